from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.schemas.base import CamelModel, UserSummary


class CommentContent(CamelModel):
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Content is required")
        return v


class CommentCreate(CommentContent):
    post_id: str


class CommentResponse(CamelModel):
    id: str
    user_id: str
    post_id: str
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: UserSummary
