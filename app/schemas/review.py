from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel, UserSummary


class ReviewCreate(CamelModel):
    teacher_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class ReviewResponse(CamelModel):
    id: str
    user_id: str
    teacher_id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
