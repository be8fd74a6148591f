from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from app.schemas.base import CamelModel, PageMeta, UserSummary

PostType = Literal["general", "educational", "job", "learning", "achievement", "question"]


class PostCreate(CamelModel):
    content: str = Field(..., min_length=1)
    type: PostType = "general"
    image_url: Optional[str] = None
    video_url: Optional[str] = None


class PostUpdate(CamelModel):
    content: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = None
    video_url: Optional[str] = None


class LikeBrief(CamelModel):
    id: int
    user_id: str


class PostResponse(CamelModel):
    id: str
    user_id: str
    content: str
    type: str
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    likes_count: int
    comments_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: UserSummary
    likes: List[LikeBrief] = []


class PostListResponse(PageMeta):
    posts: List[PostResponse]


class LikeToggleResponse(CamelModel):
    message: str
    liked: bool
