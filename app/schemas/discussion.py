from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from app.schemas.base import CamelModel, PageMeta, UserSummary

DiscussionCategory = Literal["general", "academic", "career", "resources", "events", "other"]


class DiscussionCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    category: DiscussionCategory


class DiscussionUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[DiscussionCategory] = None


class DiscussionCommentCreate(CamelModel):
    content: str = Field(..., min_length=1)
    parent_id: Optional[str] = None


class DiscussionCommentUpdate(CamelModel):
    content: str = Field(..., min_length=1)


class DiscussionCommentOut(CamelModel):
    id: str
    content: str
    discussion_id: str
    user_id: str
    parent_id: Optional[str] = None
    upvote_count: int
    is_edited: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[UserSummary] = None


class DiscussionThreadComment(DiscussionCommentOut):
    replies: List[DiscussionCommentOut] = []


class DiscussionOut(CamelModel):
    id: str
    title: str
    content: str
    category: str
    user_id: str
    is_pinned: bool
    is_closed: bool
    view_count: int
    upvote_count: int
    comment_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[UserSummary] = None


class DiscussionDetail(DiscussionOut):
    comments: List[DiscussionThreadComment] = []


class DiscussionListResponse(PageMeta):
    status: str = "success"
    discussions: List[DiscussionOut]


class DiscussionResponse(CamelModel):
    status: str = "success"
    message: Optional[str] = None
    discussion: DiscussionOut


class DiscussionDetailResponse(CamelModel):
    status: str = "success"
    discussion: DiscussionDetail


class DiscussionCommentResponse(CamelModel):
    status: str = "success"
    message: str
    comment: DiscussionCommentOut


class UpvoteResponse(CamelModel):
    status: str = "success"
    message: str
    upvote_count: int


class PinResponse(CamelModel):
    status: str = "success"
    message: str
    is_pinned: bool


class CloseResponse(CamelModel):
    status: str = "success"
    message: str
    is_closed: bool
