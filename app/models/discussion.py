import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship

from app.db.base import Base

DISCUSSION_CATEGORIES = ("general", "academic", "career", "resources", "events", "other")


class Discussion(Base):
    __tablename__ = "discussions"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(Enum(*DISCUSSION_CATEGORIES, name="discussion_category"), nullable=False, default="general")
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    is_pinned = Column(Boolean, nullable=False, default=False)
    is_closed = Column(Boolean, nullable=False, default=False)
    view_count = Column(Integer, nullable=False, default=0)
    upvote_count = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User")
    comments = relationship(
        "DiscussionComment",
        back_populates="discussion",
        cascade="all, delete-orphan",
        order_by="DiscussionComment.created_at",
    )
