import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import relationship

from app.db.base import Base


class DiscussionComment(Base):
    __tablename__ = "discussion_comments"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    content = Column(Text, nullable=False)
    discussion_id = Column(String(36), ForeignKey("discussions.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    # 답글이면 부모 댓글 id
    parent_id = Column(String(36), ForeignKey("discussion_comments.id"), nullable=True)
    upvote_count = Column(Integer, nullable=False, default=0)
    is_edited = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User")
    discussion = relationship("Discussion", back_populates="comments")
    parent = relationship("DiscussionComment", remote_side=[id], back_populates="replies")
    replies = relationship("DiscussionComment", back_populates="parent", order_by="DiscussionComment.created_at")
