import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship

from app.db.base import Base

POST_TYPES = ("general", "educational", "job", "learning", "achievement", "question")


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    type = Column(Enum(*POST_TYPES, name="post_type"), nullable=False, default="general")
    image_url = Column(String(1023), nullable=True)
    video_url = Column(String(1023), nullable=True)
    # 비정규화 카운터 (likes / comments 테이블과 별도로 증감)
    likes_count = Column(Integer, nullable=False, default=0)
    comments_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", backref="posts")
    likes = relationship("Like", back_populates="post")
    comments = relationship("Comment", back_populates="post")
