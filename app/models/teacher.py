import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, JSON, Float
from sqlalchemy.orm import relationship

from app.db.base import Base


class TeacherProfile(Base):
    __tablename__ = "teacher_profiles"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    subjects = Column(JSON, nullable=False, default=list)
    qualifications = Column(String(255), nullable=True)
    experience = Column(Integer, nullable=True)  # 경력 (년)
    education = Column(String(255), nullable=True)
    specializations = Column(JSON, nullable=False, default=list)
    teaching_methods = Column(JSON, nullable=False, default=list)
    availability = Column(String(255), nullable=True)
    hourly_rate = Column(Float, nullable=True)
    location = Column(String(255), nullable=True)
    languages = Column(JSON, nullable=False, default=list)
    certifications = Column(JSON, nullable=False, default=list)
    achievements = Column(JSON, nullable=False, default=list)
    teaching_philosophy = Column(Text, nullable=True)
    preferred_student_level = Column(String(100), nullable=True)
    contact_preference = Column(String(100), nullable=True)
    social_links = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="teacher_profile")
    reviews = relationship("Review", back_populates="teacher")
