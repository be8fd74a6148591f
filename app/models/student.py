# /app/models/student.py
import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, JSON, Float
from sqlalchemy.orm import relationship

from app.db.base import Base


class StudentProfile(Base):
    __tablename__ = "student_profiles"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    interests = Column(JSON, nullable=False, default=list)
    academic_level = Column(String(100), nullable=True)
    goals = Column(JSON, nullable=False, default=list)
    learning_style = Column(String(100), nullable=True)
    preferred_subjects = Column(JSON, nullable=False, default=list)
    current_institution = Column(String(255), nullable=True)
    graduation_year = Column(Integer, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    projects = Column(JSON, nullable=False, default=list)
    extracurriculars = Column(JSON, nullable=False, default=list)
    career_goals = Column(Text, nullable=True)
    preferred_learning_time = Column(String(100), nullable=True)
    budget = Column(Float, nullable=True)
    location = Column(String(255), nullable=True)
    languages = Column(JSON, nullable=False, default=list)
    social_links = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="student_profile")
