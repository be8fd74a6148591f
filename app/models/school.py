import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, JSON, Enum
from sqlalchemy.orm import relationship

from app.db.base import Base

SCHOOL_TYPES = ("public", "private", "charter", "international")


class SchoolProfile(Base):
    __tablename__ = "school_profiles"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    school_name = Column(String(255), nullable=False, default="")
    address = Column(Text, nullable=False, default="")
    city = Column(String(255), nullable=False, default="")
    state = Column(String(255), nullable=False, default="")
    country = Column(String(255), nullable=False, default="")
    postal_code = Column(String(50), nullable=True)
    phone_number = Column(String(50), nullable=True)
    website = Column(String(512), nullable=True)
    accreditations = Column(String(512), nullable=True)
    school_type = Column(Enum(*SCHOOL_TYPES, name="school_type"), nullable=False, default="public")
    grade_levels = Column(JSON, nullable=False, default=list)
    student_count = Column(Integer, nullable=True)
    teacher_count = Column(Integer, nullable=True)
    established_year = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    facilities = Column(JSON, nullable=False, default=list)
    extracurricular_activities = Column(JSON, nullable=False, default=list)
    social_links = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="school_profile")
