# /app/models/user.py
import uuid
from datetime import datetime

from passlib.hash import bcrypt
from sqlalchemy import Column, String, Boolean, Text, DateTime, Enum
from sqlalchemy.orm import relationship

from app.db.base import Base

USER_ROLES = ("teacher", "student", "school")


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(Enum(*USER_ROLES, name="user_role"), nullable=False)
    name = Column(String(255), nullable=False)
    bio = Column(Text, nullable=True)
    profile_picture = Column(String(1023), nullable=True, comment="이미지 호스트(S3)에 저장된 프로필 사진 URL")
    email_confirmed = Column(Boolean, nullable=False, default=False)
    profile_completed = Column(Boolean, nullable=False, default=False)
    confirmation_token = Column(String(512), nullable=True)
    reset_token = Column(String(512), nullable=True)
    refresh_token = Column(String(512), nullable=True)
    refresh_token_expiry = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    teacher_profile = relationship("TeacherProfile", back_populates="user", uselist=False)
    student_profile = relationship("StudentProfile", back_populates="user", uselist=False)
    school_profile = relationship("SchoolProfile", back_populates="user", uselist=False)

    # 평문 비밀번호는 저장하지 않고, 대입 시점에 bcrypt 해시로 바꿔 저장
    @property
    def password(self):
        raise AttributeError("password is write-only")

    @password.setter
    def password(self, raw_password: str):
        self.hashed_password = bcrypt.hash(raw_password)

    def verify_password(self, raw_password: str) -> bool:
        return bcrypt.verify(raw_password, self.hashed_password)

    @property
    def role_profile(self):
        """ role에 해당하는 프로필 row (없으면 None) """
        if self.role == "teacher":
            return self.teacher_profile
        if self.role == "student":
            return self.student_profile
        if self.role == "school":
            return self.school_profile
        return None
