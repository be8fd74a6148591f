from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from app.schemas.base import CamelModel, PageMeta

TEACHER_FIELDS = (
    "subjects", "qualifications", "experience", "education", "specializations",
    "teaching_methods", "availability", "hourly_rate", "location", "languages",
    "certifications", "achievements", "teaching_philosophy", "preferred_student_level",
    "contact_preference", "social_links",
)

STUDENT_FIELDS = (
    "interests", "academic_level", "goals", "learning_style", "preferred_subjects",
    "current_institution", "graduation_year", "skills", "projects", "extracurriculars",
    "career_goals", "preferred_learning_time", "budget", "location", "languages",
    "social_links",
)


class TeacherProfileIn(CamelModel):
    subjects: Optional[List[str]] = None
    qualifications: Optional[str] = None
    experience: Optional[int] = Field(None, ge=0)
    education: Optional[str] = None
    specializations: Optional[List[str]] = None
    teaching_methods: Optional[List[str]] = None
    availability: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    languages: Optional[List[str]] = None
    certifications: Optional[List[str]] = None
    achievements: Optional[List[str]] = None
    teaching_philosophy: Optional[str] = None
    preferred_student_level: Optional[str] = None
    contact_preference: Optional[str] = None
    social_links: Optional[Dict[str, str]] = None


class StudentProfileIn(CamelModel):
    interests: Optional[List[str]] = None
    academic_level: Optional[str] = None
    goals: Optional[List[str]] = None
    learning_style: Optional[str] = None
    preferred_subjects: Optional[List[str]] = None
    current_institution: Optional[str] = None
    graduation_year: Optional[int] = None
    skills: Optional[List[str]] = None
    projects: Optional[List[str]] = None
    extracurriculars: Optional[List[str]] = None
    career_goals: Optional[str] = None
    preferred_learning_time: Optional[str] = None
    budget: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    languages: Optional[List[str]] = None
    social_links: Optional[Dict[str, str]] = None


class ProfileSetupRequest(TeacherProfileIn, StudentProfileIn):
    """ 멀티스텝 프로필 폼 전체 (role에 맞는 필드만 사용) """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    bio: Optional[str] = None


class TeacherProfileOut(TeacherProfileIn):
    id: str
    user_id: str
    created_at: Optional[datetime] = None


class StudentProfileOut(StudentProfileIn):
    id: str
    user_id: str
    created_at: Optional[datetime] = None


class UserProfileResponse(CamelModel):
    id: str
    email: str
    name: str
    role: str
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    profile_completed: bool
    created_at: Optional[datetime] = None
    profile: dict = {}


class UserListResponse(PageMeta):
    users: List[UserProfileResponse]


class ProfileStatsResponse(CamelModel):
    connections: int
    posts: int
    reviews: int
    messages: int
