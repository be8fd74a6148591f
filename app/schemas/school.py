from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel, PageMeta, UserContact

SchoolType = Literal["public", "private", "charter", "international"]


class SchoolRegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class SchoolProfileCompleteRequest(CamelModel):
    """ 학교 프로필 완성 폼. 값 검증/정리는 서비스에서 필드별로 처리 """
    school_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    phone_number: Optional[str] = None
    website: Optional[str] = None
    school_type: Optional[str] = None
    grade_levels: Optional[Any] = None
    accreditation: Optional[Any] = None
    student_count: Optional[Any] = None
    teacher_count: Optional[Any] = None
    established_year: Optional[Any] = None
    description: Optional[str] = None
    facilities: Optional[Any] = None
    extracurricular_activities: Optional[Any] = None
    social_links: Optional[Any] = None
    profile_picture_url: Optional[str] = None


class SchoolUpdate(CamelModel):
    school_name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    phone_number: Optional[str] = None
    website: Optional[str] = None
    school_type: Optional[SchoolType] = None
    grade_levels: Optional[List[str]] = None
    accreditations: Optional[str] = None
    student_count: Optional[int] = Field(None, ge=0)
    teacher_count: Optional[int] = Field(None, ge=0)
    established_year: Optional[int] = Field(None, ge=1800)
    description: Optional[str] = None
    facilities: Optional[List[str]] = None
    extracurricular_activities: Optional[List[str]] = None
    social_links: Optional[Dict[str, str]] = None


class SchoolOut(CamelModel):
    id: str
    user_id: str
    school_name: str
    address: str
    city: str
    state: str
    country: str
    postal_code: Optional[str] = None
    phone_number: Optional[str] = None
    website: Optional[str] = None
    accreditations: Optional[str] = None
    school_type: str
    grade_levels: List[str] = []
    student_count: Optional[int] = None
    teacher_count: Optional[int] = None
    established_year: Optional[int] = None
    description: Optional[str] = None
    facilities: List[str] = []
    extracurricular_activities: List[str] = []
    social_links: Dict[str, Any] = {}
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[UserContact] = None


class SchoolResponse(CamelModel):
    status: str = "success"
    message: Optional[str] = None
    school: SchoolOut


class SchoolListResponse(CamelModel):
    status: str = "success"
    schools: List[SchoolOut]


class SchoolPageResponse(PageMeta):
    status: str = "success"
    schools: List[SchoolOut]
