from typing import List, Optional

from pydantic import Field

from app.schemas.base import CamelModel, UserSummary
from app.schemas.profile import TeacherProfileIn, TeacherProfileOut


class TeacherProfileCreate(TeacherProfileIn):
    subjects: List[str] = Field(..., min_length=1)
    experience: int = Field(..., ge=0)


class TeacherUserInfo(UserSummary):
    bio: Optional[str] = None


class TeacherResponse(TeacherProfileOut):
    user: Optional[TeacherUserInfo] = None
