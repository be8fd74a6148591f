from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """ 프론트엔드와 camelCase 키로 주고받는 스키마 공통 베이스 """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class UserSummary(CamelModel):
    id: str
    name: str
    role: Optional[str] = None
    profile_picture: Optional[str] = None


class UserContact(UserSummary):
    email: str


class MessageResponse(CamelModel):
    message: str


class StatusResponse(CamelModel):
    status: str = "success"
    message: str


class PageMeta(CamelModel):
    total_count: int
    total_pages: int
    current_page: int


class Timestamped(CamelModel):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
