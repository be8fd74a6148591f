from typing import Literal, Optional

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Literal["teacher", "student", "school"]
    name: str = Field(..., min_length=1, max_length=255)
    bio: Optional[str] = None


class RegisterResponse(CamelModel):
    status: str
    message: str
    email: str
    details: Optional[str] = None
    action: Optional[str] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class UserBrief(CamelModel):
    id: str
    email: str
    role: str
    name: str
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    profile_completed: bool
    email_confirmed: bool


class LoginResponse(CamelModel):
    token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    user: UserBrief


class ConfirmEmailRequest(CamelModel):
    token: str


class EmailRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str
    password: str = Field(..., min_length=6)


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class RefreshTokenRequest(CamelModel):
    refresh_token: str


class TokenResponse(CamelModel):
    token: str
    refresh_token: str
    expires_in: int
