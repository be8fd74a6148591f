import logging
import re
import uuid
from datetime import datetime
from typing import Any, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.school import SchoolProfile, SCHOOL_TYPES
from app.models.user import User
from app.schemas.auth import LoginRequest, LoginResponse, RegisterResponse, UserBrief
from app.schemas.school import SchoolProfileCompleteRequest, SchoolRegisterRequest
from app.services import email_service
from app.services.auth_service import (
    INVALID_CREDENTIALS,
    registration_response,
    resend_confirmation,
    unconfirmed_email_exception,
)
from app.services.token_service import create_confirmation_token, create_long_lived_session
from app.services.user_service import create_user, get_user_by_email

logger = logging.getLogger(__name__)

SCHOOL_ADMIN_NAME = "School Administrator"

# 앞쪽 정수 부분만 사용 ("120 students" -> 120)
LEADING_INT = re.compile(r"\s*[+-]?\d+")

EXISTING_ROLE_MESSAGES = {
    "teacher": "This email is already registered as a teacher account.",
    "student": "This email is already registered as a student account.",
    "school": "This email is already registered as a school account. Please use the school login or contact support.",
}


def register_school(db: Session, register_in: SchoolRegisterRequest) -> RegisterResponse:
    existing = get_user_by_email(db, register_in.email)
    if existing:
        role_message = EXISTING_ROLE_MESSAGES.get(existing.role, "This email is already registered.")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": f"{role_message} Each email can only be used for one account type. "
                           "Please use a different email or contact support if you need to change your account type.",
                "existingUserType": existing.role,
            },
        )

    email = register_in.email.lower()
    confirmation_token = create_confirmation_token(email)
    # 이름은 프로필 완성 시 학교명으로 교체됨
    user = create_user(
        db,
        email=email,
        password=register_in.password,
        role="school",
        name="School Account",
        confirmation_token=confirmation_token,
    )
    logger.info(f"학교 계정 가입 - id: {user.id}")

    email_sent = email_service.send_confirmation_email(SCHOOL_ADMIN_NAME, email, confirmation_token)
    return registration_response(email, email_sent)


def resend_school_confirmation(db: Session, email: str) -> None:
    user = get_user_by_email(db, email)
    if not user or user.role != "school":
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No school account found with this email")
    resend_confirmation(db, user, SCHOOL_ADMIN_NAME)


def authenticate_school(db: Session, login_in: LoginRequest) -> LoginResponse:
    """ 학교 전용 로그인: 30일 access token + 90일 refresh token (DB 저장) """
    user = get_user_by_email(db, login_in.email)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
    if user.role != "school":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="This login is for schools only")
    if not user.email_confirmed:
        raise unconfirmed_email_exception(user.email)
    if not user.verify_password(login_in.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

    access_token, refresh_token, expires_in = create_long_lived_session(db, user)
    return LoginResponse(
        token=access_token,
        refresh_token=refresh_token,
        expires_in=expires_in,
        user=UserBrief.model_validate(user),
    )


def _clean_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _clean_str_list(value: Any) -> Optional[List[str]]:
    """ 문자열 항목만 남긴 목록. 목록이 아니면 None """
    if not isinstance(value, list):
        return None
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _clean_int(value: Any, minimum: int, maximum: Optional[int] = None) -> Optional[int]:
    """
    숫자 또는 숫자로 시작하는 문자열("12.5", "120 students")의 정수 부분. 범위를 벗어나면 무시
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = int(value)
        except (ValueError, OverflowError):
            return None
    elif isinstance(value, str):
        match = LEADING_INT.match(value)
        if not match:
            return None
        number = int(match.group())
    else:
        return None
    if number < minimum or (maximum is not None and number > maximum):
        return None
    return number


def _validate_school_id(user_id: str) -> None:
    try:
        uuid.UUID(user_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid user ID format")


def complete_school_profile(
    db: Session, current_user: User, user_id: str, profile_in: SchoolProfileCompleteRequest
) -> SchoolProfile:
    """
    학교 프로필 생성/갱신 후 profile_completed 표시.
    형식이 맞지 않는 값은 오류 대신 건너뜁니다.
    """
    _validate_school_id(user_id)
    if current_user.id != user_id or current_user.role != "school":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to update this school profile")

    school = db.query(SchoolProfile).filter(SchoolProfile.user_id == user_id).first()
    if not school:
        school = SchoolProfile(user_id=user_id, school_type="public", grade_levels=[])
        db.add(school)

    for field in ("school_name", "address", "city", "state", "country",
                  "postal_code", "phone_number", "website", "description"):
        value = _clean_str(getattr(profile_in, field))
        if value is not None:
            setattr(school, field, value)

    if profile_in.school_type in SCHOOL_TYPES:
        school.school_type = profile_in.school_type

    for field in ("grade_levels", "facilities", "extracurricular_activities"):
        value = _clean_str_list(getattr(profile_in, field))
        if value is not None:
            setattr(school, field, value)

    student_count = _clean_int(profile_in.student_count, 0)
    if student_count is not None:
        school.student_count = student_count
    teacher_count = _clean_int(profile_in.teacher_count, 0)
    if teacher_count is not None:
        school.teacher_count = teacher_count
    established_year = _clean_int(profile_in.established_year, 1800, datetime.utcnow().year)
    if established_year is not None:
        school.established_year = established_year

    if isinstance(profile_in.social_links, dict):
        school.social_links = profile_in.social_links

    accreditation = _clean_str(profile_in.accreditation)
    if accreditation is not None:
        school.accreditations = accreditation
    elif profile_in.accreditation is not None and not isinstance(profile_in.accreditation, str):
        logger.warning(f"잘못된 accreditation 타입 무시: {type(profile_in.accreditation).__name__}")

    if profile_in.profile_picture_url:
        current_user.profile_picture = profile_in.profile_picture_url
    school_name = _clean_str(profile_in.school_name)
    if school_name is not None:
        current_user.name = school_name
    current_user.profile_completed = True

    db.commit()
    db.refresh(school)
    logger.info(f"학교 프로필 완성 - user: {user_id}")
    return school
