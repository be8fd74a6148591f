from fastapi import APIRouter, Depends, Body, status
from sqlalchemy.orm import Session

from app.dependencies.auth import get_current_user
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.auth import EmailRequest, LoginRequest, LoginResponse, RegisterResponse
from app.schemas.base import StatusResponse
from app.schemas.school import SchoolProfileCompleteRequest, SchoolRegisterRequest, SchoolResponse
from app.services import school_auth_service

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="학교 계정 회원가입"
)
def register_school(
    register_in: SchoolRegisterRequest = Body(...),
    db: Session = Depends(get_db)
):
    """
    이미 다른 role 로 가입된 이메일이면 400 과 함께 existingUserType 을 돌려줍니다.
    """
    return school_auth_service.register_school(db, register_in)


@router.post("/resend-confirmation", response_model=StatusResponse, summary="학교 계정 확인 메일 재발송")
def resend_confirmation(
    email_in: EmailRequest = Body(...),
    db: Session = Depends(get_db)
):
    school_auth_service.resend_school_confirmation(db, email_in.email)
    return StatusResponse(message="Confirmation email resent successfully. Check your email.")


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="학교 계정 로그인",
    description="30일 access token 과 90일 refresh token 을 발급합니다."
)
def login_school(
    login_in: LoginRequest = Body(...),
    db: Session = Depends(get_db)
):
    return school_auth_service.authenticate_school(db, login_in)


@router.put("/complete-profile/{user_id}", response_model=SchoolResponse, summary="학교 프로필 완성")
def complete_profile(
    user_id: str,
    profile_in: SchoolProfileCompleteRequest = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    school = school_auth_service.complete_school_profile(db, user, user_id, profile_in)
    return SchoolResponse(message="School profile completed successfully", school=school)
