import logging

from fastapi import APIRouter, Depends, Body, status
from sqlalchemy.orm import Session

from app.dependencies.auth import get_current_user
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.auth import (
    ChangePasswordRequest,
    ConfirmEmailRequest,
    EmailRequest,
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    TokenResponse,
    UserBrief,
)
from app.schemas.base import MessageResponse
from app.services import auth_service
from app.services.token_service import revoke_refresh_token, rotate_refresh_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="회원가입 (teacher / student)",
    description="계정을 만들고 이메일 확인 링크를 발송합니다. 발송 실패 시에도 계정은 유지되며 status 가 warning 으로 반환됩니다."
)
def register(
    register_in: RegisterRequest = Body(...),
    db: Session = Depends(get_db)
):
    return auth_service.register_user(db, register_in)


@router.post("/login", response_model=LoginResponse, summary="이메일/비밀번호 로그인")
def login(
    login_in: LoginRequest = Body(...),
    db: Session = Depends(get_db)
):
    """
    - 이메일 미확인: 401 (isEmailUnconfirmed)
    - 이메일/비밀번호 불일치: 401 Invalid credentials
    """
    return auth_service.authenticate_user(db, login_in)


@router.post("/confirm", response_model=MessageResponse, summary="이메일 확인")
def confirm_email(
    confirm_in: ConfirmEmailRequest = Body(...),
    db: Session = Depends(get_db)
):
    auth_service.confirm_email(db, confirm_in.token)
    return MessageResponse(message="Email confirmed")


@router.post("/send-confirmation", response_model=MessageResponse, summary="확인 메일 재발송")
def send_confirmation(
    email_in: EmailRequest = Body(...),
    db: Session = Depends(get_db)
):
    auth_service.send_confirmation(db, email_in.email)
    return MessageResponse(message="Confirmation email sent")


@router.post("/forgot-password", response_model=MessageResponse, summary="비밀번호 재설정 메일 요청")
def forgot_password(
    email_in: EmailRequest = Body(...),
    db: Session = Depends(get_db)
):
    auth_service.request_password_reset(db, email_in.email)
    return MessageResponse(message="If the email exists, a password reset link has been sent")


@router.post("/reset-password", response_model=MessageResponse, summary="비밀번호 재설정")
def reset_password(
    reset_in: ResetPasswordRequest = Body(...),
    db: Session = Depends(get_db)
):
    auth_service.reset_password(db, reset_in)
    return MessageResponse(message="Password has been reset successfully")


@router.put("/change-password", response_model=MessageResponse, summary="비밀번호 변경")
def change_password(
    change_in: ChangePasswordRequest = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    auth_service.change_password(db, user, change_in)
    return MessageResponse(message="Password changed successfully")


@router.post("/refresh", response_model=TokenResponse,
             summary="리프레시 토큰 갱신",
             description="저장된 refresh token 과 일치하면 access/refresh token 을 모두 새로 발급합니다."
             )
def refresh_token(
        refresh_in: RefreshTokenRequest = Body(...),
        db: Session = Depends(get_db)
):
    access_token, new_refresh_token, expires_in = rotate_refresh_token(db, refresh_in.refresh_token)
    return TokenResponse(
        token=access_token,
        refresh_token=new_refresh_token,
        expires_in=expires_in
    )


@router.post("/logout", response_model=MessageResponse, summary="로그아웃 (refresh token 폐기)")
def logout(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    revoke_refresh_token(db, user)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserBrief, summary="내 계정 정보")
def get_me(user: User = Depends(get_current_user)):
    return user
