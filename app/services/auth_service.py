import logging
from datetime import datetime

import jwt
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.user import User
from app.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    UserBrief,
)
from app.services import email_service
from app.services.token_service import (
    create_access_token,
    create_confirmation_token,
    create_reset_token,
    decode_token,
)
from app.services.user_service import create_user, get_user_by_email, get_user_by_id
from app.core.config import settings

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_TOKEN = "Invalid or expired token"


def registration_response(email: str, email_sent: bool) -> RegisterResponse:
    """ 메일 발송 실패여도 계정은 유지하고 warning 으로 안내 """
    if not email_sent:
        return RegisterResponse(
            status="warning",
            message="Account created successfully!",
            details="However, we could not send the confirmation email.",
            action='Please use the "Resend confirmation email" option or contact support.',
            email=email,
        )
    return RegisterResponse(
        status="success",
        message="Registration successful. Check your email for confirmation.",
        email=email,
    )


def register_user(db: Session, register_in: RegisterRequest) -> RegisterResponse:
    if get_user_by_email(db, register_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered. Please log in or use a different email.",
        )

    email = register_in.email.lower()
    confirmation_token = create_confirmation_token(email)
    user = create_user(
        db,
        email=email,
        password=register_in.password,
        role=register_in.role,
        name=register_in.name.strip(),
        bio=register_in.bio,
        confirmation_token=confirmation_token,
    )
    logger.info(f"사용자 가입 - id: {user.id}, role: {user.role}")

    email_sent = email_service.send_confirmation_email(user.name, email, confirmation_token)
    return registration_response(email, email_sent)


def unconfirmed_email_exception(email: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "message": "Please verify your email address before logging in",
            "isEmailUnconfirmed": True,
            "action": 'Check your inbox for the confirmation email or use the "Resend confirmation" option',
            "email": email,
        },
    )


def authenticate_user(db: Session, login_in: LoginRequest) -> LoginResponse:
    """
    이메일/비밀번호 로그인.
    확인되지 않은 이메일은 비밀번호 검사보다 먼저 거부합니다.
    """
    user = get_user_by_email(db, login_in.email)
    if not user:
        logger.info(f"로그인 실패 - 존재하지 않는 이메일: {login_in.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
    if not user.email_confirmed:
        raise unconfirmed_email_exception(user.email)
    if not user.verify_password(login_in.password):
        logger.info(f"로그인 실패 - 비밀번호 불일치: {user.id}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

    return LoginResponse(
        token=create_access_token(user),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserBrief.model_validate(user),
    )


def confirm_email(db: Session, token: str) -> None:
    try:
        payload = decode_token(token)
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_TOKEN)

    email = payload.get("email")
    if payload.get("type") != "confirm" or not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_TOKEN)

    user = get_user_by_email(db, email)
    # 재발송된 경우 마지막으로 발급된 토큰만 유효
    if not user or user.confirmation_token != token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_TOKEN)

    user.email_confirmed = True
    user.confirmation_token = None
    db.commit()
    logger.info(f"이메일 확인 완료 - id: {user.id}")


def resend_confirmation(db: Session, user: User, display_name: str) -> None:
    """ 새 확인 토큰을 저장하고 재발송. 발송 실패는 500 """
    if user.email_confirmed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is already confirmed. Please login.",
        )

    confirmation_token = create_confirmation_token(user.email)
    user.confirmation_token = confirmation_token
    db.commit()

    if not email_service.send_confirmation_email(display_name, user.email, confirmation_token):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send confirmation email. Please try again or contact support.",
        )


def send_confirmation(db: Session, email: str) -> None:
    user = get_user_by_email(db, email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    resend_confirmation(db, user, user.name)


def request_password_reset(db: Session, email: str) -> None:
    """ 계정 존재 여부는 응답으로 드러내지 않음 """
    user = get_user_by_email(db, email)
    if not user:
        return

    reset_token = create_reset_token(user)
    user.reset_token = reset_token
    db.commit()
    email_service.send_password_reset_email(user.email, reset_token)


def reset_password(db: Session, reset_in: ResetPasswordRequest) -> None:
    try:
        payload = decode_token(reset_in.token)
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_TOKEN)
    if payload.get("type") != "reset":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_TOKEN)

    user = get_user_by_id(db, payload.get("sub"))
    if not user or user.reset_token != reset_in.token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_TOKEN)

    user.password = reset_in.password
    user.reset_token = None
    db.commit()
    logger.info(f"비밀번호 재설정 완료 - id: {user.id}")


def change_password(db: Session, user: User, change_in: ChangePasswordRequest) -> None:
    if not user.verify_password(change_in.current_password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
    user.password = change_in.new_password
    user.updated_at = datetime.utcnow()
    db.commit()
