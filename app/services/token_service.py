import jwt
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.models.user import User
from app.core.config import settings


def _encode(data: dict, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + expires_delta
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """ 서명/만료 검증 후 payload 반환 (실패 시 jwt.PyJWTError) """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode({"sub": user.id, "role": user.role, "type": "access"}, expires_delta)


def create_confirmation_token(email: str) -> str:
    return _encode(
        {"email": email, "type": "confirm"},
        timedelta(hours=settings.CONFIRMATION_TOKEN_EXPIRE_HOURS),
    )


def create_reset_token(user: User) -> str:
    return _encode(
        {"sub": user.id, "type": "reset"},
        timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token_with_rotation(db: Session, user: User) -> str:
    """ refresh token 발급 후 users 테이블에 만료일과 함께 저장 (이전 토큰은 덮어씀) """
    expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    # jti 로 같은 초에 발급돼도 토큰이 달라지게 함
    refresh_token = _encode({"sub": user.id, "type": "refresh", "jti": uuid4().hex}, expires_delta)

    user.refresh_token = refresh_token
    user.refresh_token_expiry = datetime.utcnow() + expires_delta
    db.commit()
    db.refresh(user)

    return refresh_token


def create_long_lived_session(db: Session, user: User) -> tuple[str, str, int]:
    access_delta = timedelta(days=settings.SCHOOL_ACCESS_TOKEN_EXPIRE_DAYS)
    access_token = create_access_token(user, access_delta)
    refresh_token = create_refresh_token_with_rotation(db, user)
    return access_token, refresh_token, int(access_delta.total_seconds())


def rotate_refresh_token(db: Session, refresh_token: str) -> tuple[str, str, int]:
    try:
        payload = decode_token(refresh_token)
        user_id = payload.get("sub")
        if not user_id or payload.get("type") != "refresh":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")

        user = db.query(User).filter(User.id == user_id).first()
        if not user or user.refresh_token != refresh_token:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token is invalid or already used")
        if user.refresh_token_expiry and user.refresh_token_expiry < datetime.utcnow():
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token expired")

        return create_long_lived_session(db, user)

    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


def revoke_refresh_token(db: Session, user: User) -> None:
    user.refresh_token = None
    user.refresh_token_expiry = None
    db.commit()
