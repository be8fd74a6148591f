import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.dependencies.db import get_db
from app.models.user import User
from app.services.token_service import decode_token
from app.services.user_service import get_user_by_id

# 헤더가 없을 때도 403이 아닌 401을 돌려주기 위해 auto_error 끔
security = HTTPBearer(auto_error=False)

# 토큰 검증 실패용 공통 예외
credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


def get_token_payload(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.PyJWTError:
        raise credentials_exception

    if payload.get("sub") is None:
        raise credentials_exception
    # refresh/confirm/reset 토큰으로는 API 접근 불가
    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


def get_current_user(
    payload: dict = Depends(get_token_payload),
    db: Session = Depends(get_db),
) -> User:
    user = get_user_by_id(db, payload["sub"])
    if not user:
        # 토큰은 유효하지만, 해당 id의 사용자가 DB에 없을 때
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_completed_profile(
    payload: dict = Depends(get_token_payload),
    db: Session = Depends(get_db),
) -> User:
    """
    프로필 작성이 끝난 사용자만 통과시키는 gate.
    - 사용자 없음: 404 (requiresAuth)
    - profile_completed 가 False 이거나 role 프로필 row 가 없음: 403 (requiresProfileCompletion)
    """
    user = get_user_by_id(db, payload["sub"])
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": "User not found", "requiresAuth": True},
        )
    if not user.profile_completed or user.role_profile is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "message": "Profile completion required",
                "requiresProfileCompletion": True,
                "redirectTo": "/profile/setup",
            },
        )
    return user
