# /app/services/user_service.py
from typing import Optional

from sqlalchemy.orm import Session

from app.models.user import User


def create_user(db: Session, *, email: str, password: str, role: str, name: str,
                bio: Optional[str] = None, confirmation_token: Optional[str] = None) -> User:
    """ 이메일/비밀번호 기반 사용자 생성 (비밀번호는 모델에서 해시) """
    db_user = User(
        email=email.lower(),
        role=role,
        name=name,
        bio=bio,
        confirmation_token=confirmation_token,
    )
    db_user.password = password
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """ Email로 사용자 조회 (중복 확인용, 대소문자 무시) """
    return db.query(User).filter(User.email == email.lower()).first()
