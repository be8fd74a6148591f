from typing import List

from fastapi import HTTPException, status
from sqlalchemy import JSON
from sqlalchemy.orm import Session, joinedload

from app.models.teacher import TeacherProfile
from app.models.user import User
from app.schemas.profile import TeacherProfileIn
from app.schemas.teacher import TeacherProfileCreate


def create_teacher_profile(db: Session, user: User, teacher_in: TeacherProfileCreate) -> TeacherProfile:
    if user.role != "teacher":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only teachers can create a teacher profile")
    if db.query(TeacherProfile).filter(TeacherProfile.user_id == user.id).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Teacher profile already exists")

    data = {k: v for k, v in teacher_in.model_dump(exclude_unset=True).items() if v is not None}
    teacher = TeacherProfile(user_id=user.id, **data)
    db.add(teacher)
    db.commit()
    db.refresh(teacher)
    return teacher


def list_teachers(db: Session) -> List[TeacherProfile]:
    return (
        db.query(TeacherProfile)
        .options(joinedload(TeacherProfile.user))
        .order_by(TeacherProfile.created_at.desc())
        .all()
    )


def get_teacher_or_404(db: Session, teacher_id: str) -> TeacherProfile:
    teacher = (
        db.query(TeacherProfile)
        .options(joinedload(TeacherProfile.user))
        .filter(TeacherProfile.id == teacher_id)
        .first()
    )
    if not teacher:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
    return teacher


def update_teacher_profile(db: Session, user: User, teacher_id: str, teacher_in: TeacherProfileIn) -> TeacherProfile:
    teacher = get_teacher_or_404(db, teacher_id)
    if teacher.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")

    for field, value in teacher_in.model_dump(exclude_unset=True).items():
        if value is None and isinstance(TeacherProfile.__table__.c[field].type, JSON):
            continue
        setattr(teacher, field, value)
    db.commit()
    db.refresh(teacher)
    return teacher
