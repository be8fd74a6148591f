from typing import List

from fastapi import APIRouter, Depends, Body, status
from sqlalchemy.orm import Session

from app.dependencies.auth import get_current_user, require_completed_profile
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.profile import TeacherProfileIn
from app.schemas.teacher import TeacherProfileCreate, TeacherResponse
from app.services import teacher_service

router = APIRouter()


@router.post("", response_model=TeacherResponse, status_code=status.HTTP_201_CREATED, summary="강사 프로필 생성")
def create_teacher_profile(
    teacher_in: TeacherProfileCreate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return teacher_service.create_teacher_profile(db, user, teacher_in)


@router.get("", response_model=List[TeacherResponse], summary="강사 목록")
def list_teachers(db: Session = Depends(get_db)):
    return teacher_service.list_teachers(db)


@router.get("/{teacher_id}", response_model=TeacherResponse, summary="강사 상세")
def get_teacher(teacher_id: str, db: Session = Depends(get_db)):
    return teacher_service.get_teacher_or_404(db, teacher_id)


@router.put("/{teacher_id}", response_model=TeacherResponse, summary="강사 프로필 수정 (본인만)")
def update_teacher_profile(
    teacher_id: str,
    teacher_in: TeacherProfileIn = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return teacher_service.update_teacher_profile(db, user, teacher_id, teacher_in)
