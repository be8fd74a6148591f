from typing import List

from fastapi import APIRouter, Depends, Body, Query, status
from sqlalchemy.orm import Session

from app.dependencies.auth import require_completed_profile
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.review import ReviewCreate, ReviewResponse
from app.services import review_service

router = APIRouter()


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED, summary="강사 리뷰 작성")
def create_review(
    review_in: ReviewCreate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return review_service.create_review(db, user, review_in)


@router.get("", response_model=List[ReviewResponse], summary="강사 리뷰 목록")
def list_reviews(
    teacher_id: str = Query(..., alias="teacherId"),
    db: Session = Depends(get_db)
):
    return review_service.list_reviews(db, teacher_id)
