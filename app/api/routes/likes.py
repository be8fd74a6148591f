from fastapi import APIRouter, Depends, Body, status
from sqlalchemy.orm import Session

from app.dependencies.auth import require_completed_profile
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.base import MessageResponse
from app.schemas.like import LikeRequest, LikeResponse
from app.services import like_service

router = APIRouter()


@router.post("", response_model=LikeResponse, status_code=status.HTTP_201_CREATED, summary="게시글 좋아요")
def like_post(
    like_in: LikeRequest = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    """
    - 게시글 없음: 404
    - 이미 좋아요: 400
    """
    return like_service.like_post(db, user, like_in.post_id)


@router.delete("", response_model=MessageResponse, summary="게시글 좋아요 취소")
def unlike_post(
    like_in: LikeRequest = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    like_service.unlike_post(db, user, like_in.post_id)
    return MessageResponse(message="Like removed")
