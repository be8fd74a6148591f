from typing import List

from fastapi import APIRouter, Depends, Body, Query, status
from sqlalchemy.orm import Session

from app.dependencies.auth import require_completed_profile
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.base import MessageResponse
from app.schemas.comment import CommentContent, CommentCreate, CommentResponse
from app.services import comment_service

router = APIRouter()


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED, summary="댓글 작성")
def create_comment(
    comment_in: CommentCreate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return comment_service.create_comment(db, user, comment_in.post_id, comment_in.content)


@router.get("", response_model=List[CommentResponse], summary="게시글 댓글 목록")
def list_comments(
    post_id: str = Query(..., alias="postId"),
    db: Session = Depends(get_db)
):
    return comment_service.list_comments(db, post_id)


@router.put("/{comment_id}", response_model=CommentResponse, summary="댓글 수정 (작성자만)")
def update_comment(
    comment_id: str,
    comment_in: CommentContent = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return comment_service.update_comment(db, user, comment_id, comment_in.content)


@router.delete("/{comment_id}", response_model=MessageResponse, summary="댓글 삭제 (작성자만)")
def delete_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    comment_service.delete_comment(db, user, comment_id)
    return MessageResponse(message="Comment deleted successfully")
