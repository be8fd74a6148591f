from typing import List

from fastapi import APIRouter, Depends, Body, Query, status
from sqlalchemy.orm import Session

from app.dependencies.auth import require_completed_profile
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.base import MessageResponse
from app.schemas.comment import CommentContent, CommentResponse
from app.schemas.post import (
    LikeToggleResponse,
    PostCreate,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from app.services import comment_service, post_service

# 게시글 관련 API 는 모두 프로필 작성 완료 사용자 전용
router = APIRouter(
    dependencies=[Depends(require_completed_profile)]
)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED, summary="게시글 작성")
def create_post(
    post_in: PostCreate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return post_service.create_post(db, user, post_in)


@router.get("", response_model=PostListResponse, summary="피드 조회 (최신순)")
def list_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db)
):
    return post_service.list_posts(db, page, limit)


@router.post("/{post_id}/like", response_model=LikeToggleResponse, summary="좋아요 토글")
def toggle_like(
    post_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return post_service.toggle_like(db, user, post_id)


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED,
             summary="게시글 댓글 작성")
def add_comment(
    post_id: str,
    comment_in: CommentContent = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return comment_service.create_comment(db, user, post_id, comment_in.content)


@router.get("/{post_id}/comments", response_model=List[CommentResponse], summary="게시글 댓글 목록")
def list_comments(
    post_id: str,
    db: Session = Depends(get_db)
):
    post_service.get_post_or_404(db, post_id)
    return comment_service.list_comments(db, post_id)


@router.put("/{post_id}", response_model=PostResponse, summary="게시글 수정 (작성자만)")
def update_post(
    post_id: str,
    post_in: PostUpdate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return post_service.update_post(db, user, post_id, post_in)


@router.delete("/{post_id}", response_model=MessageResponse, summary="게시글 삭제 (작성자만)")
def delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    post_service.delete_post(db, user, post_id)
    return MessageResponse(message="Post deleted successfully")
