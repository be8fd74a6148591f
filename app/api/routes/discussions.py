from typing import Literal, Optional

from fastapi import APIRouter, Depends, Body, Query, status
from sqlalchemy.orm import Session

from app.dependencies.auth import require_completed_profile
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.base import StatusResponse
from app.schemas.discussion import (
    CloseResponse,
    DiscussionCommentCreate,
    DiscussionCommentResponse,
    DiscussionCommentUpdate,
    DiscussionCreate,
    DiscussionDetailResponse,
    DiscussionListResponse,
    DiscussionResponse,
    DiscussionUpdate,
    PinResponse,
    UpvoteResponse,
)
from app.services import discussion_service

router = APIRouter()


@router.get("", response_model=DiscussionListResponse, summary="토론 목록")
def list_discussions(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: Literal["ASC", "DESC", "asc", "desc"] = Query("DESC", alias="sortOrder"),
    db: Session = Depends(get_db)
):
    """
    category=all 이면 카테고리 필터를 적용하지 않습니다.
    search 는 제목/본문 부분 일치 (대소문자 무시).
    """
    return discussion_service.list_discussions(db, page, limit, category, search, sort_by, sort_order)


@router.get("/{discussion_id}", response_model=DiscussionDetailResponse, summary="토론 상세 (댓글 트리 포함)")
def get_discussion(discussion_id: str, db: Session = Depends(get_db)):
    return DiscussionDetailResponse(discussion=discussion_service.get_discussion_detail(db, discussion_id))


@router.post("", response_model=DiscussionResponse, status_code=status.HTTP_201_CREATED, summary="토론 작성")
def create_discussion(
    discussion_in: DiscussionCreate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    discussion = discussion_service.create_discussion(db, user, discussion_in)
    return DiscussionResponse(message="Discussion created successfully", discussion=discussion)


@router.put("/{discussion_id}", response_model=DiscussionResponse, summary="토론 수정 (작성자만)")
def update_discussion(
    discussion_id: str,
    discussion_in: DiscussionUpdate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    discussion = discussion_service.update_discussion(db, user, discussion_id, discussion_in)
    return DiscussionResponse(message="Discussion updated successfully", discussion=discussion)


@router.delete("/{discussion_id}", response_model=StatusResponse, summary="토론 삭제 (작성자만)")
def delete_discussion(
    discussion_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    discussion_service.delete_discussion(db, user, discussion_id)
    return StatusResponse(message="Discussion deleted successfully")


@router.post("/{discussion_id}/upvote", response_model=UpvoteResponse, summary="토론 추천",
             dependencies=[Depends(require_completed_profile)])
def upvote_discussion(discussion_id: str, db: Session = Depends(get_db)):
    upvote_count = discussion_service.upvote_discussion(db, discussion_id)
    return UpvoteResponse(message="Discussion upvoted successfully", upvote_count=upvote_count)


@router.patch("/{discussion_id}/pin", response_model=PinResponse, summary="토론 고정/해제 (작성자만)")
def toggle_pin(
    discussion_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    is_pinned = discussion_service.toggle_pin(db, user, discussion_id)
    return PinResponse(
        message=f"Discussion {'pinned' if is_pinned else 'unpinned'} successfully",
        is_pinned=is_pinned
    )


@router.patch("/{discussion_id}/close", response_model=CloseResponse, summary="토론 닫기 (작성자만)")
def close_discussion(
    discussion_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    discussion_service.close_discussion(db, user, discussion_id)
    return CloseResponse(message="Discussion closed successfully", is_closed=True)


@router.post("/{discussion_id}/comments", response_model=DiscussionCommentResponse,
             status_code=status.HTTP_201_CREATED, summary="토론 댓글/답글 작성")
def add_comment(
    discussion_id: str,
    comment_in: DiscussionCommentCreate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    comment = discussion_service.add_comment(db, user, discussion_id, comment_in)
    return DiscussionCommentResponse(message="Comment added successfully", comment=comment)


@router.put("/comments/{comment_id}", response_model=DiscussionCommentResponse, summary="토론 댓글 수정 (작성자만)")
def update_comment(
    comment_id: str,
    comment_in: DiscussionCommentUpdate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    comment = discussion_service.update_comment(db, user, comment_id, comment_in.content)
    return DiscussionCommentResponse(message="Comment updated successfully", comment=comment)


@router.delete("/comments/{comment_id}", response_model=StatusResponse, summary="토론 댓글 삭제 (작성자만)")
def delete_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    discussion_service.delete_comment(db, user, comment_id)
    return StatusResponse(message="Comment deleted successfully")


@router.post("/comments/{comment_id}/upvote", response_model=UpvoteResponse, summary="토론 댓글 추천",
             dependencies=[Depends(require_completed_profile)])
def upvote_comment(comment_id: str, db: Session = Depends(get_db)):
    upvote_count = discussion_service.upvote_comment(db, comment_id)
    return UpvoteResponse(message="Comment upvoted successfully", upvote_count=upvote_count)
