import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload, selectinload

from app.models.discussion import Discussion
from app.models.discussion_comment import DiscussionComment
from app.models.user import User
from app.schemas.discussion import (
    DiscussionCommentCreate,
    DiscussionCreate,
    DiscussionDetail,
    DiscussionListResponse,
    DiscussionOut,
    DiscussionThreadComment,
    DiscussionUpdate,
)
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)

# 정렬 가능한 컬럼 (camelCase 쿼리값 -> 컬럼)
SORT_COLUMNS = {
    "createdAt": Discussion.created_at,
    "updatedAt": Discussion.updated_at,
    "title": Discussion.title,
    "viewCount": Discussion.view_count,
    "upvoteCount": Discussion.upvote_count,
    "commentCount": Discussion.comment_count,
}


def list_discussions(
    db: Session,
    page: int,
    limit: int,
    category: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = "createdAt",
    sort_order: str = "DESC",
) -> DiscussionListResponse:
    query = db.query(Discussion).options(joinedload(Discussion.user))
    if category and category != "all":
        query = query.filter(Discussion.category == category)
    if search:
        pattern = f"%{search.lower()}%"
        query = query.filter(or_(
            func.lower(Discussion.title).like(pattern),
            func.lower(Discussion.content).like(pattern),
        ))

    column = SORT_COLUMNS.get(sort_by, Discussion.created_at)
    query = query.order_by(column.asc() if sort_order.upper() == "ASC" else column.desc())

    discussions, total_count, total_pages = paginate(query, page, limit)
    return DiscussionListResponse(
        discussions=[DiscussionOut.model_validate(d) for d in discussions],
        total_count=total_count,
        total_pages=total_pages,
        current_page=page,
    )


def get_discussion_or_404(db: Session, discussion_id: str) -> Discussion:
    discussion = db.query(Discussion).filter(Discussion.id == discussion_id).first()
    if not discussion:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Discussion not found")
    return discussion


def _get_own_discussion(db: Session, user: User, discussion_id: str, action: str) -> Discussion:
    discussion = get_discussion_or_404(db, discussion_id)
    if discussion.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Not authorized to {action} this discussion")
    return discussion


def get_discussion_detail(db: Session, discussion_id: str) -> DiscussionDetail:
    """ 토론 상세 + 최상위 댓글/답글 트리. 조회수 1 증가 """
    updated = db.query(Discussion).filter(Discussion.id == discussion_id).update(
        {Discussion.view_count: Discussion.view_count + 1}, synchronize_session=False
    )
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Discussion not found")
    db.commit()

    discussion = (
        db.query(Discussion)
        .options(
            joinedload(Discussion.user),
            selectinload(Discussion.comments).joinedload(DiscussionComment.user),
            selectinload(Discussion.comments).selectinload(DiscussionComment.replies),
        )
        .filter(Discussion.id == discussion_id)
        .first()
    )
    detail = DiscussionDetail.model_validate(discussion)
    detail.comments = [
        DiscussionThreadComment.model_validate(c)
        for c in discussion.comments
        if c.parent_id is None
    ]
    return detail


def create_discussion(db: Session, user: User, discussion_in: DiscussionCreate) -> Discussion:
    discussion = Discussion(
        title=discussion_in.title,
        content=discussion_in.content,
        category=discussion_in.category,
        user_id=user.id,
    )
    db.add(discussion)
    db.commit()
    db.refresh(discussion)
    logger.info(f"토론 생성 - discussion: {discussion.id}")
    return discussion


def update_discussion(db: Session, user: User, discussion_id: str, discussion_in: DiscussionUpdate) -> Discussion:
    discussion = _get_own_discussion(db, user, discussion_id, "update")
    for field, value in discussion_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(discussion, field, value)
    db.commit()
    db.refresh(discussion)
    return discussion


def delete_discussion(db: Session, user: User, discussion_id: str) -> None:
    discussion = _get_own_discussion(db, user, discussion_id, "delete")
    db.delete(discussion)
    db.commit()


def upvote_discussion(db: Session, discussion_id: str) -> int:
    discussion = get_discussion_or_404(db, discussion_id)
    db.query(Discussion).filter(Discussion.id == discussion_id).update(
        {Discussion.upvote_count: Discussion.upvote_count + 1}, synchronize_session=False
    )
    db.commit()
    db.refresh(discussion)
    return discussion.upvote_count


def toggle_pin(db: Session, user: User, discussion_id: str) -> bool:
    discussion = _get_own_discussion(db, user, discussion_id, "pin")
    discussion.is_pinned = not discussion.is_pinned
    db.commit()
    return discussion.is_pinned


def close_discussion(db: Session, user: User, discussion_id: str) -> None:
    discussion = _get_own_discussion(db, user, discussion_id, "close")
    discussion.is_closed = True
    db.commit()


def add_comment(db: Session, user: User, discussion_id: str, comment_in: DiscussionCommentCreate) -> DiscussionComment:
    """
    닫힌 토론에는 댓글 불가.
    답글의 답글은 최상위 댓글 아래로 붙여 트리를 2단계로 유지합니다.
    """
    discussion = get_discussion_or_404(db, discussion_id)
    if discussion.is_closed:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="This discussion is closed")

    parent_id = None
    if comment_in.parent_id:
        parent = get_comment_or_404(db, comment_in.parent_id)
        if parent.discussion_id != discussion.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Parent comment belongs to another discussion")
        parent_id = parent.parent_id or parent.id

    comment = DiscussionComment(
        content=comment_in.content,
        discussion_id=discussion.id,
        user_id=user.id,
        parent_id=parent_id,
    )
    db.add(comment)
    db.commit()

    db.query(Discussion).filter(Discussion.id == discussion.id).update(
        {Discussion.comment_count: Discussion.comment_count + 1}, synchronize_session=False
    )
    db.commit()
    db.refresh(comment)
    return comment


def get_comment_or_404(db: Session, comment_id: str) -> DiscussionComment:
    comment = db.query(DiscussionComment).filter(DiscussionComment.id == comment_id).first()
    if not comment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    return comment


def _get_own_comment(db: Session, user: User, comment_id: str, action: str) -> DiscussionComment:
    comment = get_comment_or_404(db, comment_id)
    if comment.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Not authorized to {action} this comment")
    return comment


def update_comment(db: Session, user: User, comment_id: str, content: str) -> DiscussionComment:
    comment = _get_own_comment(db, user, comment_id, "update")
    comment.content = content
    comment.is_edited = True
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(db: Session, user: User, comment_id: str) -> None:
    """ 댓글과 그 답글을 함께 삭제하고 comment_count 를 맞춥니다 """
    comment = _get_own_comment(db, user, comment_id, "delete")
    discussion = comment.discussion
    replies = list(comment.replies)
    for reply in replies:
        db.delete(reply)
    db.delete(comment)
    discussion.comment_count = max(0, discussion.comment_count - 1 - len(replies))
    db.commit()


def upvote_comment(db: Session, comment_id: str) -> int:
    comment = get_comment_or_404(db, comment_id)
    db.query(DiscussionComment).filter(DiscussionComment.id == comment_id).update(
        {DiscussionComment.upvote_count: DiscussionComment.upvote_count + 1}, synchronize_session=False
    )
    db.commit()
    db.refresh(comment)
    return comment.upvote_count
