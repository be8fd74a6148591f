from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from app.models.comment import Comment
from app.models.post import Post
from app.models.user import User
from app.services.post_service import adjust_counter, get_post_or_404


def create_comment(db: Session, user: User, post_id: str, content: str) -> Comment:
    get_post_or_404(db, post_id)
    comment = Comment(user_id=user.id, post_id=post_id, content=content)
    db.add(comment)
    db.commit()
    adjust_counter(db, Post.comments_count, post_id, 1)
    db.refresh(comment)
    return comment


def list_comments(db: Session, post_id: str) -> List[Comment]:
    """ 게시글 댓글 (오래된 순) """
    return (
        db.query(Comment)
        .options(joinedload(Comment.user))
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc())
        .all()
    )


def get_comment_or_404(db: Session, comment_id: str) -> Comment:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    return comment


def update_comment(db: Session, user: User, comment_id: str, content: str) -> Comment:
    comment = get_comment_or_404(db, comment_id)
    if comment.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to edit this comment")
    comment.content = content
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(db: Session, user: User, comment_id: str) -> None:
    comment = get_comment_or_404(db, comment_id)
    if comment.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to delete this comment")
    post_id = comment.post_id
    db.delete(comment)
    db.commit()
    adjust_counter(db, Post.comments_count, post_id, -1)
