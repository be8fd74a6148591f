from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.like import Like
from app.models.post import Post
from app.models.user import User
from app.services.post_service import adjust_counter, get_post_or_404


def like_post(db: Session, user: User, post_id: str) -> Like:
    get_post_or_404(db, post_id)
    if db.query(Like).filter(Like.user_id == user.id, Like.post_id == post_id).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Post already liked")

    like = Like(user_id=user.id, post_id=post_id)
    db.add(like)
    db.commit()
    db.refresh(like)
    adjust_counter(db, Post.likes_count, post_id, 1)
    return like


def unlike_post(db: Session, user: User, post_id: str) -> None:
    like = db.query(Like).filter(Like.user_id == user.id, Like.post_id == post_id).first()
    if not like:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Like not found")

    db.delete(like)
    db.commit()
    adjust_counter(db, Post.likes_count, post_id, -1)
