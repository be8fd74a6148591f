import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload, selectinload

from app.models.comment import Comment
from app.models.like import Like
from app.models.post import Post
from app.models.user import User
from app.schemas.post import (
    LikeToggleResponse,
    PostCreate,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)


def adjust_counter(db: Session, column, post_id: str, delta: int) -> None:
    """
    posts 의 비정규화 카운터(likes_count/comments_count)를 SQL 로 증감합니다.
    0 미만으로는 내려가지 않으며, 호출 측의 insert/delete 와는 별도 commit 입니다.
    """
    query = db.query(Post).filter(Post.id == post_id)
    if delta < 0:
        query = query.filter(column > 0)
    query.update({column: column + delta}, synchronize_session=False)
    db.commit()


def get_post_or_404(db: Session, post_id: str) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


def _load_post(db: Session, post_id: str) -> Post:
    return (
        db.query(Post)
        .options(joinedload(Post.user), selectinload(Post.likes))
        .filter(Post.id == post_id)
        .populate_existing()
        .first()
    )


def create_post(db: Session, user: User, post_in: PostCreate) -> PostResponse:
    post = Post(
        user_id=user.id,
        content=post_in.content,
        type=post_in.type,
        image_url=post_in.image_url,
        video_url=post_in.video_url,
    )
    db.add(post)
    db.commit()
    logger.info(f"게시글 작성 - post: {post.id}, user: {user.id}")
    return PostResponse.model_validate(_load_post(db, post.id))


def list_posts(db: Session, page: int, limit: int) -> PostListResponse:
    query = (
        db.query(Post)
        .options(joinedload(Post.user), selectinload(Post.likes))
        .order_by(Post.created_at.desc())
    )
    posts, total_count, total_pages = paginate(query, page, limit)
    return PostListResponse(
        posts=[PostResponse.model_validate(p) for p in posts],
        total_count=total_count,
        total_pages=total_pages,
        current_page=page,
    )


def toggle_like(db: Session, user: User, post_id: str) -> LikeToggleResponse:
    get_post_or_404(db, post_id)
    like = db.query(Like).filter(Like.user_id == user.id, Like.post_id == post_id).first()
    if like:
        db.delete(like)
        db.commit()
        adjust_counter(db, Post.likes_count, post_id, -1)
        return LikeToggleResponse(message="Post unliked", liked=False)

    db.add(Like(user_id=user.id, post_id=post_id))
    db.commit()
    adjust_counter(db, Post.likes_count, post_id, 1)
    return LikeToggleResponse(message="Post liked", liked=True)


def update_post(db: Session, user: User, post_id: str, post_in: PostUpdate) -> PostResponse:
    post = get_post_or_404(db, post_id)
    if post.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to edit this post")

    for field, value in post_in.model_dump(exclude_unset=True).items():
        if field == "content" and value is None:
            continue
        setattr(post, field, value)
    db.commit()
    return PostResponse.model_validate(_load_post(db, post.id))


def delete_post(db: Session, user: User, post_id: str) -> None:
    post = get_post_or_404(db, post_id)
    if post.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to delete this post")

    db.query(Like).filter(Like.post_id == post_id).delete(synchronize_session=False)
    db.query(Comment).filter(Comment.post_id == post_id).delete(synchronize_session=False)
    db.delete(post)
    db.commit()
    logger.info(f"게시글 삭제 - post: {post_id}")
