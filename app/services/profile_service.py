import logging
from typing import Optional

from fastapi import HTTPException, UploadFile, status
from sqlalchemy import JSON, func, or_
from sqlalchemy.orm import Session

from app.models.comment import Comment
from app.models.connection import Connection
from app.models.discussion import Discussion
from app.models.discussion_comment import DiscussionComment
from app.models.like import Like
from app.models.message import Message
from app.models.post import Post
from app.models.review import Review
from app.models.student import StudentProfile
from app.models.teacher import TeacherProfile
from app.models.user import User
from app.schemas.profile import (
    ProfileSetupRequest,
    ProfileStatsResponse,
    STUDENT_FIELDS,
    StudentProfileOut,
    TEACHER_FIELDS,
    TeacherProfileOut,
    UserListResponse,
    UserProfileResponse,
)
from app.schemas.school import SchoolOut
from app.services import upload_service
from app.services.user_service import get_user_by_id
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)


def upsert_role_profile(db: Session, user: User, profile_in: ProfileSetupRequest):
    """
    role(teacher/student)에 맞는 프로필 row 를 만들거나 갱신합니다.
    요청에 포함된 필드만 반영하고, 다른 role 의 필드는 무시합니다.
    """
    if user.role == "teacher":
        model, fields = TeacherProfile, TEACHER_FIELDS
    elif user.role == "student":
        model, fields = StudentProfile, STUDENT_FIELDS
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="School profiles are completed through /api/school-auth/complete-profile",
        )

    data = profile_in.model_dump(include=set(fields), exclude_unset=True)
    profile = db.query(model).filter(model.user_id == user.id).first()
    if not profile:
        profile = model(user_id=user.id)
        db.add(profile)
    for field, value in data.items():
        # JSON(목록/링크) 컬럼은 null 로 덮어쓰지 않음
        if value is None and isinstance(model.__table__.c[field].type, JSON):
            continue
        setattr(profile, field, value)
    return profile


def update_profile_picture(db: Session, user: User, file: UploadFile) -> str:
    """ 이미지를 S3에 올리고 URL을 사용자 프로필 사진으로 저장 """
    url = upload_service.upload_profile_picture(file)
    user.profile_picture = url
    db.commit()
    logger.info(f"프로필 사진 변경 - user: {user.id}")
    return url


def complete_profile(db: Session, user: User, profile_in: ProfileSetupRequest) -> None:
    upsert_role_profile(db, user, profile_in)
    if profile_in.name:
        user.name = profile_in.name.strip()
    if profile_in.bio is not None:
        user.bio = profile_in.bio
    user.profile_completed = True
    db.commit()
    logger.info(f"프로필 작성 완료 - user: {user.id}")


def update_profile(db: Session, user: User, profile_in: ProfileSetupRequest) -> None:
    """ 이름/소개 수정 + role 프로필 upsert. 완성 여부는 바꾸지 않음 """
    if profile_in.name:
        user.name = profile_in.name.strip()
    if profile_in.bio is not None:
        user.bio = profile_in.bio
    if user.role != "school":
        upsert_role_profile(db, user, profile_in)
    db.commit()


def profile_dict(user: User) -> dict:
    profile = user.role_profile
    if profile is None:
        return {}
    if user.role == "teacher":
        schema = TeacherProfileOut
    elif user.role == "student":
        schema = StudentProfileOut
    else:
        return SchoolOut.model_validate(profile).model_dump(by_alias=True, mode="json", exclude={"user"})
    return schema.model_validate(profile).model_dump(by_alias=True, mode="json")


def build_user_profile(user: User) -> UserProfileResponse:
    return UserProfileResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        bio=user.bio,
        profile_picture=user.profile_picture,
        profile_completed=user.profile_completed,
        created_at=user.created_at,
        profile=profile_dict(user),
    )


def get_user_profile(db: Session, user_id: str) -> UserProfileResponse:
    user = get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return build_user_profile(user)


def browse_users(db: Session, role: Optional[str], search: Optional[str], page: int, limit: int) -> UserListResponse:
    query = db.query(User).filter(User.profile_completed.is_(True))
    if role:
        query = query.filter(User.role == role)
    if search:
        query = query.filter(func.lower(User.name).like(f"%{search.lower()}%"))
    query = query.order_by(User.created_at.desc())

    users, total_count, total_pages = paginate(query, page, limit)
    return UserListResponse(
        users=[build_user_profile(u) for u in users],
        total_count=total_count,
        total_pages=total_pages,
        current_page=page,
    )


def get_profile_stats(db: Session, user: User) -> ProfileStatsResponse:
    connections = db.query(Connection).filter(
        Connection.status == "accepted",
        or_(Connection.requester_id == user.id, Connection.receiver_id == user.id),
    ).count()
    posts = db.query(Post).filter(Post.user_id == user.id).count()
    reviews = db.query(Review).filter(Review.user_id == user.id).count()
    messages = db.query(Message).filter(
        or_(Message.sender_id == user.id, Message.receiver_id == user.id)
    ).count()
    return ProfileStatsResponse(connections=connections, posts=posts, reviews=reviews, messages=messages)


def _delete_discussion_comment_tree(db: Session, comment: DiscussionComment) -> int:
    """ 댓글과 하위 답글 전체 삭제, 새로 삭제된 개수 반환 (이미 삭제 표시된 답글은 세지 않음) """
    deleted = 0
    for reply in list(comment.replies):
        deleted += _delete_discussion_comment_tree(db, reply)
    if comment not in db.deleted:
        db.delete(comment)
        deleted += 1
    return deleted


def delete_account(db: Session, user: User) -> None:
    """
    계정과 사용자가 소유한 모든 데이터 삭제.
    다른 사용자의 게시글/토론에 남긴 좋아요·댓글은 카운터도 함께 감소시킵니다.
    """
    user_id = user.id

    own_post_ids = [pid for (pid,) in db.query(Post.id).filter(Post.user_id == user_id)]
    if own_post_ids:
        db.query(Like).filter(Like.post_id.in_(own_post_ids)).delete(synchronize_session=False)
        db.query(Comment).filter(Comment.post_id.in_(own_post_ids)).delete(synchronize_session=False)
        db.query(Post).filter(Post.id.in_(own_post_ids)).delete(synchronize_session=False)

    for like in db.query(Like).filter(Like.user_id == user_id).all():
        db.query(Post).filter(Post.id == like.post_id, Post.likes_count > 0).update(
            {Post.likes_count: Post.likes_count - 1}, synchronize_session=False
        )
        db.delete(like)
    for comment in db.query(Comment).filter(Comment.user_id == user_id).all():
        db.query(Post).filter(Post.id == comment.post_id, Post.comments_count > 0).update(
            {Post.comments_count: Post.comments_count - 1}, synchronize_session=False
        )
        db.delete(comment)

    for discussion in db.query(Discussion).filter(Discussion.user_id == user_id).all():
        db.delete(discussion)
    db.flush()
    for comment in db.query(DiscussionComment).filter(DiscussionComment.user_id == user_id).all():
        if comment in db.deleted:
            continue
        discussion = comment.discussion
        deleted = _delete_discussion_comment_tree(db, comment)
        discussion.comment_count = max(0, discussion.comment_count - deleted)
    db.flush()

    db.query(Connection).filter(
        or_(Connection.requester_id == user_id, Connection.receiver_id == user_id)
    ).delete(synchronize_session=False)
    db.query(Message).filter(
        or_(Message.sender_id == user_id, Message.receiver_id == user_id)
    ).delete(synchronize_session=False)

    if user.teacher_profile:
        for review in list(user.teacher_profile.reviews):
            db.delete(review)
    for profile in (user.teacher_profile, user.student_profile, user.school_profile):
        if profile is not None:
            db.delete(profile)
    db.flush()
    db.query(Review).filter(Review.user_id == user_id).delete(synchronize_session=False)
    db.expire(user, ["teacher_profile", "student_profile", "school_profile"])

    db.delete(user)
    db.commit()
    logger.info(f"계정 삭제 - user: {user_id}")
