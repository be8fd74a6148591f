from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from app.models.review import Review
from app.models.teacher import TeacherProfile
from app.models.user import User
from app.schemas.review import ReviewCreate


def create_review(db: Session, user: User, review_in: ReviewCreate) -> Review:
    teacher = db.query(TeacherProfile).filter(TeacherProfile.id == review_in.teacher_id).first()
    if not teacher:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")

    review = Review(
        user_id=user.id,
        teacher_id=teacher.id,
        rating=review_in.rating,
        comment=review_in.comment,
    )
    db.add(review)
    db.commit()
    db.refresh(review)
    return review


def list_reviews(db: Session, teacher_id: str) -> List[Review]:
    return (
        db.query(Review)
        .options(joinedload(Review.user))
        .filter(Review.teacher_id == teacher_id)
        .order_by(Review.created_at.desc())
        .all()
    )
