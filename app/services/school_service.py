from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.models.school import SchoolProfile
from app.models.user import User
from app.schemas.school import SchoolOut, SchoolPageResponse, SchoolUpdate
from app.utils.pagination import paginate

POPULAR_MIN_STUDENTS = 100
POPULAR_LIMIT = 10


def _school_query(db: Session):
    return db.query(SchoolProfile).options(joinedload(SchoolProfile.user))


def _ilike(column, value: str):
    return func.lower(column).like(f"%{value.lower()}%")


def list_schools(
    db: Session,
    page: int,
    limit: int,
    search: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    school_type: Optional[str] = None,
) -> SchoolPageResponse:
    query = _school_query(db)
    if search:
        query = query.filter(_ilike(SchoolProfile.school_name, search))
    if city:
        query = query.filter(_ilike(SchoolProfile.city, city))
    if state:
        query = query.filter(_ilike(SchoolProfile.state, state))
    if school_type:
        query = query.filter(SchoolProfile.school_type == school_type)
    query = query.order_by(SchoolProfile.school_name.asc())

    schools, total_count, total_pages = paginate(query, page, limit)
    return SchoolPageResponse(
        schools=[SchoolOut.model_validate(s) for s in schools],
        total_count=total_count,
        total_pages=total_pages,
        current_page=page,
    )


def get_school_or_404(db: Session, school_id: str) -> SchoolProfile:
    school = _school_query(db).filter(SchoolProfile.id == school_id).first()
    if not school:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="School not found")
    return school


def get_school_by_user(db: Session, user_id: str) -> SchoolProfile:
    school = _school_query(db).filter(SchoolProfile.user_id == user_id).first()
    if not school:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="School not found")
    return school


def list_by_city(db: Session, city: str) -> List[SchoolProfile]:
    return _school_query(db).filter(_ilike(SchoolProfile.city, city)).order_by(SchoolProfile.school_name.asc()).all()


def list_by_type(db: Session, school_type: str) -> List[SchoolProfile]:
    return (
        _school_query(db)
        .filter(SchoolProfile.school_type == school_type)
        .order_by(SchoolProfile.school_name.asc())
        .all()
    )


def list_popular(db: Session) -> List[SchoolProfile]:
    """ 학생 수 100명 이상, 학생 수 내림차순 상위 10개 """
    return (
        _school_query(db)
        .filter(SchoolProfile.student_count >= POPULAR_MIN_STUDENTS)
        .order_by(SchoolProfile.student_count.desc())
        .limit(POPULAR_LIMIT)
        .all()
    )


def update_school(db: Session, user: User, school_id: str, school_in: SchoolUpdate) -> SchoolProfile:
    school = get_school_or_404(db, school_id)
    if school.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to update this school profile")

    for field, value in school_in.model_dump(exclude_unset=True).items():
        # NOT NULL 컬럼은 null 로 덮어쓰지 않음
        if value is None and not SchoolProfile.__table__.c[field].nullable:
            continue
        setattr(school, field, value)
    if school_in.school_name:
        user.name = school_in.school_name.strip()
    db.commit()
    db.refresh(school)
    return school
