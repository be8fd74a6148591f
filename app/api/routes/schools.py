from typing import Optional

from fastapi import APIRouter, Depends, Body, Query
from sqlalchemy.orm import Session

from app.dependencies.auth import require_completed_profile
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.school import SchoolListResponse, SchoolPageResponse, SchoolResponse, SchoolUpdate
from app.services import school_service

router = APIRouter()


@router.get("/by-user/{user_id}", response_model=SchoolResponse, summary="사용자 id 로 학교 조회")
def get_school_by_user(user_id: str, db: Session = Depends(get_db)):
    return SchoolResponse(school=school_service.get_school_by_user(db, user_id))


@router.get("", response_model=SchoolPageResponse, summary="학교 목록 (이름순)")
def list_schools(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    school_type: Optional[str] = Query(None, alias="schoolType"),
    db: Session = Depends(get_db)
):
    return school_service.list_schools(db, page, limit, search, city, state, school_type)


@router.get("/location/{city}", response_model=SchoolListResponse, summary="도시별 학교")
def list_by_city(city: str, db: Session = Depends(get_db)):
    return SchoolListResponse(schools=school_service.list_by_city(db, city))


@router.get("/type/{school_type}", response_model=SchoolListResponse, summary="유형별 학교")
def list_by_type(school_type: str, db: Session = Depends(get_db)):
    return SchoolListResponse(schools=school_service.list_by_type(db, school_type))


@router.get("/featured/popular", response_model=SchoolListResponse, summary="인기 학교 (학생 100명 이상)")
def list_popular(db: Session = Depends(get_db)):
    return SchoolListResponse(schools=school_service.list_popular(db))


@router.get("/{school_id}", response_model=SchoolResponse, summary="학교 상세")
def get_school(school_id: str, db: Session = Depends(get_db)):
    return SchoolResponse(school=school_service.get_school_or_404(db, school_id))


@router.put("/{school_id}", response_model=SchoolResponse, summary="학교 정보 수정 (학교 계정 본인만)")
def update_school(
    school_id: str,
    school_in: SchoolUpdate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    school = school_service.update_school(db, user, school_id, school_in)
    return SchoolResponse(message="School profile updated successfully", school=school)
