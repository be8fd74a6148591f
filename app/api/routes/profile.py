from typing import Literal, Optional

from fastapi import APIRouter, Depends, Body, File, Query, UploadFile
from sqlalchemy.orm import Session

from app.dependencies.auth import get_current_user, require_completed_profile
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.base import MessageResponse
from app.schemas.profile import (
    ProfileSetupRequest,
    ProfileStatsResponse,
    UserListResponse,
    UserProfileResponse,
)
from app.schemas.upload import ProfilePictureResponse
from app.services import profile_service

router = APIRouter()


@router.post("", response_model=MessageResponse, summary="프로필 작성 완료 (멀티스텝 폼)")
def complete_profile(
    profile_in: ProfileSetupRequest = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    role 에 맞는 프로필을 생성/갱신하고 profile_completed 를 True 로 바꿉니다.
    학교 계정은 /api/school-auth/complete-profile 을 사용합니다.
    """
    profile_service.complete_profile(db, user, profile_in)
    return MessageResponse(message="Profile updated successfully")


@router.put("", response_model=MessageResponse, summary="프로필 수정")
def update_profile(
    profile_in: ProfileSetupRequest = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    profile_service.update_profile(db, user, profile_in)
    return MessageResponse(message="Profile updated successfully")


@router.post("/upload-picture", response_model=ProfilePictureResponse, summary="프로필 사진 업로드")
def upload_picture(
    profile_picture: UploadFile = File(None, alias="profilePicture"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    /api/upload/profile-picture 와 같은 동작 (프로필 편집 화면에서 사용)
    """
    url = profile_service.update_profile_picture(db, user, profile_picture)
    return ProfilePictureResponse(message="Profile picture uploaded successfully", profile_picture=url)


@router.get("/stats", response_model=ProfileStatsResponse, summary="내 활동 통계")
def get_stats(
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return profile_service.get_profile_stats(db, user)


@router.delete("/delete", response_model=MessageResponse, summary="계정 삭제")
def delete_account(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    profile_service.delete_account(db, user)
    return MessageResponse(message="Account deleted successfully")


@router.get("/{user_id}", response_model=UserProfileResponse, summary="사용자 프로필 조회",
            dependencies=[Depends(get_current_user)])
def get_profile(
    user_id: str,
    db: Session = Depends(get_db)
):
    return profile_service.get_user_profile(db, user_id)


@router.get("", response_model=UserListResponse, summary="프로필 둘러보기",
            dependencies=[Depends(require_completed_profile)])
def browse_profiles(
    role: Optional[Literal["teacher", "student", "school"]] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db)
):
    return profile_service.browse_users(db, role, search, page, limit)
