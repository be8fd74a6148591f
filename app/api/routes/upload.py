from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from app.dependencies.auth import get_current_user
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.upload import ImageUploadResponse, ProfilePictureResponse, VideoUploadResponse
from app.services import profile_service, upload_service

router = APIRouter(
    dependencies=[Depends(get_current_user)]
)


@router.post("/profile-picture", response_model=ProfilePictureResponse, summary="프로필 사진 업로드 및 저장")
def upload_profile_picture(
        profile_picture: UploadFile = File(None, alias="profilePicture"),
        db: Session = Depends(get_db),
        user: User = Depends(get_current_user)
):
    """
    이미지(image/*, 5MB 이하)를 S3에 업로드하고 URL을 사용자 프로필 사진으로 저장합니다.
    """
    url = profile_service.update_profile_picture(db, user, profile_picture)
    return ProfilePictureResponse(message="Profile picture uploaded successfully", profile_picture=url)


@router.post("/post-image", response_model=ImageUploadResponse, summary="게시글 이미지 업로드")
def upload_post_image(image: UploadFile = File(None)):
    url = upload_service.upload_post_image(image)
    return ImageUploadResponse(message="Image uploaded successfully", image_url=url)


@router.post("/post-video", response_model=VideoUploadResponse, summary="게시글 영상 업로드")
def upload_post_video(video: UploadFile = File(None)):
    url = upload_service.upload_post_video(video)
    return VideoUploadResponse(message="Video uploaded successfully", video_url=url)
