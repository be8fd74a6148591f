import logging
import os
from uuid import uuid4

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError
from fastapi import HTTPException, UploadFile

from app.core.config import settings

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE = 5 * 1024 * 1024
MAX_VIDEO_SIZE = 50 * 1024 * 1024

s3_client = boto3.client(
    "s3",
    aws_access_key_id=settings.AWS_ACCESS_KEY,
    aws_secret_access_key=settings.AWS_SECRET_KEY,
    region_name=settings.AWS_REGION
)


def _file_size(file: UploadFile) -> int:
    if file.size is not None:
        return file.size
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(0)
    return size


def validate_upload(file: UploadFile, media_type: str, max_size: int) -> None:
    """ 파일 존재 / content-type(image/*, video/*) / 크기 검사. 실패 시 400 """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if not (file.content_type or "").startswith(f"{media_type}/"):
        raise HTTPException(status_code=400, detail=f"Only {media_type} files are allowed")
    if _file_size(file) > max_size:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size is {max_size // (1024 * 1024)}MB",
        )


def upload_to_s3(file: UploadFile, folder: str) -> str:
    """
    멀티파트로 받은 파일을 S3의 /{folder}/ 에 업로드하고, 공개 URL을 반환합니다.
    """
    try:
        ext = os.path.splitext(file.filename)[1]
        s3_key = f"{folder}/{uuid4().hex}{ext}"
        s3_client.upload_fileobj(
            file.file,
            settings.AWS_S3_BUCKET_NAME,
            s3_key,
            ExtraArgs={"ContentType": file.content_type}
        )
        return f"https://{settings.AWS_S3_BUCKET_NAME}.s3.{settings.AWS_REGION}.amazonaws.com/{s3_key}"
    except NoCredentialsError:
        logger.error("S3 인증 정보가 없습니다.")
        raise HTTPException(status_code=500, detail="Image host credentials are not configured")
    except (BotoCoreError, ClientError) as e:
        logger.error(f"S3 업로드 실패 ({folder}): {e}")
        raise HTTPException(status_code=500, detail="Error uploading file")


def upload_profile_picture(file: UploadFile) -> str:
    validate_upload(file, "image", MAX_IMAGE_SIZE)
    return upload_to_s3(file, "profile_pictures")


def upload_post_image(file: UploadFile) -> str:
    validate_upload(file, "image", MAX_IMAGE_SIZE)
    return upload_to_s3(file, "post_images")


def upload_post_video(file: UploadFile) -> str:
    validate_upload(file, "video", MAX_VIDEO_SIZE)
    return upload_to_s3(file, "post_videos")
