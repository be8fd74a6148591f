from app.schemas.base import CamelModel


class ProfilePictureResponse(CamelModel):
    message: str
    profile_picture: str


class ImageUploadResponse(CamelModel):
    message: str
    image_url: str


class VideoUploadResponse(CamelModel):
    message: str
    video_url: str
