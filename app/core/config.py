import os
from dotenv import load_dotenv

load_dotenv()


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    # 개별 DB_* 변수만 있는 배포 환경 (Render 등)
    if os.getenv("DB_HOST") and os.getenv("DB_NAME"):
        return "postgresql://{user}:{password}@{host}:{port}/{name}".format(
            user=os.getenv("DB_USER", "postgres"),
            password=os.getenv("DB_PASSWORD", ""),
            host=os.getenv("DB_HOST"),
            port=os.getenv("DB_PORT", "5432"),
            name=os.getenv("DB_NAME"),
        )
    return "sqlite:///./teecha.db"


class Settings:
    DATABASE_URL = _database_url()
    AWS_ACCESS_KEY = os.getenv("AWS_ACCESS_KEY", "accesskey")
    AWS_SECRET_KEY = os.getenv("AWS_SECRET_KEY", "supersecret")
    AWS_REGION = os.getenv("AWS_REGION", "ap-northeast-2")
    AWS_S3_BUCKET_NAME = os.getenv("AWS_S3_BUCKET_NAME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "jwt-secret")
    JWT_ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
    SCHOOL_ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("SCHOOL_ACCESS_TOKEN_EXPIRE_DAYS", 30))
    REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", 90))
    CONFIRMATION_TOKEN_EXPIRE_HOURS = int(os.getenv("CONFIRMATION_TOKEN_EXPIRE_HOURS", 24))
    RESET_TOKEN_EXPIRE_MINUTES = int(os.getenv("RESET_TOKEN_EXPIRE_MINUTES", 60))
    EMAIL_USER = os.getenv("EMAIL_USER")
    EMAIL_PASS = os.getenv("EMAIL_PASS")
    SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(os.getenv("SMTP_PORT", 587))
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://localhost:5173,http://localhost:5174,https://teachersonline.vercel.app",
        ).split(",")
        if origin.strip()
    ]
    PORT = int(os.getenv("PORT", 5000))

settings = Settings()
