import os
import uuid

# app 을 import 하기 전에 테스트용 설정을 주입
os.environ["DATABASE_URL"] = "sqlite:///./test_teecha.db"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["AWS_S3_BUCKET_NAME"] = "test-bucket"
os.environ["AWS_REGION"] = "ap-northeast-2"

import pytest

from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.models.school import SchoolProfile
from app.models.student import StudentProfile
from app.models.teacher import TeacherProfile
from app.models.user import User
from app.services import email_service, upload_service
from app.services.token_service import create_access_token

TEST_PASSWORD = "password123"


@pytest.fixture(autouse=True)
def reset_db():
    """ 테스트마다 빈 DB """
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """ SMTP 대신 발송 내역을 기록 """
    outbox = []

    def fake_send_email(to_email, subject, html_body):
        outbox.append({"to": to_email, "subject": subject, "html": html_body})

    monkeypatch.setattr(email_service, "send_email", fake_send_email)
    return outbox


class FakeS3Client:
    def __init__(self):
        self.uploads = []
        self.fail = False

    def upload_fileobj(self, fileobj, bucket, key, ExtraArgs=None):
        if self.fail:
            from botocore.exceptions import ClientError
            raise ClientError({"Error": {"Code": "500", "Message": "boom"}}, "PutObject")
        self.uploads.append({"bucket": bucket, "key": key, "body": fileobj.read(), "extra": ExtraArgs})


@pytest.fixture(autouse=True)
def fake_s3(monkeypatch):
    client = FakeS3Client()
    monkeypatch.setattr(upload_service, "s3_client", client)
    return client


def auth_headers(user_id: str, role: str = "student") -> dict:
    user = User(id=user_id, role=role)
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def make_user():
    """
    DB 에 직접 사용자를 만들고 (user_id, headers) 반환.
    completed=True 이면 role 프로필 row 까지 만들어 gate 를 통과하는 상태로 만듭니다.
    """
    def _make_user(role="student", email=None, name=None, confirmed=True, completed=True, **profile_fields):
        db = SessionLocal()
        try:
            user = User(
                email=email or f"{role}_{uuid.uuid4().hex[:8]}@example.com",
                role=role,
                name=name or f"Test {role.title()}",
                email_confirmed=confirmed,
                profile_completed=completed,
            )
            user.password = TEST_PASSWORD
            db.add(user)
            db.flush()
            if completed:
                if role == "teacher":
                    db.add(TeacherProfile(user_id=user.id, subjects=["Math"], experience=3, **profile_fields))
                elif role == "student":
                    db.add(StudentProfile(user_id=user.id, interests=["Science"], **profile_fields))
                else:
                    profile_fields.setdefault("school_type", "public")
                    db.add(SchoolProfile(user_id=user.id, school_name=user.name, **profile_fields))
            db.commit()
            return user.id, auth_headers(user.id, role)
        finally:
            db.close()

    return _make_user


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
