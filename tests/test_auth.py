import re
import smtplib

from fastapi.testclient import TestClient

from app.main import app
from app.models.user import User
from app.services import email_service
from app.services.token_service import create_refresh_token_with_rotation

client = TestClient(app)

TEST_EMAIL = "newuser@example.com"
TEST_PASSWORD = "password123"


def extract_token(html: str) -> str:
    return re.search(r"token=([\w\-\.]+)", html).group(1)


def register(email=TEST_EMAIL, password=TEST_PASSWORD, role="teacher", name="New Teacher"):
    return client.post("/api/auth/register", json={
        "email": email,
        "password": password,
        "role": role,
        "name": name,
    })


def test_register_confirm_login_flow(sent_emails):
    """
    가입 -> (미확인) 로그인 401 -> 이메일 확인 -> 로그인 200
    """
    resp = register()
    assert resp.status_code == 201
    data = resp.json()
    assert data["status"] == "success"
    assert data["message"] == "Registration successful. Check your email for confirmation."
    assert data["email"] == TEST_EMAIL

    assert len(sent_emails) == 1
    assert sent_emails[0]["to"] == TEST_EMAIL
    assert "/confirm?token=" in sent_emails[0]["html"]
    assert "New Teacher" in sent_emails[0]["html"]

    resp = client.post("/api/auth/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    assert resp.status_code == 401
    assert resp.json()["detail"]["isEmailUnconfirmed"] is True

    token = extract_token(sent_emails[0]["html"])
    resp = client.post("/api/auth/confirm", json={"token": token})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Email confirmed"

    resp = client.post("/api/auth/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    assert resp.status_code == 200
    data = resp.json()
    assert data["token"]
    assert data["user"]["email"] == TEST_EMAIL
    assert data["user"]["role"] == "teacher"
    assert data["user"]["profileCompleted"] is False


def test_register_duplicate_email():
    assert register().status_code == 201
    resp = register(name="Someone Else")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already registered. Please log in or use a different email."


def test_register_validation_errors():
    resp = register(email="not-an-email")
    assert resp.status_code == 400
    assert "email" in [e["field"] for e in resp.json()["errors"]]

    resp = register(password="123")
    assert resp.status_code == 400
    assert "password" in [e["field"] for e in resp.json()["errors"]]


def test_register_keeps_user_when_email_fails(monkeypatch, db_session):
    def broken_send_email(to_email, subject, html_body):
        raise smtplib.SMTPException("smtp down")

    monkeypatch.setattr(email_service, "send_email", broken_send_email)

    resp = register()
    assert resp.status_code == 201
    assert resp.json()["status"] == "warning"
    assert db_session.query(User).filter(User.email == TEST_EMAIL).first() is not None


def test_password_is_hashed(db_session):
    register()
    user = db_session.query(User).filter(User.email == TEST_EMAIL).first()
    assert user.hashed_password != TEST_PASSWORD
    assert user.verify_password(TEST_PASSWORD)


def test_login_invalid_credentials(make_user):
    make_user(role="student", email="student@example.com")

    resp = client.post("/api/auth/login", json={"email": "student@example.com", "password": "wrongpass"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"

    resp = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": TEST_PASSWORD})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"


def test_unconfirmed_checked_before_password(make_user):
    make_user(role="student", email="pending@example.com", confirmed=False, completed=False)
    resp = client.post("/api/auth/login", json={"email": "pending@example.com", "password": "wrongpass"})
    assert resp.status_code == 401
    assert resp.json()["detail"]["isEmailUnconfirmed"] is True


def test_confirm_invalid_token():
    resp = client.post("/api/auth/confirm", json={"token": "garbage"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid or expired token"


def test_send_confirmation(sent_emails, make_user):
    resp = client.post("/api/auth/send-confirmation", json={"email": "missing@example.com"})
    assert resp.status_code == 404

    make_user(role="student", email="done@example.com")
    resp = client.post("/api/auth/send-confirmation", json={"email": "done@example.com"})
    assert resp.status_code == 400

    make_user(role="student", email="pending@example.com", confirmed=False, completed=False)
    resp = client.post("/api/auth/send-confirmation", json={"email": "pending@example.com"})
    assert resp.status_code == 200
    assert sent_emails[-1]["to"] == "pending@example.com"


def test_forgot_and_reset_password(sent_emails, make_user):
    """
    비밀번호 재설정: 존재하지 않는 이메일도 동일한 응답
    """
    make_user(role="student", email="forgetful@example.com")

    resp = client.post("/api/auth/forgot-password", json={"email": "unknown@example.com"})
    assert resp.status_code == 200
    assert resp.json()["message"] == "If the email exists, a password reset link has been sent"
    assert sent_emails == []

    resp = client.post("/api/auth/forgot-password", json={"email": "forgetful@example.com"})
    assert resp.status_code == 200
    assert resp.json()["message"] == "If the email exists, a password reset link has been sent"
    assert "/reset-password?token=" in sent_emails[0]["html"]

    token = extract_token(sent_emails[0]["html"])
    resp = client.post("/api/auth/reset-password", json={"token": token, "password": "brandnew1"})
    assert resp.status_code == 200

    resp = client.post("/api/auth/login", json={"email": "forgetful@example.com", "password": "brandnew1"})
    assert resp.status_code == 200

    # 사용한 토큰은 재사용 불가
    resp = client.post("/api/auth/reset-password", json={"token": token, "password": "another1"})
    assert resp.status_code == 400


def test_change_password(make_user):
    _, headers = make_user(role="student", email="changer@example.com")

    resp = client.put("/api/auth/change-password", headers=headers,
                      json={"currentPassword": "wrong", "newPassword": "newpass123"})
    assert resp.status_code == 400

    resp = client.put("/api/auth/change-password", headers=headers,
                      json={"currentPassword": TEST_PASSWORD, "newPassword": "newpass123"})
    assert resp.status_code == 200

    resp = client.post("/api/auth/login", json={"email": "changer@example.com", "password": "newpass123"})
    assert resp.status_code == 200


def test_me_requires_token(make_user):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer invalid"}).status_code == 401

    user_id, headers = make_user(role="teacher", name="Ms Kim")
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == user_id
    assert resp.json()["name"] == "Ms Kim"


def test_refresh_token_rejected_as_access_token(make_user, db_session):
    user_id, _ = make_user(role="student")
    user = db_session.query(User).filter(User.id == user_id).first()
    refresh_token = create_refresh_token_with_rotation(db_session, user)

    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {refresh_token}"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token type"


def test_refresh_rotation_and_logout(make_user, db_session):
    user_id, headers = make_user(role="student")
    user = db_session.query(User).filter(User.id == user_id).first()
    refresh_token = create_refresh_token_with_rotation(db_session, user)

    resp = client.post("/api/auth/refresh", json={"refreshToken": refresh_token})
    assert resp.status_code == 200
    new_refresh = resp.json()["refreshToken"]
    assert resp.json()["token"]

    # 이전 refresh token 은 더 이상 사용 불가
    resp = client.post("/api/auth/refresh", json={"refreshToken": refresh_token})
    assert resp.status_code == 401

    resp = client.post("/api/auth/logout", headers=headers)
    assert resp.status_code == 200
    resp = client.post("/api/auth/refresh", json={"refreshToken": new_refresh})
    assert resp.status_code == 401
