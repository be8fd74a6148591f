import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path

from app.core.config import settings

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def render_template(template_name: str, replacements: dict) -> str:
    """
    templates/ 의 HTML 템플릿을 읽어 [Name], [ConfirmationLink] 같은 placeholder를 치환합니다.
    """
    html = (TEMPLATE_DIR / template_name).read_text(encoding="utf-8")
    for placeholder, value in replacements.items():
        html = html.replace(f"[{placeholder}]", value)
    return html


def send_email(to_email: str, subject: str, html_body: str) -> None:
    """ SMTP(STARTTLS)로 HTML 메일 발송. 실패 시 예외를 그대로 올림 """
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.EMAIL_USER or ""
    msg["To"] = to_email
    msg.attach(MIMEText(html_body, "html"))

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10) as server:
        server.starttls()
        if settings.EMAIL_USER and settings.EMAIL_PASS:
            server.login(settings.EMAIL_USER, settings.EMAIL_PASS)
        server.send_message(msg)


def send_confirmation_email(name: str, email: str, confirmation_token: str) -> bool:
    confirmation_link = f"{settings.FRONTEND_URL}/confirm?token={confirmation_token}"
    html = render_template(
        "email_confirmation.html",
        {"Name": name, "ConfirmationLink": confirmation_link},
    )
    try:
        send_email(email, "Welcome to Teacherrs - Confirm Your Email", html)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Error sending confirmation email to {email}: {e}")
        return False
    logger.info(f"Confirmation email sent to {email}")
    return True


def send_password_reset_email(email: str, reset_token: str) -> bool:
    reset_link = f"{settings.FRONTEND_URL}/reset-password?token={reset_token}"
    html = render_template("password_reset.html", {"ResetLink": reset_link})
    try:
        send_email(email, "Teacherrs - Password Reset Request", html)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Error sending password reset email to {email}: {e}")
        return False
    logger.info(f"Password reset email sent to {email}")
    return True
