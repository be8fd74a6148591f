from typing import List

from fastapi import APIRouter, Depends, Body, status
from sqlalchemy.orm import Session

from app.dependencies.auth import require_completed_profile
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.base import MessageResponse, UserContact
from app.schemas.message import (
    ConversationOut,
    MessageCreate,
    MessageOut,
    MessageUpdate,
    UnreadCountResponse,
)
from app.services import message_service

router = APIRouter()


@router.post("", response_model=MessageOut, status_code=status.HTTP_201_CREATED, summary="메시지 보내기")
def send_message(
    message_in: MessageCreate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return message_service.send_message(db, user, message_in)


@router.get("/users", response_model=List[UserContact], summary="메시지 가능한 사용자 목록")
def list_users(
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return message_service.list_contacts(db, user)


@router.get("/teachers", response_model=List[UserContact], summary="메시지 가능한 강사 목록")
def list_teachers(
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return message_service.list_contacts(db, user, role="teacher")


@router.get("/conversations", response_model=List[ConversationOut], summary="대화 목록")
def list_conversations(
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return message_service.list_conversations(db, user)


@router.get("/conversation/{partner_id}", response_model=List[MessageOut], summary="상대방과의 대화 내용")
def get_conversation(
    partner_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    """
    상대방이 보낸 메시지는 조회 시 읽음 처리됩니다.
    """
    return message_service.get_conversation(db, user, partner_id)


@router.get("/unread-count", response_model=UnreadCountResponse, summary="읽지 않은 메시지 수")
def unread_count(
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return UnreadCountResponse(count=message_service.count_unread(db, user))


@router.put("/{message_id}", response_model=MessageOut, summary="메시지 수정 (보낸 사람만)")
def update_message(
    message_id: str,
    message_in: MessageUpdate = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return message_service.update_message(db, user, message_id, message_in.content)


@router.delete("/{message_id}", response_model=MessageResponse, summary="메시지 삭제 (보낸 사람만)")
def delete_message(
    message_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    message_service.delete_message(db, user, message_id)
    return MessageResponse(message="Message deleted successfully")
