from typing import List

from fastapi import HTTPException, status
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, joinedload

from app.models.message import Message
from app.models.user import User
from app.schemas.base import UserContact
from app.schemas.message import ConversationOut, MessageCreate, MessageOut
from app.services.user_service import get_user_by_id


def send_message(db: Session, user: User, message_in: MessageCreate) -> Message:
    if not get_user_by_id(db, message_in.receiver_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Receiver not found")

    message = Message(
        sender_id=user.id,
        receiver_id=message_in.receiver_id,
        content=message_in.content.strip(),
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


def list_contacts(db: Session, user: User, role: str = None) -> List[User]:
    """ 메시지를 보낼 수 있는 (이메일 확인된) 다른 사용자 목록 """
    query = db.query(User).filter(User.email_confirmed.is_(True), User.id != user.id)
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.name.asc()).all()


def list_conversations(db: Session, user: User) -> List[ConversationOut]:
    """
    상대방별 대화 요약: 마지막 메시지와 내가 읽지 않은 메시지 수.
    최근 대화가 앞에 옵니다.
    """
    messages = (
        db.query(Message)
        .options(joinedload(Message.sender), joinedload(Message.receiver))
        .filter(or_(Message.sender_id == user.id, Message.receiver_id == user.id))
        .order_by(Message.created_at.desc())
        .all()
    )

    conversations = {}
    for message in messages:
        partner = message.receiver if message.sender_id == user.id else message.sender
        summary = conversations.get(partner.id)
        if summary is None:
            summary = conversations[partner.id] = {
                "partner": UserContact.model_validate(partner),
                "last_message": MessageOut.model_validate(message),
                "unread_count": 0,
            }
        if message.receiver_id == user.id and not message.is_read:
            summary["unread_count"] += 1

    return [ConversationOut(**summary) for summary in conversations.values()]


def get_conversation(db: Session, user: User, partner_id: str) -> List[Message]:
    """ 두 사용자 간 메시지 (오래된 순). 받은 메시지는 읽음 처리 """
    db.query(Message).filter(
        Message.sender_id == partner_id,
        Message.receiver_id == user.id,
        Message.is_read.is_(False),
    ).update({Message.is_read: True}, synchronize_session=False)
    db.commit()

    return (
        db.query(Message)
        .options(joinedload(Message.sender), joinedload(Message.receiver))
        .filter(
            or_(
                and_(Message.sender_id == user.id, Message.receiver_id == partner_id),
                and_(Message.sender_id == partner_id, Message.receiver_id == user.id),
            )
        )
        .order_by(Message.created_at.asc())
        .all()
    )


def count_unread(db: Session, user: User) -> int:
    return db.query(Message).filter(Message.receiver_id == user.id, Message.is_read.is_(False)).count()


def _get_own_message(db: Session, user: User, message_id: str) -> Message:
    message = db.query(Message).filter(Message.id == message_id).first()
    if not message:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    if message.sender_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to modify this message")
    return message


def update_message(db: Session, user: User, message_id: str, content: str) -> Message:
    message = _get_own_message(db, user, message_id)
    message.content = content.strip()
    db.commit()
    db.refresh(message)
    return message


def delete_message(db: Session, user: User, message_id: str) -> None:
    message = _get_own_message(db, user, message_id)
    db.delete(message)
    db.commit()
