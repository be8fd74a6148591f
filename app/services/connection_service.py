from typing import List

from fastapi import HTTPException, status
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, joinedload

from app.models.connection import Connection
from app.models.user import User
from app.services.user_service import get_user_by_id


def send_request(db: Session, user: User, receiver_id: str) -> Connection:
    if receiver_id == user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot connect with yourself")
    if not get_user_by_id(db, receiver_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    # 방향과 관계없이 이미 대기/수락 상태인 연결이 있으면 중복
    existing = db.query(Connection).filter(
        Connection.status.in_(("pending", "accepted")),
        or_(
            and_(Connection.requester_id == user.id, Connection.receiver_id == receiver_id),
            and_(Connection.requester_id == receiver_id, Connection.receiver_id == user.id),
        ),
    ).first()
    if existing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Connection already exists")

    connection = Connection(requester_id=user.id, receiver_id=receiver_id, status="pending")
    db.add(connection)
    db.commit()
    db.refresh(connection)
    return connection


def respond_to_request(db: Session, user: User, connection_id: str, new_status: str) -> Connection:
    """ 받은 요청만 수락/거절 가능 """
    connection = db.query(Connection).filter(Connection.id == connection_id).first()
    if not connection:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Connection not found")
    if connection.receiver_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to respond to this request")
    if connection.status != "pending":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Connection request is no longer pending")

    connection.status = new_status
    db.commit()
    db.refresh(connection)
    return connection


def list_connections(db: Session, user: User) -> List[Connection]:
    return (
        db.query(Connection)
        .options(joinedload(Connection.requester), joinedload(Connection.receiver))
        .filter(
            Connection.status == "accepted",
            or_(Connection.requester_id == user.id, Connection.receiver_id == user.id),
        )
        .order_by(Connection.updated_at.desc())
        .all()
    )


def list_pending(db: Session, user: User) -> List[Connection]:
    return (
        db.query(Connection)
        .options(joinedload(Connection.requester))
        .filter(Connection.status == "pending", Connection.receiver_id == user.id)
        .order_by(Connection.created_at.desc())
        .all()
    )
