from typing import List

from fastapi import APIRouter, Depends, Body, status
from sqlalchemy.orm import Session

from app.dependencies.auth import require_completed_profile
from app.dependencies.db import get_db
from app.models.user import User
from app.schemas.connection import ConnectionAction, ConnectionRequest, ConnectionResponse
from app.services import connection_service

router = APIRouter()


@router.post("/request", response_model=ConnectionResponse, status_code=status.HTTP_201_CREATED,
             summary="연결 요청")
def send_request(
    request_in: ConnectionRequest = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return connection_service.send_request(db, user, request_in.receiver_id)


@router.post("/accept", response_model=ConnectionResponse, summary="연결 요청 수락 (받은 사람만)")
def accept_request(
    action_in: ConnectionAction = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return connection_service.respond_to_request(db, user, action_in.connection_id, "accepted")


@router.post("/reject", response_model=ConnectionResponse, summary="연결 요청 거절 (받은 사람만)")
def reject_request(
    action_in: ConnectionAction = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return connection_service.respond_to_request(db, user, action_in.connection_id, "rejected")


@router.get("", response_model=List[ConnectionResponse], summary="내 연결 목록 (수락됨)")
def list_connections(
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return connection_service.list_connections(db, user)


@router.get("/pending", response_model=List[ConnectionResponse], summary="받은 연결 요청 목록")
def list_pending(
    db: Session = Depends(get_db),
    user: User = Depends(require_completed_profile)
):
    return connection_service.list_pending(db, user)
