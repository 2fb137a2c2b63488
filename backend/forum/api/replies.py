"""
Replies API: thread listing per question (oldest first) and author-scoped create/update/delete.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from forum.database import get_db
from forum.models.user import User
from forum.schemas.message import MessageResponse
from forum.schemas.reply import ReplyRequest, ReplyResponse
from forum.services import replies as reply_service
from forum.api.deps import get_current_user

router = APIRouter(prefix="/api/replies", tags=["replies"])


@router.get("/question/{question_id}", response_model=list[ReplyResponse])
def list_by_question(question_id: str, db: Session = Depends(get_db)):
    return reply_service.list_by_question(db, question_id)


@router.post("/question/{question_id}", response_model=ReplyResponse, status_code=status.HTTP_201_CREATED)
def create_reply(
    question_id: str,
    data: ReplyRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return reply_service.create_reply(db, question_id, current_user.email, data.content)


@router.get("/user/{user_id}", response_model=list[ReplyResponse])
def list_by_author(user_id: str, db: Session = Depends(get_db)):
    return reply_service.list_by_author(db, user_id)


@router.put("/{reply_id}", response_model=ReplyResponse)
def update_reply(
    reply_id: str,
    data: ReplyRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return reply_service.update_reply(db, reply_id, current_user, data.content)


@router.delete("/{reply_id}", response_model=MessageResponse)
def delete_reply(
    reply_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    reply_service.delete_reply(db, reply_id, current_user)
    return MessageResponse(message="Reply deleted successfully")
