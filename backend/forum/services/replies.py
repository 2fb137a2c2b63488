"""
Reply thread: replies to one question, oldest first, no pagination.
"""
import logging

from sqlalchemy.orm import Session, joinedload

from forum.models.question import Question
from forum.models.reply import Reply
from forum.models.types import as_uuid, utcnow
from forum.models.user import User
from forum.schemas.reply import ReplyResponse
from forum.services import policy
from forum.services.auth import get_user_by_email
from forum.services.errors import NotFoundError
from forum.services.validation import validate_content

logger = logging.getLogger(__name__)


def _to_response(r: Reply) -> ReplyResponse:
    return ReplyResponse(
        id=str(r.id),
        content=r.content,
        question_id=str(r.question_id),
        user_id=str(r.user_id),
        user_name=r.user.name,
        created_at=r.created_at,
        updated_at=r.updated_at,
    )


def _load_reply(db: Session, reply_id) -> Reply:
    rid = as_uuid(reply_id)
    reply = db.get(Reply, rid) if rid else None
    if reply is None:
        raise NotFoundError(f"Reply not found with id: {reply_id}")
    return reply


def list_by_question(db: Session, question_id) -> list[ReplyResponse]:
    qid = as_uuid(question_id)
    if qid is None:
        return []
    rows = (
        db.query(Reply)
        .options(joinedload(Reply.user))
        .filter(Reply.question_id == qid)
        .order_by(Reply.created_at.asc())
        .all()
    )
    return [_to_response(r) for r in rows]


def list_by_author(db: Session, user_id) -> list[ReplyResponse]:
    uid = as_uuid(user_id)
    if uid is None:
        return []
    rows = (
        db.query(Reply)
        .options(joinedload(Reply.user))
        .filter(Reply.user_id == uid)
        .order_by(Reply.created_at.desc())
        .all()
    )
    return [_to_response(r) for r in rows]


def create_reply(db: Session, question_id, author_email: str, content: str) -> ReplyResponse:
    validate_content(content)
    user = get_user_by_email(db, author_email)
    if user is None:
        raise NotFoundError("User not found")
    qid = as_uuid(question_id)
    question = db.get(Question, qid) if qid else None
    if question is None:
        raise NotFoundError(f"Question not found with id: {question_id}")
    now = utcnow()
    reply = Reply(content=content, question=question, user=user, created_at=now, updated_at=now)
    db.add(reply)
    db.commit()
    db.refresh(reply)
    logger.info("Reply %s added to question %s by %s", reply.id, question.id, user.id)
    return _to_response(reply)


def update_reply(db: Session, reply_id, caller: User, content: str) -> ReplyResponse:
    reply = _load_reply(db, reply_id)
    policy.ensure_can_mutate(caller, reply.user, "reply")
    validate_content(content)
    reply.content = content
    reply.updated_at = utcnow()
    db.commit()
    db.refresh(reply)
    return _to_response(reply)


def delete_reply(db: Session, reply_id, caller: User) -> None:
    reply = _load_reply(db, reply_id)
    policy.ensure_can_delete(caller, reply.user, "reply")
    try:
        db.delete(reply)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Reply %s deleted by %s", reply_id, caller.id)
