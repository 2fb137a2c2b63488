"""
Question catalog: questions scoped to a page and an author.
Listing is newest first with offset pagination (page * size); reply_count is a live count query.
Update is author-only; delete is author or ADMIN (see services.policy).
"""
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from forum.models.page import Page
from forum.models.question import Question
from forum.models.reply import Reply
from forum.models.types import as_uuid, utcnow
from forum.models.user import User
from forum.schemas.question import QuestionResponse
from forum.services import policy
from forum.services.auth import get_user_by_email
from forum.services.errors import NotFoundError
from forum.services.validation import validate_description, validate_pagination, validate_title

logger = logging.getLogger(__name__)

MAX_SQL_INT = 2**63 - 1


def _to_response(q: Question, reply_count: int) -> QuestionResponse:
    return QuestionResponse(
        id=str(q.id),
        title=q.title,
        description=q.description,
        user_id=str(q.user_id),
        user_name=q.user.name,
        page_id=str(q.page_id),
        page_name=q.page.name,
        reply_count=reply_count,
        created_at=q.created_at,
        updated_at=q.updated_at,
    )


def _reply_count(db: Session, question_id) -> int:
    return db.query(func.count(Reply.id)).filter(Reply.question_id == question_id).scalar() or 0


def _to_responses(db: Session, questions: list[Question]) -> list[QuestionResponse]:
    """Project a slice with one grouped reply-count query."""
    if not questions:
        return []
    ids = [q.id for q in questions]
    counts = dict(
        db.query(Reply.question_id, func.count(Reply.id))
        .filter(Reply.question_id.in_(ids))
        .group_by(Reply.question_id)
        .all()
    )
    return [_to_response(q, counts.get(q.id, 0)) for q in questions]


def _newest_first(query):
    # id breaks created_at ties so consecutive pages never overlap
    return query.order_by(Question.created_at.desc(), Question.id.desc())


def _load_question(db: Session, question_id) -> Question:
    qid = as_uuid(question_id)
    question = db.get(Question, qid) if qid else None
    if question is None:
        raise NotFoundError(f"Question not found with id: {question_id}")
    return question


def _page_slice(db: Session, query, page: int, size: int) -> list[QuestionResponse]:
    validate_pagination(page, size)
    offset = page * size
    # OFFSET/LIMIT are bound as signed 64-bit integers; nothing lives past that
    if offset >= MAX_SQL_INT:
        return []
    rows = (
        _newest_first(query)
        .options(joinedload(Question.user), joinedload(Question.page))
        .offset(offset)
        .limit(min(size, MAX_SQL_INT))
        .all()
    )
    return _to_responses(db, rows)


def list_by_page(db: Session, page_id, page: int = 0, size: int = 20) -> list[QuestionResponse]:
    """Questions of one page, newest first. Unknown page or page past the end -> []."""
    pid = as_uuid(page_id)
    if pid is None:
        return []
    return _page_slice(db, db.query(Question).filter(Question.page_id == pid), page, size)


def list_by_page_name(db: Session, page_name: str, page: int = 0, size: int = 20) -> list[QuestionResponse]:
    query = db.query(Question).join(Page, Question.page_id == Page.id).filter(Page.name == page_name)
    return _page_slice(db, query, page, size)


def list_by_author(db: Session, user_id) -> list[QuestionResponse]:
    uid = as_uuid(user_id)
    if uid is None:
        return []
    rows = _newest_first(db.query(Question).filter(Question.user_id == uid)).all()
    return _to_responses(db, rows)


def get_question(db: Session, question_id) -> QuestionResponse:
    question = _load_question(db, question_id)
    return _to_response(question, _reply_count(db, question.id))


def create_question(db: Session, author_email: str, title: str, description: str, page_id) -> QuestionResponse:
    validate_title(title)
    validate_description(description)
    user = get_user_by_email(db, author_email)
    if user is None:
        raise NotFoundError("User not found")
    pid = as_uuid(page_id)
    page = db.get(Page, pid) if pid else None
    if page is None:
        raise NotFoundError(f"Page not found with id: {page_id}")
    now = utcnow()
    question = Question(
        title=title,
        description=description,
        user=user,
        page=page,
        created_at=now,
        updated_at=now,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    logger.info("Question %s created on page %s by %s", question.id, page.name, user.id)
    return _to_response(question, 0)


def update_question(db: Session, question_id, caller: User, title: str, description: str) -> QuestionResponse:
    """Author-only edit of title/description; bumps updated_at."""
    question = _load_question(db, question_id)
    policy.ensure_can_mutate(caller, question.user, "question")
    validate_title(title)
    validate_description(description)
    question.title = title
    question.description = description
    question.updated_at = utcnow()
    db.commit()
    db.refresh(question)
    return _to_response(question, _reply_count(db, question.id))


def delete_question(db: Session, question_id, caller: User) -> None:
    """Author or ADMIN. Replies are removed in the same transaction."""
    question = _load_question(db, question_id)
    policy.ensure_can_delete(caller, question.user, "question")
    try:
        db.delete(question)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Question %s deleted by %s", question_id, caller.id)
