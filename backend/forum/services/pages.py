"""
Page directory: list/get/create/delete topic pages and the default-page seed.
question_count is a live count query, never a stored column.
"""
import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum.models.page import Page
from forum.models.question import Question
from forum.models.types import as_uuid
from forum.schemas.page import PageResponse
from forum.services.errors import ConflictError, NotFoundError
from forum.services.validation import validate_page_name

logger = logging.getLogger(__name__)

DEFAULT_PAGES = [
    ("CSE", "Computer Science and Engineering - Programming, Data Structures, Algorithms, DBMS, OS, Networks"),
    ("ECE", "Electronics and Communication Engineering - Circuits, Signals, Communication Systems, VLSI"),
    ("Mathematics", "Mathematics - Calculus, Linear Algebra, Probability, Statistics, Discrete Math"),
    ("Physics", "Physics - Mechanics, Thermodynamics, Electromagnetism, Quantum Physics"),
    ("AI/ML", "Artificial Intelligence and Machine Learning - Neural Networks, Deep Learning, NLP, Computer Vision"),
    ("General", "General Doubts - Any other academic or non-academic questions"),
]


def _question_count(db: Session, page_id) -> int:
    return db.query(func.count(Question.id)).filter(Question.page_id == page_id).scalar() or 0


def _to_response(page: Page, question_count: int) -> PageResponse:
    return PageResponse(
        id=str(page.id),
        name=page.name,
        description=page.description,
        question_count=question_count,
        created_at=page.created_at,
    )


def _load_page(db: Session, page_id) -> Page:
    pid = as_uuid(page_id)
    page = db.get(Page, pid) if pid else None
    if page is None:
        raise NotFoundError(f"Page not found with id: {page_id}")
    return page


def list_pages(db: Session) -> list[PageResponse]:
    """All pages with their question counts (one grouped query)."""
    counts = (
        db.query(Question.page_id, func.count(Question.id))
        .group_by(Question.page_id)
        .all()
    )
    by_page = {page_id: n for page_id, n in counts}
    pages = db.query(Page).order_by(Page.name).all()
    return [_to_response(p, by_page.get(p.id, 0)) for p in pages]


def get_page(db: Session, page_id) -> PageResponse:
    page = _load_page(db, page_id)
    return _to_response(page, _question_count(db, page.id))


def get_page_by_name(db: Session, name: str) -> PageResponse:
    page = db.query(Page).filter(Page.name == name).first()
    if page is None:
        raise NotFoundError(f"Page not found with name: {name}")
    return _to_response(page, _question_count(db, page.id))


def page_exists(db: Session, name: str) -> bool:
    return db.query(Page.id).filter(Page.name == name).first() is not None


def create_page(db: Session, name: str, description: str | None = None) -> PageResponse:
    """Create a page. Name match is exact and case-sensitive; duplicate -> ConflictError."""
    validate_page_name(name)
    if page_exists(db, name):
        raise ConflictError(f"Page already exists with name: {name}")
    page = Page(name=name, description=description)
    db.add(page)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"Page already exists with name: {name}") from e
    db.refresh(page)
    logger.info("Created page %s (%s)", page.name, page.id)
    return _to_response(page, 0)


def delete_page(db: Session, page_id) -> None:
    """Delete a page; its questions and their replies go with it in the same transaction."""
    page = _load_page(db, page_id)
    name = page.name
    try:
        db.delete(page)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Deleted page %s (%s)", name, page_id)


def seed_default_pages(db: Session) -> list[str]:
    """Insert the default pages that do not exist yet (by name). Safe to re-run; returns names created."""
    created = []
    for name, description in DEFAULT_PAGES:
        if page_exists(db, name):
            continue
        db.add(Page(name=name, description=description))
        created.append(name)
    if created:
        db.commit()
        for name in created:
            logger.info("Created page: %s", name)
    return created
