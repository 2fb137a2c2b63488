"""
Questions API: paginated listing per page (id or name), get, and author-scoped create/update/delete.
Reads are public; writes need a Bearer token.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from forum.config import settings
from forum.database import get_db
from forum.models.user import User
from forum.schemas.message import MessageResponse
from forum.schemas.question import QuestionCreateRequest, QuestionResponse, QuestionUpdateRequest
from forum.services import questions as question_service
from forum.api.deps import get_current_user

router = APIRouter(prefix="/api/questions", tags=["questions"])


def _page_query(page: int = Query(0, ge=0), size: int | None = Query(None, ge=1)) -> tuple[int, int]:
    """?page (0-indexed) and ?size, size defaulting to settings and capped at max_page_size."""
    size = settings.default_page_size if size is None else min(size, settings.max_page_size)
    return page, size


@router.get("/page/name/{page_name:path}", response_model=list[QuestionResponse])
def list_by_page_name(
    page_name: str,
    paging: tuple[int, int] = Depends(_page_query),
    db: Session = Depends(get_db),
):
    page, size = paging
    return question_service.list_by_page_name(db, page_name, page, size)


@router.get("/page/{page_id}", response_model=list[QuestionResponse])
def list_by_page(
    page_id: str,
    paging: tuple[int, int] = Depends(_page_query),
    db: Session = Depends(get_db),
):
    page, size = paging
    return question_service.list_by_page(db, page_id, page, size)


@router.get("/user/{user_id}", response_model=list[QuestionResponse])
def list_by_author(user_id: str, db: Session = Depends(get_db)):
    return question_service.list_by_author(db, user_id)


@router.get("/{question_id}", response_model=QuestionResponse)
def get_question(question_id: str, db: Session = Depends(get_db)):
    return question_service.get_question(db, question_id)


@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
def create_question(
    data: QuestionCreateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return question_service.create_question(
        db, current_user.email, data.title, data.description, data.page_id
    )


@router.put("/{question_id}", response_model=QuestionResponse)
def update_question(
    question_id: str,
    data: QuestionUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Only the author may edit."""
    return question_service.update_question(db, question_id, current_user, data.title, data.description)


@router.delete("/{question_id}", response_model=MessageResponse)
def delete_question(
    question_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Author or admin."""
    question_service.delete_question(db, question_id, current_user)
    return MessageResponse(message="Question deleted successfully")
