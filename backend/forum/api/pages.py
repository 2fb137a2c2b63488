"""
Pages API: list/get are public; create and delete require an ADMIN.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from forum.database import get_db
from forum.models.user import User
from forum.schemas.message import MessageResponse
from forum.schemas.page import PageCreateRequest, PageResponse
from forum.services import pages as page_service
from forum.api.deps import require_admin

router = APIRouter(prefix="/api/pages", tags=["pages"])


@router.get("", response_model=list[PageResponse])
def list_pages(db: Session = Depends(get_db)):
    return page_service.list_pages(db)


@router.get("/name/{name:path}", response_model=PageResponse)
def get_page_by_name(name: str, db: Session = Depends(get_db)):
    return page_service.get_page_by_name(db, name)


@router.get("/{page_id}", response_model=PageResponse)
def get_page(page_id: str, db: Session = Depends(get_db)):
    return page_service.get_page(db, page_id)


@router.post("", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
def create_page(
    data: PageCreateRequest,
    _admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create a page. Duplicate name -> 409."""
    return page_service.create_page(db, data.name, data.description)


@router.delete("/{page_id}", response_model=MessageResponse)
def delete_page(
    page_id: str,
    _admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Delete a page with all of its questions and replies."""
    page_service.delete_page(db, page_id)
    return MessageResponse(message="Page deleted successfully")
