"""
Page request/response schemas.
"""
from datetime import datetime

from pydantic import BaseModel, field_validator

from forum.services.validation import validate_page_name


class PageCreateRequest(BaseModel):
    name: str
    description: str | None = None

    @field_validator("name")
    @classmethod
    def name_valid(cls, v: str) -> str:
        return validate_page_name(v)


class PageResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    question_count: int
    created_at: datetime
