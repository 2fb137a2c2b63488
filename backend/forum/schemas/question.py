"""
Question request/response schemas. reply_count is computed at read time.
"""
from datetime import datetime

from pydantic import BaseModel, field_validator

from forum.services.validation import validate_description, validate_title


class QuestionUpdateRequest(BaseModel):
    title: str
    description: str

    @field_validator("title")
    @classmethod
    def title_valid(cls, v: str) -> str:
        return validate_title(v)

    @field_validator("description")
    @classmethod
    def description_valid(cls, v: str) -> str:
        return validate_description(v)


class QuestionCreateRequest(QuestionUpdateRequest):
    page_id: str

    @field_validator("page_id")
    @classmethod
    def page_id_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Page ID is required")
        return v.strip()


class QuestionResponse(BaseModel):
    id: str
    title: str
    description: str
    user_id: str
    user_name: str
    page_id: str
    page_name: str
    reply_count: int
    created_at: datetime
    updated_at: datetime
