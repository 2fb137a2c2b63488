"""
Reply request/response schemas.
"""
from datetime import datetime

from pydantic import BaseModel, field_validator

from forum.services.validation import validate_content


class ReplyRequest(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def content_valid(cls, v: str) -> str:
        return validate_content(v)


class ReplyResponse(BaseModel):
    id: str
    content: str
    question_id: str
    user_id: str
    user_name: str
    created_at: datetime
    updated_at: datetime
