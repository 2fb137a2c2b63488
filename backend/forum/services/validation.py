"""
Field constraints for questions, replies and pages.
Shared by the request schemas (pydantic validators -> 422) and the services (direct callers).
"""
from forum.services.errors import ValidationError

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 200
DESCRIPTION_MIN_LENGTH = 10
CONTENT_MIN_LENGTH = 1
PAGE_NAME_MAX_LENGTH = 255


def _required(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{label} is required")
    return value


def validate_title(title: str | None) -> str:
    _required(title, "Title")
    if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters"
        )
    return title


def validate_description(description: str | None) -> str:
    _required(description, "Description")
    if len(description) < DESCRIPTION_MIN_LENGTH:
        raise ValidationError(f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters")
    return description


def validate_content(content: str | None) -> str:
    _required(content, "Content")
    if len(content) < CONTENT_MIN_LENGTH:
        raise ValidationError(f"Content must be at least {CONTENT_MIN_LENGTH} character")
    return content


def validate_page_name(name: str | None) -> str:
    _required(name, "Page name")
    if len(name) > PAGE_NAME_MAX_LENGTH:
        raise ValidationError(f"Page name must be at most {PAGE_NAME_MAX_LENGTH} characters")
    return name


def validate_pagination(page: int, size: int) -> None:
    """page is 0-indexed; size must be positive."""
    if page < 0:
        raise ValidationError("page must be 0 or greater")
    if size < 1:
        raise ValidationError("size must be at least 1")
