"""
Bloggy Backend — Input Validation
===================================

Pure checks run by the services before any write is attempted. Nothing here
touches the database or the file system.
"""

import uuid
from typing import List, Mapping, Optional

from app.exceptions import InvalidIdentifierError, ValidationError

MISSING_POST_FIELDS_MESSAGE = (
    "Missing or invalid required fields. "
    "Ensure title, content, and category are provided."
)
MISSING_CATEGORY_FIELDS_MESSAGE = (
    "Missing or invalid required fields. Ensure the category name is provided."
)


def find_missing_fields(values: Mapping[str, Optional[str]]) -> List[str]:
    """Return the names of fields that are absent or blank after trimming."""
    return [
        name
        for name, value in values.items()
        if value is None or not str(value).strip()
    ]


def validate_post_fields(
    title: Optional[str],
    content: Optional[str],
    category: Optional[str],
) -> None:
    """Raise ValidationError unless title, content and category are all non-blank."""
    missing = find_missing_fields(
        {"title": title, "content": content, "category": category}
    )
    if missing:
        raise ValidationError(
            message=MISSING_POST_FIELDS_MESSAGE,
            context={"missing": missing},
        )


def validate_category_fields(name: Optional[str]) -> None:
    missing = find_missing_fields({"category": name})
    if missing:
        raise ValidationError(
            message=MISSING_CATEGORY_FIELDS_MESSAGE,
            context={"missing": missing},
        )


def parse_identifier(value: str, resource: str) -> uuid.UUID:
    """
    Parse a client-supplied identifier.

    Raises:
        InvalidIdentifierError: value is not a well-formed UUID
    """
    try:
        return uuid.UUID(str(value).strip())
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdentifierError(resource=resource, raw_id=str(value))
