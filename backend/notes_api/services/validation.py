"""
Notes API — Validation Layer
=============================

What:  Field rules for note input and whitelist rules for listing parameters.
How:   Plain functions and closed enumerations; every check runs before the
       store is touched.
Who:   Called by NoteService (create/update) and by the query engine (list).

Field rules (shared by create and update):
    title    required, 1-200 characters after trimming
    content  optional (None → ""), at most 4000 characters after trimming

Every failing field is collected before a single ValidationError is raised.

Listing rules:
    sort     id | title | created (createdAt) | updated (updatedAt), case-insensitive
    dir      asc | desc, case-insensitive
    page     clamped to 1..MAX_PAGE (pages past the end are simply empty)
    pageSize clamped to 1..100

Paging is clamped and never rejected; sort and dir are rejected. The two
behave differently on purpose and callers rely on both.
"""

from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple

from notes_api.exceptions import ValidationError
from notes_api.models.note import CONTENT_MAX_LENGTH, ID_MAX, TITLE_MAX_LENGTH

MIN_PAGE = 1
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100
# Largest page whose offset still fits a 64-bit LIMIT/OFFSET at any page size
MAX_PAGE = ID_MAX // MAX_PAGE_SIZE + 1


class NoteFields(NamedTuple):
    """Trimmed, validated title/content ready to be stored."""
    title: str
    content: str


class SortKey(str, Enum):
    """Primary ordering key of the note listing."""

    ID = "id"
    TITLE = "title"
    CREATED = "created"
    UPDATED = "updated"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["SortKey"]:
        """Resolve a client value (aliases included); None if not allowed."""
        if raw is None:
            return cls.UPDATED
        return _SORT_KEY_ALIASES.get(raw.strip().lower())


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["SortDirection"]:
        if raw is None:
            return cls.DESC
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


_SORT_KEY_ALIASES: Dict[str, SortKey] = {
    "id": SortKey.ID,
    "title": SortKey.TITLE,
    "created": SortKey.CREATED,
    "createdat": SortKey.CREATED,
    "updated": SortKey.UPDATED,
    "updatedat": SortKey.UPDATED,
}


def _failure(field: str, rule: str, message: str) -> Dict[str, str]:
    return {"field": field, "rule": rule, "message": message}


def _raise_if_failed(failures: List[Dict[str, str]]) -> None:
    if failures:
        raise ValidationError(
            message=failures[0]["message"],
            field=failures[0]["field"],
            errors=failures,
        )


def validate_note_fields(title: Optional[str], content: Optional[str]) -> NoteFields:
    """
    Check title and content against the note rules.

    Args:
        title: Raw title from the client (None when missing)
        content: Raw content from the client (None when missing)

    Returns:
        NoteFields with both values trimmed; missing content becomes "".

    Raises:
        ValidationError: One or more rules failed. `errors` lists every
            failure, title first.
    """
    failures: List[Dict[str, str]] = []

    clean_title = (title or "").strip()
    if title is None:
        failures.append(_failure("title", "required", "title is required"))
    elif not clean_title:
        failures.append(_failure("title", "blank", "title must not be blank"))
    elif len(clean_title) > TITLE_MAX_LENGTH:
        failures.append(_failure(
            "title", "max_length",
            f"title must be at most {TITLE_MAX_LENGTH} characters",
        ))

    clean_content = (content or "").strip()
    if len(clean_content) > CONTENT_MAX_LENGTH:
        failures.append(_failure(
            "content", "max_length",
            f"content must be at most {CONTENT_MAX_LENGTH} characters",
        ))

    _raise_if_failed(failures)
    return NoteFields(title=clean_title, content=clean_content)


def validate_sort(
    sort: Optional[str], direction: Optional[str]
) -> Tuple[SortKey, SortDirection]:
    """
    Resolve sort key and direction against their whitelists.

    Returns:
        (SortKey, SortDirection)

    Raises:
        ValidationError: "invalid sort key" and/or "invalid sort direction".
    """
    sort_key = SortKey.parse(sort)
    sort_direction = SortDirection.parse(direction)

    failures: List[Dict[str, str]] = []
    if sort_key is None:
        failures.append(_failure("sort", "allowed_values", "invalid sort key"))
    if sort_direction is None:
        failures.append(_failure("dir", "allowed_values", "invalid sort direction"))

    _raise_if_failed(failures)
    return sort_key, sort_direction


def clamp_page(page: int) -> int:
    return min(max(page, MIN_PAGE), MAX_PAGE)


def clamp_page_size(page_size: int) -> int:
    return min(max(page_size, MIN_PAGE_SIZE), MAX_PAGE_SIZE)
