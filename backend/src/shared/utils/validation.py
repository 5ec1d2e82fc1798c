"""
Post Validation

Editorial rules a post must satisfy before it is saved. Returns every
failing field at once (first failing rule per field) so the editor can
highlight them together.

Usage:
======
    result = validate_post({"title": "Short", "slug": "Bad Slug", ...})
    if not result.valid:
        raise ValidationError("Post validation failed", details=result.to_details())
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
import re
from typing import Any, Optional

from src.shared.utils.content import has_text


TITLE_MIN_LENGTH = 10
TITLE_MAX_LENGTH = 200
EXCERPT_MAX_LENGTH = 300
SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 100
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    valid: bool
    errors: list[FieldError] = field(default_factory=list)

    def to_details(self) -> dict[str, Any]:
        return {"errors": [{"field": e.field, "message": e.message} for e in self.errors]}


def _title_error(title: Optional[str]) -> Optional[str]:
    if not title:
        return "Title is required"
    if len(title) < TITLE_MIN_LENGTH:
        return f"Title must be at least {TITLE_MIN_LENGTH} characters"
    if len(title) > TITLE_MAX_LENGTH:
        return f"Title must be no more than {TITLE_MAX_LENGTH} characters"
    return None


def _slug_error(slug: Optional[str]) -> Optional[str]:
    if not slug:
        return "Slug is required"
    if len(slug) < SLUG_MIN_LENGTH:
        return f"Slug must be at least {SLUG_MIN_LENGTH} characters"
    if len(slug) > SLUG_MAX_LENGTH:
        return f"Slug must be no more than {SLUG_MAX_LENGTH} characters"
    if not SLUG_PATTERN.match(slug):
        return "Slug can only contain lowercase letters, numbers, and hyphens"
    return None


def _excerpt_error(excerpt: Optional[str]) -> Optional[str]:
    if excerpt and len(excerpt) > EXCERPT_MAX_LENGTH:
        return f"Excerpt must be no more than {EXCERPT_MAX_LENGTH} characters"
    return None


def _category_error(category: Optional[str]) -> Optional[str]:
    return None if category else "Category is required"


def _content_error(content: Any) -> Optional[str]:
    if content is None:
        return "Content is required"
    if not has_text(content):
        return "Content cannot be empty"
    return None


_RULES = (
    ("title", _title_error),
    ("slug", _slug_error),
    ("excerpt", _excerpt_error),
    ("category", _category_error),
    ("content", _content_error),
)


def validate_post(data: Mapping[str, Any]) -> ValidationResult:
    errors = []
    for name, rule in _RULES:
        message = rule(data.get(name))
        if message:
            errors.append(FieldError(field=name, message=message))
    return ValidationResult(valid=not errors, errors=errors)
