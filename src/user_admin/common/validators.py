from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_max_length(value: Optional[str], field_name: str, max_len: int) -> Optional[str]:
    if value and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_email(value: Optional[str], field_name: str) -> Optional[str]:
    """Empty values pass; combine with ``require_non_empty`` when mandatory."""
    if value and not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} is not a valid email address")
    return value


def require_digits(value: Optional[str], field_name: str) -> Optional[str]:
    if value and not value.isdigit():
        raise ValidationError(f"{field_name} must contain digits only")
    return value


def require_equal(value: Optional[str], other: Optional[str], field_name: str) -> Optional[str]:
    if (value or "") != (other or ""):
        raise ValidationError(f"{field_name} does not match")
    return value
