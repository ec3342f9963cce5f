"""
Record validation rules.

Errors are accumulated in a fixed order rather than stopping at the first one.
"""

from collections.abc import Mapping
from numbers import Real
from typing import Any

from .models import ValidationResult


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate(candidate: Any) -> ValidationResult:
    """Validate a record candidate given as a mapping of record fields"""
    if not isinstance(candidate, Mapping):
        return ValidationResult(valid=False, errors=["record must be a mapping"])

    errors = []

    record_id = candidate.get("id")
    if not isinstance(record_id, str) or not record_id:
        errors.append("id must be a non-empty string")

    title = candidate.get("title")
    if not isinstance(title, str) or not title:
        errors.append("title must be a non-empty string")

    # Emptiness is a visibility concern, not a validation one
    if "primary_handle" in candidate and not isinstance(candidate["primary_handle"], str):
        errors.append("primary_handle must be a string")

    duration = candidate.get("duration_seconds")
    if not _is_number(duration) or duration < 0:
        errors.append("duration_seconds must be a non-negative number")

    return ValidationResult(valid=not errors, errors=errors)
