from __future__ import annotations

from typing import Any, List

from .errors import ValidationError
from .types import ComparisonInput

MIN_OPTIONS = 2
MIN_CONSTRAINTS = 1


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _check_string_list(
    body: dict, field_name: str, minimum: int, label: str
) -> List[str]:
    value = body.get(field_name)
    if value is None or value == "":
        return [f"{field_name} is required"]
    if not isinstance(value, list):
        return [f"{field_name} must be an array"]

    errors: List[str] = []
    if len(value) < minimum:
        errors.append(f"At least {minimum} {label} required")
    for index, item in enumerate(value):
        if not _is_non_empty_string(item):
            errors.append(f"{field_name}[{index}] must be a non-empty string")
    return errors


def validate_comparison_request(body: Any) -> ComparisonInput:
    """Check a decoded request body and return a trimmed `ComparisonInput`.

    Every problem is collected so the caller can report them all at once.
    """

    if not isinstance(body, dict):
        raise ValidationError(details=["request body must be a JSON object"])

    errors = _check_string_list(body, "options", MIN_OPTIONS, "options are")
    errors += _check_string_list(
        body, "constraints", MIN_CONSTRAINTS, "constraint is"
    )
    if errors:
        raise ValidationError(details=errors)

    return ComparisonInput(
        options=[o.strip() for o in body["options"]],
        constraints=[c.strip() for c in body["constraints"]],
    )
