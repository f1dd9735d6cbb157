"""Form validation — composable rules, clean results.

Usage::

    from scribble.validation import validate, required, min_length

    result = validate(form, {
        "title": [required("title must not be empty")],
        "body": [required(), min_length(10)],
    })
    if not result:
        ...  # result.errors == {"body": "Must be at least 10 characters"}
"""

from collections.abc import Mapping

from scribble.validation.result import ValidationResult
from scribble.validation.rules import (
    Validator,
    length_between,
    max_length,
    min_length,
    required,
)

__all__ = [
    "ValidationResult",
    "Validator",
    "length_between",
    "max_length",
    "min_length",
    "required",
    "validate",
]


def validate(
    data: Mapping[str, str],
    rules: dict[str, list[Validator]],
) -> ValidationResult:
    """Validate data against a set of rules.

    Args:
        data: Any mapping of field names to string values,
            such as ``FormData`` or a plain ``dict``. Missing fields count as ``""``.
        rules: A dict mapping field names to lists of validator
            functions. Each validator returns an error message string
            on failure, or ``None`` on success.

    Returns:
        A ``ValidationResult`` with ``.data`` (every field's value) and
        ``.errors`` (field → first failing rule's message).

    Rules for a field run in order and stop at the first failure, so a
    field never reports two messages at once. Fields are validated
    independently of each other.
    """
    errors: dict[str, str] = {}
    cleaned: dict[str, str] = {}

    for field_name, validators in rules.items():
        value = data.get(field_name) or ""
        cleaned[field_name] = value

        for validator in validators:
            error = validator(value)
            if error is not None:
                errors[field_name] = error
                break

    return ValidationResult(data=cleaned, errors=errors)
