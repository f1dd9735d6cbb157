"""Built-in scribble template filters.

Auto-registered on every scribble kida Environment, next to kida's own
filters.
"""

from collections.abc import Mapping
from typing import Any


def field_error(errors: Any, field_name: str) -> str:
    """Return the validation message for one form field, or ``""``.

    Safely navigates a ``{field: message}`` mapping, so templates can
    test the result directly::

        {% set title_error = errors | field_error("title") %}
        {% if title_error %}<p class="error">{{ title_error }}</p>{% end %}
    """
    if not isinstance(errors, Mapping):
        return ""
    return errors.get(field_name) or ""


# All built-in scribble filters, registered automatically on every env.
BUILTIN_FILTERS: dict[str, Any] = {
    "field_error": field_error,
}
