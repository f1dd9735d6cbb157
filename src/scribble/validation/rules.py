"""Built-in validation rules.

Each validator is a callable with the signature::

    def rule(value: str) -> str | None:
        '''Return error message, or None if valid.'''

Every rule is a factory taking the message to report, so applications
own their wording::

    title_rules = [
        required("title must not be empty"),
        length_between(3, 40, "title length must be between 3 and 40 characters"),
    ]

Lengths are counted in characters (``len(str)``), never in encoded bytes,
so ``"你好世界"`` is four characters long.
"""

from collections.abc import Callable

# Type alias for a validator function
type Validator = Callable[[str], str | None]


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(message: str = "This field is required") -> Validator:
    """Field must be present and non-empty."""

    def check(value: str) -> str | None:
        if not value:
            return message
        return None

    return check


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int, message: str | None = None) -> Validator:
    """String must be at most *n* characters."""

    def check(value: str) -> str | None:
        if len(value) > n:
            return message or f"Must be at most {n} characters"
        return None

    return check


def min_length(n: int, message: str | None = None) -> Validator:
    """String must be at least *n* characters."""

    def check(value: str) -> str | None:
        if len(value) < n:
            return message or f"Must be at least {n} characters"
        return None

    return check


def length_between(low: int, high: int, message: str | None = None) -> Validator:
    """String must be between *low* and *high* characters, inclusive."""

    def check(value: str) -> str | None:
        if not low <= len(value) <= high:
            return message or f"Must be between {low} and {high} characters"
        return None

    return check
