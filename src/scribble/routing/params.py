"""Path parameter constraints.

Built-in converters for route path segments like ``{id:int}``. Any
constraint that is not a converter name is treated as an inline regex,
so ``{id:[0-9]+}`` is equivalent to ``{id:int}``.
"""

import re

from scribble.errors import ConfigurationError

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"[0-9]+", int),
    "float": (r"[0-9]+(?:\.[0-9]+)?", float),
}


def constraint_pattern(param_type: str) -> re.Pattern[str]:
    """Compile the full-match regex for a parameter constraint.

    Raises ``ConfigurationError`` if an inline regex does not compile.
    """
    if param_type in CONVERTERS:
        pattern, _ = CONVERTERS[param_type]
    else:
        pattern = param_type
    try:
        return re.compile(pattern)
    except re.error as exc:
        msg = f"Invalid path parameter constraint {param_type!r}: {exc}"
        raise ConfigurationError(msg) from exc


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured path parameter string to the target type.

    Inline regex constraints have no target type, so the string is
    returned unchanged.

    Raises ``ValueError`` if the string cannot be converted.
    """
    if param_type not in CONVERTERS:
        return value
    _, target_type = CONVERTERS[param_type]
    return target_type(value)
