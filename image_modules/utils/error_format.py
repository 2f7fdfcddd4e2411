"""Error message formatting for CLI output.

Guarantees a non-empty, single-line message for any exception, and escapes
text before it is interpolated into Rich markup.
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup

from ..errors import ImageModulesError


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a display message.

    Errors raised by image_modules already describe themselves and are shown
    without the type prefix.

    Examples:
        >>> format_error_message(ValueError("bad input"))
        'ValueError: bad input'

        >>> format_error_message(RuntimeError())
        'RuntimeError: (no additional details)'
    """
    error_str = str(e).strip()
    error_type = type(e).__name__

    if not error_str:
        return f"{error_type}: (no additional details)"
    if isinstance(e, ImageModulesError) or not include_type or error_type in error_str:
        return error_str
    return f"{error_type}: {error_str}"


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings."""
    return _escape_markup(str(value))
