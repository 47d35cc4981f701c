"""Safe error message formatting utilities.

Ensures exceptions always have useful display messages, even when
their str() representation is empty (e.g., a bare ValueError() raised by
a validate function).
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup

# Messages for filesystem errors raised without a message (e.g. by a validate function)
FRIENDLY_MESSAGES: dict[type, str] = {
    FileNotFoundError: "File not found.",
    IsADirectoryError: "Path is a directory, not a file.",
    PermissionError: "Permission denied.",
}


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Describe an exception for wisp error messages.

    Loader failures include the type of the underlying error; validation
    failures pass ``include_type=False`` so the validator's own message is
    kept as-is. An exception with an empty message is always described by
    its type name.

    Examples:
        >>> format_error_message(ValueError("invalid input"))
        'ValueError: invalid input'

        >>> format_error_message(ValueError("invalid input"), include_type=False)
        'invalid input'

        >>> format_error_message(PermissionError())
        'PermissionError: Permission denied.'
    """
    name = type(e).__name__
    message = str(e)
    if not message:
        detail = next((text for kind, text in FRIENDLY_MESSAGES.items() if isinstance(e, kind)), None)
        return f"{name}: {detail or '(no additional details)'}"
    if include_type and name not in message:
        return f"{name}: {message}"
    return message


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings.

    Prevents Rich from interpreting brackets in exception messages or
    file paths as markup tags.
    """
    return _escape_markup(str(value))
