from __future__ import annotations

import re

PROMPT_MAX_LENGTH = 500
ERROR_MAX_LENGTH = 200
GENERIC_ERROR = "An unexpected error occurred. Please try again."

_NEWLINES_RE = re.compile(r"[\r\n]+")
_WHITESPACE_RE = re.compile(r"\s+")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")

_PATH_RE = re.compile(r"/[^\s]+")
_STACK_LINE_RE = re.compile(
    r"Traceback \(most recent call last\):"
    r"|File \"[^\"]+\", line \d+(?:, in \S+)?"
    r"|at\s+\S+\s+\([^)]+\)"
)
_ERROR_PREFIX_RE = re.compile(r"^\s*Error:\s*", re.IGNORECASE)
_SENSITIVE_PATTERNS = (
    (re.compile(r"API[_\s]?KEY", re.IGNORECASE), "[API_KEY]"),
    (re.compile(r"password", re.IGNORECASE), "[password]"),
    (re.compile(r"secret", re.IGNORECASE), "[secret]"),
    (re.compile(r"token", re.IGNORECASE), "[token]"),
)


def sanitize_for_prompt(text: str | None) -> str:
    """Flatten free text so it cannot restructure the prompt it is embedded in."""
    if not text:
        return ""

    cleaned = _NEWLINES_RE.sub(" ", text)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    cleaned = cleaned.replace("`", "'")
    cleaned = _CONTROL_RE.sub("", cleaned).strip()

    return cleaned[:PROMPT_MAX_LENGTH]


def _scrub(message: str) -> str:
    message = _STACK_LINE_RE.sub("[stack trace]", message)
    message = _PATH_RE.sub("[path]", message)
    for pattern, replacement in _SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    message = _ERROR_PREFIX_RE.sub("", message)
    return _WHITESPACE_RE.sub(" ", message).strip()


def sanitize_error_message(error: BaseException | str | None, include_details: bool = False) -> str:
    """Return error text that is safe to hand to a client.

    File paths, stack-trace fragments and credential-like words are redacted
    and the result is capped at ``ERROR_MAX_LENGTH`` characters. The exception
    class name is only prefixed when ``include_details`` is set.
    """
    if error is None:
        return GENERIC_ERROR

    if isinstance(error, BaseException):
        raw = str(getattr(error, "message", None) or error)
    else:
        raw = str(error)

    message = _scrub(raw)
    if len(message) > ERROR_MAX_LENGTH:
        message = message[:ERROR_MAX_LENGTH] + "..."
    if not message:
        message = GENERIC_ERROR

    if include_details and isinstance(error, BaseException):
        return f"{type(error).__name__}: {message}"
    return message
