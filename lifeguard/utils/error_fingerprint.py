"""
Error Fingerprint Utility
=========================
Turns a failure into a canonical string and a short stable code.

Canonical text (first non-empty candidate wins):
    1. diagnostic trace   — formatted traceback, or a string ``stack`` attribute
    2. message            — str(exception), or a string ``message`` attribute
    3. generic coercion   — text as-is, bytes decoded as UTF-8, other values via str()
    4. "Unknown error"

Fingerprint:
    SHA-256 of the canonical text, truncated to 8 hex chars.
    Same text always produces the same code. The code is the only
    deduplication key and is embedded in issue titles as "[<code>]".
"""
import hashlib
import traceback
from typing import Any

from lifeguard.core.constants import FINGERPRINT_LENGTH, UNKNOWN_ERROR
from lifeguard.models.report_options import ReportOptions


def _trace_of(failure: Any) -> str:
    if isinstance(failure, BaseException):
        if failure.__traceback__ is None:
            return ""
        return "".join(
            traceback.format_exception(type(failure), failure, failure.__traceback__)
        )
    return _text_attr(failure, "stack")


def _message_of(failure: Any) -> str:
    if isinstance(failure, BaseException):
        return _safe_str(failure)
    return _text_attr(failure, "message")


def _coerce(failure: Any) -> str:
    if failure is None:
        return ""
    if isinstance(failure, str):
        return failure
    if isinstance(failure, (bytes, bytearray, memoryview)):
        return bytes(failure).decode("utf-8", errors="replace")
    return _safe_str(failure)


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return ""


def _text_attr(failure: Any, name: str) -> str:
    try:
        value = getattr(failure, name, None)
    except Exception:
        return ""
    return value if isinstance(value, str) else ""


def canonicalize(failure: Any) -> str:
    """
    Build the canonical error text for a failure.

    Parameters
    ----------
    failure : Any
        Exception, string, bytes-like value, None, or any other object.

    Returns
    -------
    str
        Non-empty text used both for hashing and for the issue body.
    """
    for extract in (_trace_of, _message_of, _coerce):
        candidate = extract(failure)
        if candidate:
            return candidate
    return UNKNOWN_ERROR


def fingerprint(text: str) -> str:
    """
    Generate the short error code for a canonical error text.

    Parameters
    ----------
    text : str
        Output of canonicalize().

    Returns
    -------
    str
        First 8 hex chars of the SHA-256 digest.
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


def report_title(error_code: str, options: ReportOptions) -> str:
    """Issue title for an error code: ``[<code>] <options.title>``."""
    return f"[{error_code}] {options.title}"
