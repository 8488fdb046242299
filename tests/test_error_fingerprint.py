"""
Error Fingerprint Tests
=======================
Covers:
    - canonical text priority: trace > message > coercion > "Unknown error"
    - fingerprint: deterministic, 8 hex chars
    - report title format
"""
import re
import pytest

from lifeguard.models.report_options import ReportOptions
from lifeguard.utils.error_fingerprint import canonicalize, fingerprint, report_title


def _raised(exc: BaseException) -> BaseException:
    try:
        raise exc
    except BaseException as caught:
        return caught


class _StackLike:
    def __init__(self, stack="", message=""):
        self.stack = stack
        self.message = message

    def __str__(self):
        return "stack-like object"


# ---------------------------------------------------------------------------
# canonicalize
# ---------------------------------------------------------------------------
def test_raised_exception_uses_traceback():
    err = _raised(ValueError("bad value"))
    text = canonicalize(err)
    assert text.startswith("Traceback (most recent call last):")
    assert text.rstrip().endswith("ValueError: bad value")


def test_unraised_exception_uses_message():
    assert canonicalize(RuntimeError("no traceback here")) == "no traceback here"


def test_unraised_exception_without_message_falls_back():
    assert canonicalize(RuntimeError()) == "Unknown error"


def test_stack_attribute_wins_over_message():
    assert canonicalize(_StackLike(stack="at handler:1", message="msg")) == "at handler:1"


def test_message_attribute_used_when_stack_empty():
    assert canonicalize(_StackLike(message="msg")) == "msg"


def test_object_without_trace_or_message_is_coerced():
    assert canonicalize(_StackLike()) == "stack-like object"


def test_attribute_lookup_errors_fall_through_to_str():
    class Weird:
        def __getattr__(self, name):
            raise KeyError(name)

        def __str__(self):
            return "weird failure"

    assert canonicalize(Weird()) == "weird failure"


def test_property_errors_fall_through_to_unknown_error():
    class Broken:
        @property
        def stack(self):
            raise RuntimeError("no stack")

        @property
        def message(self):
            raise RuntimeError("no message")

        def __str__(self):
            return ""

    assert canonicalize(Broken()) == "Unknown error"


def test_plain_string_is_returned_verbatim():
    assert canonicalize("Whoops") == "Whoops"


def test_bytes_are_decoded():
    assert canonicalize(b"disk full") == "disk full"
    assert canonicalize(bytearray(b"\xffoops")) == "\ufffdoops"


def test_numbers_are_coerced():
    assert canonicalize(42) == "42"


@pytest.mark.parametrize("empty", [None, "", b""])
def test_empty_values_fall_back_to_unknown_error(empty):
    assert canonicalize(empty) == "Unknown error"


def test_unprintable_object_falls_back():
    class Broken:
        def __str__(self):
            raise RuntimeError("cannot print")

    assert canonicalize(Broken()) == "Unknown error"


# ---------------------------------------------------------------------------
# fingerprint
# ---------------------------------------------------------------------------
def test_fingerprint_known_value():
    assert fingerprint("Whoops") == "85d8ae40"


def test_fingerprint_is_deterministic():
    assert fingerprint("same text") == fingerprint("same text")


def test_fingerprint_differs_for_different_text():
    assert fingerprint("error one") != fingerprint("error two")


@pytest.mark.parametrize("text", ["Whoops", "Unknown error", "ünïcödé", "x" * 10000])
def test_fingerprint_is_eight_hex_chars(text):
    assert re.fullmatch(r"[0-9a-f]{8}", fingerprint(text))


# ---------------------------------------------------------------------------
# report_title
# ---------------------------------------------------------------------------
def test_report_title_default():
    assert report_title("85d8ae40", ReportOptions()) == "[85d8ae40] Probot integration problem"


def test_report_title_custom():
    assert report_title("abcd1234", ReportOptions(title="Bot crashed")) == "[abcd1234] Bot crashed"
