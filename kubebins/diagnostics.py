"""Bounded, human-readable descriptions of failures for the debug log.

``describe`` accepts anything that ended up in an ``except`` clause or a
failed callback (exceptions, exception groups, dicts, plain strings) and
renders it as a multi-line report. The report stays small no matter what it
is given:

* at most ``MAX_SUB_ERRORS`` nested failures of an aggregate are detailed,
* every stack trace is cut to ``MAX_STACK_LINES`` lines,
* every serialized attribute is cut to ``MAX_PROPERTY_CHARS`` characters,

and values that cannot be serialized (circular structures, non-string keys)
are replaced by a placeholder instead of raising.
"""

from __future__ import annotations

import json
import traceback
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

T = TypeVar("T")

MAX_SUB_ERRORS = 5
MAX_STACK_LINES = 10
MAX_PROPERTY_CHARS = 500
TRUNCATION_MARKER = "... [truncated]"
UNSERIALIZABLE = "[unserializable]"
STANDARD_PROPERTIES = frozenset({"name", "message", "stack", "code", "errors"})


def truncate(items: Sequence[T], limit: int) -> tuple[list[T], int]:
    """Keep the first ``limit`` items and report how many were dropped."""
    return list(items[:limit]), max(len(items) - limit, 0)


def truncate_text(text: str, limit: int) -> tuple[str, int]:
    """Keep the first ``limit`` characters and report how many were dropped."""
    return text[:limit], max(len(text) - limit, 0)


def describe(failure: object) -> str:
    """Describe ``failure`` as a bounded multi-line report.

    Never raises and never returns an empty string.
    """
    details: list[str] = []
    try:
        if isinstance(failure, BaseException):
            _describe_exception(failure, details)
        else:
            _describe_value(failure, details)
    except Exception:  # noqa: BLE001
        details.append(UNSERIALIZABLE)
    return "\n".join(details) or UNSERIALIZABLE


def _describe_exception(failure: BaseException, details: list[str]) -> None:
    details.append(f"Error type: {type(failure).__name__}")

    message = _safe_str(failure)
    if message:
        details.append(f"Error message: {message}")

    code = _safe_getattr(failure, "code") or _safe_getattr(failure, "errno")
    if code:
        details.append(f"Error code: {code}")

    sub_failures = _sub_failures(failure)
    if sub_failures is not None:
        details.append(f"Number of errors: {len(sub_failures)}")
        shown, hidden = truncate(sub_failures, MAX_SUB_ERRORS)
        for index, sub_failure in enumerate(shown, start=1):
            details.append(f"Error {index}: {_safe_str(sub_failure)}")
            stack = _stack_lines(sub_failure)
            if stack:
                details.extend(_stack_report(f"Stack trace {index}", stack))
        if hidden:
            details.append(f"... {hidden} more errors not shown")

    stack = _stack_lines(failure)
    if stack:
        details.extend(_stack_report("Stack trace", stack))

    properties = _own_properties(failure) or {}
    other = [key for key in properties if key not in STANDARD_PROPERTIES]
    if other:
        details.append(f"Other properties: {_bounded_json(other)}")
        for key in other:
            details.append(f"{key}: {_bounded_json(properties[key])}")


def _describe_value(failure: object, details: list[str]) -> None:
    details.append(f"Non-Error object: {_safe_str(failure)}")
    details.append(f"Type: {type(failure).__name__}")
    properties = _own_properties(failure)
    if properties is not None:
        details.append(f"Properties: {_bounded_json(properties, indent=2)}")


def _sub_failures(failure: object) -> Sequence[Any] | None:
    """Return nested failures if ``failure`` aggregates several of them.

    Matches anything carrying a list of failures in ``errors`` as well as
    exception groups, which keep theirs in ``exceptions``.
    """
    for attribute in ("errors", "exceptions"):
        value = _safe_getattr(failure, attribute)
        if isinstance(value, (list, tuple)):
            return value
    return None


def _stack_lines(failure: object) -> list[str]:
    stack = _safe_getattr(failure, "stack")
    if isinstance(stack, str):
        return stack.splitlines()
    if isinstance(failure, BaseException) and failure.__traceback__ is not None:
        formatted = traceback.format_exception(
            type(failure),
            failure,
            failure.__traceback__,
        )
        return "".join(formatted).splitlines()
    return []


def _stack_report(label: str, lines: list[str]) -> list[str]:
    kept, omitted = truncate(lines, MAX_STACK_LINES)
    report = [f"{label}:", *kept]
    if omitted:
        report.append(f"... {omitted} more lines omitted")
    return report


def _own_properties(value: object) -> Any:
    if value is None or isinstance(value, (str, bytes, int, float, bool)):
        return None
    if isinstance(value, (Mapping, list, tuple)):
        return value
    try:
        return vars(value)
    except TypeError:
        return None


def _bounded_json(value: Any, indent: int | None = None) -> str:
    try:
        text = json.dumps(value, indent=indent, default=repr)
    except Exception:  # noqa: BLE001
        return UNSERIALIZABLE
    kept, omitted = truncate_text(text, MAX_PROPERTY_CHARS)
    return f"{kept}{TRUNCATION_MARKER}" if omitted else kept


def _safe_str(value: object) -> str:
    try:
        return str(value)
    except Exception:  # noqa: BLE001
        return UNSERIALIZABLE


def _safe_getattr(value: object, name: str) -> Any:
    try:
        return getattr(value, name, None)
    except Exception:  # noqa: BLE001
        return None
