"""Method name normalization.

Turns raw report method identifiers into developer-facing names.

Raw shapes (type name + method signature):
    Calc           + Add(int,int):int      → Add(int,int)        METHOD
    Calc           + get_Total():int       → Total()             PROPERTY
    <Run>d__3      + MoveNext():void       → Run()               METHOD (async)
    <>c            + <Compute>b__4(int):int → None               (lambda)

Precedence: the async state-machine rule is tried first. The lambda rule
only runs when it fails, so an async body is reported under its source
method instead of being dropped as a closure.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from covmodel.domain.coverage import CodeElementType
from covmodel.domain.exceptions import MalformedRecordError

# <Original>d__N + MoveNext():ret
_ASYNC_STATE_MACHINE = re.compile(r"<(?P<original>.+)>.+__.+MoveNext\(\):.+$")

# <Outer>b__N(params)
_LAMBDA = re.compile(r"<.+>.+__.+\(.*\)")

# compiler-generated types: <>c, <>c__DisplayClass0_0, <Run>d__3
SYNTHETIC_MARKER = "__"

SIGNATURE_SEPARATOR = ":"

_PROPERTY_PREFIXES = ("get_", "set_")


class NormalizedName(NamedTuple):
    """Display name and kind of a code element."""

    name: str
    kind: CodeElementType


def is_synthetic_type(type_name: str) -> bool:
    """Check if type name denotes a compiler-generated type."""
    return SYNTHETIC_MARKER in type_name


def is_lambda(name: str) -> bool:
    """Check if name denotes a compiler-generated closure or local function."""
    return _LAMBDA.search(name) is not None


def demangle_async(type_name: str, method_name: str) -> str | None:
    """Source method of an async state machine's MoveNext.

    Returns:
        "Original()" or None if not a state-machine MoveNext.
    """
    match = _ASYNC_STATE_MACHINE.search(type_name + method_name)
    if match is None:
        return None
    return match.group("original") + "()"


def extract_method_name(type_name: str, method_name: str) -> str:
    """Display name before property/lambda classification.

    Raises:
        MalformedRecordError: method_name has no signature separator.
    """
    original = demangle_async(type_name, method_name)
    if original is not None:
        return original

    separator = method_name.rfind(SIGNATURE_SEPARATOR)
    if separator < 0:
        raise MalformedRecordError(
            "Method",
            "Name",
            method_name,
            f"missing {SIGNATURE_SEPARATOR!r} before return type",
        )
    return method_name[:separator]


def normalize_method_name(type_name: str, method_name: str) -> NormalizedName | None:
    """Normalize raw method identifier.

    Args:
        type_name: Name of the type directly declaring the method.
        method_name: Raw method name with signature and return type.

    Returns:
        NormalizedName, or None for compiler-generated closures.

    Raises:
        MalformedRecordError: method_name has no signature separator.
    """
    name = extract_method_name(type_name, method_name)

    if is_lambda(name):
        return None

    if name.startswith(_PROPERTY_PREFIXES):
        return NormalizedName(name[4:], CodeElementType.PROPERTY)

    return NormalizedName(name, CodeElementType.METHOD)
