"""
Structural diffs appended to failed verification messages.

- Text is diffed character by character. Runs present only in the expected
  value are wrapped with the delete format, runs present only in the actual
  value with the insert format: ``AB|(-)C||(+)D|``.
- Sequences list the elements missing from the actual value and the extra
  elements it has.
- Mappings list missing keys, extra keys and changed values.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from difflib import SequenceMatcher
from typing import Any

from affirm.states.base import render

DEFAULT_INSERT_FORMAT = "|(+){}|"
DEFAULT_DELETE_FORMAT = "|(-){}|"


def text_diff(
    expected: str,
    actual: str,
    insert_format: str = DEFAULT_INSERT_FORMAT,
    delete_format: str = DEFAULT_DELETE_FORMAT,
) -> str:
    """Character-level diff turning ``expected`` into ``actual``."""
    matcher = SequenceMatcher(None, expected, actual, autojunk=False)
    parts: list[str] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            parts.append(expected[i1:i2])
            continue
        if tag in ("delete", "replace"):
            parts.append(delete_format.format(expected[i1:i2]))
        if tag in ("insert", "replace"):
            parts.append(insert_format.format(actual[j1:j2]))
    return "".join(parts)


def sequence_diff(expected: Iterable[Any], actual: Iterable[Any]) -> str:
    """List elements missing from ``actual`` and extra elements in it, respecting duplicates."""
    extra = list(actual)
    missing: list[Any] = []
    for element in expected:
        for index, candidate in enumerate(extra):
            if candidate == element:
                del extra[index]
                break
        else:
            missing.append(element)
    if not missing and not extra:
        return "Same elements in a different order"
    return f"Missing: {missing}, Extra: {extra}"


def mapping_diff(expected: Mapping[Any, Any], actual: Mapping[Any, Any]) -> str:
    missing = {k: v for k, v in expected.items() if k not in actual}
    extra = {k: v for k, v in actual.items() if k not in expected}
    changed = {k: f"{render(v)} -> {render(actual[k])}" for k, v in expected.items() if k in actual and actual[k] != v}
    parts = []
    if missing:
        parts.append(f"Missing: {missing}")
    if extra:
        parts.append(f"Extra: {extra}")
    if changed:
        parts.append(f"Changed: {changed}")
    return ", ".join(parts)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray, Mapping))


def structural_diff(
    expected: Any,
    actual: Any,
    insert_format: str = DEFAULT_INSERT_FORMAT,
    delete_format: str = DEFAULT_DELETE_FORMAT,
) -> str:
    """Pick the diff matching the shape of both values; fall back to diffing their text."""
    if isinstance(expected, Mapping) and isinstance(actual, Mapping):
        return mapping_diff(expected, actual)
    if _is_sequence(expected) and _is_sequence(actual):
        return sequence_diff(expected, actual)
    return text_diff(render(expected), render(actual), insert_format, delete_format)
