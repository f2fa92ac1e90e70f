"""
Extract the reply text from an LLM completion of uncertain shape.

The completion is reduced to plain data first (SDK models via model_dump()),
so everything below only deals with str | sequence | mapping | other.

Order:
1. Known completion fields (first non-empty string wins).
2. Bounded walk over the whole object collecting non-empty strings, joined
   with single spaces.
3. Empty string when nothing is found; callers pick the fallback text.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any, Union

MAX_DEPTH = 8
MAX_COLLECTED_STRINGS = 50
SKIPPED_KEYS = frozenset({"binary", "blob"})

PathKey = Union[str, int]

CANDIDATE_PATHS: tuple[tuple[PathKey, ...], ...] = (
    ("choices", 0, "message", "content"),
    ("choices", 0, "delta", "content"),
    ("choices", 0, "text"),
    ("choices", 0, "content"),
    ("message", "content"),
    ("content",),
    ("output", 0, "content"),
    ("output", 0, "text"),
)

_WHITESPACE = re.compile(r"\s+")


def to_plain_data(obj: Any) -> Any:
    """Pydantic/SDK models -> dicts; anything else unchanged."""
    dump = getattr(obj, "model_dump", None)
    if callable(dump):
        try:
            return dump()
        except Exception:
            return obj
    return obj


def _is_sequence(obj: Any) -> bool:
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes, bytearray))


def lookup_path(data: Any, path: tuple[PathKey, ...]) -> Any:
    """Follow mapping keys / sequence indexes; None when the path is absent."""
    current = data
    for key in path:
        if isinstance(key, int):
            if not _is_sequence(current) or len(current) <= key:
                return None
            current = current[key]
        else:
            if not isinstance(current, Mapping) or key not in current:
                return None
            current = current[key]
    return current


def collect_strings(obj: Any, acc: list[str], depth: int = 0) -> None:
    if obj is None or depth > MAX_DEPTH or len(acc) >= MAX_COLLECTED_STRINGS:
        return
    if isinstance(obj, str):
        stripped = obj.strip()
        if stripped:
            acc.append(stripped)
        return
    if isinstance(obj, Mapping):
        for key, value in obj.items():
            if key in SKIPPED_KEYS:
                continue
            collect_strings(value, acc, depth + 1)
        return
    if _is_sequence(obj):
        for item in obj:
            collect_strings(item, acc, depth + 1)


def extract_reply_text(completion: Any) -> str:
    """Best-effort reply text from a completion; "" if there is none."""
    if completion is None:
        return ""
    data = to_plain_data(completion)

    for path in CANDIDATE_PATHS:
        value = lookup_path(data, path)
        if isinstance(value, str) and value.strip():
            return value.strip()

    gathered: list[str] = []
    collect_strings(data, gathered)
    if gathered:
        return _WHITESPACE.sub(" ", " ".join(gathered)).strip()
    return ""
