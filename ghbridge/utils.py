"""Lookup helpers for loosely-typed GitHub payloads."""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

BRANCH_PREFIX = "refs/heads/"
SHORT_SHA_LENGTH = 7
MAX_BODY_LENGTH = 200


def dig(data: Any, path: Sequence[str]) -> Any:
    """Walk ``path`` through nested mappings, returning None on any miss."""
    current = data
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def get_str(data: Any, *path: str) -> str:
    """
    String at ``path`` or ``""``.

    Non-string leaves (numbers, objects, null) also resolve to ``""``.
    """
    value = dig(data, path)
    return value if isinstance(value, str) else ""


def get_int(data: Any, *path: str) -> int:
    """Number at ``path`` as an int, ``0`` when missing or not a number."""
    value = dig(data, path)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return 0


def ensure_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def branch_name(ref: str) -> str:
    """
    Strip the ``refs/heads/`` prefix from a git ref.

    Example
    -------
    'refs/heads/main' → 'main'
    'feature/x'       → 'feature/x'
    """
    if len(ref) > len(BRANCH_PREFIX) and ref.startswith(BRANCH_PREFIX):
        return ref[len(BRANCH_PREFIX):]
    return ref


def short_sha(sha: str) -> str:
    return sha[:SHORT_SHA_LENGTH]


def truncate(text: str, limit: int = MAX_BODY_LENGTH) -> str:
    """Cut ``text`` to ``limit`` characters plus ``...`` when it is longer."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text
