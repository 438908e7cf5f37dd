"""Utility helpers shared by the site configuration resolver."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from types import MappingProxyType
from urllib.parse import urlsplit

from .models import Violation

BASE_REASON = "must be non-empty and start with /"
URL_SCHEMES = ("http", "https")


class ViolationCollector:
    """Accumulate violations while a document is walked."""

    def __init__(self) -> None:
        self._violations: list[Violation] = []

    def add(self, field_path: str, reason: str) -> None:
        """Record a violation at ``field_path``."""
        self._violations.append(Violation(field_path, reason))

    @property
    def violations(self) -> list[Violation]:
        """Return the recorded violations in insertion order."""
        return list(self._violations)

    def __bool__(self) -> bool:
        return bool(self._violations)


def _join_path(parent: str, key: str | int) -> str:
    """Append a mapping key or list index to a dotted field path."""
    if isinstance(key, int):
        return f"{parent}[{key}]"
    if not parent:
        return key
    return f"{parent}.{key}"


def _non_empty_str(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _optional_str(value: object | None, default: str = "") -> str:
    """Return ``value`` as a string, or ``default`` when it is missing."""
    if value is None:
        return default
    return str(value)


def _is_valid_base(value: object) -> bool:
    return isinstance(value, str) and value.startswith("/")


def _is_valid_url(value: object) -> bool:
    """Return True when ``value`` is an absolute http(s) URL with a host."""
    if not _non_empty_str(value):
        return False
    try:
        parsed = urlsplit(typ.cast("str", value).strip())
    except ValueError:
        return False
    return parsed.scheme in URL_SCHEMES and bool(parsed.hostname)


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _freeze_mapping(payload: typ.Mapping[str, typ.Any]) -> typ.Mapping[str, typ.Any]:
    """Return a read-only copy of ``payload``, freezing nested containers."""
    return MappingProxyType({str(key): _freeze(value) for key, value in payload.items()})


def _freeze(value: typ.Any) -> typ.Any:
    match value:
        case cabc.Mapping():
            return _freeze_mapping(value)
        case list() | tuple():
            return tuple(_freeze(item) for item in value)
        case _:
            return value


__all__ = [
    "BASE_REASON",
    "URL_SCHEMES",
    "ViolationCollector",
    "_freeze",
    "_freeze_mapping",
    "_is_positive_int",
    "_is_valid_base",
    "_is_valid_url",
    "_join_path",
    "_non_empty_str",
    "_optional_str",
]
