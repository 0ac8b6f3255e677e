"""
Field-level mapping between persisted rows and API rows.

A `FieldSpec` describes one semantic attribute:
- `columns`: where it may be stored, current column first, then legacy
  aliases in priority order (read side)
- `sources`: which API fields may feed it, highest priority first (write side)

`EntityMapper` applies a list of specs in both directions.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

logger = logging.getLogger(__name__)

_TRUE_WORDS = {"1", "true", "yes", "y", "on"}


def to_flag(value: Any) -> int:
    """
    Normalize anything boolean-like to 0/1. Unknown values count as 0.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return 1 if value else 0
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_WORDS:
            return 1
        try:
            return 1 if float(text) else 0
        except ValueError:
            return 0
    return 0


def decode_json(value: Any, default: Any) -> Any:
    """
    Decode a JSON text column without ever raising.

    Already-decoded values (dict/list from a json codec) pass through.
    """
    if value is None:
        return default
    if isinstance(value, (dict, list)):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if not isinstance(value, str):
        return default
    try:
        return json.loads(value)
    except (ValueError, RecursionError):
        logger.warning("json_decode_failed value=%r", value[:80])
        return default


def json_list(value: Any) -> list:
    decoded = decode_json(value, [])
    return decoded if isinstance(decoded, list) else []


def json_object(value: Any) -> dict:
    decoded = decode_json(value, {})
    return decoded if isinstance(decoded, dict) else {}


def encode_json(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value)


@dataclass(frozen=True)
class FieldSpec:
    api_name: str
    columns: tuple[str, ...]
    default: Any = None
    # Extra API names that also receive the resolved value on read.
    mirrors: tuple[str, ...] = ()
    # API names accepted on write, highest priority first. Defaults to (api_name,).
    sources: tuple[str, ...] = ()
    # Nest under this API key (e.g. "legality" -> {"legality": {"text": ...}}).
    group: str | None = None
    # Value conversion on read / on write.
    read: Callable[[Any], Any] | None = None
    write: Callable[[Any], Any] | None = None
    # Empty strings are treated like missing values on read (`row.x || ''`).
    blank_is_missing: bool = False

    @property
    def column(self) -> str:
        return self.columns[0]

    @property
    def write_sources(self) -> tuple[str, ...]:
        return self.sources or (self.api_name,)


def field_spec(api_name: str, *columns: str, **kwargs: Any) -> FieldSpec:
    return FieldSpec(api_name, columns or (api_name,), **kwargs)


_MISSING = object()


def _first_present(row: Mapping[str, Any], columns: tuple[str, ...], *, blank_is_missing: bool) -> Any:
    for column in columns:
        value = row.get(column)
        if value is None:
            continue
        if blank_is_missing and value == "":
            continue
        return value
    return _MISSING


def _pick_source(payload: Mapping[str, Any], sources: tuple[str, ...]) -> Any:
    """
    First present non-null source wins. If sources were present but all
    null, the result is an explicit null. If none was present: _MISSING.
    """
    seen_null = False
    for name in sources:
        if name not in payload:
            continue
        value = payload[name]
        if value is not None:
            return value
        seen_null = True
    return None if seen_null else _MISSING


@dataclass(frozen=True)
class EntityMapper:
    kind: str
    fields: tuple[FieldSpec, ...]
    id_column: str | None = "id"

    def to_api(self, row: Mapping[str, Any] | None) -> dict[str, Any] | None:
        if row is None:
            return None
        api: dict[str, Any] = {}
        if self.id_column is not None:
            api["id"] = row.get(self.id_column)
        for spec in self.fields:
            value = _first_present(row, spec.columns, blank_is_missing=spec.blank_is_missing)
            value = spec.default if value is _MISSING else value
            if spec.read is not None:
                value = spec.read(value)
            target = api.setdefault(spec.group, {}) if spec.group else api
            target[spec.api_name] = value
            for mirror in spec.mirrors:
                target[mirror] = value
        return api

    def to_db(self, payload: Mapping[str, Any] | None) -> dict[str, Any]:
        if not payload:
            return {}
        db: dict[str, Any] = {}
        for spec in self.fields:
            scope: Any = payload
            if spec.group:
                scope = payload.get(spec.group)
                if not isinstance(scope, Mapping):
                    continue
            value = _pick_source(scope, spec.write_sources)
            if value is _MISSING:
                continue
            if spec.write is not None:
                value = spec.write(value)
            db[spec.column] = value
        if self.id_column is not None and "id" in payload:
            db[self.id_column] = payload["id"]
        return db

    @property
    def columns(self) -> list[str]:
        """
        Current-convention columns this mapper writes (id excluded).
        """
        seen: list[str] = []
        for spec in self.fields:
            if spec.column not in seen:
                seen.append(spec.column)
        return seen
