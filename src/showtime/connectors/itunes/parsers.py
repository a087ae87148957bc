"""Decoding utilities for the catalog feed payload."""

import json
import logging
from typing import Any, Optional

from showtime.errors import DecodeError
from showtime.models.entry import GenericEntry
from showtime.models.rules import CatalogRules

from .constants import LABEL_KEY

logger = logging.getLogger(__name__)

_MISSING = object()


def resolve_path(data: Any, path: str) -> Any:
    """
    Walk a dotted path through nested dicts and lists.
    Integer segments index into lists (negative allowed).
    Returns the _MISSING sentinel when any segment does not resolve.
    """
    current = data
    for segment in path.split("."):
        if isinstance(current, dict):
            if segment not in current:
                return _MISSING
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return _MISSING
        else:
            return _MISSING
    return current


def _scalar(value: Any) -> Optional[Any]:
    """Unwrap {"label": ...} nodes; keep only str/number values."""
    if isinstance(value, dict) and LABEL_KEY in value:
        value = value[LABEL_KEY]
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int, float)):
        return value
    return None


def project_entry(item: dict[str, Any], rules: CatalogRules) -> GenericEntry:
    """
    Flatten one feed entry into a GenericEntry using the rules' field paths.
    First candidate path that yields a scalar wins; absent fields are omitted.
    """
    entry: GenericEntry = {}
    for name, paths in rules.field_paths.items():
        for path in paths:
            value = resolve_path(item, path)
            if value is _MISSING:
                continue
            if isinstance(value, list) and name == rules.image_field:
                if not value:
                    continue
                value = value[-1] if rules.image_pick == "last" else value[0]
            value = _scalar(value)
            if value is not None:
                entry[name] = value
                break
    return entry


def locate_entries(data: Any, rules: CatalogRules) -> list[Any]:
    """Find the entry list using the first entries path that resolves to one."""
    wrong_shape: list[str] = []
    for path in rules.entries_paths:
        found = resolve_path(data, path)
        if found is _MISSING:
            continue
        if isinstance(found, list):
            return found
        # A feed with a single entry carries an object instead of a list
        if isinstance(found, dict):
            return [found]
        wrong_shape.append(f"'{path}' is {type(found).__name__}")
    if wrong_shape:
        raise DecodeError(f"Entries are not a list ({', '.join(wrong_shape)})")
    raise DecodeError(f"No entry list found (tried: {', '.join(rules.entries_paths)})")


def decode_feed(raw: str, rules: CatalogRules) -> list[GenericEntry]:
    """
    Decode raw feed text into flat generic entries, in feed order.
    Raises DecodeError for invalid JSON or an unexpected top-level shape.
    """
    if not raw or not raw.strip():
        raise DecodeError("Empty payload")
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        raise DecodeError(f"Payload is not valid JSON: {e}") from e

    entries: list[GenericEntry] = []
    for index, item in enumerate(locate_entries(data, rules)):
        if not isinstance(item, dict):
            logger.debug("Skipping non-object entry at index %d", index)
            continue
        entries.append(project_entry(item, rules))
    return entries
