# pokedex_http_api/services/suggestions.py
"""
Name-suggestion rules, kept apart from the lookup service so they can be
tested on plain lists.

Rules (fixed, not configurable per call):

* queries shorter than ``MIN_QUERY_LENGTH`` after trimming get nothing
* matching is a case-insensitive substring test against the stored
  lowercase ``name``
* results keep index order and stop at ``MAX_SUGGESTIONS``
* each result is displayed with its first letter uppercased and the rest
  lowercased, whatever the stored casing
* a malformed entry is skipped on its own; it never aborts the query
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

MIN_QUERY_LENGTH = 3
MAX_SUGGESTIONS = 10


def normalize_query(query: Any) -> Optional[str]:
    """
    Lowercased, trimmed query, or None when it cannot produce suggestions.
    """
    if not isinstance(query, str):
        return None
    trimmed = query.strip()
    if len(trimmed) < MIN_QUERY_LENGTH:
        return None
    return trimmed.lower()


def format_display_name(value: str) -> str:
    """``"PIKACHU"`` -> ``"Pikachu"``; ``"mr. mime"`` -> ``"Mr. mime"``."""
    return value[:1].upper() + value[1:].lower()


def _display_for(entry: Mapping[str, Any]) -> Optional[str]:
    display = entry.get("displayName")
    if isinstance(display, str) and display:
        return format_display_name(display)
    # Fall back to the lookup name when displayName is unusable.
    name = entry.get("name")
    if isinstance(name, str) and name:
        return format_display_name(name)
    return None


def match_suggestions(
    entries: Iterable[Any],
    needle: str,
    *,
    limit: int = MAX_SUGGESTIONS,
) -> List[str]:
    """
    Collect up to ``limit`` display names whose stored name contains
    ``needle`` (already lowercased).
    """
    results: List[str] = []
    for entry in entries:
        if len(results) >= limit:
            break
        if not isinstance(entry, Mapping):
            continue
        name = entry.get("name")
        if not isinstance(name, str) or needle not in name.lower():
            continue
        display = _display_for(entry)
        if display is not None:
            results.append(display)
    return results


__all__ = [
    "MIN_QUERY_LENGTH",
    "MAX_SUGGESTIONS",
    "normalize_query",
    "format_display_name",
    "match_suggestions",
]
