# pokedex_http_api/data/validation.py
"""
Advisory structural checks for the suggestion index.

The suggestion index is served from raw JSON entries; nothing rejects a bad
entry at load time. ``validate_suggestion_entries`` walks every entry and
describes what is wrong with it, without touching the entries themselves.

Each entry should look like::

    {"id": 25, "name": "pikachu", "displayName": "Pikachu"}
"""

from __future__ import annotations

from numbers import Real
from typing import Any, Iterable, List, Mapping


def _is_number(value: Any) -> bool:
    # bool is a numbers.Real subclass, but true/false is not an id.
    return isinstance(value, Real) and not isinstance(value, bool)


def entry_problems(entry: Any) -> List[str]:
    """
    Return the structural problems of a single suggestion entry
    (empty list when the entry is well-formed).
    """
    if not isinstance(entry, Mapping):
        return [f"not an object (got {type(entry).__name__})"]

    problems: List[str] = []
    if not _is_number(entry.get("id")):
        problems.append("missing or invalid 'id'")
    if not isinstance(entry.get("name"), str):
        problems.append("missing or invalid 'name'")
    if not isinstance(entry.get("displayName"), str):
        problems.append("missing or invalid 'displayName'")
    return problems


def validate_suggestion_entries(entries: Iterable[Any]) -> List[str]:
    """
    Validate every entry; returns one message per problem, e.g.
    ``"Entry 3: missing or invalid 'id'"``.
    """
    errors: List[str] = []
    for position, entry in enumerate(entries):
        for problem in entry_problems(entry):
            errors.append(f"Entry {position}: {problem}")
    return errors


__all__ = ["entry_problems", "validate_suggestion_entries"]
