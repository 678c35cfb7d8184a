# pokedex_http_api/data/errors.py
"""
Exception types for the data store.

Only loading problems are exceptions here. Lookups never raise for bad
caller input (they return None / empty results), and problems with
secondary files are reported as warnings in the ``LoadReport`` instead.

Typical usage:

    from pokedex_http_api.data.errors import DataLoadError

    try:
        store.reload()
    except DataLoadError as e:
        log.error("data_reload_failed", path=e.path, detail=e.detail)
"""

from __future__ import annotations


class PokedexDataError(Exception):
    """
    Base class for all data-store errors.
    """


class DataLoadError(PokedexDataError):
    """
    Raised when the primary Pokemon file exists but cannot be used:
    unreadable, not valid JSON, or not a JSON array.

    The store keeps its previous snapshot when this is raised.
    """

    def __init__(self, path: str, detail: str | None = None) -> None:
        msg = f"Failed to load primary data file '{path}'."
        if detail:
            msg += f" Detail: {detail}"
        super().__init__(msg)
        self.path = path
        self.detail = detail


__all__ = ["PokedexDataError", "DataLoadError"]
