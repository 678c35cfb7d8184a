# pokedex_http_api/data/store.py
"""
pokedex_http_api/data/store.py
==============================

In-memory data store: one immutable ``DataSnapshot`` per load generation.

Load policy
-----------
- Every load reads all five files into temporaries and publishes a new
  snapshot with a single reference assignment. Readers that grabbed the
  old snapshot keep a consistent view; nobody ever sees a mix of two
  generations.
- A file that is missing or unusable keeps the collection it backed in the
  previous generation (empty on the first load). Stale data is preferred
  over no data.
- The primary ``pokemon.json`` is the exception: if it exists but cannot
  be used, ``DataLoadError`` is raised and the previous snapshot stays in
  place untouched.
- Reloads are serialized with a lock; reads never take it.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Generic, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union

from ..logging import get_logger
from ..schemas.pokemon import EvolutionChain, Pokemon, PokemonSpecies, PokemonType
from ..schemas.suggestions import SuggestionIndex
from ..schemas.system import InitializationStatus, SuggestionIndexValidation
from .errors import DataLoadError
from .loader import (
    PRIMARY_DATASET,
    DatasetName,
    DatasetReport,
    FileOutcome,
    ParsedDataset,
    load_dataset,
)
from .validation import validate_suggestion_entries

logger = get_logger(__name__)

R = TypeVar("R")


# ---------------------------------------------------------------------------
# Indexed collections
# ---------------------------------------------------------------------------


class RecordIndex(Generic[R]):
    """
    Ordered, read-only collection of records with O(1) lookup by id and by
    lowercase name. First-writer-wins on collisions.

    Records without a ``name`` attribute (evolution chains) are only
    indexed by id.
    """

    __slots__ = ("_records", "_by_id", "_by_name")

    def __init__(self, records: Sequence[R] = ()) -> None:
        self._records: Tuple[R, ...] = tuple(records)
        by_id: Dict[int, R] = {}
        by_name: Dict[str, R] = {}
        for record in self._records:
            by_id.setdefault(getattr(record, "id"), record)
            name = getattr(record, "name", None)
            if isinstance(name, str):
                by_name.setdefault(name.lower(), record)
        self._by_id: Mapping[int, R] = MappingProxyType(by_id)
        self._by_name: Mapping[str, R] = MappingProxyType(by_name)

    @property
    def records(self) -> Tuple[R, ...]:
        return self._records

    def get_by_id(self, record_id: int) -> Optional[R]:
        return self._by_id.get(record_id)

    def get_by_name(self, lowered_name: str) -> Optional[R]:
        return self._by_name.get(lowered_name)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)


# ---------------------------------------------------------------------------
# Snapshot + report
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DataSnapshot:
    """
    One complete load generation. Never mutated after construction.

    ``loaded`` lists the datasets backed by a successfully parsed file in
    this or an earlier generation.
    """

    pokemon: RecordIndex[Pokemon] = field(default_factory=RecordIndex)
    species: RecordIndex[PokemonSpecies] = field(default_factory=RecordIndex)
    evolution_chains: RecordIndex[EvolutionChain] = field(default_factory=RecordIndex)
    types: RecordIndex[PokemonType] = field(default_factory=RecordIndex)
    suggestions: Optional[SuggestionIndex] = None
    loaded: FrozenSet[DatasetName] = frozenset()
    loaded_at: Optional[datetime] = None

    def collection(self, dataset: DatasetName) -> Any:
        return {
            DatasetName.POKEMON: self.pokemon,
            DatasetName.SPECIES: self.species,
            DatasetName.EVOLUTION_CHAINS: self.evolution_chains,
            DatasetName.TYPES: self.types,
            DatasetName.SUGGESTIONS: self.suggestions,
        }[dataset]


EMPTY_SNAPSHOT = DataSnapshot()


@dataclass(frozen=True)
class LoadReport:
    """
    Outcome of one successful ``load()`` call, per dataset.
    """

    datasets: Mapping[DatasetName, DatasetReport]
    loaded_at: datetime

    def outcome(self, dataset: DatasetName) -> FileOutcome:
        return self.datasets[dataset].outcome

    @property
    def warnings(self) -> List[str]:
        found: List[str] = []
        for name in DatasetName:
            report = self.datasets.get(name)
            if report is not None:
                found.extend(report.warnings)
        return found


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class PokemonDataStore:
    """
    Owns the current ``DataSnapshot`` for one data directory.

    Several stores can coexist (e.g. one per test); nothing is global.
    """

    def __init__(self, data_dir: Union[str, Path], *, autoload: bool = True) -> None:
        self._data_dir = Path(data_dir)
        self._snapshot: DataSnapshot = EMPTY_SNAPSHOT
        self._last_report: Optional[LoadReport] = None
        self._reload_lock = threading.Lock()

        if autoload:
            self.load()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def snapshot(self) -> DataSnapshot:
        return self._snapshot

    @property
    def last_report(self) -> Optional[LoadReport]:
        return self._last_report

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> LoadReport:
        """
        Read all files and publish a new snapshot.

        Raises:
            DataLoadError: ``pokemon.json`` exists but is unreadable, not
                JSON, or not an array. The current snapshot is kept.
        """
        with self._reload_lock:
            primary = load_dataset(self._data_dir, PRIMARY_DATASET)
            if primary.report.outcome is FileOutcome.INVALID:
                detail = "; ".join(primary.report.warnings)
                logger.error(
                    "data_load_failed",
                    dataset=PRIMARY_DATASET.value,
                    path=primary.report.path,
                    detail=detail,
                )
                raise DataLoadError(primary.report.path, detail)

            parsed: Dict[DatasetName, ParsedDataset] = {PRIMARY_DATASET: primary}
            for name in DatasetName:
                if name is not PRIMARY_DATASET:
                    parsed[name] = load_dataset(self._data_dir, name)

            loaded_at = datetime.now(timezone.utc)
            snapshot = self._build_snapshot(self._snapshot, parsed, loaded_at)
            report = LoadReport(
                datasets=MappingProxyType({n: p.report for n, p in parsed.items()}),
                loaded_at=loaded_at,
            )

            self._snapshot = snapshot
            self._last_report = report

        logger.info(
            "data_loaded",
            data_dir=str(self._data_dir),
            pokemon=len(snapshot.pokemon),
            species=len(snapshot.species),
            evolution_chains=len(snapshot.evolution_chains),
            types=len(snapshot.types),
            suggestions=len(snapshot.suggestions) if snapshot.suggestions else 0,
            warnings=len(report.warnings),
        )
        return report

    def reload(self) -> LoadReport:
        """Re-run ``load()`` from scratch (e.g. after a new scrape)."""
        return self.load()

    def initialize(self) -> LoadReport:
        return self.load()

    @staticmethod
    def _build_snapshot(
        previous: DataSnapshot,
        parsed: Mapping[DatasetName, ParsedDataset],
        loaded_at: datetime,
    ) -> DataSnapshot:
        collections: Dict[DatasetName, Any] = {}
        loaded = set()

        for name in DatasetName:
            result = parsed[name]
            if result.report.ok:
                value = result.value
                if name is not DatasetName.SUGGESTIONS:
                    value = RecordIndex(value)
                collections[name] = value
                loaded.add(name)
            else:
                # Keep what the previous generation had for this file.
                collections[name] = previous.collection(name)
                if name in previous.loaded:
                    loaded.add(name)
                    logger.warning(
                        "data_retained_previous",
                        dataset=name.value,
                        outcome=result.report.outcome.value,
                    )

        return DataSnapshot(
            pokemon=collections[DatasetName.POKEMON],
            species=collections[DatasetName.SPECIES],
            evolution_chains=collections[DatasetName.EVOLUTION_CHAINS],
            types=collections[DatasetName.TYPES],
            suggestions=collections[DatasetName.SUGGESTIONS],
            loaded=frozenset(loaded),
            loaded_at=loaded_at,
        )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def is_initialized(self) -> bool:
        """
        True when at least one usable dataset is present: Pokemon records
        or the suggestion index.
        """
        snapshot = self._snapshot
        return bool(snapshot.pokemon) or snapshot.suggestions is not None

    def get_initialization_status(self) -> InitializationStatus:
        snapshot = self._snapshot
        suggestions = snapshot.suggestions
        return InitializationStatus(
            initialized=bool(snapshot.pokemon) or suggestions is not None,
            pokemon_data_loaded=DatasetName.POKEMON in snapshot.loaded,
            pokemon_count=len(snapshot.pokemon),
            suggestions_data_loaded=suggestions is not None,
            suggestions_count=len(suggestions) if suggestions is not None else 0,
            species_count=len(snapshot.species),
            types_count=len(snapshot.types),
            evolution_chains_count=len(snapshot.evolution_chains),
            loaded_at=snapshot.loaded_at,
            suggestions_metadata=suggestions.metadata if suggestions is not None else None,
        )

    def validate_suggestion_index(self) -> SuggestionIndexValidation:
        """
        Report structural problems in the suggestion index without
        changing it.
        """
        suggestions = self._snapshot.suggestions
        if suggestions is None:
            return SuggestionIndexValidation(
                is_valid=False,
                errors=["Suggestion index is not loaded"],
            )

        errors = validate_suggestion_entries(suggestions.entries)
        return SuggestionIndexValidation(is_valid=not errors, errors=errors)


__all__ = [
    "RecordIndex",
    "DataSnapshot",
    "EMPTY_SNAPSHOT",
    "LoadReport",
    "PokemonDataStore",
]
