# pokedex_http_api/data/loader.py
"""
pokedex_http_api/data/loader.py
===============================

Reads the five Pokedex JSON files and turns each into a typed, immutable
collection. This module knows about files and record shapes; it knows
nothing about load generations or which collection survives a failed
reload (that policy lives in ``pokedex_http_api.data.store``).

Files
-----
- ``pokemon.json``          array of Pokemon records (primary)
- ``species.json``          array of species records
- ``evolution-chains.json`` array of evolution chain records
- ``types.json``            array of type records
- ``suggestions.json``      ``{"metadata": {...}, "pokemon": [...]}``

Behaviour
---------
- A missing file yields outcome ``missing``; never an exception.
- Unreadable files, JSON decode errors and wrong top-level shapes yield
  outcome ``invalid`` with a human-readable reason.
- Array elements are validated one by one; an element that does not fit
  its model is skipped with a warning, as is a repeated id (first record
  wins). One bad record never invalidates the file.
- Suggestion entries are kept raw; only the envelope is checked.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Set, Tuple, Type

from pydantic import BaseModel, ValidationError

from ..logging import get_logger
from ..schemas.pokemon import EvolutionChain, Pokemon, PokemonSpecies, PokemonType
from ..schemas.suggestions import SuggestionIndex, SuggestionsMetadata

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Dataset catalogue
# ---------------------------------------------------------------------------


class DatasetName(str, Enum):
    POKEMON = "pokemon"
    SPECIES = "species"
    EVOLUTION_CHAINS = "evolution_chains"
    TYPES = "types"
    SUGGESTIONS = "suggestions"


DATA_FILES: Dict[DatasetName, str] = {
    DatasetName.POKEMON: "pokemon.json",
    DatasetName.SPECIES: "species.json",
    DatasetName.EVOLUTION_CHAINS: "evolution-chains.json",
    DatasetName.TYPES: "types.json",
    DatasetName.SUGGESTIONS: "suggestions.json",
}

PRIMARY_DATASET = DatasetName.POKEMON

RECORD_MODELS: Dict[DatasetName, Type[BaseModel]] = {
    DatasetName.POKEMON: Pokemon,
    DatasetName.SPECIES: PokemonSpecies,
    DatasetName.EVOLUTION_CHAINS: EvolutionChain,
    DatasetName.TYPES: PokemonType,
}


class FileOutcome(str, Enum):
    LOADED = "loaded"
    MISSING = "missing"
    INVALID = "invalid"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatasetReport:
    """
    What happened to one file during one load.

    ``records`` counts accepted records (or raw suggestion entries);
    ``skipped`` counts array elements rejected by validation.
    """

    dataset: DatasetName
    path: str
    outcome: FileOutcome
    records: int = 0
    skipped: int = 0
    warnings: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.outcome is FileOutcome.LOADED


@dataclass(frozen=True)
class ParsedDataset:
    report: DatasetReport
    # Tuple of records, a SuggestionIndex, or None when the file was unusable.
    value: Any = None


@dataclass
class _Problems:
    warnings: List[str] = field(default_factory=list)
    skipped: int = 0


class _UnusableFile(Exception):
    def __init__(self, outcome: FileOutcome, reason: str) -> None:
        super().__init__(reason)
        self.outcome = outcome
        self.reason = reason


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _read_json(path: Path) -> Any:
    """
    Read and parse one file as UTF-8 JSON.

    Raises _UnusableFile(MISSING) when the file does not exist and
    _UnusableFile(INVALID) for any other read or decode problem.
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise _UnusableFile(FileOutcome.MISSING, "file not found") from None
    except json.JSONDecodeError as e:
        raise _UnusableFile(FileOutcome.INVALID, f"JSON decode error: {e}") from None
    except UnicodeDecodeError as e:
        raise _UnusableFile(FileOutcome.INVALID, f"not valid UTF-8: {e}") from None
    except (ValueError, RecursionError) as e:
        # Valid JSON the decoder still refuses: huge integers, deep nesting.
        raise _UnusableFile(FileOutcome.INVALID, f"JSON decode error: {e}") from None
    except OSError as e:
        raise _UnusableFile(FileOutcome.INVALID, f"read error: {e}") from None


def _summarize_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0] if exc.errors() else {}
    loc = ".".join(str(p) for p in first.get("loc", ())) or "<record>"
    msg = first.get("msg", "invalid record")
    extra = exc.error_count() - 1
    suffix = f" (+{extra} more)" if extra > 0 else ""
    return f"{loc}: {msg}{suffix}"


def _parse_records(
    dataset: DatasetName,
    raw: Any,
    problems: _Problems,
) -> Tuple[BaseModel, ...]:
    if not isinstance(raw, list):
        raise _UnusableFile(
            FileOutcome.INVALID,
            f"top-level value must be a JSON array, got {type(raw).__name__}",
        )

    model = RECORD_MODELS[dataset]
    records: List[BaseModel] = []
    seen_ids: Set[int] = set()

    for position, item in enumerate(raw):
        try:
            record = model.model_validate(item)
        except ValidationError as e:
            problems.skipped += 1
            detail = _summarize_validation_error(e)
            problems.warnings.append(f"record {position} skipped: {detail}")
            logger.warning(
                "data_record_skipped",
                dataset=dataset.value,
                index=position,
                error=detail,
            )
            continue

        record_id = getattr(record, "id")
        if record_id in seen_ids:
            problems.skipped += 1
            problems.warnings.append(
                f"record {position} skipped: duplicate id {record_id}"
            )
            logger.warning(
                "data_record_duplicate",
                dataset=dataset.value,
                index=position,
                id=record_id,
            )
            continue

        seen_ids.add(record_id)
        records.append(record)

    return tuple(records)


def _parse_suggestions(raw: Any, problems: _Problems) -> SuggestionIndex:
    if not isinstance(raw, dict):
        raise _UnusableFile(
            FileOutcome.INVALID,
            f"top-level value must be a JSON object, got {type(raw).__name__}",
        )

    entries = raw.get("pokemon")
    if not isinstance(entries, list):
        raise _UnusableFile(
            FileOutcome.INVALID, "'pokemon' must be a JSON array of entries"
        )

    metadata = SuggestionsMetadata()
    raw_meta = raw.get("metadata")
    if raw_meta is not None:
        try:
            metadata = SuggestionsMetadata.model_validate(raw_meta)
        except ValidationError as e:
            detail = _summarize_validation_error(e)
            problems.warnings.append(f"metadata ignored: {detail}")
            logger.warning("suggestions_metadata_ignored", error=detail)

    return SuggestionIndex(metadata=metadata, entries=tuple(entries))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def dataset_path(data_dir: Path, dataset: DatasetName) -> Path:
    return Path(data_dir) / DATA_FILES[dataset]


def load_dataset(data_dir: Path, dataset: DatasetName) -> ParsedDataset:
    """
    Read one dataset from ``data_dir``.

    Never raises for missing or malformed files: the outcome is carried in
    the returned report and ``value`` is None. Callers decide whether an
    unusable file is fatal.
    """
    path = dataset_path(data_dir, dataset)
    problems = _Problems()

    try:
        raw = _read_json(path)
        if dataset is DatasetName.SUGGESTIONS:
            value: Any = _parse_suggestions(raw, problems)
            count = len(value)
        else:
            value = _parse_records(dataset, raw, problems)
            count = len(value)
    except _UnusableFile as e:
        if e.outcome is FileOutcome.MISSING:
            logger.warning("data_file_missing", dataset=dataset.value, path=str(path))
        else:
            logger.warning(
                "data_file_invalid",
                dataset=dataset.value,
                path=str(path),
                reason=e.reason,
            )
        report = DatasetReport(
            dataset=dataset,
            path=str(path),
            outcome=e.outcome,
            warnings=(f"{path.name}: {e.reason}",),
        )
        return ParsedDataset(report=report, value=None)

    report = DatasetReport(
        dataset=dataset,
        path=str(path),
        outcome=FileOutcome.LOADED,
        records=count,
        skipped=problems.skipped,
        warnings=tuple(f"{path.name}: {w}" for w in problems.warnings),
    )
    return ParsedDataset(report=report, value=value)


__all__ = [
    "DatasetName",
    "DATA_FILES",
    "PRIMARY_DATASET",
    "FileOutcome",
    "DatasetReport",
    "ParsedDataset",
    "dataset_path",
    "load_dataset",
]
