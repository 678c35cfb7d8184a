# tests/conftest.py
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from pokedex_http_api.config import Settings
from pokedex_http_api.data.store import PokemonDataStore
from pokedex_http_api.services.pokemon_service import PokemonDataService
from tests.sample_data import DEFAULT_FILES, write_json


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_data_dir(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory writing a data directory.

    Keyword arguments are file names with dashes/dots replaced by
    underscores (``evolution_chains_json=...``); a value of None leaves the
    file out, a ``str`` is written verbatim (for corrupt files).
    """
    counter = {"n": 0}

    def _make(**overrides: Any) -> Path:
        counter["n"] += 1
        directory = tmp_path / f"data{counter['n']}"
        directory.mkdir()

        files = dict(DEFAULT_FILES)
        for key, value in overrides.items():
            filename = key[: -len("_json")].replace("_", "-") + ".json"
            files[filename] = value

        for filename, payload in files.items():
            if payload is None:
                continue
            if isinstance(payload, str):
                (directory / filename).write_text(payload, encoding="utf-8")
            else:
                write_json(directory, filename, payload)
        return directory

    return _make


@pytest.fixture
def data_dir(make_data_dir) -> Path:
    """A data directory holding the full default dataset."""
    return make_data_dir()


@pytest.fixture
def store(data_dir: Path) -> PokemonDataStore:
    return PokemonDataStore(data_dir)


@pytest.fixture
def service(store: PokemonDataStore) -> PokemonDataService:
    return PokemonDataService(store)


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(data_dir: Path, **overrides: Any) -> Settings:
        values: Dict[str, Any] = {
            "DATA_DIR": str(data_dir),
            "APP_ENV": "testing",
            "API_SECRET": "test-secret",
            "BASE_URL": "http://testserver",
            "LOG_FORMAT": "console",
            "LOG_LEVEL": "WARNING",
            "OTEL_EXPORTER_OTLP_ENDPOINT": None,
        }
        values.update(overrides)
        return Settings(**values)

    return _make
