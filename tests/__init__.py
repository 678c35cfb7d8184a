# tests/__init__.py
"""
Test Suite for the Pokedex HTTP API.

Organization:
- `store`: data loading, per-file failure isolation, reload and snapshot swaps.
- `services`: identifier resolution, pagination, search and suggestion rules.
- `http_api`: FastAPI routes through TestClient (status mapping, admin key).

Every test builds its own data directory under `tmp_path` (see `conftest.py`).
"""
