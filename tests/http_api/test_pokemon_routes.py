# tests/http_api/test_pokemon_routes.py
from unittest.mock import MagicMock

import pytest
from dependency_injector import providers
from fastapi import status
from fastapi.testclient import TestClient

from pokedex_http_api import SERVICE_NAME, __version__
from pokedex_http_api.data.errors import DataLoadError
from pokedex_http_api.main import create_app
from pokedex_http_api.services.pokemon_service import PokemonDataService

API = "/api/v2"


@pytest.fixture
def make_client(make_settings):
    clients = []

    def _make(data_dir, **overrides):
        app = create_app(make_settings(data_dir, **overrides))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, data_dir):
    return make_client(data_dir)


def assert_error(response, code, message=None):
    assert response.status_code == code
    body = response.json()
    assert body["status"] == "error"
    assert body["code"] == code
    if message is not None:
        assert body["message"] == message


# ---------------------------------------------------------------------------
# Pokemon
# ---------------------------------------------------------------------------


def test_list_pokemon(client):
    response = client.get(f"{API}/pokemon", params={"offset": 1, "limit": 2})

    assert response.status_code == 200
    assert response.json() == {
        "count": 7,
        "results": [
            {"name": "charmander", "url": "http://testserver/api/v2/pokemon/4"},
            {"name": "charmeleon", "url": "http://testserver/api/v2/pokemon/5"},
        ],
    }


def test_list_pokemon_with_non_numeric_params_uses_defaults(client):
    response = client.get(f"{API}/pokemon", params={"offset": "abc", "limit": "lots"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 7
    assert len(body["results"]) == 7
    assert body["results"][0]["name"] == "bulbasaur"


@pytest.mark.parametrize("identifier", ["25", "pikachu", "PIKACHU"])
def test_get_pokemon(client, identifier):
    response = client.get(f"{API}/pokemon/{identifier}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == 25
    assert body["name"] == "pikachu"
    assert body["types"][0]["type"]["name"] == "electric"
    # Unmodelled fields are served as scraped.
    assert body["cries"] == {"latest": "https://example.test/cries/25.ogg"}
    assert body["sprites"]["front_default"] == "http://testserver/images/pokemon/sprites/25.png"
    assert body["sprites"]["back_shiny"] is None
    assert body["sprites"]["other"]["official-artwork"]["front_default"] == (
        "http://testserver/images/pokemon/official-artwork/25.png"
    )


@pytest.mark.parametrize("identifier", ["missingno", "0", "-1", "025", "9999"])
def test_get_pokemon_not_found(client, identifier):
    response = client.get(f"{API}/pokemon/{identifier}")
    assert_error(response, 404, f"Pokemon '{identifier}' not found")


def test_get_species(client):
    response = client.get(f"{API}/pokemon-species/pichu")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == 172
    assert body["is_baby"] is True
    assert body["evolution_chain"]["url"].endswith("/evolution-chain/10/")

    assert_error(client.get(f"{API}/pokemon-species/raichu"), 404)


def test_get_evolution_chain(client):
    response = client.get(f"{API}/evolution-chain/10")

    assert response.status_code == 200
    chain = response.json()["chain"]
    assert chain["species"]["name"] == "pichu"
    assert chain["evolves_to"][0]["species"]["name"] == "pikachu"
    assert chain["evolves_to"][0]["evolves_to"][0]["species"]["name"] == "raichu"


@pytest.mark.parametrize("chain_id", ["abc", "1.5", "-1", "pichu"])
def test_evolution_chain_id_must_be_an_integer(client, chain_id):
    response = client.get(f"{API}/evolution-chain/{chain_id}")
    assert_error(response, 400, "Evolution chain id must be an integer")


def test_unknown_evolution_chain(client):
    assert_error(client.get(f"{API}/evolution-chain/999"), 404)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def test_list_types(client):
    response = client.get(f"{API}/type")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 4
    assert body["results"][0] == {"name": "fire", "url": "http://testserver/api/v2/type/10"}


def test_get_type(client):
    response = client.get(f"{API}/type/Electric")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == 13
    assert body["damage_relations"]["double_damage_to"][0]["name"] == "water"

    assert_error(client.get(f"{API}/type/shadow"), 404, "Type 'shadow' not found")


def test_pokemon_by_type(client):
    response = client.get(f"{API}/type/13/pokemon")

    assert response.status_code == 200
    assert response.json() == {
        "count": 3,
        "results": [
            {"id": 25, "name": "pikachu", "url": "http://testserver/api/v2/pokemon/25"},
            {"id": 26, "name": "raichu", "url": "http://testserver/api/v2/pokemon/26"},
            {"id": 172, "name": "pichu", "url": "http://testserver/api/v2/pokemon/172"},
        ],
    }


def test_pokemon_by_unknown_type(client):
    assert_error(client.get(f"{API}/type/shadow/pokemon"), 404)


# ---------------------------------------------------------------------------
# Search / suggestions
# ---------------------------------------------------------------------------


def test_search(client):
    response = client.get(f"{API}/search/pokemon", params={"q": "CHAR"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 3
    assert [r["name"] for r in body["results"]] == ["charmander", "charmeleon", "charizard"]
    assert body["results"][0] == {
        "id": 4,
        "name": "charmander",
        "url": "http://testserver/api/v2/pokemon/4",
    }


@pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
def test_search_requires_a_query(client, params):
    response = client.get(f"{API}/search/pokemon", params=params)
    assert_error(response, 400, "Query parameter 'q' is required")


def test_suggestions(client):
    assert client.get(f"{API}/suggestions", params={"q": "pik"}).json() == ["Pikachu"]
    assert client.get(f"{API}/suggestions", params={"q": "SAUR"}).json() == [
        "Bulbasaur",
        "Ivysaur",
        "Venusaur",
    ]

    short = client.get(f"{API}/suggestions", params={"q": "pi"})
    assert short.status_code == 200
    assert short.json() == []

    empty = client.get(f"{API}/suggestions", params={"q": ""})
    assert empty.status_code == 200
    assert empty.json() == []


def test_suggestions_require_a_query(client):
    assert_error(client.get(f"{API}/suggestions"), 400)


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


def test_stats(client):
    response = client.get(f"{API}/stats")

    assert response.status_code == 200
    assert response.json() == {
        "totalPokemon": 7,
        "totalTypes": 4,
        "totalEvolutionChains": 2,
        "totalSpecies": 3,
    }


def test_status(client):
    response = client.get(f"{API}/status")

    assert response.status_code == 200
    body = response.json()
    assert body["status"]["initialized"] is True
    assert body["status"]["pokemonDataLoaded"] is True
    assert body["status"]["suggestionsCount"] == 9
    assert body["status"]["suggestionsMetadata"]["generation"] == 1
    assert body["suggestionsValidation"] == {"isValid": True, "errors": []}


def test_status_with_partial_data(make_client, make_data_dir):
    client = make_client(make_data_dir(suggestions_json=None))

    body = client.get(f"{API}/status").json()

    assert body["status"]["initialized"] is True
    assert body["status"]["suggestionsDataLoaded"] is False
    assert body["suggestionsValidation"] == {
        "isValid": False,
        "errors": ["Suggestion index is not loaded"],
    }


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["service"] == SERVICE_NAME
    assert body["initialized"] is True
    assert body["timestamp"]


def test_readiness(client, make_client, tmp_path):
    assert client.get("/health/ready").status_code == 200

    empty = make_client(tmp_path)
    response = empty.get("/health/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "not_ready"}
    # Liveness stays green.
    assert empty.get("/health").json()["initialized"] is False


@pytest.mark.parametrize("path", ["/version", f"{API}/version"])
def test_version(client, path):
    response = client.get(path)
    assert response.status_code == 200
    assert response.json() == {"name": "pokedex-api-service", "version": __version__}


def test_unknown_route_uses_error_envelope(client):
    assert_error(client.get(f"{API}/berries"), 404)


def test_cors_allows_configured_origin(client):
    response = client.get(f"{API}/stats", headers={"Origin": "http://localhost:3000"})
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_cors_empty_origin_list_allows_no_origin(make_client, make_settings, data_dir):
    assert make_settings(data_dir, CORS_ORIGINS="").cors_origins == []
    assert make_settings(data_dir, CORS_ORIGINS="   ").cors_origins == []
    assert make_settings(data_dir, CORS_ORIGINS="*").cors_origins == ["*"]

    client = make_client(data_dir, CORS_ORIGINS="")
    response = client.get(f"{API}/stats", headers={"Origin": "http://localhost:3000"})

    assert response.status_code == 200
    assert "access-control-allow-origin" not in response.headers


# ---------------------------------------------------------------------------
# Reload
# ---------------------------------------------------------------------------


def test_reload_requires_a_key(client):
    assert_error(client.post(f"{API}/reload"), 401, "Missing X-API-Key header")


def test_reload_rejects_a_wrong_key(client):
    response = client.post(f"{API}/reload", headers={"X-API-Key": "nope"})
    assert_error(response, 403, "Invalid X-API-Key credentials")


@pytest.mark.parametrize("key", ["test-secret", "Bearer test-secret"])
def test_reload(client, data_dir, key):
    (data_dir / "types.json").unlink()

    response = client.post(f"{API}/reload", headers={"X-API-Key": key})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Data reloaded successfully"
    # Deleted secondary file: previous types are kept.
    assert body["stats"]["totalTypes"] == 4


def test_reload_accepts_any_configured_key(make_client, data_dir):
    client = make_client(data_dir, API_SECRET="old-key, new-key")

    response = client.post(f"{API}/reload", headers={"X-API-Key": "new-key"})
    assert response.status_code == 200


def test_reload_failure_keeps_serving_previous_data(client, data_dir):
    (data_dir / "pokemon.json").write_text('"not an array"', encoding="utf-8")

    response = client.post(f"{API}/reload", headers={"X-API-Key": "test-secret"})

    assert_error(response, 500, "Data reload failed")
    assert client.get(f"{API}/pokemon/pikachu").status_code == 200
    assert client.get(f"{API}/stats").json()["totalPokemon"] == 7


def test_reload_without_secret_outside_production(make_client, data_dir):
    client = make_client(data_dir, API_SECRET=None, APP_ENV="development")
    assert client.post(f"{API}/reload").status_code == 200


def test_reload_without_secret_in_production(make_client, data_dir):
    client = make_client(data_dir, API_SECRET=None, APP_ENV="production")
    assert_error(client.post(f"{API}/reload"), 500)


# ---------------------------------------------------------------------------
# App wiring
# ---------------------------------------------------------------------------


def test_custom_api_prefix(make_client, data_dir):
    client = make_client(data_dir, API_PREFIX="pokedex/")

    assert client.get("/pokedex/pokemon/1").json()["name"] == "bulbasaur"
    assert client.get("/pokedex/pokemon").json()["results"][0]["url"] == (
        "http://testserver/pokedex/pokemon/1"
    )
    assert client.get(f"{API}/pokemon/1").status_code == 404


def test_startup_fails_on_corrupt_primary_file(make_settings, make_data_dir):
    app = create_app(make_settings(make_data_dir(pokemon_json="[{oops")))

    with pytest.raises(DataLoadError):
        with TestClient(app):
            pass


def test_apps_do_not_share_data(make_client, make_data_dir, data_dir):
    full = make_client(data_dir)
    empty = make_client(make_data_dir(pokemon_json=None))

    assert full.get(f"{API}/stats").json()["totalPokemon"] == 7
    assert empty.get(f"{API}/stats").json()["totalPokemon"] == 0


def test_unhandled_errors_become_generic_500(make_settings, data_dir):
    app = create_app(make_settings(data_dir))
    broken = MagicMock(spec=PokemonDataService)
    broken.get_stats.side_effect = RuntimeError("disk on fire")
    app.state.container.pokemon_service.override(providers.Object(broken))

    client = TestClient(app, raise_server_exceptions=False)
    response = client.get(f"{API}/stats")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {
        "status": "error",
        "code": 500,
        "message": "Internal Server Error",
    }
