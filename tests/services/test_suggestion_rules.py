# tests/services/test_suggestion_rules.py
import pytest

from pokedex_http_api.data.store import PokemonDataStore
from pokedex_http_api.services import MAX_SUGGESTIONS, MIN_QUERY_LENGTH, PokemonDataService
from pokedex_http_api.services.suggestions import (
    format_display_name,
    match_suggestions,
    normalize_query,
)
from tests.sample_data import suggestion


@pytest.fixture
def make_service(make_data_dir):
    def _make(entries):
        payload = {"metadata": {"generation": 1}, "pokemon": entries}
        return PokemonDataService(PokemonDataStore(make_data_dir(suggestions_json=payload)))

    return _make


@pytest.fixture
def pika_service(make_service):
    return make_service(
        [
            {"id": 25, "name": "pikachu", "displayName": "pikachu"},
            {"id": 172, "name": "pichu", "displayName": "pichu"},
        ]
    )


# ---------------------------------------------------------------------------
# Business rules
# ---------------------------------------------------------------------------


def test_two_entry_index(pika_service):
    assert pika_service.get_pokemon_suggestions("pik") == ["Pikachu"]
    assert pika_service.get_pokemon_suggestions("ich") == ["Pichu"]
    assert pika_service.get_pokemon_suggestions("pi") == []
    assert pika_service.get_pokemon_suggestions("") == []


@pytest.mark.parametrize(
    "query",
    [None, 123, 12.5, ["pikachu"], {"q": "pik"}, "", "   ", "\t\n", "p", "pi", "  pi  "],
)
def test_unusable_queries_return_nothing(pika_service, query):
    assert pika_service.get_pokemon_suggestions(query) == []


def test_query_is_trimmed_before_matching(pika_service):
    assert pika_service.get_pokemon_suggestions("  pik  ") == ["Pikachu"]


def test_matching_is_case_insensitive(service):
    expected = service.get_pokemon_suggestions("pik")
    assert expected == ["Pikachu"]
    assert service.get_pokemon_suggestions("PIK") == expected
    assert service.get_pokemon_suggestions("PiK") == expected


def test_results_keep_index_order(service):
    assert service.get_pokemon_suggestions("saur") == ["Bulbasaur", "Ivysaur", "Venusaur"]
    assert service.get_pokemon_suggestions("chu") == ["Pikachu", "Raichu", "Pichu"]


def test_results_are_capped(make_service):
    service = make_service([suggestion(i, f"saur{i:02d}") for i in range(1, 26)])

    results = service.get_pokemon_suggestions("saur")

    assert len(results) == MAX_SUGGESTIONS == 10
    assert results[0] == "Saur01"
    assert results[-1] == "Saur10"


@pytest.mark.parametrize(
    "display,expected",
    [
        ("PIKACHU", "Pikachu"),
        ("pikachu", "Pikachu"),
        ("pIKACHU", "Pikachu"),
        ("Mr. Mime", "Mr. mime"),
    ],
)
def test_display_names_are_normalized(make_service, display, expected):
    service = make_service([{"id": 25, "name": "pikachu mr. mime", "displayName": display}])
    assert service.get_pokemon_suggestions("pik") == [expected]


def test_every_result_is_capitalized(service):
    for query in ("aur", "cha", "chu", "ich"):
        for result in service.get_pokemon_suggestions(query):
            assert result[:1].isupper()
            assert result[1:] == result[1:].lower()


def test_malformed_entries_do_not_suppress_valid_ones(make_service):
    service = make_service(
        [
            None,
            "pikachu",
            42,
            {"id": 1, "name": None, "displayName": "Pikachu"},
            {"id": 2, "name": 7, "displayName": "Pikachu"},
            {"id": 3, "displayName": "Pikachu"},
            {"id": 25, "name": "pikachu", "displayName": "Pikachu"},
            {"id": 26, "name": "pikachu-alola", "displayName": 99},
            {"id": 27, "name": "pikachu-rock-star"},
        ]
    )

    # Unusable displayName falls back to the lookup name.
    assert service.get_pokemon_suggestions("pika") == [
        "Pikachu",
        "Pikachu-alola",
        "Pikachu-rock-star",
    ]


def test_missing_index_returns_nothing(make_data_dir):
    service = PokemonDataService(PokemonDataStore(make_data_dir(suggestions_json=None)))
    assert service.get_pokemon_suggestions("pikachu") == []


def test_suggestions_ignore_the_pokemon_collection(make_data_dir):
    # Suggestions come from the index only, even for loaded Pokemon.
    payload = {"metadata": {}, "pokemon": [suggestion(172, "pichu")]}
    service = PokemonDataService(PokemonDataStore(make_data_dir(suggestions_json=payload)))

    assert service.get_pokemon("pikachu") is not None
    assert service.get_pokemon_suggestions("pikachu") == []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def test_normalize_query():
    assert MIN_QUERY_LENGTH == 3
    assert normalize_query("  PiKa ") == "pika"
    assert normalize_query("abc") == "abc"
    assert normalize_query("ab") is None
    assert normalize_query(None) is None


def test_format_display_name():
    assert format_display_name("BULBASAUR") == "Bulbasaur"
    assert format_display_name("") == ""
    assert format_display_name("x") == "X"


def test_match_suggestions_respects_limit():
    entries = [{"name": f"mon{i}", "displayName": f"Mon{i}"} for i in range(5)]
    assert match_suggestions(entries, "mon", limit=2) == ["Mon0", "Mon1"]
    assert match_suggestions(entries, "zzz") == []
