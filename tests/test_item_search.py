"""
Tests for the card drill-down search
"""
import pytest

from catalog_search.errors import StoreError
from catalog_search.models.candidates import OrganizationCandidate, PersonCandidate
from catalog_search.services.item_search import (
    CARD_NUMBER_RELEVANCE,
    FILTER_ONLY_RELEVANCE,
    build_item_search_query,
    execute_item_search,
    should_run_item_search,
    top_person_ids,
)
from catalog_search.services.tokenizer import parse_query_tokens
from tests.factories import FakeCatalogStore, item_row


def _person(player_id, relevance):
    return PersonCandidate(id=player_id, name=f"Player {player_id}", relevance=relevance, slug=f"p-{player_id}")


def test_trigger_rules():
    """Drill down only on card signals or an explicit request"""
    assert not should_run_item_search(parse_query_tokens("juan soto"), include_items=False)
    assert should_run_item_search(parse_query_tokens("juan soto"), include_items=True)
    assert should_run_item_search(parse_query_tokens("soto rookie"), include_items=False)
    assert should_run_item_search(parse_query_tokens("soto /99"), include_items=False)
    assert should_run_item_search(parse_query_tokens("soto BD-9"), include_items=False)


def test_skip_makes_no_round_trip(test_settings):
    store = FakeCatalogStore()

    result = execute_item_search(store, parse_query_tokens("juan soto"), [], False, test_settings)

    assert not result.executed
    assert result.elapsed_ms == 0
    assert result.candidates == []
    assert store.queries == []


def test_top_person_ids_sorted_by_relevance():
    """Top five players, highest relevance first, ties in arrival order"""
    candidates = [
        _person(1, 70),
        _person(2, 95),
        OrganizationCandidate(id=99, name="Padres", relevance=100, slug="padres"),
        _person(3, 90),
        _person(4, 70),
        _person(5, 100),
        _person(6, 70),
        _person(7, 75),
    ]

    assert top_person_ids(candidates, 5) == [5, 2, 3, 7, 1]


def test_card_number_filter_and_tier(test_settings):
    """Card number hits use the higher relevance tier"""
    tokens = parse_query_tokens("2023 BD-9 soto")

    query = build_item_search_query(tokens, [_person(1, 95)], test_settings)

    assert "c.card_number ILIKE %(card_number_pattern)s" in query.sql
    assert query.params["card_number_pattern"] == "%BD-9%"
    assert query.params["item_relevance"] == CARD_NUMBER_RELEVANCE
    assert query.params["year"] == 2023
    assert query.params["player_ids"] == [1]
    assert "BD-9" not in query.sql


def test_type_flags_are_and_conditions(test_settings):
    tokens = parse_query_tokens("soto rookie auto patch")

    query = build_item_search_query(tokens, [], test_settings)

    where = query.sql.split("WHERE", 1)[1]
    assert "c.is_rookie\n  AND c.is_autograph\n  AND c.is_relic" in where
    assert query.params["item_relevance"] == FILTER_ONLY_RELEVANCE
    assert "player_ids" not in query.params


def test_serial_bound_is_upper_limit(test_settings):
    """/25 means numbered to 25 or fewer"""
    query = build_item_search_query(parse_query_tokens("topps chrome /25"), [], test_settings)

    assert "c.print_run <= %(serial_bound)s" in query.sql
    assert query.params["serial_bound"] == 25


def test_player_filter_needs_card_signal(test_settings):
    """include_items alone does not restrict by player"""
    tokens = parse_query_tokens("2022 juan soto")

    query = build_item_search_query(tokens, [_person(1, 95)], test_settings)

    assert "player_ids" not in query.params
    assert "ANY(%(player_ids)s)" not in query.sql
    assert query.params["year"] == 2022


def test_no_conditions_means_no_scan(test_settings):
    """Never run an unfiltered card query"""
    store = FakeCatalogStore(item_rows=[item_row(1, "1", ["Juan Soto"])])

    assert build_item_search_query(parse_query_tokens("juan soto"), [], test_settings) is None

    result = execute_item_search(store, parse_query_tokens("juan soto"), [_person(1, 95)], True, test_settings)

    assert not result.executed
    assert store.queries == []


def test_row_cap_bound(test_settings):
    query = build_item_search_query(parse_query_tokens("soto rc"), [], test_settings)

    assert query.params["item_limit"] == 20


def test_execute_maps_cards(test_settings):
    """Display name joins every linked player"""
    store = FakeCatalogStore(item_rows=[
        item_row(501, "BD-9", ["Fernando Tatis Jr.", "Juan Soto"], relevance=105, is_rookie=True),
    ])

    result = execute_item_search(store, parse_query_tokens("BD-9 soto"), [_person(1, 95)], False, test_settings)

    assert result.executed
    assert store.labels() == ["item_search"]
    card = result.candidates[0]
    assert card.category == "item"
    assert card.name == "#BD-9 Fernando Tatis Jr., Juan Soto"
    assert card.relevance == 105
    assert card.is_rookie


def test_store_error_propagates(test_settings):
    store = FakeCatalogStore(errors={"item_search": [StoreError("relation \"card\" does not exist")]})

    with pytest.raises(StoreError):
        execute_item_search(store, parse_query_tokens("soto rc"), [], False, test_settings)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
