"""
Row factories and an in-memory store for search tests

Rows mirror what the catalog SQL returns: entity rows carry an
`attributes` JSON object, card rows are flat.
"""
from typing import Any, Dict, List, Optional

from catalog_search.db.query import ParameterizedQuery


def person_row(player_id: int, first: str, last: str, relevance: int = 70, **attrs) -> Dict[str, Any]:
    attributes = {
        "first_name": first,
        "last_name": last,
        "nick_name": None,
        "slug": f"{first}-{last}".lower(),
        "card_count": 100,
        "is_hof": False,
    }
    attributes.update(attrs)
    return {
        "entity_type": "person",
        "id": player_id,
        "name": f"{first} {last}",
        "relevance": relevance,
        "tiebreak": attributes["card_count"],
        "attributes": attributes,
    }


def organization_row(team_id: int, name: str, relevance: int = 70, **attrs) -> Dict[str, Any]:
    attributes = {
        "slug": None,
        "abbreviation": None,
        "city": None,
        "primary_color": None,
        "secondary_color": None,
        "player_count": 0,
    }
    attributes.update(attrs)
    return {
        "entity_type": "organization",
        "id": team_id,
        "name": name,
        "relevance": relevance,
        "tiebreak": attributes["player_count"],
        "attributes": attributes,
    }


def release_row(set_id: int, name: str, year: int, relevance: int = 70, **attrs) -> Dict[str, Any]:
    attributes = {"slug": None, "year": year, "manufacturer_name": "Topps"}
    attributes.update(attrs)
    return {
        "entity_type": "release",
        "id": set_id,
        "name": name,
        "relevance": relevance,
        "tiebreak": year,
        "attributes": attributes,
    }


def series_row(series_id: int, name: str, year: int, relevance: int = 70, **attrs) -> Dict[str, Any]:
    attributes = {
        "slug": None,
        "set_name": name,
        "set_slug": None,
        "year": year,
        "manufacturer_name": "Topps",
        "color_name": None,
        "color_hex": None,
        "card_count": 220,
        "print_run": None,
        "is_parallel": False,
    }
    attributes.update(attrs)
    return {
        "entity_type": "series",
        "id": series_id,
        "name": name,
        "relevance": relevance,
        "tiebreak": attributes["card_count"],
        "attributes": attributes,
    }


def item_row(card_id: int, card_number: str, players: List[str], relevance: int = 85, **fields) -> Dict[str, Any]:
    row = {
        "entity_type": "item",
        "id": card_id,
        "card_number": card_number,
        "player_names": players,
        "team_names": [],
        "series_name": "Base",
        "series_slug": "base",
        "set_name": "Topps Chrome",
        "set_slug": "topps-chrome",
        "year": 2022,
        "manufacturer_name": "Topps",
        "color_name": None,
        "color_hex": None,
        "print_run": None,
        "is_rookie": False,
        "is_autograph": False,
        "is_relic": False,
        "is_parallel": False,
        "relevance": relevance,
    }
    row.update(fields)
    return row


class FakeCatalogStore:
    """
    In-memory stand-in for CatalogStore

    Returns canned rows per query label and records every query. Scripted
    errors for a label are raised (in order) before its rows are returned.
    """

    def __init__(
        self,
        entity_rows: Optional[List[Dict[str, Any]]] = None,
        item_rows: Optional[List[Dict[str, Any]]] = None,
        errors: Optional[Dict[str, List[Exception]]] = None,
    ):
        self.rows = {
            "entity_search": entity_rows or [],
            "item_search": item_rows or [],
        }
        self.errors = {label: list(errs) for label, errs in (errors or {}).items()}
        self.queries: List[ParameterizedQuery] = []

    def fetch_all(self, query: ParameterizedQuery) -> List[Dict[str, Any]]:
        self.queries.append(query)
        pending = self.errors.get(query.label)
        if pending:
            raise pending.pop(0)
        return [dict(row) for row in self.rows.get(query.label, [])]

    def labels(self) -> List[str]:
        return [q.label for q in self.queries]
