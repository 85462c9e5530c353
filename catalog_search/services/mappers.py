"""
Row Mappers
One pure function per category turning a store row into a candidate record
"""
import re
from typing import Any, Callable, Dict, List, Optional

from catalog_search.models.candidates import (
    CandidateBase,
    EntityCategory,
    ItemCandidate,
    OrganizationCandidate,
    PersonCandidate,
    ReleaseCandidate,
    SeriesCandidate,
)


def generate_slug(name: Optional[str]) -> str:
    """
    Build a URL slug from a display name

    Used when the catalog row has no stored slug.
    """
    if not name:
        return "unknown"
    slug = name.lower().replace("&", "and").replace("'", "")
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-") or "unknown"


def _int_or_none(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def _name_list(value: Any) -> List[str]:
    if not value:
        return []
    return [name for name in value if name]


def _attributes(row: Dict[str, Any]) -> Dict[str, Any]:
    return row.get("attributes") or {}


def map_person_row(row: Dict[str, Any]) -> PersonCandidate:
    attrs = _attributes(row)
    return PersonCandidate(
        id=int(row["id"]),
        name=row["name"],
        relevance=int(row["relevance"]),
        first_name=attrs.get("first_name"),
        last_name=attrs.get("last_name"),
        nick_name=attrs.get("nick_name"),
        slug=attrs.get("slug") or generate_slug(row["name"]),
        card_count=int(attrs.get("card_count") or 0),
        is_hof=bool(attrs.get("is_hof")),
    )


def map_organization_row(row: Dict[str, Any]) -> OrganizationCandidate:
    attrs = _attributes(row)
    return OrganizationCandidate(
        id=int(row["id"]),
        name=row["name"],
        relevance=int(row["relevance"]),
        slug=attrs.get("slug") or generate_slug(row["name"]),
        abbreviation=attrs.get("abbreviation"),
        city=attrs.get("city"),
        primary_color=attrs.get("primary_color"),
        secondary_color=attrs.get("secondary_color"),
        player_count=int(attrs.get("player_count") or 0),
    )


def map_release_row(row: Dict[str, Any]) -> ReleaseCandidate:
    attrs = _attributes(row)
    return ReleaseCandidate(
        id=int(row["id"]),
        name=row["name"],
        relevance=int(row["relevance"]),
        slug=attrs.get("slug") or generate_slug(row["name"]),
        year=_int_or_none(attrs.get("year")),
        manufacturer_name=attrs.get("manufacturer_name"),
    )


def map_series_row(row: Dict[str, Any]) -> SeriesCandidate:
    attrs = _attributes(row)
    return SeriesCandidate(
        id=int(row["id"]),
        name=row["name"],
        relevance=int(row["relevance"]),
        slug=attrs.get("slug") or generate_slug(row["name"]),
        set_name=attrs.get("set_name"),
        set_slug=attrs.get("set_slug"),
        year=_int_or_none(attrs.get("year")),
        manufacturer_name=attrs.get("manufacturer_name"),
        color_name=attrs.get("color_name"),
        color_hex=attrs.get("color_hex"),
        card_count=int(attrs.get("card_count") or 0),
        print_run=attrs.get("print_run"),
        is_parallel=bool(attrs.get("is_parallel")),
    )


def build_item_display_name(card_id: int, card_number: Optional[str], player_names: List[str]) -> str:
    """'#BD-9 Juan Soto, Fernando Tatis Jr.'"""
    parts = []
    if card_number:
        parts.append(f"#{card_number}")
    if player_names:
        parts.append(", ".join(player_names))
    return " ".join(parts) if parts else f"Card {card_id}"


def map_item_row(row: Dict[str, Any]) -> ItemCandidate:
    card_id = int(row["id"])
    player_names = _name_list(row.get("player_names"))
    return ItemCandidate(
        id=card_id,
        name=build_item_display_name(card_id, row.get("card_number"), player_names),
        relevance=int(row["relevance"]),
        card_number=row.get("card_number"),
        player_names=player_names,
        team_names=_name_list(row.get("team_names")),
        series_name=row.get("series_name"),
        series_slug=row.get("series_slug"),
        set_name=row.get("set_name"),
        set_slug=row.get("set_slug"),
        year=_int_or_none(row.get("year")),
        manufacturer_name=row.get("manufacturer_name"),
        color_name=row.get("color_name"),
        color_hex=row.get("color_hex"),
        print_run=_int_or_none(row.get("print_run")),
        is_rookie=bool(row.get("is_rookie")),
        is_autograph=bool(row.get("is_autograph")),
        is_relic=bool(row.get("is_relic")),
        is_parallel=bool(row.get("is_parallel")),
    )


ROW_MAPPERS: Dict[str, Callable[[Dict[str, Any]], CandidateBase]] = {
    EntityCategory.PERSON.value: map_person_row,
    EntityCategory.ORGANIZATION.value: map_organization_row,
    EntityCategory.RELEASE.value: map_release_row,
    EntityCategory.SERIES.value: map_series_row,
    EntityCategory.ITEM.value: map_item_row,
}


def map_row(row: Dict[str, Any]) -> CandidateBase:
    """
    Dispatch a row to its category mapper

    Raises:
        ValueError: If the row carries an unknown entity_type
    """
    entity_type = row.get("entity_type")
    mapper = ROW_MAPPERS.get(entity_type)
    if mapper is None:
        raise ValueError(f"Unknown entity_type in search row: {entity_type!r}")
    return mapper(row)
