"""
Drill-down Item Search
Zero or one round trip scoped to individual cards

The card query only runs when it can be narrow: the caller asked for cards,
or the query carries a card-level signal (card number, type flag, serial
bound). When card signals are present and the entity phase found players,
the top players by relevance restrict the card query, which bridges entity
discovery into card lookup without another round trip.
"""
from typing import Any, Dict, List, Optional, Sequence
import logging
import time

from catalog_search.config import Settings
from catalog_search.db.query import ParameterizedQuery, contains_pattern
from catalog_search.models.candidates import CandidateBase, EntityCategory
from catalog_search.models.tokens import TokenSet
from catalog_search.services.mappers import map_item_row
from catalog_search.services.phase import PhaseResult

logger = logging.getLogger(__name__)


# Card-number hits outrank an exact entity name match (100)
CARD_NUMBER_RELEVANCE = 105
FILTER_ONLY_RELEVANCE = 85

ITEM_SELECT = """
SELECT
    'item' AS entity_type,
    c.card_id AS id,
    c.card_number,
    ARRAY_AGG(DISTINCT CONCAT_WS(' ', p.first_name, p.last_name)
              ORDER BY CONCAT_WS(' ', p.first_name, p.last_name))
        FILTER (WHERE p.player_id IS NOT NULL) AS player_names,
    ARRAY_AGG(DISTINCT t.name ORDER BY t.name)
        FILTER (WHERE t.team_id IS NOT NULL) AS team_names,
    s.name AS series_name,
    s.slug AS series_slug,
    st.name AS set_name,
    st.slug AS set_slug,
    st.year,
    m.name AS manufacturer_name,
    col.name AS color_name,
    col.hex_value AS color_hex,
    c.print_run,
    c.is_rookie,
    c.is_autograph,
    c.is_relic,
    s.parallel_of_series IS NOT NULL AS is_parallel,
    %(item_relevance)s AS relevance
FROM card c
JOIN series s ON c.series = s.series_id
JOIN card_set st ON s.set_id = st.set_id
LEFT JOIN manufacturer m ON st.manufacturer = m.manufacturer_id
LEFT JOIN color col ON s.color = col.color_id
LEFT JOIN card_player_team cpt ON c.card_id = cpt.card
LEFT JOIN player_team pt ON cpt.player_team = pt.player_team_id
LEFT JOIN player p ON pt.player = p.player_id
LEFT JOIN team t ON pt.team = t.team_id
WHERE {where_clause}
GROUP BY c.card_id, s.series_id, st.set_id, m.manufacturer_id, col.color_id
ORDER BY st.year DESC, c.card_number
LIMIT %(item_limit)s
"""

# Filters on linked players through EXISTS so the aggregated player list
# still names every player on the card.
PLAYER_FILTER = """EXISTS (
        SELECT 1
        FROM card_player_team cpt_f
        JOIN player_team pt_f ON cpt_f.player_team = pt_f.player_team_id
        WHERE cpt_f.card = c.card_id AND pt_f.player = ANY(%(player_ids)s)
    )"""


def should_run_item_search(tokens: TokenSet, include_items: bool) -> bool:
    """Round-trip avoidance: only drill down when there is something to narrow on."""
    return include_items or tokens.has_item_signals


def top_person_ids(candidates: Sequence[CandidateBase], count: int) -> List[int]:
    """IDs of the highest-relevance player candidates (ties keep arrival order)."""
    people = [c for c in candidates if c.category == EntityCategory.PERSON.value]
    people = sorted(people, key=lambda c: c.relevance, reverse=True)
    return [c.id for c in people[:count]]


def build_item_search_query(
    tokens: TokenSet,
    entity_candidates: Sequence[CandidateBase],
    config: Settings,
) -> Optional[ParameterizedQuery]:
    """
    Build the card drill-down query

    Args:
        tokens: Parsed query
        entity_candidates: Candidates from the entity phase
        config: Settings holding the row cap and player count

    Returns:
        ParameterizedQuery, or None when no filter applies (never an
        unfiltered scan of the card table)
    """
    conditions: List[str] = []
    params: Dict[str, Any] = {}

    if tokens.has_item_signals:
        player_ids = top_person_ids(entity_candidates, config.drilldown_person_count)
        if player_ids:
            conditions.append(PLAYER_FILTER)
            params["player_ids"] = player_ids

    if tokens.card_number:
        conditions.append("c.card_number ILIKE %(card_number_pattern)s")
        params["card_number_pattern"] = contains_pattern(tokens.card_number)

    if tokens.type_flags.rookie:
        conditions.append("c.is_rookie")
    if tokens.type_flags.autograph:
        conditions.append("c.is_autograph")
    if tokens.type_flags.relic:
        conditions.append("c.is_relic")

    if tokens.year is not None:
        conditions.append("st.year = %(year)s")
        params["year"] = tokens.year

    if tokens.serial_bound is not None:
        conditions.append("c.print_run <= %(serial_bound)s")
        params["serial_bound"] = tokens.serial_bound

    if not conditions:
        return None

    params["item_relevance"] = CARD_NUMBER_RELEVANCE if tokens.card_number else FILTER_ONLY_RELEVANCE
    params["item_limit"] = config.item_limit

    return ParameterizedQuery(
        sql=ITEM_SELECT.format(where_clause="\n  AND ".join(conditions)),
        params=params,
        label="item_search",
    )


def execute_item_search(
    store,
    tokens: TokenSet,
    entity_candidates: Sequence[CandidateBase],
    include_items: bool,
    config: Settings,
) -> PhaseResult:
    """
    Run the drill-down if warranted (zero or one round trip)

    Returns an empty, zero-time PhaseResult when skipped. Store errors
    propagate.
    """
    if not should_run_item_search(tokens, include_items):
        logger.debug("Item search skipped: no card signals and items not requested")
        return PhaseResult.skipped()

    query = build_item_search_query(tokens, entity_candidates, config)
    if query is None:
        logger.debug("Item search skipped: no applicable card filters")
        return PhaseResult.skipped()

    logger.info(f"Executing item search with filters {sorted(query.params)}")
    start_time = time.time()

    rows = store.fetch_all(query)
    candidates = [map_item_row(row) for row in rows]

    elapsed_ms = int((time.time() - start_time) * 1000)
    logger.info(f"Item search returned {len(candidates)} cards in {elapsed_ms}ms")

    return PhaseResult(candidates=candidates, elapsed_ms=elapsed_ms, executed=True)
