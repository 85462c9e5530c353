"""
Unified Entity Search
One round trip returning top-K ranked candidates per entity category

All four categories (players, teams, sets, series) are searched by a single
UNION ALL query. Each branch caps its own rows so the payload stays bounded,
and each branch returns only its own attributes as a JSON object.

Matching uses OR semantics: a record is a hit when ANY term matches ANY of
its searchable columns. "2022 topps juan soto" must still surface Juan Soto
even though "topps" matches no player column.
"""
from typing import Any, Dict, List, Sequence, Tuple
import logging
import time

from catalog_search.config import Settings
from catalog_search.db.query import ParameterizedQuery, contains_pattern
from catalog_search.models.tokens import TokenSet
from catalog_search.services.mappers import map_row
from catalog_search.services.phase import PhaseResult

logger = logging.getLogger(__name__)


# =============================================================================
# SEARCHABLE COLUMNS (fixed identifiers, never user input)
# =============================================================================

PERSON_COLUMNS = ("p.first_name", "p.last_name", "p.nick_name")
ORGANIZATION_COLUMNS = ("t.name", "t.city", "t.mascot", "t.abbreviation")
RELEASE_COLUMNS = ("st.name", "m.name")
SERIES_COLUMNS = ("s.name", "st.name", "m.name")

YEAR_BONUS = 10
HOF_BONUS = 5


def build_any_term_condition(columns: Sequence[str], term_keys: Sequence[str]) -> str:
    """
    OR together every (column, term) ILIKE pair

    Args:
        columns: Qualified column names
        term_keys: Parameter names holding %term% patterns

    Returns:
        Parenthesized SQL condition with named placeholders
    """
    conditions = [
        f"{column} ILIKE %({key})s"
        for key in term_keys
        for column in columns
    ]
    return "(" + " OR ".join(conditions) + ")"


def build_search_params(tokens: TokenSet, config: Settings) -> Tuple[Dict[str, Any], List[str]]:
    """
    Bind search terms and limits as query parameters

    Returns:
        (params, term_keys)
    """
    terms = list(tokens.search_terms)
    phrase = " ".join(terms)

    params: Dict[str, Any] = {
        "phrase": phrase.lower(),
        "phrase_pattern": contains_pattern(phrase),
        "first_term": terms[0].lower(),
        "last_term": terms[-1].lower(),
        "person_limit": config.person_limit,
        "organization_limit": config.organization_limit,
        "release_limit": config.release_limit,
        "series_limit": config.series_limit,
    }
    if tokens.year is not None:
        params["year"] = tokens.year

    term_keys = []
    for index, term in enumerate(terms):
        key = f"term_{index}"
        params[key] = contains_pattern(term)
        term_keys.append(key)

    return params, term_keys


# =============================================================================
# PER-CATEGORY BRANCHES
# =============================================================================

def _person_branch(term_keys: Sequence[str]) -> str:
    return f"""(
    SELECT
        'person' AS entity_type,
        p.player_id AS id,
        CONCAT_WS(' ', p.first_name, p.last_name) AS name,
        CASE
            WHEN LOWER(CONCAT_WS(' ', p.first_name, p.last_name)) = %(phrase)s THEN 100
            WHEN LOWER(p.last_name) = %(last_term)s THEN 95
            WHEN LOWER(p.first_name) = %(first_term)s THEN 90
            ELSE 70
        END + CASE WHEN p.is_hof THEN {HOF_BONUS} ELSE 0 END AS relevance,
        COALESCE(p.card_count, 0) AS tiebreak,
        json_build_object(
            'first_name', p.first_name,
            'last_name', p.last_name,
            'nick_name', p.nick_name,
            'slug', p.slug,
            'card_count', p.card_count,
            'is_hof', p.is_hof
        ) AS attributes
    FROM player p
    WHERE {build_any_term_condition(PERSON_COLUMNS, term_keys)}
    ORDER BY relevance DESC, tiebreak DESC
    LIMIT %(person_limit)s
)"""


def _organization_branch(term_keys: Sequence[str]) -> str:
    return f"""(
    SELECT
        'organization' AS entity_type,
        t.team_id AS id,
        t.name AS name,
        CASE
            WHEN LOWER(t.abbreviation) = %(first_term)s THEN 100
            WHEN t.name ILIKE %(phrase_pattern)s THEN 90
            WHEN t.city ILIKE %(phrase_pattern)s THEN 85
            ELSE 70
        END AS relevance,
        COALESCE(t.player_count, 0) AS tiebreak,
        json_build_object(
            'slug', t.slug,
            'abbreviation', t.abbreviation,
            'city', t.city,
            'primary_color', t.primary_color,
            'secondary_color', t.secondary_color,
            'player_count', t.player_count
        ) AS attributes
    FROM team t
    WHERE {build_any_term_condition(ORGANIZATION_COLUMNS, term_keys)}
    ORDER BY relevance DESC, tiebreak DESC
    LIMIT %(organization_limit)s
)"""


def _year_clauses(has_year: bool) -> Tuple[str, str]:
    """(score bonus, hard filter) for categories that carry a year."""
    if not has_year:
        return "", ""
    return (
        f" + CASE WHEN st.year = %(year)s THEN {YEAR_BONUS} ELSE 0 END",
        "\n      AND st.year = %(year)s",
    )


def _release_branch(term_keys: Sequence[str], has_year: bool) -> str:
    year_bonus, year_filter = _year_clauses(has_year)
    return f"""(
    SELECT
        'release' AS entity_type,
        st.set_id AS id,
        st.name AS name,
        CASE
            WHEN LOWER(st.name) = %(phrase)s THEN 100
            WHEN st.name ILIKE %(phrase_pattern)s THEN 85
            WHEN m.name ILIKE %(phrase_pattern)s THEN 80
            ELSE 70
        END{year_bonus} AS relevance,
        COALESCE(st.year, 0) AS tiebreak,
        json_build_object(
            'slug', st.slug,
            'year', st.year,
            'manufacturer_name', m.name
        ) AS attributes
    FROM card_set st
    LEFT JOIN manufacturer m ON st.manufacturer = m.manufacturer_id
    WHERE {build_any_term_condition(RELEASE_COLUMNS, term_keys)}{year_filter}
    ORDER BY relevance DESC, tiebreak DESC
    LIMIT %(release_limit)s
)"""


def _series_branch(term_keys: Sequence[str], has_year: bool) -> str:
    year_bonus, year_filter = _year_clauses(has_year)
    return f"""(
    SELECT
        'series' AS entity_type,
        s.series_id AS id,
        s.name AS name,
        CASE
            WHEN LOWER(s.name) = %(phrase)s THEN 100
            WHEN s.name ILIKE %(phrase_pattern)s THEN 85
            WHEN m.name ILIKE %(phrase_pattern)s THEN 80
            ELSE 70
        END{year_bonus} AS relevance,
        COALESCE(s.card_count, 0) AS tiebreak,
        json_build_object(
            'slug', s.slug,
            'set_name', st.name,
            'set_slug', st.slug,
            'year', st.year,
            'manufacturer_name', m.name,
            'color_name', c.name,
            'color_hex', c.hex_value,
            'card_count', s.card_count,
            'print_run', s.print_run_display,
            'is_parallel', s.parallel_of_series IS NOT NULL
        ) AS attributes
    FROM series s
    JOIN card_set st ON s.set_id = st.set_id
    LEFT JOIN manufacturer m ON st.manufacturer = m.manufacturer_id
    LEFT JOIN color c ON s.color = c.color_id
    WHERE {build_any_term_condition(SERIES_COLUMNS, term_keys)}{year_filter}
    ORDER BY relevance DESC, tiebreak DESC
    LIMIT %(series_limit)s
)"""


def build_entity_search_query(tokens: TokenSet, config: Settings) -> ParameterizedQuery:
    """
    Build the single UNION ALL query covering every entity category

    A year token is a hard filter on sets and series only.

    Raises:
        ValueError: If the token set has no search terms
    """
    if not tokens.search_terms:
        raise ValueError("Entity search requires at least one search term")

    params, term_keys = build_search_params(tokens, config)
    has_year = tokens.year is not None

    branches = [
        _person_branch(term_keys),
        _organization_branch(term_keys),
        _release_branch(term_keys, has_year),
        _series_branch(term_keys, has_year),
    ]

    return ParameterizedQuery(
        sql="\nUNION ALL\n".join(branches),
        params=params,
        label="entity_search",
    )


def execute_entity_search(store, tokens: TokenSet, config: Settings) -> PhaseResult:
    """
    Run the unified entity search (exactly one round trip)

    Store errors propagate to the caller untouched; an error is never
    reported as an empty result.

    Args:
        store: Object exposing fetch_all(ParameterizedQuery)
        tokens: Parsed query
        config: Settings holding the per-category caps

    Returns:
        PhaseResult with unsorted candidates from every category
    """
    query = build_entity_search_query(tokens, config)

    logger.info(f"Executing unified entity search for terms {list(tokens.search_terms)}")
    start_time = time.time()

    rows = store.fetch_all(query)
    candidates = [map_row(row) for row in rows]

    elapsed_ms = int((time.time() - start_time) * 1000)
    logger.info(f"Unified entity search returned {len(candidates)} candidates in {elapsed_ms}ms")

    return PhaseResult(candidates=candidates, elapsed_ms=elapsed_ms, executed=True)
