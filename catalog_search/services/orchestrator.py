"""
Search Orchestrator - Main Entry Point
========================================

Pipeline:
    Input (query, SearchOptions)
        ↓
    Validation → InputError (no store access)
        ↓
    Tokenizer (no I/O) → TokenSet
        ↓
    Unified Entity Search (1 round trip, retried)
        ↓
    Drill-down trigger check
        ↓
    Item Search (0-1 round trip, retried)
        ↓
    Result Assembler → SearchEnvelope

This orchestrator:
    - Is the only place that retries or gives up
    - Keeps no per-request state on the instance (safe to share)
    - Never returns a partial result as a success
"""

from typing import Callable, Dict, Optional
import logging
import time
import uuid

from catalog_search.config import Settings, settings as default_settings
from catalog_search.errors import InputError, SearchFailure, StoreError
from catalog_search.models.requests import SearchOptions
from catalog_search.models.responses import PhaseTimings, SearchEnvelope
from catalog_search.services.assembler import assemble_results
from catalog_search.services.entity_search import execute_entity_search
from catalog_search.services.item_search import execute_item_search
from catalog_search.services.phase import PhaseResult
from catalog_search.services.tokenizer import parse_query_tokens
from catalog_search.utils.retry import estimate_retry_time, retry_with_backoff

logger = logging.getLogger(__name__)


def _elapsed_ms(start_time: float) -> int:
    return int((time.time() - start_time) * 1000)


class SearchOrchestrator:
    """
    Coordinates tokenization, both search phases and assembly.

    Usage:
        orchestrator = SearchOrchestrator(CatalogStore.from_settings())
        envelope = orchestrator.search("2022 topps chrome juan soto rookie")
    """

    def __init__(
        self,
        store,
        config: Optional[Settings] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            store: Object exposing fetch_all(ParameterizedQuery)
            config: Settings (defaults to the global settings)
            sleep: Backoff sleep function (injectable for tests)
        """
        self.store = store
        self.config = config or default_settings
        self.sleep = sleep

        logger.debug(
            f"Search orchestrator ready: retries={self.config.retry_max_retries}, "
            f"worst-case backoff per phase="
            f"{estimate_retry_time(self.config.retry_max_retries, self.config.retry_base_delay):.1f}s"
        )

    def validate(self, query: Optional[str], options: SearchOptions) -> str:
        """
        Validate and trim the query

        Raises:
            InputError: If the query is missing or too short, or limit < 1
        """
        if query is None or not isinstance(query, str):
            raise InputError("Query is required")

        trimmed = query.strip()
        if len(trimmed) < self.config.min_query_length:
            raise InputError(
                f"Query must be at least {self.config.min_query_length} characters"
            )

        if options.limit < 1:
            raise InputError("Limit must be at least 1")

        return trimmed

    def _run_phase(self, func: Callable[[], PhaseResult]) -> PhaseResult:
        return retry_with_backoff(
            func,
            max_retries=self.config.retry_max_retries,
            base_delay=self.config.retry_base_delay,
            sleep=self.sleep,
        )

    def search(self, query: Optional[str], options: Optional[SearchOptions] = None) -> SearchEnvelope:
        """
        Run a full search

        Args:
            query: Raw query text
            options: Result limit and include-items flag

        Returns:
            SearchEnvelope with globally ranked results

        Raises:
            InputError: Before any store access, for invalid input
            SearchFailure: When a phase still fails after retries
        """
        start_time = time.time()
        options = options or SearchOptions(limit=self.config.default_limit)

        trimmed = self.validate(query, options)
        limit = min(options.limit, self.config.max_limit)
        request_id = str(uuid.uuid4())[:8]

        logger.info(
            f"[{request_id}] Search request: {trimmed!r} "
            f"(limit={limit}, include_items={options.include_items})"
        )

        timings: Dict[str, int] = {
            "tokenize_ms": 0,
            "entity_search_ms": 0,
            "item_search_ms": 0,
        }
        round_trips = 0

        # Phase 0: tokenize (no I/O)
        phase_start = time.time()
        tokens = parse_query_tokens(trimmed)
        timings["tokenize_ms"] = _elapsed_ms(phase_start)

        # Phase 1: unified entity search
        phase_start = time.time()
        try:
            entity_phase = self._run_phase(
                lambda: execute_entity_search(self.store, tokens, self.config)
            )
        except StoreError as e:
            timings["entity_search_ms"] = _elapsed_ms(phase_start)
            logger.error(f"[{request_id}] Entity search failed after retries: {e}")
            raise SearchFailure(
                phase="entity_search",
                elapsed_ms=_elapsed_ms(start_time),
                phase_timings=timings,
                round_trip_count=round_trips,
                cause=e,
            ) from e
        timings["entity_search_ms"] = _elapsed_ms(phase_start)  # includes retries and backoff
        round_trips += 1

        # Phase 2: drill-down, depends on phase 1's player candidates
        phase_start = time.time()
        try:
            item_phase = self._run_phase(
                lambda: execute_item_search(
                    self.store,
                    tokens,
                    entity_phase.candidates,
                    options.include_items,
                    self.config,
                )
            )
        except StoreError as e:
            timings["item_search_ms"] = _elapsed_ms(phase_start)
            logger.error(f"[{request_id}] Item search failed after retries: {e}")
            raise SearchFailure(
                phase="item_search",
                elapsed_ms=_elapsed_ms(start_time),
                phase_timings=timings,
                round_trip_count=round_trips,
                cause=e,
            ) from e
        timings["item_search_ms"] = _elapsed_ms(phase_start) if item_phase.executed else 0
        if item_phase.executed:
            round_trips += 1

        results, total = assemble_results(
            entity_phase.candidates,
            item_phase.candidates,
            limit=limit,
        )

        elapsed_ms = _elapsed_ms(start_time)

        logger.info(
            f"[{request_id}] Search completed in {elapsed_ms}ms: "
            f"{total} results (returned {len(results)}), "
            f"entity={timings['entity_search_ms']}ms, "
            f"items={timings['item_search_ms']}ms, "
            f"round_trips={round_trips}"
        )

        return SearchEnvelope(
            query=trimmed,
            results=results,
            total_results=total,
            elapsed_ms=elapsed_ms,
            phase_timings=PhaseTimings(**timings),
            round_trip_count=round_trips,
        )


def search(query: Optional[str], options: Optional[SearchOptions] = None, store=None) -> SearchEnvelope:
    """
    Convenience entry point using the global settings

    Args:
        query: Raw query text
        options: Result limit and include-items flag
        store: Store to search (defaults to a CatalogStore built from settings)
    """
    if store is None:
        from catalog_search.db.catalog_store import CatalogStore
        store = CatalogStore.from_settings()
    return SearchOrchestrator(store).search(query, options)
