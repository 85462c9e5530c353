"""
Core service modules for Catalog Search
"""
from .tokenizer import parse_query_tokens
from .entity_search import build_entity_search_query, execute_entity_search
from .item_search import build_item_search_query, execute_item_search, should_run_item_search
from .assembler import assemble_results
from .orchestrator import SearchOrchestrator, search

__all__ = [
    "parse_query_tokens",
    "build_entity_search_query",
    "execute_entity_search",
    "build_item_search_query",
    "execute_item_search",
    "should_run_item_search",
    "assemble_results",
    "SearchOrchestrator",
    "search",
]
