"""
Result Assembler
Merges candidates from both search phases and ranks them globally
"""
from typing import List, Sequence, Set, Tuple
import logging

from catalog_search.models.candidates import CandidateBase

logger = logging.getLogger(__name__)


def deduplicate_candidates(candidates: Sequence[CandidateBase]) -> List[CandidateBase]:
    """
    Drop repeated (category, id) pairs, keeping the first occurrence

    Args:
        candidates: Candidates in arrival order

    Returns:
        Candidates with unique identities, arrival order preserved
    """
    seen: Set[Tuple[str, int]] = set()
    unique = []
    for candidate in candidates:
        if candidate.identity in seen:
            continue
        seen.add(candidate.identity)
        unique.append(candidate)
    return unique


def assemble_results(
    *phases: Sequence[CandidateBase],
    limit: int,
) -> Tuple[List[CandidateBase], int]:
    """
    Merge phases, sort by relevance, then truncate

    Truncation happens after the global sort, so a strong card hit is never
    dropped in favour of a weaker entity hit (or the reverse). Python's sort
    is stable, so equal scores keep arrival order.

    Args:
        phases: Candidate lists in phase order
        limit: Maximum number of results to return

    Returns:
        (ranked results, total count before truncation)
    """
    merged: List[CandidateBase] = []
    for phase in phases:
        merged.extend(phase)

    unique = deduplicate_candidates(merged)
    if len(unique) < len(merged):
        logger.debug(f"Dropped {len(merged) - len(unique)} duplicate candidates")

    ranked = sorted(unique, key=lambda c: c.relevance, reverse=True)
    return ranked[:limit], len(ranked)
