"""
Phase result shared by the two search executors
"""
from dataclasses import dataclass, field
from typing import List

from catalog_search.models.candidates import CandidateBase


@dataclass
class PhaseResult:
    """Candidates from one search phase plus its cost."""
    candidates: List[CandidateBase] = field(default_factory=list)
    elapsed_ms: int = 0
    executed: bool = False  # True when a store round trip happened

    @classmethod
    def skipped(cls) -> "PhaseResult":
        return cls(candidates=[], elapsed_ms=0, executed=False)
