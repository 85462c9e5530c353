"""
Token Set - Data Structures
============================

Immutable result of parsing a raw search string.

A TokenSet is:
    - Deterministic (same input -> same tokens)
    - Request-scoped (never cached)
    - Free of I/O (built by the tokenizer only)
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class TypeFlags:
    """Card attribute flags detected in the query. Not mutually exclusive."""
    rookie: bool = False
    autograph: bool = False
    relic: bool = False

    def any(self) -> bool:
        return self.rookie or self.autograph or self.relic

    def to_dict(self) -> Dict[str, bool]:
        return {
            'rookie': self.rookie,
            'autograph': self.autograph,
            'relic': self.relic,
        }


@dataclass(frozen=True)
class TokenSet:
    """
    Structured view of a search query.

    `remaining_terms` is never empty for a non-empty query: when every word
    was consumed by extraction it holds the original word list instead.
    """
    original: str
    normalized: str
    words: Tuple[str, ...] = ()
    year: Optional[int] = None
    card_number: Optional[str] = None
    serial_bound: Optional[int] = None
    type_flags: TypeFlags = field(default_factory=TypeFlags)
    remaining_terms: Tuple[str, ...] = ()

    @property
    def has_item_signals(self) -> bool:
        """True when the query carries a card-level filter."""
        return (
            self.card_number is not None
            or self.serial_bound is not None
            or self.type_flags.any()
        )

    @property
    def search_terms(self) -> Tuple[str, ...]:
        """Terms matched against entity fields."""
        return self.remaining_terms if self.remaining_terms else self.words

    def to_dict(self) -> Dict[str, Any]:
        return {
            'original': self.original,
            'normalized': self.normalized,
            'words': list(self.words),
            'year': self.year,
            'card_number': self.card_number,
            'serial_bound': self.serial_bound,
            'type_flags': self.type_flags.to_dict(),
            'remaining_terms': list(self.remaining_terms),
        }
