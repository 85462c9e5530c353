"""
Query Tokenizer
Parses a raw search string into a TokenSet using regex only (no database calls)
"""
import re
from typing import List, Optional, Tuple
import logging

from catalog_search.models.tokens import TokenSet, TypeFlags

logger = logging.getLogger(__name__)


YEAR_PATTERN = re.compile(r"\b(19\d{2}|20\d{2})\b")

# Card number patterns, most specific first. The first match wins.
CARD_NUMBER_PATTERNS = [
    re.compile(r"\b([A-Z]{1,4}-[A-Z0-9]{1,4})\b", re.IGNORECASE),  # BD-9, CPA-JDL
    re.compile(r"\b([A-Z]-\d{1,3})\b", re.IGNORECASE),  # A-1, B-9
    re.compile(r"\b([A-Z]{1,4}\d{1,4}[A-Z]?)\b", re.IGNORECASE),  # US110, H78
    re.compile(r"\b(\d{1,4}[A-Z]{1,2})\b", re.IGNORECASE),  # 1T, 57b
]

SIMPLE_NUMBER_PATTERN = re.compile(r"\d{1,4}")

SERIAL_PATTERN = re.compile(r"/(\d{1,9})\b")  # print runs never exceed 9 digits

TYPE_FLAG_TERMS = {
    "rookie": ("rookie", "rc", "rcs"),
    "autograph": ("auto", "autograph", "signed"),
    "relic": ("relic", "jersey", "patch", "memorabilia"),
}

TYPE_FLAG_PATTERNS = {
    flag: re.compile(r"\b(" + "|".join(terms) + r")\b", re.IGNORECASE)
    for flag, terms in TYPE_FLAG_TERMS.items()
}

ALL_TYPE_TERMS_PATTERN = re.compile(
    r"\b(" + "|".join(t for terms in TYPE_FLAG_TERMS.values() for t in terms) + r")\b",
    re.IGNORECASE,
)

MIN_TERM_LENGTH = 2


def _is_plausible_year(value: int) -> bool:
    return 1900 <= value <= 2099


def extract_year(query: str) -> Optional[int]:
    """Return the first 19xx/20xx year in the query."""
    match = YEAR_PATTERN.search(query)
    return int(match.group(1)) if match else None


def extract_card_number(query: str, words: Tuple[str, ...]) -> Optional[str]:
    """
    Extract a card number

    Complex patterns are tried first. A bare 1-4 digit word is only used when
    the query has other words and the number is not a plausible year.

    Args:
        query: Raw query text
        words: Whitespace-split words of the query

    Returns:
        Card number as typed, or None
    """
    for pattern in CARD_NUMBER_PATTERNS:
        match = pattern.search(query)
        if match:
            return match.group(1)

    if len(words) > 1:
        for word in words:
            if SIMPLE_NUMBER_PATTERN.fullmatch(word) and not _is_plausible_year(int(word)):
                return word

    return None


def extract_serial(query: str) -> Tuple[Optional[int], Optional[str]]:
    """Return the print-run bound and the literal text it was read from."""
    match = SERIAL_PATTERN.search(query)
    if not match:
        return None, None
    return int(match.group(1)), match.group(0)


def detect_type_flags(query: str) -> TypeFlags:
    return TypeFlags(**{
        flag: bool(pattern.search(query))
        for flag, pattern in TYPE_FLAG_PATTERNS.items()
    })


def build_remaining_terms(
    query: str,
    words: Tuple[str, ...],
    year: Optional[int],
    card_number: Optional[str],
    serial_text: Optional[str],
) -> Tuple[str, ...]:
    """
    Strip extracted tokens and type keywords from the query

    Falls back to the original word list when nothing is left, so the
    entity search always has terms to match.
    """
    remaining = query
    if year is not None:
        remaining = re.sub(rf"\b{year}\b", " ", remaining, count=1)
    if card_number:
        remaining = re.sub(
            rf"\b{re.escape(card_number)}\b", " ", remaining, count=1, flags=re.IGNORECASE
        )
    if serial_text:
        remaining = remaining.replace(serial_text, " ", 1)

    remaining = ALL_TYPE_TERMS_PATTERN.sub(" ", remaining)

    terms: List[str] = [t for t in remaining.split() if len(t) >= MIN_TERM_LENGTH]
    if not terms:
        return words
    return tuple(terms)


def parse_query_tokens(query: str) -> TokenSet:
    """
    Parse a search query into a TokenSet

    Never raises: anything that is not a string is treated as an empty query.

    Args:
        query: Raw query text as typed by the user

    Returns:
        Immutable TokenSet
    """
    if not isinstance(query, str):
        query = ""

    words = tuple(query.split())
    year = extract_year(query)
    card_number = extract_card_number(query, words)
    serial_bound, serial_text = extract_serial(query)
    type_flags = detect_type_flags(query)
    remaining_terms = build_remaining_terms(query, words, year, card_number, serial_text)

    tokens = TokenSet(
        original=query,
        normalized=query.lower().strip(),
        words=words,
        year=year,
        card_number=card_number,
        serial_bound=serial_bound,
        type_flags=type_flags,
        remaining_terms=remaining_terms,
    )

    logger.debug(f"Parsed tokens: {tokens.to_dict()}")

    return tokens
