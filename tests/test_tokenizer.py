"""
Tests for the query tokenizer
"""
import pytest
from catalog_search.services.tokenizer import parse_query_tokens


def test_tokenize_is_deterministic():
    """Same query, same tokens"""
    query = "2023 BD-9 soto rookie auto /25"

    assert parse_query_tokens(query) == parse_query_tokens(query)


def test_year_wins_over_bare_number():
    """A plausible year is never read as a card number"""
    tokens = parse_query_tokens("1987 topps 5")

    assert tokens.year == 1987
    assert tokens.card_number == "5"
    assert tokens.remaining_terms == ("topps",)


def test_hyphenated_card_number_beats_digits():
    """Letters-hyphen pattern takes priority over the year and the trailing digit"""
    tokens = parse_query_tokens("2023 BD-9 soto")

    assert tokens.card_number == "BD-9"
    assert tokens.year == 2023
    assert tokens.remaining_terms == ("soto",)


@pytest.mark.parametrize("query, expected", [
    ("CPA-JDL duran", "CPA-JDL"),
    ("A-1 ohtani", "A-1"),
    ("US110 judge", "US110"),
    ("H78 mantle", "H78"),
    ("1T soto", "1T"),
    ("57b mays", "57b"),
])
def test_card_number_patterns(query, expected):
    """Each card number shape is recognized"""
    assert parse_query_tokens(query).card_number == expected


def test_bare_number_needs_other_words():
    """A lone number is not a card number"""
    assert parse_query_tokens("77").card_number is None
    assert parse_query_tokens("77 jose ramirez").card_number == "77"


def test_year_not_card_number_when_alone_with_name():
    """jose ramirez 2020 has a year and no card number"""
    tokens = parse_query_tokens("jose ramirez 2020")

    assert tokens.year == 2020
    assert tokens.card_number is None


def test_type_flags_are_independent():
    """All three flags can be set at once"""
    tokens = parse_query_tokens("rookie auto patch")

    assert tokens.type_flags.rookie
    assert tokens.type_flags.autograph
    assert tokens.type_flags.relic


def test_type_flag_synonyms_case_insensitive():
    """RC, Signed and Jersey are synonyms"""
    tokens = parse_query_tokens("Soto RC Signed Jersey")

    assert tokens.type_flags.rookie
    assert tokens.type_flags.autograph
    assert tokens.type_flags.relic
    assert tokens.remaining_terms == ("Soto",)


def test_type_flags_need_word_boundary():
    """'autobahn' and 'rcx' do not set flags"""
    tokens = parse_query_tokens("autobahn rcx")

    assert not tokens.type_flags.any()


def test_serial_bound_extracted_and_removed():
    """/25 becomes serial_bound=25 and leaves the terms"""
    tokens = parse_query_tokens("topps chrome /25")

    assert tokens.serial_bound == 25
    assert tokens.remaining_terms == ("topps", "chrome")
    assert "/25" not in tokens.remaining_terms


def test_oversized_serial_is_ignored():
    """A runaway digit string after / is not a print run and does not raise"""
    tokens = parse_query_tokens("soto /" + "9" * 5000)

    assert tokens.serial_bound is None
    assert not tokens.has_item_signals
    assert tokens.remaining_terms[0] == "soto"


def test_year_only_query_falls_back_to_words():
    """Nothing left after extraction -> original word list"""
    tokens = parse_query_tokens("1999")

    assert tokens.year == 1999
    assert tokens.card_number is None
    assert tokens.remaining_terms == ("1999",)


def test_flags_only_query_falls_back_to_words():
    """Remaining terms are never empty for a non-empty query"""
    tokens = parse_query_tokens("rookie auto patch")

    assert tokens.remaining_terms == ("rookie", "auto", "patch")


def test_short_terms_are_dropped():
    """Single characters are not search terms"""
    tokens = parse_query_tokens("a soto")

    assert tokens.remaining_terms == ("soto",)


def test_full_collector_query():
    """2022 topps chrome juan soto rookie"""
    tokens = parse_query_tokens("2022 topps chrome juan soto rookie")

    assert tokens.year == 2022
    assert tokens.card_number is None
    assert tokens.type_flags.rookie
    assert not tokens.type_flags.autograph
    assert tokens.remaining_terms == ("topps", "chrome", "juan", "soto")
    assert tokens.has_item_signals


def test_two_letter_query():
    """aj has no special tokens"""
    tokens = parse_query_tokens("aj")

    assert tokens.remaining_terms == ("aj",)
    assert tokens.year is None
    assert tokens.card_number is None
    assert tokens.serial_bound is None
    assert not tokens.type_flags.any()
    assert not tokens.has_item_signals


def test_normalized_and_words():
    tokens = parse_query_tokens("  Juan SOTO ")

    assert tokens.normalized == "juan soto"
    assert tokens.words == ("Juan", "SOTO")


def test_non_string_input_never_raises():
    tokens = parse_query_tokens(None)

    assert tokens.original == ""
    assert tokens.words == ()
    assert tokens.remaining_terms == ()


def test_token_set_is_immutable():
    tokens = parse_query_tokens("juan soto")

    with pytest.raises(Exception):
        tokens.year = 2020


def test_to_dict_for_debug_output():
    data = parse_query_tokens("soto rc /99").to_dict()

    assert data["serial_bound"] == 99
    assert data["type_flags"] == {"rookie": True, "autograph": False, "relic": False}
    assert data["remaining_terms"] == ["soto"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
