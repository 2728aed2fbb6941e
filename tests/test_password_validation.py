"""
Test the password policy validator.
"""

from concurrent.futures import ThreadPoolExecutor
from functools import partial

import pytest

from app.core.password_validation import (
    DEFAULT_POLICY,
    REFERENCE_SYMBOLS,
    CharacterCategory,
    CharacterClassCoverage,
    PasswordPolicyConfigurationError,
    PolicyConfiguration,
    RejectionReason,
    ValidationOutcome,
    classify_character,
    ensure_password_policy,
    validate_password,
)

POLICY = DEFAULT_POLICY


class TestReferenceScenarios:
    """Scenarios for the reference policy (8-50 chars, 3 of 4 categories)."""

    def test_empty_string_is_empty(self):
        outcome = validate_password("", POLICY)
        assert not outcome
        assert outcome.reason is RejectionReason.EMPTY

    def test_short_password_is_too_short(self):
        outcome = validate_password("short1!", POLICY)
        assert outcome.reason is RejectionReason.TOO_SHORT

    def test_single_category_is_insufficient_diversity(self):
        outcome = validate_password("alllowercase", POLICY)
        assert outcome.reason is RejectionReason.INSUFFICIENT_DIVERSITY
        assert outcome.categories_found == 1
        assert outcome.categories_required == 3

    def test_three_categories_without_symbol_is_accepted(self):
        outcome = validate_password("Password1", POLICY)
        assert outcome
        assert outcome.accepted is True
        assert outcome.reason is None

    def test_non_ascii_letter_is_invalid_character(self):
        outcome = validate_password("Pässword1!", POLICY)
        assert outcome.reason is RejectionReason.INVALID_CHARACTER
        assert outcome.character == "ä"
        assert outcome.position == 1

    def test_fifty_one_characters_is_too_long(self):
        candidate = "Aa1!" + "a" * 47
        assert len(candidate) == 51
        assert validate_password(candidate, POLICY).reason is RejectionReason.TOO_LONG


class TestEmptyCandidates:
    """Absent and whitespace-only candidates."""

    @pytest.mark.parametrize("candidate", [None, "", " ", "        ", "\t\n\r ", "　" * 10])
    def test_blank_candidates_are_empty(self, candidate):
        assert validate_password(candidate, POLICY).reason is RejectionReason.EMPTY

    @pytest.mark.parametrize("candidate", [12345678, b"Password1", ["Password1"]])
    def test_non_string_candidates_are_empty(self, candidate):
        assert validate_password(candidate, POLICY).reason is RejectionReason.EMPTY

    def test_interior_whitespace_is_not_empty(self):
        outcome = validate_password("Pass word1", POLICY)
        assert outcome.reason is RejectionReason.INVALID_CHARACTER
        assert outcome.character == " "
        assert outcome.position == 4

    def test_surrounding_whitespace_is_invalid_character(self):
        outcome = validate_password(" Password1", POLICY)
        assert outcome.reason is RejectionReason.INVALID_CHARACTER
        assert outcome.position == 0


class TestLengthBounds:
    """Length checks run before any character inspection."""

    def test_exact_minimum_length_is_accepted(self):
        assert validate_password("Passwor1", POLICY)

    def test_exact_maximum_length_is_accepted(self):
        candidate = "Aa1" + "a" * 47
        assert len(candidate) == 50
        assert validate_password(candidate, POLICY)

    @pytest.mark.parametrize("length", range(1, 8))
    def test_every_length_below_minimum_is_too_short(self, length):
        assert validate_password("<" * length, POLICY).reason is RejectionReason.TOO_SHORT

    @pytest.mark.parametrize("candidate", ["a" * 51, "<" * 51, "Aa1!" * 20, "é" * 60])
    def test_too_long_regardless_of_content(self, candidate):
        assert validate_password(candidate, POLICY).reason is RejectionReason.TOO_LONG

    def test_length_counts_code_points(self):
        config = PolicyConfiguration(min_length=1, max_length=3, min_distinct_categories=1)
        # "a😀" is two code points even though it is three UTF-16 code units
        assert validate_password("a😀", config).reason is RejectionReason.INVALID_CHARACTER
        assert validate_password("a😀aa", config).reason is RejectionReason.TOO_LONG


class TestCharacterClasses:
    """Classification into the four categories."""

    @pytest.mark.parametrize("symbol", list(REFERENCE_SYMBOLS))
    def test_every_reference_symbol_is_a_symbol(self, symbol):
        assert classify_character(symbol, DEFAULT_POLICY.symbol_alphabet) is CharacterCategory.SYMBOL

    @pytest.mark.parametrize(
        "char,category",
        [
            ("A", CharacterCategory.UPPER),
            ("Z", CharacterCategory.UPPER),
            ("a", CharacterCategory.LOWER),
            ("z", CharacterCategory.LOWER),
            ("0", CharacterCategory.DIGIT),
            ("9", CharacterCategory.DIGIT),
        ],
    )
    def test_ascii_letters_and_digits(self, char, category):
        assert classify_character(char, DEFAULT_POLICY.symbol_alphabet) is category

    @pytest.mark.parametrize("char", ["<", ">", "=", "`", " ", "\t", "é", "Ä", "３", "٣", "€", "😀"])
    def test_characters_outside_the_classes_are_rejected(self, char):
        assert classify_character(char, DEFAULT_POLICY.symbol_alphabet) is None

    @pytest.mark.parametrize("char", ["<", ">", "=", "`", "é", "３"])
    def test_invalid_character_rejected_even_when_otherwise_valid(self, char):
        candidate = "Password1!" + char
        outcome = validate_password(candidate, POLICY)
        assert outcome.reason is RejectionReason.INVALID_CHARACTER
        assert outcome.character == char
        assert outcome.position == len(candidate) - 1

    def test_invalid_character_after_full_coverage_is_still_rejected(self):
        outcome = validate_password("Aa1!xxxx<", POLICY)
        assert outcome.reason is RejectionReason.INVALID_CHARACTER
        assert outcome.position == 8

    def test_scan_stops_at_first_invalid_character(self):
        outcome = validate_password("Pa<sw>rd1", POLICY)
        assert outcome.character == "<"
        assert outcome.position == 2


class TestDiversity:
    """Category coverage requirement."""

    @pytest.mark.parametrize(
        "candidate",
        ["abcdefg1", "ABCDEFG1", "abcdefgH", "abcdefg!", "12345678!", "ABCD!!!!"],
    )
    def test_two_categories_is_insufficient(self, candidate):
        outcome = validate_password(candidate, POLICY)
        assert outcome.reason is RejectionReason.INSUFFICIENT_DIVERSITY
        assert outcome.categories_found == 2

    @pytest.mark.parametrize(
        "candidate",
        ["password1!", "PASSWORD1!", "Password!!", "Password1", "Password1!", "\\\"'?Aa1x"],
    )
    def test_three_or_four_categories_is_accepted(self, candidate):
        assert validate_password(candidate, POLICY)

    def test_stricter_policy_requires_all_four(self):
        config = PolicyConfiguration(min_distinct_categories=4)
        outcome = validate_password("Password1", config)
        assert outcome.reason is RejectionReason.INSUFFICIENT_DIVERSITY
        assert outcome.categories_found == 3
        assert outcome.categories_required == 4
        assert validate_password("Password1!", config)

    def test_custom_symbol_alphabet(self):
        config = PolicyConfiguration(symbol_alphabet=frozenset("#"))
        assert validate_password("password#1", config)
        outcome = validate_password("password!1", config)
        assert outcome.reason is RejectionReason.INVALID_CHARACTER
        assert outcome.character == "!"


class TestCoverage:
    """CharacterClassCoverage bookkeeping."""

    def test_starts_empty(self):
        assert CharacterClassCoverage().categories_found == 0

    def test_records_each_category_once(self):
        coverage = CharacterClassCoverage()
        coverage.record(CharacterCategory.UPPER)
        coverage.record(CharacterCategory.UPPER)
        coverage.record(CharacterCategory.SYMBOL)
        assert coverage.has_upper and coverage.has_symbol
        assert not coverage.has_lower and not coverage.has_digit
        assert coverage.categories_found == 2


class TestPurity:
    """The validator is a pure function."""

    def test_repeated_validation_gives_same_outcome(self):
        candidates = ["", "short1!", "alllowercase", "Password1", "Pässword1!"]
        first = [validate_password(c, POLICY) for c in candidates]
        for _ in range(3):
            assert [validate_password(c, POLICY) for c in candidates] == first

    def test_concurrent_validation(self):
        candidates = ["Password1", "alllowercase", "Pässword1!"] * 100
        expected = [validate_password(c, POLICY) for c in candidates]
        with ThreadPoolExecutor(max_workers=8) as pool:
            assert list(pool.map(partial(validate_password, config=POLICY), candidates)) == expected

    def test_policy_must_be_passed_explicitly(self):
        with pytest.raises(TypeError):
            validate_password("Password1")


class TestPolicyConfiguration:
    """Misconfigured policies fail at construction."""

    def test_reference_defaults(self):
        assert DEFAULT_POLICY.min_length == 8
        assert DEFAULT_POLICY.max_length == 50
        assert DEFAULT_POLICY.min_distinct_categories == 3
        assert DEFAULT_POLICY.symbol_alphabet == frozenset(REFERENCE_SYMBOLS)

    def test_string_alphabet_is_converted(self):
        assert PolicyConfiguration(symbol_alphabet="!@").symbol_alphabet == frozenset("!@")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_length": 0},
            {"min_length": -1},
            {"min_length": 10, "max_length": 9},
            {"min_distinct_categories": 0},
            {"min_distinct_categories": 5},
            {"symbol_alphabet": frozenset()},
            {"symbol_alphabet": frozenset({"!!"})},
            {"symbol_alphabet": frozenset("a!")},
            {"symbol_alphabet": frozenset("7")},
        ],
    )
    def test_invalid_configuration_raises(self, kwargs):
        with pytest.raises(PasswordPolicyConfigurationError):
            PolicyConfiguration(**kwargs)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            PolicyConfiguration(min_length=20, max_length=10)

    def test_equal_bounds_allowed(self):
        config = PolicyConfiguration(min_length=9, max_length=9)
        assert validate_password("Password1", config)


class TestMessages:
    """Human-readable descriptions and the pydantic adapter."""

    def test_describe_uses_policy_bounds(self):
        config = PolicyConfiguration(min_length=10, max_length=20)
        assert "at least 10" in validate_password("Passwor1", config).describe(config)
        assert "at most 20" in validate_password("Password1" * 3, config).describe(config)

    def test_describe_invalid_character_mentions_position(self):
        message = validate_password("Pässword1!", POLICY).describe(POLICY)
        assert "'ä'" in message
        assert "position 1" in message

    def test_describe_never_echoes_password(self):
        for candidate in ["short1!", "alllowercase", "Secret1<"]:
            assert candidate not in validate_password(candidate, POLICY).describe(POLICY)

    def test_accepted_outcome_describe(self):
        assert ValidationOutcome.accept().describe(POLICY) == "Password is valid"

    def test_ensure_password_policy_returns_password(self):
        assert ensure_password_policy("Password1", POLICY) == "Password1"

    def test_ensure_password_policy_raises_value_error(self):
        with pytest.raises(ValueError) as excinfo:
            ensure_password_policy("short1!", POLICY)
        assert "at least 8 characters" in str(excinfo.value)

    def test_ensure_password_policy_with_custom_policy(self):
        config = PolicyConfiguration(min_distinct_categories=4)
        with pytest.raises(ValueError) as excinfo:
            ensure_password_policy("Password1", config)
        assert "at least 4 of" in str(excinfo.value)
