"""
Password validation utilities.

Structural password policy checks shared by every schema that accepts a
password. A candidate is accepted when it fits the length bounds, contains
only ASCII letters, ASCII digits and characters from a fixed symbol
alphabet, and covers enough distinct character categories.

Length is measured in Unicode code points. Classification is ASCII-only:
letters and digits outside ASCII are treated as invalid characters.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

REFERENCE_SYMBOLS = "~!@#$%^&*()-_+{}|[]\\:;\"'?,./"

_UPPER = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
_LOWER = frozenset("abcdefghijklmnopqrstuvwxyz")
_DIGITS = frozenset("0123456789")


class PasswordPolicyConfigurationError(ValueError):
    """Raised when a password policy is constructed with inconsistent bounds."""


class CharacterCategory(Enum):
    """Character categories counted towards the diversity requirement."""

    UPPER = "upper"
    LOWER = "lower"
    DIGIT = "digit"
    SYMBOL = "symbol"


class RejectionReason(str, Enum):
    """Reasons a candidate password can be rejected."""

    EMPTY = "empty"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_CHARACTER = "invalid_character"
    INSUFFICIENT_DIVERSITY = "insufficient_diversity"


@dataclass(frozen=True)
class PolicyConfiguration:
    """
    Tunable parameters for a single validation call.

    Raises:
        PasswordPolicyConfigurationError: If the bounds are inconsistent
    """

    min_length: int = 8
    max_length: int = 50
    min_distinct_categories: int = 3
    symbol_alphabet: frozenset[str] = field(default=frozenset(REFERENCE_SYMBOLS))

    def __post_init__(self) -> None:
        if isinstance(self.symbol_alphabet, str):
            object.__setattr__(self, "symbol_alphabet", frozenset(self.symbol_alphabet))

        if self.min_length <= 0:
            raise PasswordPolicyConfigurationError("min_length must be positive")
        if self.min_length > self.max_length:
            raise PasswordPolicyConfigurationError(
                f"min_length ({self.min_length}) must not exceed max_length ({self.max_length})"
            )
        if not 1 <= self.min_distinct_categories <= len(CharacterCategory):
            raise PasswordPolicyConfigurationError(
                f"min_distinct_categories must be between 1 and {len(CharacterCategory)}"
            )
        if not self.symbol_alphabet:
            raise PasswordPolicyConfigurationError("symbol_alphabet must not be empty")
        if any(len(symbol) != 1 for symbol in self.symbol_alphabet):
            raise PasswordPolicyConfigurationError(
                "symbol_alphabet must contain single characters only"
            )
        overlap = self.symbol_alphabet & (_UPPER | _LOWER | _DIGITS)
        if overlap:
            raise PasswordPolicyConfigurationError(
                f"symbol_alphabet must not contain letters or digits: {''.join(sorted(overlap))}"
            )

    @classmethod
    def from_settings(cls, settings: Any) -> "PolicyConfiguration":
        """Build a policy from the password_* fields of the application settings."""
        return cls(
            min_length=settings.password_min_length,
            max_length=settings.password_max_length,
            min_distinct_categories=settings.password_min_categories,
            symbol_alphabet=frozenset(settings.password_symbols),
        )


DEFAULT_POLICY = PolicyConfiguration()


@dataclass
class CharacterClassCoverage:
    """Categories seen while scanning one candidate."""

    has_upper: bool = False
    has_lower: bool = False
    has_digit: bool = False
    has_symbol: bool = False

    def record(self, category: CharacterCategory) -> None:
        if category is CharacterCategory.UPPER:
            self.has_upper = True
        elif category is CharacterCategory.LOWER:
            self.has_lower = True
        elif category is CharacterCategory.DIGIT:
            self.has_digit = True
        else:
            self.has_symbol = True

    @property
    def categories_found(self) -> int:
        return sum((self.has_upper, self.has_lower, self.has_digit, self.has_symbol))


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Result of validating one candidate.

    Either accepted, or rejected with a reason. The invalid character and its
    zero-based position are filled in for invalid_character rejections, and
    the category counts for insufficient_diversity rejections.
    """

    accepted: bool
    reason: RejectionReason | None = None
    character: str | None = None
    position: int | None = None
    categories_found: int | None = None
    categories_required: int | None = None

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def accept(cls) -> "ValidationOutcome":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectionReason) -> "ValidationOutcome":
        return cls(accepted=False, reason=reason)

    @classmethod
    def reject_invalid_character(cls, character: str, position: int) -> "ValidationOutcome":
        return cls(
            accepted=False,
            reason=RejectionReason.INVALID_CHARACTER,
            character=character,
            position=position,
        )

    @classmethod
    def reject_insufficient_diversity(cls, found: int, required: int) -> "ValidationOutcome":
        return cls(
            accepted=False,
            reason=RejectionReason.INSUFFICIENT_DIVERSITY,
            categories_found=found,
            categories_required=required,
        )

    def describe(self, config: PolicyConfiguration) -> str:
        """
        Human-readable explanation of the outcome.

        Only the offending character is ever echoed back, never the password.

        Args:
            config: Policy the outcome was produced with, used for the bounds

        Returns:
            A single sentence suitable for an API error message
        """
        if self.accepted:
            return "Password is valid"
        if self.reason is RejectionReason.EMPTY:
            return "Password must not be empty"
        if self.reason is RejectionReason.TOO_SHORT:
            return f"Password must be at least {config.min_length} characters long"
        if self.reason is RejectionReason.TOO_LONG:
            return f"Password must be at most {config.max_length} characters long"
        if self.reason is RejectionReason.INVALID_CHARACTER:
            return (
                f"Password contains a character that is not allowed "
                f"({self.character!r} at position {self.position})"
            )
        return (
            f"Password must contain at least {self.categories_required} of: "
            f"uppercase letter, lowercase letter, digit, symbol "
            f"(found {self.categories_found})"
        )


def classify_character(char: str, symbol_alphabet: frozenset[str]) -> CharacterCategory | None:
    """Return the category of a single character, or None if it is not allowed."""
    if char in _DIGITS:
        return CharacterCategory.DIGIT
    if char in _UPPER:
        return CharacterCategory.UPPER
    if char in _LOWER:
        return CharacterCategory.LOWER
    if char in symbol_alphabet:
        return CharacterCategory.SYMBOL
    return None


def validate_password(candidate: str | None, config: PolicyConfiguration) -> ValidationOutcome:
    """
    Validate a candidate password against a policy.

    Checks run in order: emptiness, length bounds, allowed characters and
    then category diversity. The scan stops at the first character outside
    the allowed classes. It never stops early on full coverage, so a
    disallowed character anywhere in the string is always reported.

    Args:
        candidate: Password to validate. None and non-string values are empty.
        config: Policy to validate against

    Returns:
        ValidationOutcome; rejections are returned, never raised
    """
    if not isinstance(candidate, str) or not candidate.strip():
        return ValidationOutcome.reject(RejectionReason.EMPTY)

    if len(candidate) < config.min_length:
        return ValidationOutcome.reject(RejectionReason.TOO_SHORT)
    if len(candidate) > config.max_length:
        return ValidationOutcome.reject(RejectionReason.TOO_LONG)

    coverage = CharacterClassCoverage()
    for position, char in enumerate(candidate):
        category = classify_character(char, config.symbol_alphabet)
        if category is None:
            return ValidationOutcome.reject_invalid_character(char, position)
        coverage.record(category)

    if coverage.categories_found < config.min_distinct_categories:
        return ValidationOutcome.reject_insufficient_diversity(
            coverage.categories_found, config.min_distinct_categories
        )

    return ValidationOutcome.accept()


def ensure_password_policy(password: str, config: PolicyConfiguration) -> str:
    """
    Validate password policy for use inside pydantic field validators.

    Args:
        password: Password to validate
        config: Policy to validate against

    Returns:
        The password if valid

    Raises:
        ValueError: If password doesn't meet requirements
    """
    outcome = validate_password(password, config)
    if not outcome:
        raise ValueError(outcome.describe(config))
    return password
