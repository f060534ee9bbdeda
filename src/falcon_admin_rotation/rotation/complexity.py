"""
Password complexity policy.

A candidate satisfies the policy when its length falls within the bounds and
it contains at least one lowercase letter, one uppercase letter, one digit and
one symbol from string.punctuation.
"""

import string
from dataclasses import dataclass
from typing import List

from falcon_admin_rotation.utils.constants import PHRASE_MAX_LENGTH, PHRASE_MIN_LENGTH
from falcon_admin_rotation.utils.exceptions import ValidationError

SYMBOLS = frozenset(string.punctuation)

# class name -> membership test
CHARACTER_CLASSES = (
    ('lowercase', lambda c: c in string.ascii_lowercase),
    ('uppercase', lambda c: c in string.ascii_uppercase),
    ('digit', lambda c: c in string.digits),
    ('symbol', lambda c: c in SYMBOLS),
)


@dataclass(frozen=True)
class ComplexityPolicy:
    """Length bounds plus the four required character classes.

    Attributes:
        min_length: Minimum length, inclusive
        max_length: Maximum length, inclusive
    """
    min_length: int
    max_length: int

    def __post_init__(self):
        if self.min_length < 0:
            raise ValidationError(f"min_length cannot be negative, got {self.min_length}")
        if self.max_length < len(CHARACTER_CLASSES):
            raise ValidationError(
                f"max_length must be at least {len(CHARACTER_CLASSES)} to fit every required class, "
                f"got {self.max_length}"
            )
        if self.min_length > self.max_length:
            raise ValidationError(
                f"min_length ({self.min_length}) cannot exceed max_length ({self.max_length})"
            )

    def missing_classes(self, candidate: str) -> List[str]:
        """Return the names of required character classes absent from candidate."""
        return [name for name, test in CHARACTER_CLASSES if not any(test(c) for c in candidate)]

    def satisfies(self, candidate) -> bool:
        """Check a candidate password against the policy.

        Args:
            candidate: Password string to evaluate

        Returns:
            bool: True if length is within bounds and every class is present
        """
        if not isinstance(candidate, str):
            return False
        if not self.min_length <= len(candidate) <= self.max_length:
            return False
        return not self.missing_classes(candidate)


PHRASE_POLICY = ComplexityPolicy(PHRASE_MIN_LENGTH, PHRASE_MAX_LENGTH)


def validate_phrase(phrase: str) -> str:
    """Validate an operator-supplied static phrase.

    Args:
        phrase: The phrase combined with per-host tokens

    Returns:
        The phrase, unchanged

    Raises:
        ValidationError: If the phrase length is outside bounds or a class is missing
    """
    if not isinstance(phrase, str):
        raise ValidationError("Phrase must be a string")

    if not PHRASE_POLICY.min_length <= len(phrase) <= PHRASE_POLICY.max_length:
        raise ValidationError(
            f"Phrase length must be between {PHRASE_POLICY.min_length} and "
            f"{PHRASE_POLICY.max_length} characters, got {len(phrase)}"
        )

    missing = PHRASE_POLICY.missing_classes(phrase)
    if missing:
        raise ValidationError(f"Phrase is missing required character classes: {', '.join(missing)}")

    return phrase
