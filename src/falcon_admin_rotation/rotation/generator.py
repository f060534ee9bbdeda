"""Random password generation by rejection sampling."""

import logging
import secrets
import string
from typing import Callable, Optional

from falcon_admin_rotation.rotation.complexity import ComplexityPolicy
from falcon_admin_rotation.utils.constants import (
    DEFAULT_MAX_GENERATION_ATTEMPTS,
    RANDOM_MAX_LENGTH,
    RANDOM_MIN_LENGTH,
)
from falcon_admin_rotation.utils.exceptions import GenerationExhaustedError, ValidationError

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_letters + string.digits + string.punctuation


def secure_random_string(length: int, alphabet: str = ALPHABET) -> str:
    """Return a string of the requested length drawn with the secrets module."""
    return ''.join(secrets.choice(alphabet) for _ in range(length))


class RandomPasswordGenerator:
    """
    Generates random passwords that satisfy the complexity policy.

    A length is drawn uniformly from [min_length, max_length), a candidate of
    that length is produced and tested against the policy; failing candidates
    are discarded and the draw is repeated up to max_attempts times.
    """

    def __init__(self,
                 max_attempts: int = DEFAULT_MAX_GENERATION_ATTEMPTS,
                 random_string: Optional[Callable[[int], str]] = None,
                 min_length: int = RANDOM_MIN_LENGTH,
                 max_length: int = RANDOM_MAX_LENGTH):
        """
        Initialize the generator.

        Args:
            max_attempts: Maximum number of candidates drawn before giving up
            random_string: Callable returning a random string of a given length
            min_length: Smallest length drawn, inclusive
            max_length: Upper length bound, exclusive for the draw and inclusive for the policy
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")
        if max_length <= min_length:
            raise ValidationError(
                f"max_length ({max_length}) must be greater than min_length ({min_length}) for the length draw"
            )
        self.max_attempts = max_attempts
        self.random_string = random_string or secure_random_string
        self.min_length = min_length
        self.max_length = max_length
        self.policy = ComplexityPolicy(min_length, max_length)

    def _draw_length(self) -> int:
        return self.min_length + secrets.randbelow(self.max_length - self.min_length)

    def generate(self) -> str:
        """
        Produce a password satisfying the policy.

        Returns:
            str: Compliant random password

        Raises:
            GenerationExhaustedError: If max_attempts candidates all fail the policy
        """
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.random_string(self._draw_length())
            if self.policy.satisfies(candidate):
                if attempt > 1:
                    logger.debug("Compliant password generated after %s attempts", attempt)
                return candidate

        raise GenerationExhaustedError(
            f"No compliant password after {self.max_attempts} attempts"
        )
