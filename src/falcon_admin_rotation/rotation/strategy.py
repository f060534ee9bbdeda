"""
Rotation mode selection.

The mode is either RandomConfig or TokenConfig, chosen once per invocation.
build_password_deriver() turns it into a single callable the pipeline invokes
for every host, so the pipeline never branches on the mode itself.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from falcon_admin_rotation.rotation.complexity import ComplexityPolicy, validate_phrase
from falcon_admin_rotation.rotation.generator import RandomPasswordGenerator
from falcon_admin_rotation.rotation.results import HostTarget
from falcon_admin_rotation.rotation.token import PositionMode, TokenKind, TokenResolver, synthesize
from falcon_admin_rotation.utils.constants import PHRASE_MIN_LENGTH, SYNTHESIZED_MAX_LENGTH
from falcon_admin_rotation.utils.exceptions import ValidationError

SYNTHESIZED_POLICY = ComplexityPolicy(PHRASE_MIN_LENGTH, SYNTHESIZED_MAX_LENGTH)


@dataclass(frozen=True)
class RandomConfig:
    """Random mode: every host gets an independent random password."""


@dataclass(frozen=True)
class TokenConfig:
    """Token mode: phrase combined with a per-host token.

    Attributes:
        position: Token placement relative to the phrase
        phrase: Static phrase, validated on construction
        token_kind: Which per-host token to use
    """
    position: PositionMode
    phrase: str
    token_kind: TokenKind

    def __post_init__(self):
        object.__setattr__(self, 'position', PositionMode(self.position))
        object.__setattr__(self, 'token_kind', TokenKind(self.token_kind))
        validate_phrase(self.phrase)


RotationMode = Union[RandomConfig, TokenConfig]

PasswordDeriver = Callable[[HostTarget], str]


def build_password_deriver(mode: RotationMode,
                           generator: Optional[RandomPasswordGenerator] = None,
                           resolver: Optional[TokenResolver] = None,
                           revalidate: bool = False) -> PasswordDeriver:
    """
    Build the per-host password derivation function for a mode.

    Args:
        mode: RandomConfig or TokenConfig
        generator: Generator used in random mode (created if not provided)
        resolver: Token resolver used in token mode
        revalidate: Re-check synthesized token passwords against the complexity policy

    Returns:
        Callable taking a HostTarget and returning its password

    Raises:
        ValueError: If the mode is not a known variant
    """
    if isinstance(mode, RandomConfig):
        generator = generator or RandomPasswordGenerator()

        def derive_random(target: HostTarget) -> str:
            return generator.generate()

        return derive_random

    if isinstance(mode, TokenConfig):
        resolver = resolver or TokenResolver()

        def derive_token(target: HostTarget) -> str:
            token_value = resolver.resolve(mode.token_kind, target.host)
            password = synthesize(token_value, mode.phrase, mode.position)
            if revalidate and not SYNTHESIZED_POLICY.satisfies(password):
                raise ValidationError(f"Synthesized password for {target.host} does not satisfy the complexity policy")
            return password

        return derive_token

    raise ValueError(f"Unsupported rotation mode: {mode!r}")
