"""Password derivation and per-host rotation pipeline."""

from falcon_admin_rotation.rotation.applier import CredentialApplier
from falcon_admin_rotation.rotation.complexity import ComplexityPolicy, PHRASE_POLICY, validate_phrase
from falcon_admin_rotation.rotation.generator import RandomPasswordGenerator
from falcon_admin_rotation.rotation.pipeline import RotationPipeline
from falcon_admin_rotation.rotation.results import (
    ApplyResult,
    FailureReason,
    HostTarget,
    RotationOutcome,
    RotationStatus,
)
from falcon_admin_rotation.rotation.strategy import RandomConfig, TokenConfig, build_password_deriver
from falcon_admin_rotation.rotation.token import PositionMode, TokenKind, TokenResolver, synthesize

__all__ = [
    'ApplyResult',
    'ComplexityPolicy',
    'CredentialApplier',
    'FailureReason',
    'HostTarget',
    'PHRASE_POLICY',
    'PositionMode',
    'RandomConfig',
    'RandomPasswordGenerator',
    'RotationOutcome',
    'RotationPipeline',
    'RotationStatus',
    'TokenConfig',
    'TokenKind',
    'TokenResolver',
    'build_password_deriver',
    'synthesize',
    'validate_phrase',
]
