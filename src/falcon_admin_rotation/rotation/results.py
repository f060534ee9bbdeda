"""
Rotation result models.

Each host processed by the pipeline produces exactly one RotationOutcome.
The public status keeps the three values operators already script against;
FailureReason carries the finer-grained cause next to it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from falcon_admin_rotation.utils.datetime_utils import get_utc_iso_timestamp


class RotationStatus(str, Enum):
    """Public outcome status for one host."""
    SUCCESSFUL = "Successful"
    PASSWORD_SET_FAILED = "PasswordSetFailed"
    NETWORK_CONNECTION_FAILED = "NetworkConnectionFailed"


class FailureReason(str, Enum):
    """Internal cause behind a failed status."""
    UNREACHABLE = "Unreachable"
    INVENTORY_UNAVAILABLE = "InventoryUnavailable"
    DERIVATION_FAILED = "DerivationFailed"
    APPLY_REJECTED = "ApplyRejected"
    TIMEOUT = "Timeout"


@dataclass(frozen=True)
class HostTarget:
    """A host and the local account to rotate on it."""
    host: str
    account: str


@dataclass(frozen=True)
class ApplyResult:
    """Result of a single credential apply attempt."""
    success: bool
    reason: Optional[FailureReason] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class RotationOutcome:
    """Outcome record for one host.

    Attributes:
        host: Host identifier as supplied by the caller
        account: Local account that was rotated
        password: Password that was set, or attempted; empty if none was derived
        status: Public status
        reason: Failure cause, None on success
        error: Error message for failures, None on success
        timestamp: UTC ISO 8601 time the outcome was recorded
    """
    host: str
    account: str
    password: str
    status: RotationStatus
    reason: Optional[FailureReason] = None
    error: Optional[str] = None
    timestamp: str = field(default_factory=get_utc_iso_timestamp)

    @property
    def succeeded(self) -> bool:
        return self.status == RotationStatus.SUCCESSFUL

    def to_dict(self) -> Dict[str, Any]:
        """Convert the outcome to a plain dictionary for serialization."""
        return {
            'host': self.host,
            'account': self.account,
            'password': self.password,
            'status': self.status.value,
            'reason': self.reason.value if self.reason else None,
            'error': self.error,
            'timestamp': self.timestamp,
        }
