"""
Per-host rotation pipeline.

Each host moves through reachability check, password derivation and apply,
and ends with exactly one RotationOutcome:

    Start -> reachable? --no--> NetworkConnectionFailed
                        --yes-> derive --error--> PasswordSetFailed
                                       --ok-----> apply --rejected--> PasswordSetFailed
                                                        --accepted--> Successful

Hosts are processed one at a time, in input order. Failures are recorded in
the outcome of the host they belong to and never stop the batch.
"""

import logging
from typing import Iterable, Iterator, Optional, Union

from falcon_admin_rotation.rotation.applier import CredentialApplier
from falcon_admin_rotation.rotation.generator import RandomPasswordGenerator
from falcon_admin_rotation.rotation.results import (
    FailureReason,
    HostTarget,
    RotationOutcome,
    RotationStatus,
)
from falcon_admin_rotation.rotation.strategy import RotationMode, build_password_deriver
from falcon_admin_rotation.rotation.token import TokenResolver
from falcon_admin_rotation.utils.constants import DEFAULT_ACCOUNT
from falcon_admin_rotation.utils.exceptions import CommandTimeoutError, InventoryUnavailableError

logger = logging.getLogger(__name__)


def _derivation_failure_reason(error: Exception) -> FailureReason:
    if isinstance(error, InventoryUnavailableError):
        return FailureReason.INVENTORY_UNAVAILABLE
    if isinstance(error, CommandTimeoutError):
        return FailureReason.TIMEOUT
    return FailureReason.DERIVATION_FAILED


class RotationPipeline:
    """Orchestrates password rotation across a sequence of hosts."""

    def __init__(self, probe, identity, mode: RotationMode, inventory=None,
                 account: str = DEFAULT_ACCOUNT,
                 generator: Optional[RandomPasswordGenerator] = None,
                 revalidate: bool = False):
        """
        Initialize the pipeline.

        Args:
            probe: ReachabilityProbe providing probe(host) -> bool
            identity: IdentityService used by the CredentialApplier
            mode: RandomConfig or TokenConfig, fixed for this pipeline
            inventory: InventorySource for Serial and Mac tokens
            account: Default account for hosts given as plain strings
            generator: RandomPasswordGenerator for random mode
            revalidate: Re-check synthesized token passwords against the complexity policy
        """
        self.probe = probe
        self.mode = mode
        self.account = account
        self.applier = CredentialApplier(identity)
        self.derive_password = build_password_deriver(
            mode,
            generator=generator,
            resolver=TokenResolver(inventory),
            revalidate=revalidate,
        )

    def _is_reachable(self, host: str) -> bool:
        try:
            return bool(self.probe.probe(host))
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Reachability probe for %s raised an error: %s", host, e)
            return False

    def rotate_host(self, target: HostTarget) -> RotationOutcome:
        """
        Run the full rotation for one host.

        Args:
            target: Host and account to rotate

        Returns:
            RotationOutcome: Exactly one outcome, never raises for per-host failures
        """
        if not self._is_reachable(target.host):
            logger.warning("Host %s is unreachable, skipping", target.host)
            return RotationOutcome(
                host=target.host,
                account=target.account,
                password='',
                status=RotationStatus.NETWORK_CONNECTION_FAILED,
                reason=FailureReason.UNREACHABLE,
                error="Host did not respond to the reachability probe",
            )

        password = ''
        try:
            password = self.derive_password(target)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Password derivation failed for %s: %s", target.host, e)
            return RotationOutcome(
                host=target.host,
                account=target.account,
                password=password,
                status=RotationStatus.PASSWORD_SET_FAILED,
                reason=_derivation_failure_reason(e),
                error=str(e),
            )

        result = self.applier.apply(target.host, target.account, password)
        if not result.success:
            return RotationOutcome(
                host=target.host,
                account=target.account,
                password=password,
                status=RotationStatus.PASSWORD_SET_FAILED,
                reason=result.reason or FailureReason.APPLY_REJECTED,
                error=result.error,
            )

        return RotationOutcome(
            host=target.host,
            account=target.account,
            password=password,
            status=RotationStatus.SUCCESSFUL,
        )

    def _to_target(self, host: Union[str, HostTarget]) -> Optional[HostTarget]:
        if isinstance(host, HostTarget):
            return host
        host = (host or '').strip()
        if not host:
            return None
        return HostTarget(host=host, account=self.account)

    def run(self, hosts: Iterable[Union[str, HostTarget]]) -> Iterator[RotationOutcome]:
        """
        Rotate every host lazily, yielding one outcome per host in input order.

        Args:
            hosts: Host names or HostTarget instances; blank names are skipped

        Yields:
            RotationOutcome for each host
        """
        processed = 0
        failed = 0
        for host in hosts:
            target = self._to_target(host)
            if target is None:
                continue

            outcome = self.rotate_host(target)
            processed += 1
            if not outcome.succeeded:
                failed += 1
            logger.info("Host %s: %s", outcome.host, outcome.status.value)
            yield outcome

        logger.info("Rotation finished: %s hosts processed, %s failed", processed, failed)
