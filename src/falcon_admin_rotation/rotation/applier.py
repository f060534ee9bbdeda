"""Credential apply step: one password change attempt against the identity service."""

import logging

from falcon_admin_rotation.rotation.results import ApplyResult, FailureReason
from falcon_admin_rotation.utils.exceptions import CommandTimeoutError

logger = logging.getLogger(__name__)


class CredentialApplier:
    """Sets a local account password through the identity service.

    Any error from the identity service is converted into a failed
    ApplyResult; nothing is raised to the caller. There is no retry.
    """

    def __init__(self, identity):
        """
        Args:
            identity: IdentityService providing set_password(host, account, password)
        """
        self.identity = identity

    def apply(self, host: str, account: str, password: str) -> ApplyResult:
        try:
            accepted = self.identity.set_password(host, account, password)
        except CommandTimeoutError as e:
            logger.error("Password change for %s on %s timed out: %s", account, host, e)
            return ApplyResult(success=False, reason=FailureReason.TIMEOUT, error=str(e))
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Password change for %s on %s failed: %s", account, host, e)
            return ApplyResult(success=False, reason=FailureReason.APPLY_REJECTED, error=str(e))

        if not accepted:
            logger.error("Password change for %s on %s was rejected", account, host)
            return ApplyResult(success=False, reason=FailureReason.APPLY_REJECTED,
                               error="Identity service rejected the password change")

        logger.info("Password changed for %s on %s", account, host)
        return ApplyResult(success=True)
