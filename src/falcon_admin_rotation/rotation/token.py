"""
Per-host token resolution and token password synthesis.

A token makes an otherwise static phrase unique per host. It is the hostname
itself, the hardware serial number, or the MAC address of the last network
adapter the host reports.
"""

import logging
from enum import Enum

from falcon_admin_rotation.utils.exceptions import CommandTimeoutError, InventoryUnavailableError


class TokenKind(str, Enum):
    """Source of the per-host uniqueness token."""
    SERIAL = "Serial"
    HOSTNAME = "Hostname"
    MAC = "Mac"


class PositionMode(str, Enum):
    """Where the token goes relative to the phrase."""
    APPEND = "Append"
    PREPEND = "Prepend"


def synthesize(token_value: str, phrase: str, position: PositionMode) -> str:
    """Combine a token with the static phrase.

    Args:
        token_value: Resolved per-host token, possibly empty
        phrase: Validated static phrase
        position: APPEND puts the token first, PREPEND puts the phrase first

    Returns:
        str: token + phrase for APPEND, phrase + token for PREPEND
    """
    position = PositionMode(position)
    if position == PositionMode.APPEND:
        return f"{token_value}{phrase}"
    return f"{phrase}{token_value}"


class TokenResolver:
    """
    Resolves token values for hosts.

    Hostname tokens need no external call. Serial and MAC tokens are read
    from the inventory collaborator; an empty value from a successful query is
    returned as-is, while a failed query raises InventoryUnavailableError.
    """

    def __init__(self, inventory=None):
        """
        Initialize TokenResolver instance.

        Args:
            inventory: InventorySource providing fetch_serial() and fetch_adapters()
        """
        self.inventory = inventory

    def resolve(self, token_kind: TokenKind, host: str) -> str:
        """
        Resolve the token value for a host.

        Args:
            token_kind: Which token to resolve
            host: Host identifier

        Returns:
            str: Token value, possibly empty

        Raises:
            InventoryUnavailableError: If the inventory query cannot be completed
            CommandTimeoutError: If the inventory query timed out
        """
        token_kind = TokenKind(token_kind)

        if token_kind == TokenKind.HOSTNAME:
            return host

        if self.inventory is None:
            raise InventoryUnavailableError(f"No inventory source configured to resolve {token_kind.value} token")

        try:
            if token_kind == TokenKind.SERIAL:
                return self._resolve_serial(host)
            return self._resolve_mac(host)
        except (InventoryUnavailableError, CommandTimeoutError):
            raise
        except Exception as e:
            raise InventoryUnavailableError(
                f"Inventory query for {token_kind.value} failed on {host}: {e}"
            ) from e

    def _resolve_serial(self, host: str) -> str:
        serial = self.inventory.fetch_serial(host) or ''
        if not serial:
            # Some vendors leave the BIOS serial blank
            logging.warning("Host %s reported an empty serial number", host)
        return serial

    def _resolve_mac(self, host: str) -> str:
        adapters = self.inventory.fetch_adapters(host) or []
        if not adapters:
            logging.warning("Host %s reported no network adapters", host)
            return ''

        if len(adapters) > 1:
            logging.debug("Host %s reported %s adapters, using the last one", host, len(adapters))

        # Positional last entry, not a "primary adapter" selection
        return adapters[-1].get('mac_address') or ''
