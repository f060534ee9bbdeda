from abc import ABC, abstractmethod
from typing import Dict, List


class ReachabilityProbe(ABC):
    """Abstract base class for host reachability probes."""

    @abstractmethod
    def probe(self, host: str) -> bool:
        """Return True if the host can be reached for rotation."""
        pass


class InventorySource(ABC):
    """Abstract base class for hardware inventory lookups."""

    @abstractmethod
    def fetch_serial(self, host: str) -> str:
        """Return the system serial number, possibly empty."""
        pass

    @abstractmethod
    def fetch_adapters(self, host: str) -> List[Dict[str, str]]:
        """Return the host's network adapters in reported order as [{'mac_address': ...}]."""
        pass


class IdentityService(ABC):
    """Abstract base class for services that store local account credentials."""

    @abstractmethod
    def set_password(self, host: str, account: str, password: str) -> bool:
        """Set the password of a local account on a host.

        Returns True when the change was confirmed, False when it was rejected.
        Transport failures are raised.
        """
        pass
