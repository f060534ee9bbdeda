import logging
import socket

from falcon_admin_rotation.factories.adapters.collaborator_adapter import ReachabilityProbe
from falcon_admin_rotation.utils.constants import DEFAULT_PROBE_PORT, DEFAULT_PROBE_TIMEOUT_SECONDS


class TcpReachabilityProbe(ReachabilityProbe):
    """Treats a host as reachable when a TCP connection to the given port succeeds."""

    def __init__(self, port=DEFAULT_PROBE_PORT, timeout=DEFAULT_PROBE_TIMEOUT_SECONDS):
        self.port = port
        self.timeout = timeout

    def probe(self, host):
        try:
            with socket.create_connection((host, self.port), timeout=self.timeout):
                return True
        except OSError as e:
            logging.debug("TCP probe to %s:%s failed: %s", host, self.port, e)
            return False
