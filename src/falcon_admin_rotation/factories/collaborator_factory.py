from falcon_admin_rotation.factories.adapters.falcon_adapter import (
    FalconIdentityService,
    FalconInventory,
    FalconOnlineStateProbe,
)
from falcon_admin_rotation.factories.adapters.tcp_probe import TcpReachabilityProbe
from falcon_admin_rotation.falconapi.devices import Devices
from falcon_admin_rotation.falconapi.rtr import RealTimeResponse
from falcon_admin_rotation.utils.constants import (
    DEFAULT_PROBE_PORT,
    DEFAULT_PROBE_TIMEOUT_SECONDS,
    DEFAULT_RTR_POLL_INTERVAL_SECONDS,
    DEFAULT_RTR_TIMEOUT_SECONDS,
)
from falcon_admin_rotation.utils.exceptions import ConfigurationError


class CollaboratorFactory:
    """Factory to create the reachability, inventory and identity collaborators."""

    @staticmethod
    def create_probe(probe_type, devices, reachability_config):
        if probe_type == 'falcon':
            return FalconOnlineStateProbe(devices)
        elif probe_type == 'tcp':
            return TcpReachabilityProbe(port=reachability_config.get('port', DEFAULT_PROBE_PORT),
                                        timeout=reachability_config.get('timeout', DEFAULT_PROBE_TIMEOUT_SECONDS))
        else:
            raise ConfigurationError(f"Unsupported reachability type: {probe_type}")

    @staticmethod
    def create_collaborators(falcon, config):
        """Build all collaborators sharing one device cache and RTR client.

        Returns:
            dict: {'probe': ..., 'inventory': ..., 'identity': ...}
        """
        rtr_config = config.get('rtr', {})
        reachability_config = config.get('reachability', {})

        devices = Devices(falcon)
        rtr = RealTimeResponse(falcon,
                               timeout=rtr_config.get('timeout', DEFAULT_RTR_TIMEOUT_SECONDS),
                               poll_interval=rtr_config.get('poll_interval', DEFAULT_RTR_POLL_INTERVAL_SECONDS))

        return {
            'probe': CollaboratorFactory.create_probe(reachability_config.get('type', 'falcon'),
                                                      devices, reachability_config),
            'inventory': FalconInventory(devices, rtr),
            'identity': FalconIdentityService(devices, rtr),
        }
