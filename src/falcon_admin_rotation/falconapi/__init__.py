"""FalconAPI module for CrowdStrike Falcon API interactions."""

from falcon_admin_rotation.falconapi.devices import Devices
from falcon_admin_rotation.falconapi.rtr import RealTimeResponse

__all__ = [
    'Devices',
    'RealTimeResponse',
]
