"""
Device lookup utilities.

Maps hostnames to Falcon device IDs and reads online state and device
details for those devices.
"""

import logging
from typing import Dict

from falcon_admin_rotation.utils.constants import (
    API_COMMAND_GET_DEVICE_DETAILS,
    API_COMMAND_GET_ONLINE_STATE,
    API_COMMAND_QUERY_DEVICES,
)
from falcon_admin_rotation.utils.exceptions import ApiError, DeviceNotFoundError


def _errors(response) -> list:
    return response.get('body', {}).get('errors', [])


class Devices:
    """
    Devices class for resolving CrowdStrike Falcon hosts.

    Device IDs are cached per hostname for the lifetime of the instance, so
    one rotation run performs a single lookup per host.
    """

    def __init__(self, falcon):
        """
        Initialize Devices instance.

        Args:
            falcon: APIHarnessV2 instance
        """
        self.falcon = falcon
        self._device_ids: Dict[str, str] = {}

    @staticmethod
    def _build_hostname_filter(hostname: str) -> str:
        escaped = hostname.replace("'", "\\'")
        return f"hostname:'{escaped}'"

    def get_device_id(self, hostname: str) -> str:
        """
        Resolve a hostname to its device ID.

        When several devices share the hostname (for example after a sensor
        reinstall) the most recently seen one is used.

        Args:
            hostname: Host name as known to Falcon

        Returns:
            str: Device ID

        Raises:
            ApiError: If the device query fails
            DeviceNotFoundError: If no device matches the hostname
        """
        key = hostname.lower()
        if key in self._device_ids:
            return self._device_ids[key]

        r = self.falcon.command(API_COMMAND_QUERY_DEVICES,
                                limit=1,
                                sort="last_seen.desc",
                                filter=self._build_hostname_filter(hostname))

        if r['status_code'] != 200:
            logging.error("Failed to query device for hostname %s. Status: %s, Errors: %s",
                          hostname, r['status_code'], _errors(r))
            raise ApiError(f"Failed to query devices: {_errors(r)}")

        resources = r['body'].get('resources', [])
        if not resources:
            raise DeviceNotFoundError(f"No Falcon device found with hostname '{hostname}'")

        device_id = resources[0]
        self._device_ids[key] = device_id
        logging.debug("Resolved hostname %s to device %s", hostname, device_id)
        return device_id

    def get_online_state(self, device_id: str) -> str:
        """
        Get the sensor online state for a device.

        Args:
            device_id: Falcon device ID

        Returns:
            str: 'online', 'offline' or 'unknown'

        Raises:
            ApiError: If the online state query fails
        """
        r = self.falcon.command(API_COMMAND_GET_ONLINE_STATE, ids=[device_id])

        if r['status_code'] != 200:
            raise ApiError(f"Failed to get online state for {device_id}: {_errors(r)}")

        resources = r['body'].get('resources', [])
        if not resources:
            return 'unknown'
        return resources[0].get('state', 'unknown')

    def get_device_details(self, device_id: str) -> Dict:
        """
        Get device details for a single device.

        Args:
            device_id: Falcon device ID

        Returns:
            dict: Device detail record

        Raises:
            ApiError: If the details query fails or returns no record
        """
        r = self.falcon.command(API_COMMAND_GET_DEVICE_DETAILS, ids=[device_id])

        if r['status_code'] != 200:
            raise ApiError(f"Failed to get device details for {device_id}: {_errors(r)}")

        resources = r['body'].get('resources', [])
        if not resources:
            raise ApiError(f"No device details returned for {device_id}")
        return resources[0]
