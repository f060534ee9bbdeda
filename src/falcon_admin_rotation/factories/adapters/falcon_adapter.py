"""Falcon-backed collaborators: sensor online state, device inventory and RTR password changes.

Password changes run as RTR runscript commands. Falcon records every RTR
command string in its audit log, so anyone with access to that log can
recover the new password.
"""

import base64
import logging
from typing import Dict, List

from falcon_admin_rotation.factories.adapters.collaborator_adapter import (
    IdentityService,
    InventorySource,
    ReachabilityProbe,
)
from falcon_admin_rotation.falconapi.devices import Devices
from falcon_admin_rotation.falconapi.rtr import RealTimeResponse
from falcon_admin_rotation.utils.exceptions import DeviceNotFoundError, PasswordApplyError

ADAPTERS_SCRIPT = (
    "Get-CimInstance -ClassName Win32_NetworkAdapterConfiguration -Filter 'IPEnabled=True' | "
    "ForEach-Object { $_.MACAddress }"
)

PASSWORD_SET_MARKER = 'PASSWORD_SET'

# Account and password travel base64 encoded so no character in either can end
# the raw script block. Encoding is not secrecy: Falcon keeps the RTR command
# string in its audit log, and the new password can be decoded from there.
SET_PASSWORD_SCRIPT = (
    "$ErrorActionPreference = 'Stop'; "
    "$a = [Text.Encoding]::UTF8.GetString([Convert]::FromBase64String('{account}')); "
    "$p = [Text.Encoding]::UTF8.GetString([Convert]::FromBase64String('{password}')); "
    "([ADSI](\"WinNT://./$a,user\")).SetPassword($p); "
    "Write-Output '" + PASSWORD_SET_MARKER + "'"
)


def _b64(value: str) -> str:
    return base64.b64encode(value.encode('utf-8')).decode('ascii')


def build_set_password_script(account: str, password: str) -> str:
    """Build the PowerShell script that sets a local account password."""
    return SET_PASSWORD_SCRIPT.replace('{account}', _b64(account)).replace('{password}', _b64(password))


class FalconOnlineStateProbe(ReachabilityProbe):
    """Reachable means the Falcon sensor reports the device as online."""

    def __init__(self, devices: Devices):
        self.devices = devices

    def probe(self, host):
        try:
            device_id = self.devices.get_device_id(host)
        except DeviceNotFoundError:
            logging.warning("Host %s is not known to Falcon", host)
            return False

        state = self.devices.get_online_state(device_id)
        logging.debug("Host %s (%s) online state: %s", host, device_id, state)
        return state == 'online'


class FalconInventory(InventorySource):
    """Reads the serial number from device details and adapters through RTR."""

    def __init__(self, devices: Devices, rtr: RealTimeResponse):
        self.devices = devices
        self.rtr = rtr

    def fetch_serial(self, host: str) -> str:
        details = self.devices.get_device_details(self.devices.get_device_id(host))
        return details.get('serial_number') or ''

    def fetch_adapters(self, host: str) -> List[Dict[str, str]]:
        result = self.rtr.run_script(self.devices.get_device_id(host), ADAPTERS_SCRIPT)
        if result['stderr']:
            raise RuntimeError(f"Adapter query reported an error: {result['stderr'].strip()}")

        return [
            {'mac_address': line.strip()}
            for line in result['stdout'].splitlines()
            if line.strip()
        ]


class FalconIdentityService(IdentityService):
    """Sets local account passwords with an ADSI WinNT call run through RTR."""

    def __init__(self, devices: Devices, rtr: RealTimeResponse):
        self.devices = devices
        self.rtr = rtr

    def set_password(self, host, account, password):
        device_id = self.devices.get_device_id(host)
        result = self.rtr.run_script(device_id, build_set_password_script(account, password))

        if result['stderr']:
            raise PasswordApplyError(f"Password change on {host} reported: {result['stderr'].strip()}")

        return PASSWORD_SET_MARKER in result['stdout']
