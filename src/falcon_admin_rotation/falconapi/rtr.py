"""
Real Time Response (RTR) script execution.

Runs PowerShell through the RTR admin `runscript` command: open a session,
submit the script, poll for completion until the timeout, then close the
session.
"""

import logging
import time
from typing import Callable, Dict, Optional

from falcon_admin_rotation.utils.constants import (
    API_COMMAND_RTR_CHECK_ADMIN,
    API_COMMAND_RTR_DELETE_SESSION,
    API_COMMAND_RTR_EXECUTE_ADMIN,
    API_COMMAND_RTR_INIT_SESSION,
    DEFAULT_RTR_POLL_INTERVAL_SECONDS,
    DEFAULT_RTR_TIMEOUT_SECONDS,
)
from falcon_admin_rotation.utils.exceptions import ApiError, CommandTimeoutError


def _errors(response) -> list:
    return response.get('body', {}).get('errors', [])


def _first_resource(response) -> Dict:
    resources = response.get('body', {}).get('resources') or []
    return resources[0] if resources else {}


class RealTimeResponse:
    """Executes RTR admin scripts on single devices."""

    def __init__(self, falcon,
                 timeout: float = DEFAULT_RTR_TIMEOUT_SECONDS,
                 poll_interval: float = DEFAULT_RTR_POLL_INTERVAL_SECONDS,
                 clock: Optional[Callable[[], float]] = None,
                 sleep: Optional[Callable[[float], None]] = None):
        """
        Initialize RealTimeResponse instance.

        Args:
            falcon: APIHarnessV2 instance
            timeout: Seconds to wait for a command to complete
            poll_interval: Seconds between status checks
            clock: Monotonic clock (defaults to time.monotonic)
            sleep: Sleep function (defaults to time.sleep)
        """
        self.falcon = falcon
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.clock = clock or time.monotonic
        self.sleep = sleep or time.sleep

    def _init_session(self, device_id: str) -> str:
        r = self.falcon.command(API_COMMAND_RTR_INIT_SESSION,
                                body={"device_id": device_id, "queue_offline": False})
        if r['status_code'] not in (200, 201):
            raise ApiError(f"Failed to open RTR session on {device_id}: {_errors(r)}")

        session_id = _first_resource(r).get('session_id')
        if not session_id:
            raise ApiError(f"RTR session response for {device_id} carried no session_id")
        return session_id

    def _delete_session(self, session_id: str) -> None:
        # Runs in a finally block; must not replace the exception in flight
        try:
            r = self.falcon.command(API_COMMAND_RTR_DELETE_SESSION, session_id=session_id)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logging.warning("Failed to delete RTR session %s: %s", session_id, e)
            return
        if r['status_code'] not in (200, 204):
            logging.warning("Failed to delete RTR session %s: %s", session_id, _errors(r))

    def _submit(self, device_id: str, session_id: str, script: str) -> str:
        r = self.falcon.command(API_COMMAND_RTR_EXECUTE_ADMIN,
                                body={
                                    "base_command": "runscript",
                                    "command_string": f"runscript -Raw=```{script}```",
                                    "device_id": device_id,
                                    "session_id": session_id,
                                    "persist": False
                                })
        if r['status_code'] not in (200, 201):
            raise ApiError(f"Failed to submit RTR command on {device_id}: {_errors(r)}")

        cloud_request_id = _first_resource(r).get('cloud_request_id')
        if not cloud_request_id:
            raise ApiError(f"RTR command response for {device_id} carried no cloud_request_id")
        return cloud_request_id

    def _wait_for_result(self, device_id: str, cloud_request_id: str) -> Dict:
        deadline = self.clock() + self.timeout

        while True:
            r = self.falcon.command(API_COMMAND_RTR_CHECK_ADMIN,
                                    cloud_request_id=cloud_request_id,
                                    sequence_id=0)
            if r['status_code'] != 200:
                raise ApiError(f"Failed to check RTR command status on {device_id}: {_errors(r)}")

            status = _first_resource(r)
            if status.get('complete'):
                return {
                    'stdout': status.get('stdout', '') or '',
                    'stderr': status.get('stderr', '') or ''
                }

            if self.clock() >= deadline:
                raise CommandTimeoutError(
                    f"RTR command on {device_id} did not complete within {self.timeout} seconds"
                )
            self.sleep(self.poll_interval)

    def run_script(self, device_id: str, script: str) -> Dict:
        """
        Run a PowerShell script on a device and wait for its output.

        Args:
            device_id: Falcon device ID
            script: PowerShell source passed to runscript -Raw

        Returns:
            dict: {'stdout': str, 'stderr': str}

        Raises:
            ApiError: If any RTR call fails
            CommandTimeoutError: If the command does not complete in time
        """
        session_id = self._init_session(device_id)
        try:
            cloud_request_id = self._submit(device_id, session_id, script)
            logging.debug("Submitted RTR script to %s (request %s)", device_id, cloud_request_id)
            return self._wait_for_result(device_id, cloud_request_id)
        finally:
            self._delete_session(session_id)
