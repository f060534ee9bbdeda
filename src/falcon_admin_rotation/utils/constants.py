"""Shared constants for the admin rotation application.

Constants used across CLI, rotation core, and Falcon collaborators.
"""


# Default values
DEFAULT_ACCOUNT = 'Administrator'
DEFAULT_MAX_GENERATION_ATTEMPTS = 1000
DEFAULT_PROBE_PORT = 445
DEFAULT_PROBE_TIMEOUT_SECONDS = 5
DEFAULT_RTR_TIMEOUT_SECONDS = 60
DEFAULT_RTR_POLL_INTERVAL_SECONDS = 2

# Random password length bounds (length is drawn from [min, max))
RANDOM_MIN_LENGTH = 30
RANDOM_MAX_LENGTH = 60

# Phrase length bounds (inclusive)
PHRASE_MIN_LENGTH = 4
PHRASE_MAX_LENGTH = 60

# Windows local accounts accept at most 127 characters
SYNTHESIZED_MAX_LENGTH = 127

# API constants
API_COMMAND_QUERY_DEVICES = 'QueryDevicesByFilterScroll'
API_COMMAND_GET_DEVICE_DETAILS = 'GetDeviceDetailsV2'
API_COMMAND_GET_ONLINE_STATE = 'GetOnlineState_V1'
API_COMMAND_RTR_INIT_SESSION = 'RTR_InitSession'
API_COMMAND_RTR_DELETE_SESSION = 'RTR_DeleteSession'
API_COMMAND_RTR_EXECUTE_ADMIN = 'RTR_ExecuteAdminCommand'
API_COMMAND_RTR_CHECK_ADMIN = 'RTR_CheckAdminCommandStatus'


# Rich styles (used by CLI output strategies)
class Style:  # pylint: disable=too-few-public-methods
    """Rich markup style constants."""
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    DIM = "dim"
    BOLD = "bold"
