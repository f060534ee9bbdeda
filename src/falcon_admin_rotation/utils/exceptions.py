"""Custom exceptions for falcon_admin_rotation.

Exceptions shared between the rotation core, the Falcon collaborators and the CLI.
Per-host failures are raised as these types and converted into outcome records
at the pipeline boundary; only setup failures reach the CLI.
"""


class RotationError(Exception):
    """Base exception for all falcon_admin_rotation errors.

    All custom exceptions in the project should inherit from this base class.
    """
    pass


class ConfigurationError(RotationError):
    """Configuration file or settings error.

    Raised when:
    - Configuration file is invalid
    - Required credentials are missing
    - Collaborator type in configuration is unknown
    """
    pass


class ApiConnectionError(RotationError):
    """Error connecting to CrowdStrike API.

    Raised when:
    - Cannot establish connection to Falcon API
    - Authentication fails (invalid credentials)
    """
    pass


class ApiError(RotationError):
    """Error from CrowdStrike API response.

    Raised when:
    - API returns error status code
    - API response is malformed
    """
    pass


class DeviceNotFoundError(RotationError):
    """No Falcon device matches the requested hostname."""
    pass


class InventoryUnavailableError(RotationError):
    """Hardware inventory query could not be completed for a host.

    Distinct from a successful query that reports an empty value.
    """
    pass


class PasswordApplyError(RotationError):
    """The remote password change was rejected or reported an error."""
    pass


class CommandTimeoutError(RotationError):
    """A remote command did not complete within its configured timeout."""
    pass


class GenerationExhaustedError(RotationError):
    """Random password generation hit its attempt limit without a compliant candidate."""
    pass


class ValidationError(RotationError):
    """Input validation error.

    Raised when:
    - Phrase fails length or complexity requirements
    - Complexity policy bounds are inconsistent
    """
    pass


__all__ = [
    'RotationError',
    'ConfigurationError',
    'ApiConnectionError',
    'ApiError',
    'DeviceNotFoundError',
    'InventoryUnavailableError',
    'PasswordApplyError',
    'CommandTimeoutError',
    'GenerationExhaustedError',
    'ValidationError',
]
