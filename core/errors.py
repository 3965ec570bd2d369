"""
Centralized error handling for the Megaport MCR client.

Error Hierarchy:
- MegaportError: base class for everything raised by this package
  - ValidationError: order parameters rejected before any network call
  - SerializationError / MalformedResponseError: local encode/decode failures
  - TransportError: cannot reach the API (connection refused, timeout)
  - AuthenticationError: login rejected
  - RemoteAPIError: API answered with an unexpected status code
  - ProvisionTimeoutExceeded: provisioning wait budget exhausted

Usage:
    from core.errors import InvalidTermError, RemoteAPIError

    try:
        service.buy_mcr(location_id=1, name="edge", term=12, port_speed=1000)
    except RemoteAPIError as e:
        print(e.status_code, e.message)
"""

from typing import Any, Optional


# Messages match the wording of the Megaport client libraries
ERR_TERM_NOT_VALID = "invalid term, valid values are 1, 12, 24, and 36"
ERR_MCR_INVALID_PORT_SPEED = "invalid port speed, valid speeds are 1000, 2500, 5000, and 10000"
ERR_MCR_PROVISION_TIMEOUT_EXCEED = "the MCR took too long to provision"


class MegaportError(Exception):
    """Base exception for Megaport client errors."""
    pass


# =============================================================================
# Local Errors (raised before or after I/O)
# =============================================================================

class ValidationError(MegaportError):
    """Order parameters failed validation."""
    pass


class InvalidTermError(ValidationError):
    """Contract term is not one of the allowed values."""

    def __init__(self, term: Any):
        super().__init__(ERR_TERM_NOT_VALID)
        self.term = term


class InvalidPortSpeedError(ValidationError):
    """Port speed is not one of the allowed values."""

    def __init__(self, port_speed: Any):
        super().__init__(ERR_MCR_INVALID_PORT_SPEED)
        self.port_speed = port_speed


class SerializationError(MegaportError):
    """Request body could not be encoded."""
    pass


class MalformedResponseError(MegaportError):
    """Response body could not be decoded into the expected shape."""
    pass


# =============================================================================
# Remote Errors (propagated from the API)
# =============================================================================

class TransportError(MegaportError):
    """Cannot connect to the Megaport API."""
    pass


class AuthenticationError(MegaportError):
    """Login failed or session token was rejected."""
    pass


class RemoteAPIError(MegaportError):
    """
    API returned a status code other than the expected one.

    Carries whatever detail the API supplied so callers can decide
    what to do next.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        data: Any = None,
        trace: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.data = data
        self.trace = trace

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class ProvisionTimeoutExceeded(MegaportError):
    """MCR did not reach a ready state within the polling budget."""

    def __init__(self, mcr_id: str = ""):
        super().__init__(ERR_MCR_PROVISION_TIMEOUT_EXCEED)
        self.mcr_id = mcr_id
