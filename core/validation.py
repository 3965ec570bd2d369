"""Order parameter checks run before anything is sent to the API."""

from core.errors import InvalidPortSpeedError, InvalidTermError

VALID_TERMS = frozenset({1, 12, 24, 36})
VALID_MCR_PORT_SPEEDS = frozenset({1000, 2500, 5000, 10000})


def validate_term(term: int) -> None:
    """Raise InvalidTermError unless term is 1, 12, 24 or 36 months."""
    if term not in VALID_TERMS:
        raise InvalidTermError(term)


def validate_port_speed(port_speed: int) -> None:
    """Raise InvalidPortSpeedError unless port_speed is an MCR speed in Mbps."""
    if port_speed not in VALID_MCR_PORT_SPEEDS:
        raise InvalidPortSpeedError(port_speed)


def validate_mcr_order(term: int, port_speed: int) -> None:
    """Validate an MCR order. Term is checked first."""
    validate_term(term)
    validate_port_speed(port_speed)
