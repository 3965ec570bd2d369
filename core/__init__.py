"""
Megaport Cloud Router lifecycle client.

Modules:
- api_client: authenticated transport and response classification
- product: generic product operations (orders, modify, cancel, restore)
- mcr: MCR purchase, details, provisioning wait
- validation: order parameter checks
- types: pydantic wire models
- errors: exception hierarchy
"""

from .api_client import MegaportClient
from .errors import (
    AuthenticationError,
    InvalidPortSpeedError,
    InvalidTermError,
    MalformedResponseError,
    MegaportError,
    ProvisionTimeoutExceeded,
    RemoteAPIError,
    SerializationError,
    TransportError,
    ValidationError,
)
from .mcr import MCRService
from .product import ProductService
from .types import MCR, SERVICE_STATE_READY, MCRPrefixFilterList, MCRPrefixListEntry

__all__ = [
    # Services
    "MegaportClient",
    "ProductService",
    "MCRService",
    # Types
    "MCR",
    "MCRPrefixFilterList",
    "MCRPrefixListEntry",
    "SERVICE_STATE_READY",
    # Errors
    "MegaportError",
    "ValidationError",
    "InvalidTermError",
    "InvalidPortSpeedError",
    "SerializationError",
    "MalformedResponseError",
    "TransportError",
    "AuthenticationError",
    "RemoteAPIError",
    "ProvisionTimeoutExceeded",
]
