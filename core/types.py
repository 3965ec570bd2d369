"""
Wire types for the Megaport product API.

Pydantic models mirror the JSON bodies exchanged with the API. Field names
are snake_case in Python and camelCase on the wire (via aliases), so models
are dumped with ``by_alias=True`` before being sent.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Product type tag used in product-level URLs
PRODUCT_MCR = "mcr2"

# Order-level product type for a second-generation MCR
MCR_ORDER_TYPE = "MCR2"

# Provisioning states that mean the service is usable
SERVICE_STATE_READY = frozenset({"CONFIGURED", "LIVE"})


class _WireModel(BaseModel):
    """Base for API models: accept both field names and aliases, ignore extras."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values):
        """The API sends null for unset fields; fall back to the defaults."""
        if isinstance(values, dict):
            return {k: v for k, v in values.items() if v is not None}
        return values


# =============================================================================
# Orders
# =============================================================================

class MCROrderConfig(_WireModel):
    """Router configuration attached to an MCR order."""
    asn: Optional[int] = Field(default=None, alias="mcrAsn")

    @field_validator("asn")
    @classmethod
    def normalize_asn(cls, v: Optional[int]) -> Optional[int]:
        """Zero is the legacy "unset" sentinel."""
        if v == 0:
            return None
        return v


class MCROrder(_WireModel):
    """A single MCR purchase order line."""
    location_id: int = Field(..., alias="locationId")
    name: str = Field(..., alias="productName")
    term: int
    type: str = Field(default=MCR_ORDER_TYPE, alias="productType")
    port_speed: int = Field(..., alias="portSpeed")
    config: MCROrderConfig = Field(default_factory=MCROrderConfig)


class MCROrderConfirmation(_WireModel):
    """One entry of the order response envelope."""
    technical_service_uid: str = Field(..., alias="technicalServiceUid")


class MCROrderResponse(_WireModel):
    """Response envelope returned by the network design buy endpoint."""
    message: str = ""
    terms: str = ""
    data: List[MCROrderConfirmation] = Field(default_factory=list)


# =============================================================================
# MCR Details
# =============================================================================

class MCRVirtualRouter(_WireModel):
    """Routing instance of an MCR."""
    id: Optional[int] = None
    asn: Optional[int] = Field(default=None, alias="mcrAsn")
    name: str = ""
    resource_name: str = Field(default="", alias="resourceName")
    resource_type: str = Field(default="", alias="resourceType")
    speed: Optional[int] = None


class MCRResources(_WireModel):
    interface: Dict[str, Any] = Field(default_factory=dict)
    virtual_router: MCRVirtualRouter = Field(default_factory=MCRVirtualRouter)


class MCR(_WireModel):
    """
    Snapshot of an MCR as reported by the API.

    Only ``uid`` and ``provisioning_status`` drive client logic; the rest is
    descriptive.
    """
    id: Optional[int] = Field(default=None, alias="productId")
    uid: str = Field(default="", alias="productUid")
    name: str = Field(default="", alias="productName")
    type: str = Field(default="", alias="productType")
    provisioning_status: str = Field(default="", alias="provisioningStatus")
    create_date: Optional[int] = Field(default=None, alias="createDate")
    created_by: str = Field(default="", alias="createdBy")
    cost_centre: str = Field(default="", alias="costCentre")
    port_speed: Optional[int] = Field(default=None, alias="portSpeed")
    terminate_date: Optional[int] = Field(default=None, alias="terminateDate")
    live_date: Optional[int] = Field(default=None, alias="liveDate")
    market: str = ""
    location_id: Optional[int] = Field(default=None, alias="locationId")
    usage_algorithm: str = Field(default="", alias="usageAlgorithm")
    marketplace_visibility: bool = Field(default=False, alias="marketplaceVisibility")
    vxc_permitted: bool = Field(default=False, alias="vxcpermitted")
    vxc_auto_approval: bool = Field(default=False, alias="vxcAutoApproval")
    secondary_name: str = Field(default="", alias="secondaryName")
    company_uid: str = Field(default="", alias="companyUid")
    company_name: str = Field(default="", alias="companyName")
    contract_start_date: Optional[int] = Field(default=None, alias="contractStartDate")
    contract_end_date: Optional[int] = Field(default=None, alias="contractEndDate")
    contract_term_months: Optional[int] = Field(default=None, alias="contractTermMonths")
    attribute_tags: Dict[str, str] = Field(default_factory=dict, alias="attributeTags")
    virtual: bool = False
    buyout_port: bool = Field(default=False, alias="buyoutPort")
    locked: bool = False
    admin_locked: bool = Field(default=False, alias="adminLocked")
    cancelable: bool = False
    resources: MCRResources = Field(default_factory=MCRResources)


class MCRResponse(_WireModel):
    """Envelope of the product details endpoint."""
    message: str = ""
    terms: str = ""
    data: MCR


# =============================================================================
# Prefix Filter Lists
# =============================================================================

class MCRPrefixListEntry(_WireModel):
    """A single permit/deny rule."""
    action: str
    prefix: str
    ge: Optional[int] = None
    le: Optional[int] = None

    @field_validator("action")
    @classmethod
    def validate_action(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("permit", "deny"):
            raise ValueError("action must be 'permit' or 'deny'")
        return v


class MCRPrefixFilterList(_WireModel):
    """Named list of prefix rules attached to an MCR."""
    description: str = Field(..., min_length=1, max_length=100)
    address_family: str = Field(..., alias="addressFamily")
    entries: List[MCRPrefixListEntry] = Field(..., min_length=1, max_length=200)

    @field_validator("address_family")
    @classmethod
    def validate_address_family(cls, v: str) -> str:
        normalized = {"ipv4": "IPv4", "ipv6": "IPv6"}.get(v.strip().lower())
        if normalized is None:
            raise ValueError("addressFamily must be 'IPv4' or 'IPv6'")
        return normalized
