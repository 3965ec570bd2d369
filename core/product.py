"""
Generic product operations shared by every Megaport product type.

Order execution, modify, delete, restore and MCR prefix filter lists.
Product-specific services (core.mcr) delegate to this module.
"""

import logging

from pydantic_core import PydanticSerializationError

from core.api_client import MegaportClient
from core.errors import SerializationError
from core.types import PRODUCT_MCR, MCRPrefixFilterList

logger = logging.getLogger(__name__)

BUY_PATH = "/v3/networkdesign/buy"

ACTION_CANCEL = "CANCEL"
ACTION_CANCEL_NOW = "CANCEL_NOW"
ACTION_UN_CANCEL = "UN_CANCEL"


class ProductService:
    """Product-level API operations parameterized by product type tag."""

    def __init__(self, client: MegaportClient):
        self.client = client

    def execute_order(self, body: bytes, correlation_id: str = "") -> bytes:
        """
        Submit a serialized order array to the buy endpoint.

        Returns:
            Raw response body

        Raises:
            RemoteAPIError: API rejected the order
            TransportError: API unreachable
        """
        log_prefix = f"[{correlation_id}] " if correlation_id else ""
        logger.info(f"{log_prefix}Submitting order ({len(body)} bytes)")

        with self.client.make_api_call("POST", BUY_PATH, body, correlation_id=correlation_id) as response:
            error = self.client.is_error_response(response, 200)
            if error is not None:
                raise error
            return response.content

    def modify_product(
        self,
        product_id: str,
        product_type: str,
        name: str,
        cost_centre: str,
        marketplace_visibility: bool,
        correlation_id: str = "",
    ) -> bool:
        """Update name, cost centre and marketplace visibility of a product."""
        body = {
            "name": name,
            "costCentre": cost_centre,
            "marketplaceVisibility": marketplace_visibility,
        }
        path = f"/v2/product/{product_type}/{product_id}"

        with self.client.make_api_call("PUT", path, body, correlation_id=correlation_id) as response:
            error = self.client.is_error_response(response, 200)
            if error is not None:
                raise error

        logger.info(f"Modified {product_type} {product_id}")
        return True

    def delete_product(self, product_id: str, delete_now: bool, correlation_id: str = "") -> bool:
        """
        Cancel a product.

        delete_now=True terminates immediately; False cancels at the end of
        the current billing period.
        """
        action = ACTION_CANCEL_NOW if delete_now else ACTION_CANCEL
        return self._product_action(product_id, action, correlation_id)

    def restore_product(self, product_id: str, correlation_id: str = "") -> bool:
        """Undo a scheduled cancellation."""
        return self._product_action(product_id, ACTION_UN_CANCEL, correlation_id)

    def _product_action(self, product_id: str, action: str, correlation_id: str) -> bool:
        path = f"/v3/product/{product_id}/action/{action}"

        with self.client.make_api_call("POST", path, correlation_id=correlation_id) as response:
            error = self.client.is_error_response(response, 200)
            if error is not None:
                raise error

        logger.info(f"Product {product_id}: {action} accepted")
        return True

    def create_mcr_prefix_filter_list(
        self,
        mcr_id: str,
        prefix_filter_list: MCRPrefixFilterList,
        correlation_id: str = "",
    ) -> bool:
        """Attach a prefix filter list to an MCR."""
        try:
            body = prefix_filter_list.model_dump(by_alias=True, exclude_none=True)
        except PydanticSerializationError as e:
            raise SerializationError(f"Cannot encode prefix filter list: {e}") from e

        path = f"/v2/product/{PRODUCT_MCR}/{mcr_id}/prefixList"

        with self.client.make_api_call("POST", path, body, correlation_id=correlation_id) as response:
            error = self.client.is_error_response(response, 200)
            if error is not None:
                raise error

        logger.info(f"Created prefix filter list '{prefix_filter_list.description}' on MCR {mcr_id}")
        return True

