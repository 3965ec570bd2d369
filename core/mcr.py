"""
Megaport Cloud Router (MCR) lifecycle management.

Purchase, describe, modify, cancel and restore an MCR, and wait for a newly
ordered MCR to finish provisioning.

Usage:
    from core.api_client import MegaportClient
    from core.mcr import MCRService

    with MegaportClient() as client:
        service = MCRService(client)
        mcr_id = service.buy_mcr(location_id=65, name="edge-mcr", term=12, port_speed=1000)
        service.wait_for_mcr_provisioning(mcr_id)
"""

import json
import logging
import time
from typing import Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from config.settings import get_settings
from core.api_client import MegaportClient
from core.errors import MalformedResponseError, ProvisionTimeoutExceeded, SerializationError
from core.product import ProductService
from core.types import (
    MCR,
    PRODUCT_MCR,
    SERVICE_STATE_READY,
    MCROrder,
    MCROrderConfig,
    MCROrderResponse,
    MCRPrefixFilterList,
    MCRResponse,
)
from core.validation import validate_mcr_order

logger = logging.getLogger(__name__)

# Called once per poll with (mcr_id, provisioning_status, attempt)
StatusObserver = Callable[[str, str, int], None]


class MCRService:
    """
    MCR lifecycle operations.

    Stateless apart from its collaborators; every call builds its own request
    and decodes its own response.

    Attributes:
        client: Authenticated MegaportClient
        product: ProductService used for orders and generic product actions
        poll_attempts: Maximum reads in wait_for_mcr_provisioning
        poll_interval: Seconds slept between reads
    """

    def __init__(
        self,
        client: MegaportClient,
        product: Optional[ProductService] = None,
        poll_attempts: Optional[int] = None,
        poll_interval: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        on_status: Optional[StatusObserver] = None,
    ):
        if poll_attempts is None or poll_interval is None:
            cfg = get_settings().provisioning
            poll_attempts = cfg.poll_attempts if poll_attempts is None else poll_attempts
            poll_interval = cfg.poll_interval if poll_interval is None else poll_interval

        if poll_attempts < 1:
            raise ValueError(f"poll_attempts must be at least 1, got {poll_attempts}")
        if poll_interval < 0:
            raise ValueError(f"poll_interval must not be negative, got {poll_interval}")

        self.client = client
        self.product = product or ProductService(client)
        self.poll_attempts = poll_attempts
        self.poll_interval = poll_interval
        self._sleep = sleep
        self._on_status = on_status

    # =========================================================================
    # Ordering
    # =========================================================================

    def buy_mcr(
        self,
        location_id: int,
        name: str,
        term: int,
        port_speed: int,
        mcr_asn: Optional[int] = None,
        correlation_id: str = "",
    ) -> str:
        """
        Purchase an MCR.

        Not idempotent: every successful call provisions a new, billable MCR.

        Args:
            location_id: Megaport location ID
            name: Product name
            term: Contract term in months (1, 12, 24 or 36)
            port_speed: Speed in Mbps (1000, 2500, 5000 or 10000)
            mcr_asn: Router ASN, None (or 0) to let Megaport assign one
            correlation_id: For log tracing

        Returns:
            Technical service UID of the new MCR

        Raises:
            InvalidTermError / InvalidPortSpeedError: Before any network call
            RemoteAPIError / TransportError: Order submission failed
            MalformedResponseError: Response could not be decoded
        """
        validate_mcr_order(term, port_speed)

        log_prefix = f"[{correlation_id}] " if correlation_id else ""
        order = [
            MCROrder(
                location_id=location_id,
                name=name,
                term=term,
                port_speed=port_speed,
                config=MCROrderConfig(asn=mcr_asn),
            )
        ]

        try:
            request_body = json.dumps(
                [o.model_dump(by_alias=True, exclude_none=True) for o in order]
            ).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"{log_prefix}Cannot encode MCR order: {e}") from e

        logger.info(
            f"{log_prefix}Ordering MCR '{name}' at location {location_id} "
            f"({port_speed} Mbps, {term} months)"
        )
        body = self.product.execute_order(request_body, correlation_id=correlation_id)

        try:
            order_info = MCROrderResponse.model_validate_json(body)
        except PydanticValidationError as e:
            raise MalformedResponseError(f"{log_prefix}Cannot decode order response: {e}") from e

        if not order_info.data:
            raise MalformedResponseError(f"{log_prefix}Order response contained no services")

        mcr_id = order_info.data[0].technical_service_uid
        logger.info(f"{log_prefix}MCR ordered: {mcr_id}")
        return mcr_id

    def create_prefix_filter_list(
        self,
        mcr_id: str,
        prefix_filter_list: MCRPrefixFilterList,
        correlation_id: str = "",
    ) -> bool:
        """Create a prefix filter list on an MCR."""
        return self.product.create_mcr_prefix_filter_list(
            mcr_id, prefix_filter_list, correlation_id=correlation_id
        )

    # =========================================================================
    # Details
    # =========================================================================

    def get_mcr_details(self, mcr_id: str, correlation_id: str = "") -> MCR:
        """
        Fetch the current state of an MCR.

        Raises:
            RemoteAPIError: API returned anything but 200
            TransportError: API unreachable
            MalformedResponseError: Body could not be decoded
        """
        log_prefix = f"[{correlation_id}] " if correlation_id else ""

        with self.client.make_api_call(
            "GET", f"/v2/product/{mcr_id}", correlation_id=correlation_id
        ) as response:
            error = self.client.is_error_response(response, 200)
            if error is not None:
                raise error

            try:
                details = MCRResponse.model_validate_json(response.content)
            except PydanticValidationError as e:
                raise MalformedResponseError(
                    f"{log_prefix}Cannot decode details for MCR {mcr_id}: {e}"
                ) from e

        return details.data

    # =========================================================================
    # Modify / Delete / Restore
    # =========================================================================

    def modify_mcr(
        self,
        mcr_id: str,
        name: str,
        cost_centre: str,
        marketplace_visibility: bool,
        correlation_id: str = "",
    ) -> bool:
        return self.product.modify_product(
            mcr_id,
            PRODUCT_MCR,
            name,
            cost_centre,
            marketplace_visibility,
            correlation_id=correlation_id,
        )

    def delete_mcr(self, mcr_id: str, delete_now: bool, correlation_id: str = "") -> bool:
        return self.product.delete_product(mcr_id, delete_now, correlation_id=correlation_id)

    def restore_mcr(self, mcr_id: str, correlation_id: str = "") -> bool:
        return self.product.restore_product(mcr_id, correlation_id=correlation_id)

    # =========================================================================
    # Provisioning Wait
    # =========================================================================

    def wait_for_mcr_provisioning(self, mcr_id: str, correlation_id: str = "") -> bool:
        """
        Block until the MCR reports a ready provisioning status.

        Intended for tests and scripted verification. Reads are not retried:
        the first failed read aborts the wait.

        Returns:
            True once the status is in SERVICE_STATE_READY

        Raises:
            ProvisionTimeoutExceeded: Still not ready after poll_attempts reads
            RemoteAPIError / TransportError / MalformedResponseError: Read failed
        """
        log_prefix = f"[{correlation_id}] " if correlation_id else ""
        logger.info(
            f"{log_prefix}Waiting for MCR {mcr_id} to provision "
            f"(up to {self.poll_attempts} checks, {self.poll_interval}s apart)"
        )

        for attempt in range(1, self.poll_attempts + 1):
            details = self.get_mcr_details(mcr_id, correlation_id=correlation_id)
            status = details.provisioning_status
            log_extra = {
                "correlation_id": correlation_id,
                "mcr_id": mcr_id,
                "provisioning_status": status,
                "attempt": attempt,
            }

            if self._on_status is not None:
                self._on_status(mcr_id, status, attempt)

            if status in SERVICE_STATE_READY:
                logger.info(
                    f"{log_prefix}MCR {mcr_id} is {status} after {attempt} check(s)",
                    extra=log_extra,
                )
                return True

            logger.debug(
                f"{log_prefix}MCR status is {status!r} - waiting "
                f"({attempt}/{self.poll_attempts})",
                extra=log_extra,
            )

            if attempt < self.poll_attempts:
                self._sleep(self.poll_interval)

        logger.warning(f"{log_prefix}MCR {mcr_id} not ready after {self.poll_attempts} checks")
        raise ProvisionTimeoutExceeded(mcr_id)
