#!/usr/bin/env python3
"""
MCR Lifecycle Check

Orders an MCR, waits for it to provision, optionally renames it, then
cancels it. Meant for verifying a staging account end to end.

Every run creates a billable MCR in the target environment.

Usage:
    python scripts/mcr_lifecycle_check.py --location 65 --name lifecycle-check
    python scripts/mcr_lifecycle_check.py --location 65 --speed 2500 --asn 64512 --keep
"""

import argparse
import sys
import uuid
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.api_client import MegaportClient  # noqa: E402
from core.errors import MegaportError  # noqa: E402
from core.logging_config import configure_logging  # noqa: E402
from core.mcr import MCRService  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Order, verify and cancel an MCR")
    parser.add_argument("--location", type=int, required=True, help="Megaport location ID")
    parser.add_argument("--name", default="lifecycle-check", help="MCR product name")
    parser.add_argument("--term", type=int, default=1, help="Contract term in months")
    parser.add_argument("--speed", type=int, default=1000, help="Port speed in Mbps")
    parser.add_argument("--asn", type=int, default=None, help="MCR ASN (default: assigned)")
    parser.add_argument("--rename", default="", help="Rename the MCR once it is live")
    parser.add_argument("--keep", action="store_true", help="Do not cancel the MCR afterwards")
    args = parser.parse_args()

    logger = configure_logging(log_format="text")
    correlation_id = f"check-{uuid.uuid4().hex[:8]}"

    try:
        with MegaportClient() as client:
            service = MCRService(
                client,
                on_status=lambda mcr_id, status, attempt: print(
                    f"  [{attempt}] {mcr_id}: {status}"
                ),
            )

            mcr_id = service.buy_mcr(
                location_id=args.location,
                name=args.name,
                term=args.term,
                port_speed=args.speed,
                mcr_asn=args.asn,
                correlation_id=correlation_id,
            )
            print(f"Ordered MCR {mcr_id}")

            service.wait_for_mcr_provisioning(mcr_id, correlation_id=correlation_id)
            details = service.get_mcr_details(mcr_id, correlation_id=correlation_id)
            print(
                f"MCR {details.uid} is {details.provisioning_status} "
                f"(ASN {details.resources.virtual_router.asn})"
            )

            if args.rename:
                service.modify_mcr(
                    mcr_id, args.rename, details.cost_centre,
                    details.marketplace_visibility, correlation_id=correlation_id,
                )
                print(f"Renamed MCR to {args.rename}")

            if not args.keep:
                service.delete_mcr(mcr_id, delete_now=True, correlation_id=correlation_id)
                print(f"Cancelled MCR {mcr_id}")

    except MegaportError as e:
        logger.error(f"[{correlation_id}] Lifecycle check failed: {e}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
