"""Shared pytest fixtures for MCR client tests."""
import os
import sys

import pytest
import responses

# Add project root to path
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _PROJECT_ROOT)

# ---------------------------------------------------------------------------
# Deterministic test environment - set BEFORE any settings are loaded so a
# developer's MEGAPORT_* variables or .env file never leak into tests.
# ---------------------------------------------------------------------------
os.environ["MEGAPORT_ENVIRONMENT"] = "staging"
os.environ.pop("MEGAPORT_BASE_URL", None)
os.environ.pop("MEGAPORT_API_TOKEN", None)
os.environ.setdefault("MEGAPORT_USERNAME", "test-user")
os.environ.setdefault("MEGAPORT_PASSWORD", "test-password")

BASE_URL = "https://api.test.megaport.example"
MCR_UID = "a1b2c3d4-0000-4000-8000-000000000001"


@pytest.fixture(autouse=True)
def _reset_settings():
    """Reset the settings singleton between tests for isolation."""
    from config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def mcr_uid():
    return MCR_UID


@pytest.fixture
def client():
    """MegaportClient with a pre-issued token (no login round-trip)."""
    from core.api_client import MegaportClient

    return MegaportClient(
        base_url=BASE_URL,
        username="test-user",
        password="test-password",
        api_token="test-token",
        login_backoff=0,
    )


@pytest.fixture
def mock_responses():
    """Enable responses mock for HTTP requests."""
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def sleeps():
    """Records requested sleep durations instead of sleeping."""
    return []


@pytest.fixture
def service(client, sleeps):
    """MCRService with the default polling budget and a fake sleep."""
    from core.mcr import MCRService

    return MCRService(client, poll_attempts=30, poll_interval=10, sleep=sleeps.append)


def _mcr_payload(status="LIVE", uid=MCR_UID, **overrides):
    data = {
        "productId": 1234,
        "productUid": uid,
        "productName": "test-mcr",
        "productType": "MCR2",
        "provisioningStatus": status,
        "createDate": 1700000000000,
        "createdBy": "test-user",
        "portSpeed": 1000,
        "market": "AU",
        "locationId": 1,
        "marketplaceVisibility": False,
        "vxcpermitted": True,
        "vxcAutoApproval": False,
        "contractTermMonths": 12,
        "virtual": True,
        "cancelable": True,
        "resources": {
            "interface": {"demarcation": "", "up": 1},
            "virtual_router": {
                "id": 88,
                "mcrAsn": 133937,
                "name": "test-mcr",
                "resourceName": "vrouter",
                "resourceType": "virtual_router",
                "speed": 1000,
            },
        },
    }
    data.update(overrides)
    return {"message": "Found Product " + uid, "terms": "", "data": data}


@pytest.fixture
def mcr_payload():
    """Factory for /v2/product/<uid> response bodies."""
    return _mcr_payload
