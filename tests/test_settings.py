"""Tests for central configuration settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from config.settings import (
    AppSettings,
    MegaportSettings,
    ProvisioningSettings,
    get_settings,
)


def _env_without(*prefixes):
    return {k: v for k, v in os.environ.items() if not k.startswith(prefixes)}


class TestMegaportSettings:
    def test_defaults(self):
        with patch.dict(os.environ, _env_without("MEGAPORT_"), clear=True):
            settings = MegaportSettings()
            assert settings.environment == "staging"
            assert settings.resolved_base_url == "https://api-staging.megaport.com"
            assert settings.username == ""
            assert settings.request_timeout == 30
            assert settings.login_attempts == 3

    def test_environment_selects_endpoint(self):
        with patch.dict(os.environ, {"MEGAPORT_ENVIRONMENT": "Production"}, clear=False):
            settings = MegaportSettings()
            assert settings.environment == "production"
            assert settings.resolved_base_url == "https://api.megaport.com"

    def test_base_url_override(self):
        with patch.dict(os.environ, {"MEGAPORT_BASE_URL": "https://mock.example/"}, clear=False):
            assert MegaportSettings().resolved_base_url == "https://mock.example"

    def test_unknown_environment_rejected(self):
        with patch.dict(os.environ, {"MEGAPORT_ENVIRONMENT": "qa"}, clear=False):
            with pytest.raises(ValidationError, match="Unknown environment"):
                MegaportSettings()


class TestProvisioningSettings:
    def test_defaults(self):
        with patch.dict(os.environ, _env_without("MCR_"), clear=True):
            settings = ProvisioningSettings()
            assert settings.poll_attempts == 30
            assert settings.poll_interval == 10.0

    def test_env_override(self):
        with patch.dict(os.environ, {"MCR_POLL_ATTEMPTS": "5", "MCR_POLL_INTERVAL": "0"}, clear=False):
            settings = ProvisioningSettings()
            assert settings.poll_attempts == 5
            assert settings.poll_interval == 0

    def test_zero_attempts_rejected(self):
        with patch.dict(os.environ, {"MCR_POLL_ATTEMPTS": "0"}, clear=False):
            with pytest.raises(ValidationError, match="MCR_POLL_ATTEMPTS"):
                ProvisioningSettings()


class TestSecretStr:
    def test_secret_not_in_repr(self):
        with patch.dict(os.environ, {"MEGAPORT_PASSWORD": "super-secret"}, clear=False):
            settings = MegaportSettings()
            repr_str = repr(settings)
            assert "super-secret" not in repr_str
            assert "**" in repr_str

    def test_secret_value_accessible(self):
        with patch.dict(os.environ, {"MEGAPORT_API_TOKEN": "tok"}, clear=False):
            assert MegaportSettings().api_token.get_secret_value() == "tok"


class TestGetSettings:
    def test_singleton(self):
        s1 = get_settings()
        s2 = get_settings()
        assert s1 is s2

    def test_cache_clear_resets(self):
        s1 = get_settings()
        get_settings.cache_clear()
        s2 = get_settings()
        assert s2 is not s1

    def test_nested_groups_initialized(self):
        s = get_settings()
        assert isinstance(s, AppSettings)
        assert s.megaport is not None
        assert s.provisioning is not None
