"""
Shared fixtures for the gateway tests.
"""

from django.apps import apps
from gateway.bbb.signer import GatewayConfig
from gateway.store import DemoStore
import pytest

from tests.responses import API_SECRET, SERVER_URL


@pytest.fixture
def config() -> GatewayConfig:
    return GatewayConfig(server_base_url=SERVER_URL, api_secret=API_SECRET)

@pytest.fixture
def gateway_settings(settings):
    settings.CLASSROOM_BBB_SERVER_URL = SERVER_URL
    settings.CLASSROOM_BBB_API_SECRET = API_SECRET
    settings.CLASSROOM_BBB_CHECKSUM_ALGORITHM = "sha1"
    settings.CLASSROOM_JITSI_DOMAIN = "meet.example.org"
    return settings

@pytest.fixture
def store(tmp_path) -> DemoStore:
    """Fresh demo store with a temporary recordings directory."""
    app_config = apps.get_app_config("gateway")
    previous = app_config.store
    app_config.store = DemoStore(str(tmp_path))
    yield app_config.store
    app_config.store = previous
