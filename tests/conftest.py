"""Shared pytest fixtures for Prizm Client tests."""

import pytest

from prizm_client.config_store import ConfigStore
from prizm_client.models import ClientConfig, Configuration, ServerConfig, TrayConfig


@pytest.fixture
def config_path(tmp_path):
    """Provide a config file path inside a not-yet-existing directory."""
    return tmp_path / "prizm-client" / "config.json"


@pytest.fixture
def config_store(config_path):
    """Provide a ConfigStore writing to a temporary location."""
    return ConfigStore(config_path)


@pytest.fixture
def server_url():
    """Provide a consistent server URL."""
    return "http://test-server:4127"


@pytest.fixture
def sample_config():
    """Provide a non-default Configuration."""
    return Configuration(
        server=ServerConfig(host="10.0.0.5", port="9000"),
        client=ClientConfig(
            name="workstation",
            auto_register=False,
            requested_scopes=["default", "online"],
        ),
        api_key="key-abc",
        tray=TrayConfig(enabled=True, minimize_to_tray=False, show_notification=True),
    )
