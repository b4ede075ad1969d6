"""Tests for prizm_client.config_store module."""

import json
import os
import stat
import sys

import pytest

from prizm_client.config_store import ConfigStore
from prizm_client.errors import ConfigIOError, ParseError
from prizm_client.models import ConfigDefaults, Configuration, ClientConfig, ServerConfig


class TestConfigStoreInit:
    """Test cases for ConfigStore initialization."""

    def test_init(self, config_path):
        store = ConfigStore(config_path)

        assert store.config_path == config_path
        assert store.path == config_path
        assert store.defaults == ConfigDefaults()

    def test_default_path(self, monkeypatch, tmp_path):
        """Test store uses the per-user config path when none is given."""
        monkeypatch.setattr("prizm_client.config_store.get_config_path", lambda: tmp_path / "c.json")

        store = ConfigStore()

        assert store.path == tmp_path / "c.json"


class TestConfigLoad:
    """Test cases for load() method."""

    def test_load_nonexistent_file_returns_defaults(self, config_store, config_path):
        """Test loading a missing file returns defaults without creating it."""
        config = config_store.load()

        assert config == Configuration()
        assert config.server.host == "127.0.0.1"
        assert config.server.port == "4127"
        assert config.client.name == "Prizm Tauri Client"
        assert config.client.auto_register is True
        assert config.client.requested_scopes == ["default"]
        assert config.api_key == ""
        assert config.tray.enabled is True

        assert not config_path.exists()

    def test_load_creates_directory(self, config_store, config_path):
        config_store.load()

        assert config_path.parent.is_dir()

    def test_load_existing_file(self, config_store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({
            "server": {"host": "example.com", "port": "8080"},
            "client": {"name": "c1", "auto_register": False, "requested_scopes": ["a", "b"]},
            "api_key": "k1",
            "tray": {"enabled": False, "minimize_to_tray": True, "show_notification": False},
        }))

        config = config_store.load()

        assert config.server.host == "example.com"
        assert config.server.port == "8080"
        assert config.client.name == "c1"
        assert config.client.auto_register is False
        assert config.client.requested_scopes == ["a", "b"]
        assert config.api_key == "k1"
        assert config.tray.enabled is False
        assert config.tray.show_notification is False

    def test_load_partial_document_uses_defaults(self, config_store, config_path):
        """Test missing fields are filled with defaults, not empty values."""
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({
            "server": {"host": "example.com"},
            "client": {},
        }))

        config = config_store.load()

        assert config.server.host == "example.com"
        assert config.server.port == "4127"
        assert config.client.name == "Prizm Tauri Client"
        assert config.client.requested_scopes == ["default"]
        assert config.api_key == ""
        assert config.tray.minimize_to_tray is True

    def test_load_empty_host_and_port_use_defaults(self, config_store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('{"server": {"host": "", "port": ""}}')

        config = config_store.load()

        assert config.server.host == "127.0.0.1"
        assert config.server.port == "4127"

    def test_load_empty_json(self, config_store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("{}")

        assert config_store.load() == Configuration()

    def test_load_legacy_string_booleans(self, config_store, config_path):
        """Test files written with "true"/"false" strings still load."""
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({
            "client": {"auto_register": "false"},
            "tray": {"enabled": "true", "minimize_to_tray": "false", "show_notification": "TRUE"},
        }))

        config = config_store.load()

        assert config.client.auto_register is False
        assert config.tray.enabled is True
        assert config.tray.minimize_to_tray is False
        assert config.tray.show_notification is True

    def test_load_with_unicode(self, config_store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(
            json.dumps({"client": {"name": "测试客户端"}}, ensure_ascii=False),
            encoding="utf-8",
        )

        assert config_store.load().client.name == "测试客户端"

    def test_load_ignores_unknown_fields(self, config_store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('{"api_key": "k", "notify_events": ["notification"]}')

        config = config_store.load()

        assert config.api_key == "k"
        assert "notify_events" not in config.to_dict()

    def test_load_invalid_json_raises_parse_error(self, config_store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("{not json")

        with pytest.raises(ParseError) as exc_info:
            config_store.load()

        assert exc_info.value.step == "config"

    def test_load_non_object_raises_parse_error(self, config_store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[1, 2, 3]")

        with pytest.raises(ParseError):
            config_store.load()

    def test_load_wrong_field_type_raises_parse_error(self, config_store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('{"client": {"requested_scopes": "default"}}')

        with pytest.raises(ParseError):
            config_store.load()

    def test_load_invalid_utf8_raises_parse_error(self, config_store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_bytes(b'{"api_key": "\xff\xfe"}')

        with pytest.raises(ParseError):
            config_store.load()

    def test_load_unreadable_path_raises_io_error(self, config_store, config_path):
        """Test a directory in place of the file is reported as an IO error."""
        config_path.mkdir(parents=True)

        with pytest.raises(ConfigIOError):
            config_store.load()

    def test_load_directory_not_creatable(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = ConfigStore(blocker / "config.json")

        with pytest.raises(ConfigIOError):
            store.load()

    def test_load_with_injected_defaults(self, config_path):
        defaults = ConfigDefaults(host="prizm.local", port="5000", client_name="Test Client")
        store = ConfigStore(config_path, defaults=defaults)

        config = store.load()

        assert config.server.host == "prizm.local"
        assert config.server.port == "5000"
        assert config.client.name == "Test Client"


class TestConfigSave:
    """Test cases for save() method."""

    def test_save_creates_file_and_directory(self, config_store, config_path, sample_config):
        config_store.save(sample_config)

        assert config_path.exists()
        saved_data = json.loads(config_path.read_text(encoding="utf-8"))
        assert saved_data == sample_config.to_dict()

    def test_save_writes_exactly_four_fields(self, config_store, config_path):
        config_store.save(Configuration())

        saved_data = json.loads(config_path.read_text(encoding="utf-8"))
        assert list(saved_data) == ["server", "client", "api_key", "tray"]

    def test_save_writes_native_booleans(self, config_store, config_path):
        config_store.save(Configuration())

        saved_data = json.loads(config_path.read_text(encoding="utf-8"))
        assert saved_data["client"]["auto_register"] is True
        assert saved_data["tray"]["enabled"] is True

    def test_save_overwrites_existing(self, config_store, config_path, sample_config):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('{"api_key": "old"}')

        config_store.save(sample_config)

        assert json.loads(config_path.read_text())["api_key"] == "key-abc"

    def test_save_formatted_json(self, config_store, config_path):
        config_store.save(Configuration())

        content = config_path.read_text()
        assert "\n" in content
        assert '  "server"' in content

    def test_save_preserves_unicode(self, config_store, config_path):
        config_store.save(Configuration(client=ClientConfig(name="Привет")))

        assert "Привет" in config_path.read_text(encoding="utf-8")

    def test_save_leaves_no_temp_files(self, config_store, config_path):
        config_store.save(Configuration())
        config_store.save(Configuration(api_key="k2"))

        assert [p.name for p in config_path.parent.iterdir()] == ["config.json"]

    def test_save_unwritable_target_raises_io_error(self, config_store, config_path):
        """Test a directory in place of the file cannot be replaced."""
        config_path.mkdir(parents=True)

        with pytest.raises(ConfigIOError):
            config_store.save(Configuration())

        assert [p.name for p in config_path.parent.iterdir()] == ["config.json"]

    def test_save_cleanup_failure_keeps_io_error(self, config_store, config_path, monkeypatch):
        """Test a failing temp file cleanup does not hide the write error."""
        def failing_replace(src, dst):
            raise OSError("disk full")

        def failing_unlink(path):
            raise PermissionError("cannot remove temp file")

        monkeypatch.setattr("prizm_client.config_store.os.replace", failing_replace)
        monkeypatch.setattr("prizm_client.config_store.os.unlink", failing_unlink)

        with pytest.raises(ConfigIOError) as exc_info:
            config_store.save(Configuration())

        assert "disk full" in str(exc_info.value)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX file modes")
class TestConfigFileMode:
    """Test cases for the permissions of the saved file."""

    def test_new_file_is_private(self, config_store, config_path):
        config_store.save(Configuration(api_key="secret"))

        assert stat.S_IMODE(os.stat(config_path).st_mode) == 0o600

    def test_existing_mode_is_kept(self, config_store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("{}")
        os.chmod(config_path, 0o644)

        config_store.save(Configuration(api_key="secret"))

        assert stat.S_IMODE(os.stat(config_path).st_mode) == 0o644
        assert json.loads(config_path.read_text())["api_key"] == "secret"


class TestRoundTrip:
    """Saving then loading yields the saved value."""

    def test_round_trip(self, config_store, sample_config):
        config_store.save(sample_config)

        assert config_store.load() == sample_config

    def test_round_trip_empty_scopes_and_api_key(self, config_store):
        config = Configuration(client=ClientConfig(requested_scopes=[]), api_key="")

        config_store.save(config)
        loaded = config_store.load()

        assert loaded == config
        assert loaded.client.requested_scopes == []
        assert loaded.api_key == ""

    def test_empty_port_reloads_as_default(self, config_store):
        """Test an empty port, as resolved from "http://host:", is not kept."""
        config_store.save(Configuration(server=ServerConfig(host="host", port="")))

        loaded = config_store.load()

        assert loaded.server.host == "host"
        assert loaded.server.port == "4127"

    def test_load_does_not_cache(self, config_store, config_path, sample_config):
        """Test every load re-reads the file."""
        config_store.save(sample_config)
        config_path.write_text('{"api_key": "edited"}')

        assert config_store.load().api_key == "edited"


class TestServerUrl:
    """Test cases for server_url()."""

    def test_server_url(self, sample_config):
        assert ConfigStore.server_url(sample_config) == "10.0.0.5:9000"

    def test_server_url_defaults(self):
        assert ConfigStore.server_url(Configuration()) == "127.0.0.1:4127"
