"""Configuration store backed by a single JSON file.

The file is the single source of truth: nothing is cached between calls,
every load re-reads it and every save rewrites it. There is no locking,
so two processes saving at the same time race and the last write wins.

The file holds the api key, so a newly created file is readable by the
current user only (0600). Saving over an existing file keeps its mode.
"""

import contextlib
import json
import logging
import os
import stat
import tempfile
from pathlib import Path

from .errors import ConfigIOError, ParseError, SerializationError, STEP_CONFIG
from .models import ConfigDefaults, Configuration
from .paths import get_config_path

logger = logging.getLogger(__name__)


class ConfigStore:
    """Loads and saves the client configuration."""

    def __init__(self, config_path: Path | None = None, defaults: ConfigDefaults | None = None):
        """Initialize config store.

        Args:
            config_path: Location of the config file. Defaults to the
                per-user application config path.
            defaults: Values used for fields missing from the file.
        """
        self.config_path = config_path if config_path is not None else get_config_path()
        self.defaults = defaults if defaults is not None else ConfigDefaults()

    @property
    def path(self) -> Path:
        """Get the config file path."""
        return self.config_path

    def _ensure_dir(self) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigIOError(
                f"cannot create config directory {self.config_path.parent}: {e}"
            ) from e

    def load(self) -> Configuration:
        """Load configuration from file.

        A missing file yields the defaults and is not created.
        """
        self._ensure_dir()

        if not self.config_path.exists():
            logger.debug(f"No config file at {self.config_path}, using defaults")
            return Configuration.from_defaults(self.defaults)

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise ParseError(f"config file is not valid UTF-8: {e}", STEP_CONFIG) from e
        except OSError as e:
            raise ConfigIOError(f"cannot read config file {self.config_path}: {e}") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ParseError(f"config file is not valid JSON: {e}", STEP_CONFIG) from e

        config = Configuration.from_dict(data, self.defaults)
        logger.debug(f"Loaded config from {self.config_path}")
        return config

    def save(self, config: Configuration) -> None:
        """Save configuration to file.

        The document is written to a temporary file in the same directory
        and renamed over the target, so readers never see a partial file.
        """
        try:
            content = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"cannot encode config: {e}") from e

        self._ensure_dir()

        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.config_path.parent,
                prefix=f".{self.config_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = f.name
                f.write(content)
                f.write("\n")
            if self.config_path.exists():
                os.chmod(tmp_path, stat.S_IMODE(os.stat(self.config_path).st_mode))
            os.replace(tmp_path, self.config_path)
        except OSError as e:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
            raise ConfigIOError(f"cannot write config file {self.config_path}: {e}") from e

        logger.info(f"Config saved to {self.config_path}")

    @staticmethod
    def server_url(config: Configuration) -> str:
        """Format the server location as host:port (no scheme)."""
        return f"{config.server.host}:{config.server.port}"
