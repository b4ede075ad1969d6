"""Path utilities for the per-user configuration location."""

import os
import sys
from pathlib import Path

from .constants import (
    APP_CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    PLATFORM_MACOS,
    PLATFORM_WINDOWS,
)


def get_user_config_dir() -> Path:
    """Get the platform's per-user configuration root.

    - macOS: ~/Library/Application Support
    - Windows: %APPDATA% (falls back to ~/AppData/Roaming)
    - Others: $XDG_CONFIG_HOME (falls back to ~/.config)
    """
    if sys.platform == PLATFORM_MACOS:
        return Path.home() / 'Library' / 'Application Support'
    elif sys.platform == PLATFORM_WINDOWS:
        appdata = os.environ.get('APPDATA')
        if appdata:
            return Path(appdata)
        return Path.home() / 'AppData' / 'Roaming'
    else:
        xdg_config = os.environ.get('XDG_CONFIG_HOME')
        if xdg_config:
            return Path(xdg_config)
        return Path.home() / '.config'


def get_config_dir() -> Path:
    """Get the application configuration directory.

    Does not create the directory; the config store creates it on
    every load and save.
    """
    return get_user_config_dir() / APP_CONFIG_DIR_NAME


def get_config_path() -> Path:
    """Get the main config file path."""
    return get_config_dir() / CONFIG_FILE_NAME
