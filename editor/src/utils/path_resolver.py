"""Path resolver for per-user configuration files.

Works the same in development and in a PyInstaller frozen executable since
everything lives under the user's home directory.
"""

import os
from pathlib import Path

from constants import CONFIG_DIR_NAME, CONFIG_FILE_NAME


def get_config_dir() -> Path:
    """Per-user settings directory (~/.tonie_cropper).

    TONIE_CROPPER_CONFIG_DIR overrides the location.

    Returns:
        Path: Directory holding config.json
    """
    override = os.environ.get('TONIE_CROPPER_CONFIG_DIR')
    if override:
        return Path(override)
    return Path(os.path.expanduser("~")) / CONFIG_DIR_NAME


def get_config_file() -> Path:
    return get_config_dir() / CONFIG_FILE_NAME
