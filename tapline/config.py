# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
import os
from pathlib import Path

import yaml

from tapline.core.deprecation import set_deprecation_warnings
from tapline.core.types import Settings
from tapline.logging import configure_logging


DEFAULT_SETTINGS_PATH = Path("settings.tapline.yaml")


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from a YAML file.

    Resolution order:
    1. Explicit config_path parameter (if provided)
    2. TAPLINE_SETTINGS environment variable (if set)
    3. Default: 'settings.tapline.yaml' in the current directory

    Args:
        config_path: Optional explicit path to the configuration file.

    Returns:
        Settings object populated from the YAML configuration, or defaults
        when no file was named and the default file does not exist.

    Raises:
        FileNotFoundError: If an explicitly named configuration file does not exist.
        yaml.YAMLError: If the YAML file is malformed.
        pydantic.ValidationError: If the configuration fails validation.
    """
    if config_path is None:
        env_path = os.environ.get("TAPLINE_SETTINGS")
        if env_path:
            config_path = Path(env_path)
        elif DEFAULT_SETTINGS_PATH.exists():
            config_path = DEFAULT_SETTINGS_PATH
        else:
            return Settings()

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found at {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f)

    # An empty file loads as None
    return Settings(**(data or {}))


def apply_settings(settings: Settings) -> None:
    """Apply settings to logging and the deprecation warning switch.

    Args:
        settings: Settings to apply.
    """
    configure_logging(settings.log_level)
    set_deprecation_warnings(settings.deprecation_warnings)
