"""
Configuration loader — reads .lwcpreview.yml into PreviewSettings.

The settings file is optional: without one every key takes its
default.  A file that exists but cannot be read, is not valid YAML,
or does not match the schema raises ConfigError.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lwcpreview.core.models.preview import CLI_CONTRACTS, CliContract

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = ".lwcpreview.yml"

# Default per-user state directory (store, output log, telemetry)
DEFAULT_STATE_DIR = Path.home() / ".lwcpreview"


class ConfigError(Exception):
    """Raised when the settings file is unreadable or invalid."""


class PreviewSettings(BaseModel):
    """Effective settings for a preview invocation.

    ``rememberDevice`` and ``logLevel`` are accepted as aliases so a
    settings block copied from an editor configuration still loads.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    remember_device: bool = Field(default=False, alias="rememberDevice")
    log_level: str = Field(default="warn", alias="logLevel")
    platforms: Literal["mobile", "all"] = "mobile"
    cli_contract: Literal["lwc", "local"] = Field(default="lwc", alias="cliContract")
    executable: str = "sfdx"
    dev_server_url: str = Field(default="http://localhost:3333", alias="devServerUrl")
    namespace: str = "c"
    telemetry: bool = True
    locale: str | None = None   # YAML file overriding message templates

    @property
    def contract(self) -> CliContract:
        return CLI_CONTRACTS[self.cli_contract]

    @property
    def include_desktop(self) -> bool:
        return self.platforms == "all"


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for .lwcpreview.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the settings file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> PreviewSettings:
    """Load and validate preview settings.

    Args:
        path: Explicit settings file. If None, uses LWCP_CONFIG or
            searches upward from the working directory.

    Returns:
        Validated PreviewSettings (defaults when no file is found).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None and os.environ.get("LWCP_CONFIG"):
        path = Path(os.environ["LWCP_CONFIG"])

    if path is None:
        path = find_settings_file()
        if path is None:
            logger.debug("No %s found — using default settings", SETTINGS_FILE)
            return PreviewSettings()

    if not path.is_file():
        raise ConfigError(f"Settings file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return PreviewSettings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Settings may sit under a "preview" key or be flat
    if isinstance(data.get("preview"), dict):
        data = data["preview"]

    try:
        settings = PreviewSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info(
        "Loaded settings from %s (platforms=%s, contract=%s)",
        path, settings.platforms, settings.cli_contract,
    )
    return settings


def resolve_state_dir(explicit: Path | None = None) -> Path:
    """Pick the state directory: explicit > LWCP_HOME > ~/.lwcpreview."""
    if explicit is not None:
        return explicit
    env_home = os.environ.get("LWCP_HOME")
    if env_home:
        return Path(env_home)
    return DEFAULT_STATE_DIR
