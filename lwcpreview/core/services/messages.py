"""
User-facing text — message templates keyed by stable identifiers.

Templates use ``%s`` placeholders.  Each key names one message in one
situation; the per-platform keys (``lwc_preview_<platform>_*``) are
looked up by prefix.  A translation only has to replace the values of
this table.  A locale file (YAML mapping of key → template) overrides any
subset of the keys.

Conventions:
    ``*_text``     command titles shown in the UI
    everything else is a message shown as-is
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

MESSAGES: dict[str, str] = {
    "command_failure": "%s failed to run.",
    "command_success": "%s successfully ran.",
    "command_executed": "Executed: %s",
    "lwc_preview_text": "SFDX: Preview Component Locally",
    # ── Input / target resolution ──
    "lwc_preview_file_undefined": (
        "Can't find the Lightning Web Components module. "
        "Check that %s is the correct file path."
    ),
    "lwc_preview_file_nonexist": (
        "Can't find the Lightning Web Components module in %s. "
        "Check that the module exists."
    ),
    "lwc_preview_unsupported": (
        "Something's not right with the file path. The local development server "
        "doesn't recognize the Lightning Web Components module '%s.'"
    ),
    # ── Selection ──
    "lwc_preview_platform_selection": "Select the platform to preview the component",
    "lwc_preview_platform_cancelled": "Preview platform selection cancelled.",
    "lwc_preview_device_cancelled": "Device target selection cancelled.",
    # ── Desktop ──
    "lwc_preview_desktop_label": "Use Desktop Browser",
    "lwc_preview_desktop_description": "Preview component on desktop",
    "lwc_preview_desktop_start": "Opening %s in the browser.",
    "lwc_preview_desktop_failure": "Couldn't open %s in the browser.",
    # ── iOS ──
    "lwc_preview_ios_label": "Use iOS Simulator",
    "lwc_preview_ios_description": "Preview component on iOS",
    "lwc_preview_ios_target_default": (
        "Enter the name for an iOS simulator (leave blank for default SFDXSimulator)"
    ),
    "lwc_preview_ios_target_remembered": "Enter the name of a new iOS simulator (leave blank for %s)",
    "lwc_preview_ios_cancelled": "iOS simulator preview cancelled.",
    "lwc_preview_ios_start": "Starting the iOS simulator %s.",
    "lwc_preview_ios_failure": "Something went wrong when starting the iOS simulator %s.",
    # ── Android ──
    "lwc_preview_android_label": "Use Android Emulator",
    "lwc_preview_android_description": "Preview component on Android",
    "lwc_preview_android_target_default": (
        "Enter the name for an Android emulator (leave blank for default SFDXEmulator)"
    ),
    "lwc_preview_android_target_remembered": (
        "Enter the name of a new Android emulator (leave blank for %s)"
    ),
    "lwc_preview_android_cancelled": "Android emulator preview cancelled.",
    "lwc_preview_android_start": "Starting the Android emulator %s.",
    "lwc_preview_android_failure": "Something went wrong when starting the Android emulator %s.",
    # ── Process outcome ──
    "lwc_preview_tool_not_installed": "The sfdx mobile preview plugin isn't installed.",
    "lwc_preview_tool_install_instructions": (
        "To install it, run: sfdx plugins:install @salesforce/lwc-dev-mobile"
    ),
    "lwc_preview_recent_output": "Most recent output from %s:",
    "lwc_preview_process_cancelled": "Stopped: %s",
    # ── Dev server ──
    "lwc_preview_dev_server_starting": "Starting the local development server.",
    "lwc_preview_dev_server_running": "The local development server is already running.",
    "lwc_preview_dev_server_starting_for_device": (
        "Starting the local development server for the %s preview."
    ),
    "lwc_preview_dev_server_failure": "The local development server at %s stopped.",
    "lwc_preview_dev_server_not_up": (
        "The local development server at %s stopped before it was ready. "
        "The device preview was not started."
    ),
}


class Messages:
    """Message table with optional locale overrides."""

    def __init__(self, overrides: dict[str, str] | None = None):
        self._table = dict(MESSAGES)
        if overrides:
            unknown = sorted(set(overrides) - set(MESSAGES))
            if unknown:
                logger.warning("Ignoring unknown message keys: %s", ", ".join(unknown))
            self._table.update({k: v for k, v in overrides.items() if k in MESSAGES})

    @classmethod
    def from_locale_file(cls, path: Path | None) -> Messages:
        """Build a table from a YAML locale file (None → built-in text)."""
        if path is None:
            return cls()
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Cannot load locale file %s: %s — using built-in text", path, e)
            return cls()
        if not isinstance(data, dict):
            logger.warning("Locale file %s is not a mapping — using built-in text", path)
            return cls()
        return cls({str(k): str(v) for k, v in data.items()})

    def localize(self, key: str, *args: object) -> str:
        """Format the template for ``key`` with ``args``.

        Missing arguments render as empty strings, extra ones are
        appended, so a bad translation never breaks a command.
        """
        template = self._table[key]
        expected = template.count("%s")
        values = [str(a) if a is not None else "" for a in args]
        if len(values) < expected:
            values += [""] * (expected - len(values))
        text = template % tuple(values[:expected]) if expected else template
        if len(values) > expected:
            text = " ".join([text, *values[expected:]])
        return text
