"""
Device memory — the last device name used per platform.

A thin facade over the persistent store that owns the key naming
convention (``last<PlatformName>Device``).  Values are stored verbatim;
there is no validation and no expiry.
"""

from __future__ import annotations

import logging

from lwcpreview.core.persistence.state_file import GlobalStore

logger = logging.getLogger(__name__)


def device_key(platform_name: str) -> str:
    """Store key for a platform, e.g. ``lastAndroidDevice``."""
    return f"last{platform_name}Device"


class DeviceMemory:
    """Remembered device names, keyed by platform name."""

    def __init__(self, store: GlobalStore):
        self._store = store

    def get(self, platform_name: str) -> str:
        return self._store.get(device_key(platform_name), "")

    def set(self, platform_name: str, value: str) -> None:
        logger.debug("Remembering %s device %r", platform_name, value)
        self._store.update(device_key(platform_name), value)

    def forget(self, platform_name: str) -> bool:
        """Drop the remembered device. Returns False if none was set."""
        return self._store.delete(device_key(platform_name))
