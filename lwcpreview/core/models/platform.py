"""
Platform catalog — the preview targets a user can pick from.

Each option carries the message keys for its label and description,
the platform name passed to ``sfdx -p`` and the built-in device the
plugin falls back to.  The catalogs are ordered: order is the order
the options are presented in.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PlatformId(str, Enum):
    """Stable identifier of a preview platform."""

    DESKTOP = "desktop"
    IOS = "ios"
    ANDROID = "android"


class PlatformOption(BaseModel):
    """One entry in the platform picker."""

    model_config = ConfigDict(frozen=True)

    id: PlatformId
    label_key: str
    description_key: str
    platform_name: str = ""         # empty for Desktop
    default_target_name: str = ""   # empty for Desktop
    picked: bool = False            # pre-selected in the picker

    @property
    def is_desktop(self) -> bool:
        return self.id is PlatformId.DESKTOP

    @property
    def message_prefix(self) -> str:
        """Prefix of the per-platform message keys (``lwc_preview_<id>``)."""
        return f"lwc_preview_{self.id.value}"


DESKTOP = PlatformOption(
    id=PlatformId.DESKTOP,
    label_key="lwc_preview_desktop_label",
    description_key="lwc_preview_desktop_description",
    picked=True,
)

IOS = PlatformOption(
    id=PlatformId.IOS,
    label_key="lwc_preview_ios_label",
    description_key="lwc_preview_ios_description",
    platform_name="iOS",
    default_target_name="SFDXSimulator",
)

ANDROID = PlatformOption(
    id=PlatformId.ANDROID,
    label_key="lwc_preview_android_label",
    description_key="lwc_preview_android_description",
    platform_name="Android",
    default_target_name="SFDXEmulator",
)

# Mobile-only variant: always launches the mobile tool.
MOBILE_CATALOG: tuple[PlatformOption, ...] = (ANDROID, IOS)

# Full variant: Desktop first and pre-selected.
FULL_CATALOG: tuple[PlatformOption, ...] = (DESKTOP, IOS, ANDROID)


def catalog_for(platforms: str) -> tuple[PlatformOption, ...]:
    """Return the catalog for a ``platforms`` setting (``mobile`` or ``all``)."""
    if platforms == "all":
        return FULL_CATALOG
    return MOBILE_CATALOG


def find_platform(
    name: str,
    catalog: tuple[PlatformOption, ...] = FULL_CATALOG,
) -> PlatformOption | None:
    """Look up a catalog entry by id or platform name (case-insensitive)."""
    wanted = name.strip().lower()
    if not wanted:
        return None
    for option in catalog:
        if wanted in (option.id.value, option.platform_name.lower()):
            return option
    return None
