"""
Platform / device selector — asks where to preview the component.

Two steps: pick a platform from the catalog, then (for iOS and Android)
name the device.  The device prompt distinguishes a dismissed prompt
(cancel) from an empty submission (keep the current target):

    remembered device, remember_device on   → provisional target = remembered
    otherwise                               → provisional target = built-in default
    input ""                                → provisional target, store untouched
    input "name"                            → "name", stored for next time
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from lwcpreview.adapters.base import Prompter
from lwcpreview.core.errors import SelectionCancelled
from lwcpreview.core.models.platform import PlatformOption
from lwcpreview.core.services.device_memory import DeviceMemory
from lwcpreview.core.services.messages import Messages

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """Resolved platform and device target (empty for Desktop)."""

    platform: PlatformOption
    target: str


class PlatformSelector:
    """Interactive platform and device elicitation."""

    def __init__(
        self,
        prompter: Prompter,
        memory: DeviceMemory,
        messages: Messages | None = None,
    ):
        self._prompter = prompter
        self._memory = memory
        self._messages = messages or Messages()

    def select(
        self,
        catalog: Sequence[PlatformOption],
        remember_enabled: bool,
    ) -> Selection:
        """Run both steps.

        Raises:
            SelectionCancelled: The user dismissed either prompt.
        """
        platform = self._prompter.pick(
            catalog,
            self._messages.localize("lwc_preview_platform_selection"),
        )
        if platform is None:
            raise SelectionCancelled("platform")

        if platform.is_desktop:
            return Selection(platform=platform, target="")

        return Selection(platform=platform, target=self._choose_device(platform, remember_enabled))

    def _choose_device(self, platform: PlatformOption, remember_enabled: bool) -> str:
        target = platform.default_target_name
        placeholder = self._messages.localize(f"{platform.message_prefix}_target_default")

        last_target = self._memory.get(platform.platform_name)
        if remember_enabled and last_target:
            placeholder = self._messages.localize(
                f"{platform.message_prefix}_target_remembered", last_target,
            )
            target = last_target

        entered = self._prompter.input_box(placeholder)
        if entered is None:
            raise SelectionCancelled("device", platform)

        if entered != "":
            self._memory.set(platform.platform_name, entered)
            target = entered

        logger.debug("Selected %s target %r", platform.platform_name, target)
        return target
