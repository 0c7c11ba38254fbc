"""
Tests for platform and device selection.
"""

import pytest

from lwcpreview.adapters.mock import CANCEL, ScriptedPrompter
from lwcpreview.core.errors import SelectionCancelled
from lwcpreview.core.models.platform import (
    ANDROID,
    DESKTOP,
    FULL_CATALOG,
    IOS,
    MOBILE_CATALOG,
    catalog_for,
    find_platform,
)
from lwcpreview.core.services.device_memory import DeviceMemory
from lwcpreview.core.services.messages import Messages
from lwcpreview.core.services.platform_selector import PlatformSelector


def _select(store, platform, device="", remember=True, catalog=MOBILE_CATALOG):
    prompter = ScriptedPrompter(platform=platform, device=device)
    selector = PlatformSelector(prompter, DeviceMemory(store), Messages())
    return selector.select(catalog, remember), prompter


class TestCatalog:
    def test_mobile_catalog_order(self):
        assert catalog_for("mobile") == (ANDROID, IOS)

    def test_full_catalog_desktop_first_and_picked(self):
        assert catalog_for("all") == FULL_CATALOG
        assert FULL_CATALOG[0] is DESKTOP
        assert DESKTOP.picked

    def test_defaults(self):
        assert IOS.default_target_name == "SFDXSimulator"
        assert ANDROID.default_target_name == "SFDXEmulator"
        assert IOS.platform_name == "iOS"

    def test_find_platform(self):
        assert find_platform("ANDROID") is ANDROID
        assert find_platform("ios") is IOS
        assert find_platform("desktop", MOBILE_CATALOG) is None
        assert find_platform("") is None


class TestPlatformStep:
    def test_cancel_raises(self, store):
        with pytest.raises(SelectionCancelled) as exc_info:
            _select(store, CANCEL)
        assert exc_info.value.step == "platform"

    def test_picker_receives_catalog_and_placeholder(self, store):
        _, prompter = _select(store, "android")
        options, placeholder = prompter.pick_calls[0]
        assert options == list(MOBILE_CATALOG)
        assert placeholder == Messages().localize("lwc_preview_platform_selection")

    def test_desktop_skips_device_prompt(self, store):
        selection, prompter = _select(store, "desktop", catalog=FULL_CATALOG)
        assert selection.platform is DESKTOP
        assert selection.target == ""
        assert prompter.input_calls == []


class TestDeviceStep:
    def test_empty_input_uses_default(self, store):
        selection, prompter = _select(store, "android", device="")
        assert selection.target == "SFDXEmulator"
        assert prompter.input_calls == [
            Messages().localize("lwc_preview_android_target_default")
        ]

    def test_empty_input_does_not_write(self, store):
        _select(store, "android", device="")
        assert store.items() == {}

    def test_named_device_is_remembered(self, store):
        selection, _ = _select(store, "ios", device="iostestname")
        assert selection.target == "iostestname"
        assert store.get("lastiOSDevice") == "iostestname"

    def test_named_device_written_even_when_remember_off(self, store):
        _select(store, "ios", device="iPhone 15", remember=False)
        assert store.get("lastiOSDevice") == "iPhone 15"

    def test_remembered_device_offered(self, store):
        DeviceMemory(store).set("Android", "Pixel_5")
        selection, prompter = _select(store, "android", device="")
        assert selection.target == "Pixel_5"
        assert "Pixel_5" in prompter.input_calls[0]

    def test_remembered_device_ignored_when_remember_off(self, store):
        DeviceMemory(store).set("Android", "Pixel_5")
        selection, prompter = _select(store, "android", device="", remember=False)
        assert selection.target == "SFDXEmulator"
        assert "Pixel_5" not in prompter.input_calls[0]

    def test_new_name_replaces_remembered(self, store):
        DeviceMemory(store).set("Android", "Pixel_5")
        selection, _ = _select(store, "android", device="Pixel_7")
        assert selection.target == "Pixel_7"
        assert store.get("lastAndroidDevice") == "Pixel_7"

    def test_cancel_raises_with_platform(self, store):
        with pytest.raises(SelectionCancelled) as exc_info:
            _select(store, "ios", device=CANCEL)
        assert exc_info.value.step == "device"
        assert exc_info.value.platform is IOS

    def test_cancel_does_not_write(self, store):
        with pytest.raises(SelectionCancelled):
            _select(store, "ios", device=CANCEL)
        assert store.items() == {}


class TestDeviceInputVerbatim:
    def test_padded_name_kept_as_typed(self, store):
        selection, _ = _select(store, "android", device=" My Pixel ")
        assert selection.target == " My Pixel "
        assert store.get("lastAndroidDevice") == " My Pixel "

    def test_whitespace_only_is_a_name(self, store):
        selection, _ = _select(store, "ios", device="   ")
        assert selection.target == "   "
        assert store.get("lastiOSDevice") == "   "
