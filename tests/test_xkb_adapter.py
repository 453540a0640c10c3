"""Tests for the xkbcommon-backed keyboard description (the live classes need XKB data)."""

from __future__ import annotations

import io
from unittest.mock import MagicMock

import pytest

xkb = pytest.importorskip("xkbcommon.xkb")

from xkbconv.core.converter import convert_xkb_keymap  # noqa: E402
from xkbconv.core.errors import KeymapCompileError  # noqa: E402
from xkbconv.kernel.keymap import KernelKeymap  # noqa: E402
from xkbconv.platform.description import KeymapNames  # noqa: E402
from xkbconv.platform.xkb_adapter import XkbcommonKeyboard  # noqa: E402


class TestQueryDelegation:
    """Keymap queries go straight to the binding's Keymap object."""

    def test_mods_for_level(self):
        keymap = MagicMock()
        keymap.key_get_mods_for_level.return_value = [1, 2]
        kb = XkbcommonKeyboard(keymap)
        assert kb.key_get_mods_for_level(38, 0, 1) == [1, 2]
        keymap.key_get_mods_for_level.assert_called_once_with(38, 0, 1)
        keymap.state_new.assert_not_called()

    def test_syms_by_level(self):
        keymap = MagicMock()
        keymap.key_get_syms_by_level.return_value = [0x61]
        assert XkbcommonKeyboard(keymap).key_get_syms_by_level(38, 0, 0) == [0x61]
        keymap.key_get_syms_by_level.assert_called_once_with(38, 0, 0)

    def test_empty_layout_name(self):
        keymap = MagicMock()
        keymap.layout_get_name.return_value = None
        assert XkbcommonKeyboard(keymap).layout_get_name(0) == ""


@pytest.fixture(scope="module")
def us_ru():
    return XkbcommonKeyboard.from_names(KeymapNames(model="pc105", layout="us,ru"))


@pytest.mark.live
class TestXkbcommonKeyboard:

    def test_layouts(self, us_ru):
        assert us_ru.num_layouts() == 2
        assert us_ru.layout_get_name(0).startswith("English")

    def test_keycode_range(self, us_ru):
        assert us_ru.min_keycode() <= 9
        assert us_ru.max_keycode() >= 38

    def test_letter_key(self, us_ru):
        assert us_ru.num_levels_for_key(38, 0) >= 2
        assert list(us_ru.key_get_syms_by_level(38, 0, 0)) == [0x61]
        assert list(us_ru.key_get_mods_for_level(38, 0, 0))[0] == 0

    def test_keysym_names(self, us_ru):
        assert us_ru.keysym_get_name(0x61) == "a"
        assert us_ru.keysym_to_utf32(0x61) == 0x61
        assert us_ru.keysym_to_utf32(0xfe08) == 0

    def test_modifier_names(self, us_ru):
        names = [us_ru.mod_get_name(i) for i in range(us_ru.num_mods())]
        assert "Shift" in names
        assert "Lock" in names

    def test_unknown_layout(self):
        with pytest.raises(KeymapCompileError):
            XkbcommonKeyboard.from_names(KeymapNames(layout="no-such-layout-xyz"))


@pytest.mark.live
class TestLiveConversion:

    def test_us_keymap(self):
        keymap = KernelKeymap()
        out = io.StringIO()
        convert_xkb_keymap(keymap, {'model': 'pc105', 'layout': 'us'},
                           print_table=True, out=out)
        dump = out.getvalue()
        assert "keycode  30 = +a" in dump
        assert "\tshift\tkeycode  30 = +A" in dump
