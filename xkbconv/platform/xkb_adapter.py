"""XkbcommonKeyboard — IKeyboardDescription backed by the xkbcommon bindings."""

from __future__ import annotations

import logging
from typing import Sequence

from xkbcommon import xkb

from xkbconv.core.errors import KeymapCompileError
from xkbconv.platform.description import IKeyboardDescription, KeymapNames

logger = logging.getLogger(__name__)


class XkbcommonKeyboard(IKeyboardDescription):
    """Keyboard description compiled by libxkbcommon."""

    def __init__(self, keymap) -> None:
        self._keymap = keymap

    @classmethod
    def from_names(cls, names: KeymapNames) -> "XkbcommonKeyboard":
        """Compile a keymap from RMLVO names.

        Empty fields are passed as None so libxkbcommon applies its defaults.
        """
        try:
            context = xkb.Context()
            keymap = context.keymap_new_from_names(
                rules=names.rules or None,
                model=names.model or None,
                layout=names.layout or None,
                variant=names.variant or None,
                options=names.options or None,
            )
        except xkb.XKBError as exc:
            logger.warning("xkb_keymap_new_from_names failed: %s", exc)
            raise KeymapCompileError(f"failed to compile keymap {names}: {exc}") from exc
        return cls(keymap)

    def num_layouts(self) -> int:
        return self._keymap.num_layouts()

    def layout_get_name(self, layout: int) -> str:
        return self._keymap.layout_get_name(layout) or ""

    def min_keycode(self) -> int:
        return self._keymap.min_keycode()

    def max_keycode(self) -> int:
        return self._keymap.max_keycode()

    def num_levels_for_key(self, keycode: int, layout: int) -> int:
        return self._keymap.num_levels_for_key(keycode, layout)

    def key_get_syms_by_level(self, keycode: int, layout: int, level: int) -> Sequence[int]:
        return self._keymap.key_get_syms_by_level(keycode, layout, level)

    def key_get_mods_for_level(self, keycode: int, layout: int, level: int) -> Sequence[int]:
        return self._keymap.key_get_mods_for_level(keycode, layout, level)

    def num_mods(self) -> int:
        return self._keymap.num_mods()

    def mod_get_name(self, mod: int) -> str:
        return self._keymap.mod_get_name(mod)

    def keysym_get_name(self, keysym: int) -> str | None:
        try:
            return xkb.keysym_get_name(keysym)
        except xkb.XKBInvalidKeysym:
            return None

    def keysym_to_utf32(self, keysym: int) -> int:
        text = xkb.keysym_to_string(keysym)
        if not text or len(text) != 1:
            return 0
        return ord(text)
