"""Diagnostic printer used instead of table building in XKB debug mode.

One line per keymap cell::

    * {English (US)} layout=0 level=1 keycode  42 KEY_LEFTSHIFT = ISO_Next_Group ...
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from xkbconv.core.layouts import slot_for_mask, slot_masks_for_group
from xkbconv.core.modifiers import convert_modifier, xkb_modifier_names
from xkbconv.core.symbols import map_xkbsym_to_ksym
from xkbconv.input.key_names import kernel_key_name
from xkbconv.platform.description import EVDEV_OFFSET, XKB_KEY_ISO_Next_Group

if TYPE_CHECKING:
    from xkbconv.kernel.keymap import IKernelKeymap
    from xkbconv.platform.description import IKeyboardDescription

logger = logging.getLogger(__name__)


class CellPrinter:
    def __init__(self, description: "IKeyboardDescription", keymap: "IKernelKeymap",
                 out: TextIO | None = None) -> None:
        self.description = description
        self.keymap = keymap
        self.out = out or sys.stdout

    def _value_column(self, symname: str, utf32: int) -> str:
        if utf32 == 0:
            value = self.keymap.ksym_to_unicode(symname)
            if value is None:
                return f"{symname:<39}"
            return f"0x{value:04x} {symname:<32}"
        return f"U+{utf32:04x} {symname:<32}"

    def _modifier_columns(self, masks) -> tuple[str, str]:
        xkb_mods = []
        for m, mask in enumerate(masks):
            for mod, name in xkb_modifier_names(self.description, mask):
                xkb_mods.append(f" {m}:{name}({mod})")

        kernel_mods = []
        if masks:
            for _, name in xkb_modifier_names(self.description, masks[0]):
                mapping = convert_modifier(name)
                kernel_mods.append(" " + (mapping.krn_mod if mapping else f"<{name.lower()}>"))
        return "".join(xkb_mods), "".join(kernel_mods)

    def print_cell(self, keycode: int, layout: int, level: int, keysym: int) -> None:
        name = self.description.keysym_get_name(keysym)
        if name is None:
            logger.warning("failed to get name of keysym 0x%x", keysym)
            return

        symname = map_xkbsym_to_ksym(name) or name
        utf32 = self.description.keysym_to_utf32(keysym)
        masks = list(self.description.key_get_mods_for_level(keycode, layout, level))
        xkb_mods, kernel_mods = self._modifier_columns(masks)

        num_layouts = self.description.num_layouts()
        slots = [slot_for_mask(m) for m in slot_masks_for_group(num_layouts, layout)]
        kernel_keycode = keycode - EVDEV_OFFSET

        marker = "* " if keysym == XKB_KEY_ISO_Next_Group else "  "
        self.out.write(
            f"{marker}{{{self.description.layout_get_name(layout):<12}}} "
            f"layout={layout} level={level} "
            f"keycode {kernel_keycode:3d} {kernel_key_name(kernel_keycode):<16} = "
            f"{self._value_column(symname, utf32)}"
            f"\tslots={slots}"
            f"\txkb-mods=[{xkb_mods} ]"
            f"\tkernel-mods=[{kernel_mods} ]\n"
        )
        self.out.flush()
