"""KeymapWalker — turns an XKB keymap into per-key console keymap tables.

For every key the walker visits each (layout, level) cell, resolves the
bound keysym to a console value and stores it under every kernel modifier
mask that selects the cell. Masks left empty are then filled from the
unmodified (or shifted) entry of the same layout slot.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

import xkbconv.log  # noqa: F401
from xkbconv.core.errors import MultipleSymbolsError
from xkbconv.core.layouts import LAYOUT_SWITCH, layout_row
from xkbconv.core.modifiers import kernel_mask
from xkbconv.core.printer import CellPrinter
from xkbconv.core.symbols import resolve_value
from xkbconv.kernel.ksyms import K_HOLE, KG_SHIFT, MAX_NR_KEYMAPS, NR_KEYS
from xkbconv.platform.description import EVDEV_OFFSET, XKB_KEY_ISO_Next_Group

if TYPE_CHECKING:
    from xkbconv.kernel.keymap import IKernelKeymap
    from xkbconv.platform.description import IKeyboardDescription

logger = logging.getLogger(__name__)

SHIFT_BIT = 1 << KG_SHIFT

# Values written to the four slot masks of a group switch key.
GROUP_SWITCH_PATTERN = ("ShiftL_Lock", "ShiftR_Lock", "ShiftR_Lock", "ShiftL_Lock")


def kernel_keycode(keycode: int) -> int:
    return keycode - EVDEV_OFFSET


class KeymapWalker:
    """Walks keycode × layout × level and feeds the kernel keymap."""

    def __init__(
        self,
        description: "IKeyboardDescription",
        keymap: "IKernelKeymap",
        debug: bool = False,
        printer: CellPrinter | None = None,
    ):
        self.description = description
        self.keymap = keymap
        self.debug = debug
        self.printer = printer or CellPrinter(description, keymap)
        self.num_layouts = description.num_layouts()
        self.row = layout_row(self.num_layouts)
        self._group_switch = [keymap.ksym_to_unicode(name) for name in GROUP_SWITCH_PATTERN]

    # -- helpers ------------------------------------------------------------

    def keycode_range(self) -> tuple[int, int]:
        """XKB keycodes to visit, clamped to the kernel key table."""
        min_keycode = self.description.min_keycode()
        max_keycode = self.description.max_keycode()
        last = (NR_KEYS - 1) + EVDEV_OFFSET

        if kernel_keycode(min_keycode) >= NR_KEYS:
            logger.warning("keymap defines more keycodes than the kernel can handle.")
            min_keycode = last
        if kernel_keycode(max_keycode) >= NR_KEYS:
            logger.warning("keymap defines more keycodes than the kernel can handle.")
            max_keycode = last
        return min_keycode, max_keycode

    def get_symbol(self, keycode: int, layout: int, level: int) -> int | None:
        """Return the single keysym of a cell, None for an empty cell."""
        syms = self.description.key_get_syms_by_level(keycode, layout, level)
        if not syms:
            return None
        if len(syms) > 1:
            logger.warning("fixme: more %d symbol on level", len(syms))
            raise MultipleSymbolsError(keycode, layout, level, len(syms))
        return syms[0]

    def get_code(self, keysym: int) -> int | None:
        name = self.description.keysym_get_name(keysym)
        if name is None:
            logger.warning("failed to get name of keysym 0x%x", keysym)
            return None
        return resolve_value(self.keymap, name, self.description.keysym_to_utf32(keysym))

    def add_value(self, table: list[int | None], modifier: int, code: int) -> None:
        """Store *code* under *modifier*, marking letters for Caps Lock on base/shift masks."""
        if not modifier or modifier & SHIFT_BIT:
            code = self.keymap.add_capslock(code)
        table[modifier] = code

    def cell_modifier(self, keycode: int, layout: int, level: int) -> int:
        masks = self.description.key_get_mods_for_level(keycode, layout, level)
        return kernel_mask(self.description, masks[0]) if masks else 0

    def _cells(self, keycode: int) -> Iterator[tuple[int, int, int]]:
        for layout in range(self.num_layouts):
            for level in range(self.description.num_levels_for_key(keycode, layout)):
                keysym = self.get_symbol(keycode, layout, level)
                if keysym is not None:
                    yield layout, level, keysym

    # -- tables -------------------------------------------------------------

    @staticmethod
    def complete_table(table: list[int | None]) -> list[int | None]:
        """Fill empty masks from the same slot's shifted or base entry."""
        slot = 0
        for i in range(len(table)):
            if slot + 1 < len(LAYOUT_SWITCH) and i == LAYOUT_SWITCH[slot + 1]:
                slot += 1

            if table[i] is None:
                base = LAYOUT_SWITCH[slot]
                if i & SHIFT_BIT:
                    table[i] = table[base | SHIFT_BIT]
                if table[i] is None:
                    table[i] = table[base]
        return table

    def build_key_table(self, keycode: int) -> list[int | None] | None:
        """Return the completed table of one key, or None in debug mode."""
        table: list[int | None] = [None] * MAX_NR_KEYMAPS
        row = self.row

        for layout, level, keysym in self._cells(keycode):
            if self.debug:
                self.printer.print_cell(keycode, layout, level, keysym)
                continue

            if keysym == XKB_KEY_ISO_Next_Group:
                for modifier, code in zip(LAYOUT_SWITCH, self._group_switch):
                    self.add_value(table, modifier, code)
                logger.debug("keycode %d: group switch key", keycode)
                break

            value = self.get_code(keysym)
            if value is None:
                continue

            modifier = self.cell_modifier(keycode, layout, level)
            for slot, slot_mask in enumerate(LAYOUT_SWITCH):
                if layout != row[slot]:
                    continue
                mask = slot_mask | modifier
                if mask >= MAX_NR_KEYMAPS:
                    logger.debug("keycode %d: mask 0x%x does not fit the keymap, dropped", keycode, mask)
                    continue
                logger.trace("keycode %d layout=%d level=%d mask=0x%02x value=0x%04x",
                             keycode, layout, level, mask, value)
                self.add_value(table, mask, value)

        if self.debug:
            return None
        return self.complete_table(table)

    def walk(self) -> int:
        """Emit every key table to the kernel keymap. Returns the number of keys emitted."""
        min_keycode, max_keycode = self.keycode_range()
        emitted = 0

        for keycode in range(min_keycode, max_keycode + 1):
            table = self.build_key_table(keycode)
            if table is None:
                continue
            for index, value in enumerate(table):
                self.keymap.add_key(index, kernel_keycode(keycode), K_HOLE if value is None else value)
            emitted += 1

        logger.debug("Walked keycodes %d-%d, %d keys emitted", min_keycode, max_keycode, emitted)
        return emitted
