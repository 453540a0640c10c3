"""XKB keysym names → console keymap values.

``SYMBOLS_MAPPING`` covers XKB names that have no Unicode meaning but do
have a console counterpart. ``resolve_value`` combines it with the kernel
symbol table and the keysym's own Unicode value.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xkbconv.kernel.keymap import IKernelKeymap

logger = logging.getLogger(__name__)

SYMBOLS_MAPPING: dict[str, str] = {
    "0": "zero",
    "1": "one",
    "2": "two",
    "3": "three",
    "4": "four",
    "5": "five",
    "6": "six",
    "7": "seven",
    "8": "eight",
    "9": "nine",
    # Numpad with NumLock off
    "KP_Insert": "KP_0",
    "KP_End": "KP_1",
    "KP_Down": "KP_2",
    "KP_Next": "KP_3",
    "KP_Left": "KP_4",
    "KP_Right": "KP_6",
    "KP_Home": "KP_7",
    "KP_Up": "KP_8",
    "KP_Prior": "KP_9",
    "KP_Begin": "VoidSymbol",
    "KP_Delete": "VoidSymbol",
    # Modifiers
    "Alt_R": "Alt",
    "Alt_L": "Alt",
    "Control_R": "Control",
    "Control_L": "Control",
    "Super_R": "Alt",
    "Super_L": "Alt",
    "Hyper_R": "Alt",
    "Hyper_L": "Alt",
    # Group switching
    "Mode_switch": "AltGr",
    "ISO_Group_Shift": "AltGr",
    "ISO_Group_Latch": "AltGr",
    "ISO_Group_Lock": "AltGr_Lock",
    "ISO_Next_Group": "AltGr_Lock",
    "ISO_Next_Group_Lock": "AltGr_Lock",
    "ISO_Prev_Group": "AltGr_Lock",
    "ISO_Prev_Group_Lock": "AltGr_Lock",
    "ISO_First_Group": "AltGr_Lock",
    "ISO_First_Group_Lock": "AltGr_Lock",
    "ISO_Last_Group": "AltGr_Lock",
    "ISO_Last_Group_Lock": "AltGr_Lock",
    "ISO_Level3_Shift": "AltGr",
    "ISO_Left_Tab": "Meta_Tab",
    # Virtual terminals
    **{f"XF86Switch_VT_{n}": f"Console_{n}" for n in range(1, 13)},
    "Sys_Req": "Last_Console",
    "Print": "Control_backslash",
}

# strtol() stores into an int
_INT_MAX = 0x7FFFFFFF

_HEX_PREFIX = re.compile(r"[0-9a-fA-F]*")
_UNICODE_NAME = re.compile(r"U[0-9a-fA-F]{4}")


def map_xkbsym_to_ksym(xkb_sym: str) -> str | None:
    """Return the console name for an XKB keysym name, if one is known."""
    return SYMBOLS_MAPPING.get(xkb_sym)


def _hex_value(digits: str) -> int:
    match = _HEX_PREFIX.match(digits)
    return int(match.group(0), 16) if match.group(0) else 0


def parse_hexcode(keymap: "IKernelKeymap", symname: str) -> int | None:
    """Decode keysym names of the form ``0x<hex>`` or ``U<hex>``.

    Returns the converted value, 0 when the name has neither form, or None
    when the number does not fit.
    """
    if len(symname) >= 4 and symname.startswith("0x"):
        value = _hex_value(symname[2:])
        if value > _INT_MAX:
            logger.warning("unable to convert unnamed non-Unicode xkb symbol `%s'", symname)
            return None
        return keymap.convert_code(value)

    if len(symname) >= 5 and _UNICODE_NAME.match(symname):
        value = _hex_value(symname[1:])
        if value > _INT_MAX:
            logger.warning("unable to convert unnamed unicode xkb symbol `%s'", symname)
            return None
        return keymap.convert_code(value ^ 0xF000)

    return 0


def resolve_value(keymap: "IKernelKeymap", symname: str, utf32: int) -> int | None:
    """Resolve a keysym to a keymap value, or None when nothing matches."""
    # The name is already known to the console keymap.
    if keymap.is_known(symname):
        return keymap.ksym_to_unicode(symname)

    # A translated name is known.
    ksym = map_xkbsym_to_ksym(symname)
    if ksym is not None and keymap.is_known(ksym):
        return keymap.ksym_to_unicode(ksym)

    # Unicode, shifted out of the private use area.
    if utf32 > 0:
        return utf32 ^ 0xF000

    value = parse_hexcode(keymap, symname)
    if value is not None and value > 0:
        return value

    logger.debug("No console value for xkb symbol %s", symname)
    return None
