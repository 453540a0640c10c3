"""Kernel keymap constants and the kernel symbol table.

Values follow the encoding used by ``linux/keyboard.h`` and the kbd tools:

* kernel actions are ``K(type, value) = (type << 8) | value`` and always
  stay below ``0x1000``;
* Unicode characters are stored as ``U(cp) = cp ^ 0xF000``.

Latin-1 character names come from ``Xlib.XK`` so that the kernel table and
the X keysym names agree on spelling (``adiaeresis``, ``exclam``, ...).
"""

from __future__ import annotations

import logging

from Xlib import XK

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# linux/keyboard.h
# ---------------------------------------------------------------------------

NR_KEYS = 256
MAX_NR_KEYMAPS = 256

KG_SHIFT = 0
KG_ALTGR = 1
KG_CTRL = 2
KG_ALT = 3
KG_SHIFTL = 4
KG_SHIFTR = 5
KG_CTRLL = 6
KG_CTRLR = 7
KG_CAPSSHIFT = 8

# Names used by loadkeys for each modifier bit, in bit order.
MODIFIER_NAMES: tuple[str, ...] = (
    'shift', 'altgr', 'control', 'alt',
    'shiftl', 'shiftr', 'ctrll', 'ctrlr', 'capsshift',
)

KT_LATIN = 0
KT_FN = 1
KT_SPEC = 2
KT_PAD = 3
KT_DEAD = 4
KT_CONS = 5
KT_CUR = 6
KT_SHIFT = 7
KT_META = 8
KT_ASCII = 9
KT_LOCK = 10
KT_LETTER = 11


def K(t: int, v: int) -> int:
    return (t << 8) | v


def KTYP(code: int) -> int:
    return code >> 8


def KVAL(code: int) -> int:
    return code & 0xff


def U(cp: int) -> int:
    """Encode a Unicode code point as a keymap value."""
    return cp ^ 0xf000


def is_unicode(code: int) -> bool:
    return code >= 0x1000


K_HOLE = K(KT_SPEC, 0)

# Keywords understood by the keymap renderer.
LK_KEYWORD_ALTISMETA = 1 << 5
LK_KEYWORD_STRASUSUAL = 1 << 6

# ---------------------------------------------------------------------------
# Symbol tables
# ---------------------------------------------------------------------------

# Latin characters whose kernel name is not an X keysym name.
LATIN_NAMES: dict[str, int] = {
    'nul': 0x00,
    'BackSpace': 0x08,
    'Tab': 0x09,
    'Linefeed': 0x0a,
    'Escape': 0x1b,
    'Control_backslash': 0x1c,
    'Control_bracketright': 0x1d,
    'Control_asciicircum': 0x1e,
    'Control_underscore': 0x1f,
    'Delete': 0x7f,
    'zero': 0x30,
    'one': 0x31,
    'two': 0x32,
    'three': 0x33,
    'four': 0x34,
    'five': 0x35,
    'six': 0x36,
    'seven': 0x37,
    'eight': 0x38,
    'nine': 0x39,
}

ACTION_NAMES: dict[str, int] = {
    # KT_FN
    **{f'F{n}': K(KT_FN, n - 1) for n in range(1, 21)},
    'Find': K(KT_FN, 20),
    'Insert': K(KT_FN, 21),
    'Remove': K(KT_FN, 22),
    'Select': K(KT_FN, 23),
    'Prior': K(KT_FN, 24),
    'Next': K(KT_FN, 25),
    'Macro': K(KT_FN, 26),
    'Help': K(KT_FN, 27),
    'Do': K(KT_FN, 28),
    'Pause': K(KT_FN, 29),
    # KT_SPEC
    'VoidSymbol': K_HOLE,
    'Return': K(KT_SPEC, 1),
    'Show_Registers': K(KT_SPEC, 2),
    'Show_Memory': K(KT_SPEC, 3),
    'Show_State': K(KT_SPEC, 4),
    'Break': K(KT_SPEC, 5),
    'Last_Console': K(KT_SPEC, 6),
    'Caps_Lock': K(KT_SPEC, 7),
    'Num_Lock': K(KT_SPEC, 8),
    'Scroll_Lock': K(KT_SPEC, 9),
    'Scroll_Forward': K(KT_SPEC, 10),
    'Scroll_Backward': K(KT_SPEC, 11),
    'Boot': K(KT_SPEC, 12),
    'Caps_On': K(KT_SPEC, 13),
    'Compose': K(KT_SPEC, 14),
    'SAK': K(KT_SPEC, 15),
    'Decr_Console': K(KT_SPEC, 16),
    'Incr_Console': K(KT_SPEC, 17),
    'KeyboardSignal': K(KT_SPEC, 18),
    'Bare_Num_Lock': K(KT_SPEC, 19),
    # KT_PAD
    **{f'KP_{n}': K(KT_PAD, n) for n in range(10)},
    'KP_Add': K(KT_PAD, 10),
    'KP_Subtract': K(KT_PAD, 11),
    'KP_Multiply': K(KT_PAD, 12),
    'KP_Divide': K(KT_PAD, 13),
    'KP_Enter': K(KT_PAD, 14),
    'KP_Comma': K(KT_PAD, 15),
    'KP_Period': K(KT_PAD, 16),
    'KP_MinPlus': K(KT_PAD, 17),
    # KT_DEAD
    'dead_grave': K(KT_DEAD, 0),
    'dead_acute': K(KT_DEAD, 1),
    'dead_circumflex': K(KT_DEAD, 2),
    'dead_tilde': K(KT_DEAD, 3),
    'dead_diaeresis': K(KT_DEAD, 4),
    'dead_cedilla': K(KT_DEAD, 5),
    # KT_CONS
    **{f'Console_{n}': K(KT_CONS, n - 1) for n in range(1, 64)},
    # KT_CUR
    'Down': K(KT_CUR, 0),
    'Left': K(KT_CUR, 1),
    'Right': K(KT_CUR, 2),
    'Up': K(KT_CUR, 3),
    # KT_SHIFT
    'Shift': K(KT_SHIFT, KG_SHIFT),
    'AltGr': K(KT_SHIFT, KG_ALTGR),
    'Control': K(KT_SHIFT, KG_CTRL),
    'Alt': K(KT_SHIFT, KG_ALT),
    'ShiftL': K(KT_SHIFT, KG_SHIFTL),
    'ShiftR': K(KT_SHIFT, KG_SHIFTR),
    'CtrlL': K(KT_SHIFT, KG_CTRLL),
    'CtrlR': K(KT_SHIFT, KG_CTRLR),
    'CapsShift': K(KT_SHIFT, KG_CAPSSHIFT),
    # KT_META
    'Meta_Tab': K(KT_META, 0x09),
    # KT_LOCK
    'Shift_Lock': K(KT_LOCK, KG_SHIFT),
    'AltGr_Lock': K(KT_LOCK, KG_ALTGR),
    'Control_Lock': K(KT_LOCK, KG_CTRL),
    'Alt_Lock': K(KT_LOCK, KG_ALT),
    'ShiftL_Lock': K(KT_LOCK, KG_SHIFTL),
    'ShiftR_Lock': K(KT_LOCK, KG_SHIFTR),
    'CtrlL_Lock': K(KT_LOCK, KG_CTRLL),
    'CtrlR_Lock': K(KT_LOCK, KG_CTRLR),
}

# Alternative spellings accepted on input only.
SYNONYMS: dict[str, str] = {
    'Home': 'Find',
    'End': 'Select',
    'PageUp': 'Prior',
    'PageDown': 'Next',
    # ShiftL/ShiftR address layout slots, so physical shift keys stay plain Shift.
    'Shift_L': 'Shift',
    'Shift_R': 'Shift',
    'Control_h': 'BackSpace',
    'Control_i': 'Tab',
    'Control_j': 'Linefeed',
}

_ACTION_BY_CODE: dict[int, str] = {}
for _name, _code in ACTION_NAMES.items():
    _ACTION_BY_CODE.setdefault(_code, _name)
_LATIN_BY_CODE: dict[int, str] = {code: name for name, code in LATIN_NAMES.items()}

# Latin-1 keysym names loaded by Xlib.XK (latin1 group), first spelling wins.
_XK_LATIN1_NAMES: dict[int, str] = {}
for _attr, _keysym in vars(XK).items():
    if _attr.startswith('XK_') and isinstance(_keysym, int) and 0x20 <= _keysym <= 0xff:
        _XK_LATIN1_NAMES.setdefault(_keysym, _attr[3:])


class KernelSymbolTable:
    """Name ↔ value lookups for the console keymap vocabulary."""

    def _latin1_code(self, name: str) -> int | None:
        keysym = XK.string_to_keysym(name)
        if 0x20 <= keysym <= 0xff and keysym != 0x7f:
            return keysym
        return None

    def is_known(self, name: str) -> bool:
        return self.ksym_to_unicode(name) is not None

    def ksym_to_unicode(self, name: str) -> int | None:
        """Return the keymap value for a kernel symbol name, or None.

        Printable characters are returned in Unicode form, kernel actions
        and control characters as ``K()`` codes.
        """
        name = SYNONYMS.get(name, name)
        if name in ACTION_NAMES:
            return ACTION_NAMES[name]
        if name in LATIN_NAMES:
            return self.convert_code(LATIN_NAMES[name])
        cp = self._latin1_code(name)
        if cp is not None:
            return U(cp)
        return None

    def convert_code(self, code: int) -> int:
        """Convert a raw code to its Unicode form when it is a printable latin character."""
        if is_unicode(code):
            return code
        if KTYP(code) in (KT_LATIN, KT_LETTER):
            cp = KVAL(code)
            if 0x20 <= cp != 0x7f:
                return U(cp)
        return code

    def add_capslock(self, code: int) -> int:
        """Mark a cased Latin-1 letter so that Caps Lock applies to it."""
        if is_unicode(code):
            cp = code ^ 0xf000
        elif KTYP(code) in (KT_LATIN, KT_LETTER):
            cp = KVAL(code)
        else:
            return code
        if cp > 0xff:
            return code
        ch = chr(cp)
        if ch.isalpha() and (ch.islower() or ch.isupper()):
            return K(KT_LETTER, cp)
        return code

    def value_to_char(self, code: int) -> str | None:
        if is_unicode(code):
            return chr(code ^ 0xf000)
        if KTYP(code) in (KT_LATIN, KT_LETTER):
            return chr(KVAL(code))
        return None

    def _latin_name(self, cp: int) -> str | None:
        if cp in _LATIN_BY_CODE:
            return _LATIN_BY_CODE[cp]
        return _XK_LATIN1_NAMES.get(cp)

    def value_name(self, code: int | None) -> str:
        """Render a keymap value the way loadkeys spells it."""
        if code is None:
            return 'VoidSymbol'
        if is_unicode(code):
            cp = code ^ 0xf000
            return self._latin_name(cp) or f'U+{cp:04x}'
        if code in _ACTION_BY_CODE:
            return _ACTION_BY_CODE[code]
        if KTYP(code) == KT_LETTER:
            name = self._latin_name(KVAL(code))
            if name:
                return '+' + name
        if KTYP(code) == KT_LATIN:
            name = self._latin_name(KVAL(code))
            if name:
                return name
        return f'0x{code:04x}'
