"""XKB modifier names → kernel modifier bits.

Usual modifiers of the standard keyboard configuration (see the
libxkbcommon keymap format documentation):

    Shift       real     the usual Shift
    Lock        real     Caps Lock
    Control     real     Control
    Mod1..Mod5  real     not conventional
    Alt         virtual  usually Mod1
    Meta        virtual  Mod1 or Mod4, the legacy Meta key
    NumLock     virtual  usually Mod2
    Super       virtual  usually Mod4
    LevelThree  virtual  usually Mod3, ISO level 3 (AltGr)
    LevelFive   virtual  usually Mod5, ISO level 5

Modifiers without a console counterpart (NumLock, Super, Meta) map to
bit 0 and contribute nothing to the kernel mask.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from xkbconv.kernel.ksyms import KG_ALT, KG_ALTGR, KG_CAPSSHIFT, KG_CTRL, KG_SHIFT

if TYPE_CHECKING:
    from xkbconv.platform.description import IKeyboardDescription


class ModifierMapping(NamedTuple):
    xkb_mod: str
    krn_mod: str
    bit: int


MODIFIER_MAPPING: tuple[ModifierMapping, ...] = (
    ModifierMapping("Shift", "shift", 1 << KG_SHIFT),
    ModifierMapping("Lock", "capslock", 1 << KG_CAPSSHIFT),
    ModifierMapping("Control", "control", 1 << KG_CTRL),
    ModifierMapping("Mod1", "alt", 1 << KG_ALT),
    ModifierMapping("Mod2", "<numlock>", 0),
    ModifierMapping("Mod3", "altgr", 1 << KG_ALTGR),
    ModifierMapping("Mod4", "<super>", 0),
    ModifierMapping("Mod5", "alt", 1 << KG_ALT),
    ModifierMapping("Alt", "alt", 1 << KG_ALT),
    ModifierMapping("Meta", "<meta>", 0),
    ModifierMapping("NumLock", "<numlock>", 0),
    ModifierMapping("Super", "<super>", 0),
    ModifierMapping("LevelThree", "altgr", 1 << KG_ALTGR),
    ModifierMapping("LevelFive", "alt", 1 << KG_ALT),
)

_BY_NAME: dict[str, ModifierMapping] = {m.xkb_mod.lower(): m for m in MODIFIER_MAPPING}


def convert_modifier(xkb_name: str) -> ModifierMapping | None:
    """Look up an XKB modifier name, ignoring case."""
    return _BY_NAME.get(xkb_name.lower())


def modifier_bit(xkb_name: str) -> int:
    """Kernel bit for an XKB modifier; 0 when there is none."""
    mapping = convert_modifier(xkb_name)
    return mapping.bit if mapping else 0


def xkb_modifier_names(description: "IKeyboardDescription", xkb_mask: int) -> list[tuple[int, str]]:
    """Return ``(index, name)`` for every modifier set in *xkb_mask*."""
    return [
        (mod, description.mod_get_name(mod))
        for mod in range(description.num_mods())
        if xkb_mask & (1 << mod)
    ]


def kernel_mask(description: "IKeyboardDescription", xkb_mask: int) -> int:
    """Translate an XKB modifier mask into kernel modifier bits."""
    mask = 0
    for _, name in xkb_modifier_names(description, xkb_mask):
        mask |= modifier_bit(name)
    return mask
