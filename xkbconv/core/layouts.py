"""XKB groups → the four console layout slots.

The console has no notion of groups. Four slots are addressed by the
ShiftL/ShiftR modifier bits, and ``ShiftL_Lock``/``ShiftR_Lock`` move
between them::

    slot | ShiftL ShiftR
    -----+--------------
      0  |   0      0
      1  |   1      0
      2  |   0      1
      3  |   1      1

``LAYOUTS[n - 1]`` tells which XKB group feeds each slot when the keymap
defines ``n`` groups::

    row | group per slot
    ----+----------------
     0  | { 0, 0, 0, 0 }
     1  | { 0, 1, 1, 0 }
     2  | { 0, 1, 2, 0 }
     3  | { 0, 1, 3, 2 }
"""

from __future__ import annotations

from xkbconv.core.errors import TooManyLayoutsError
from xkbconv.kernel.ksyms import KG_SHIFTL, KG_SHIFTR

LAYOUT_SWITCH: tuple[int, ...] = (
    0,
    (1 << KG_SHIFTL),
    (1 << KG_SHIFTR),
    (1 << KG_SHIFTL) | (1 << KG_SHIFTR),
)

LAYOUTS: tuple[tuple[int, int, int, int], ...] = (
    (0, 0, 0, 0),
    (0, 1, 1, 0),
    (0, 1, 2, 0),
    (0, 1, 3, 2),
)

MAX_LAYOUTS = len(LAYOUT_SWITCH)

SLOT_BITS = LAYOUT_SWITCH[-1]


def layout_row(num_groups: int) -> tuple[int, int, int, int]:
    """Group index feeding each slot for a keymap with *num_groups* groups."""
    if num_groups > MAX_LAYOUTS:
        raise TooManyLayoutsError(num_groups, MAX_LAYOUTS)
    return LAYOUTS[max(num_groups, 1) - 1]


def slot_masks_for_group(num_groups: int, group: int) -> list[int]:
    """Slot modifier masks that are fed by *group*."""
    row = layout_row(num_groups)
    return [LAYOUT_SWITCH[slot] for slot in range(MAX_LAYOUTS) if row[slot] == group]


def slot_for_mask(mask: int) -> int:
    """Slot selected by the ShiftL/ShiftR bits of *mask*."""
    return LAYOUT_SWITCH.index(mask & SLOT_BITS)
