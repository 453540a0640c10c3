"""Kernel keycode → KEY_* name helpers."""

from __future__ import annotations

from evdev import ecodes


def kernel_key_name(keycode: int) -> str:
    """Return the input-event-codes name of a kernel keycode, e.g. ``KEY_A``.

    Codes with several names report the first one evdev lists; unknown
    codes are rendered as ``KEY_<n>``.
    """
    name = ecodes.KEY.get(keycode)
    if isinstance(name, (list, tuple)):
        name = name[0]
    return name or f"KEY_{keycode}"
