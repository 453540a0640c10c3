"""IKeyboardDescription interface and KeymapNames dataclass."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

# xkbcommon-keysyms.h
XKB_KEY_ISO_Next_Group = 0xfe08

# evdev keycodes start at KEY_ESC = 1, XKB evdev keycodes at <ESC> = 9.
EVDEV_OFFSET = 8


@dataclass(frozen=True)
class KeymapNames:
    rules: str = "evdev"
    model: str = ""
    layout: str = ""
    variant: str = ""
    options: str = ""


class IKeyboardDescription(ABC):
    """Read-only view of a compiled XKB keymap."""

    @abstractmethod
    def num_layouts(self) -> int: ...

    @abstractmethod
    def layout_get_name(self, layout: int) -> str: ...

    @abstractmethod
    def min_keycode(self) -> int: ...

    @abstractmethod
    def max_keycode(self) -> int: ...

    @abstractmethod
    def num_levels_for_key(self, keycode: int, layout: int) -> int: ...

    @abstractmethod
    def key_get_syms_by_level(self, keycode: int, layout: int, level: int) -> Sequence[int]: ...

    @abstractmethod
    def key_get_mods_for_level(self, keycode: int, layout: int, level: int) -> Sequence[int]:
        """XKB modifier masks selecting *level*; the first one is canonical."""

    @abstractmethod
    def num_mods(self) -> int: ...

    @abstractmethod
    def mod_get_name(self, mod: int) -> str: ...

    @abstractmethod
    def keysym_get_name(self, keysym: int) -> str | None: ...

    @abstractmethod
    def keysym_to_utf32(self, keysym: int) -> int: ...
