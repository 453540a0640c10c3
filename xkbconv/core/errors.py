"""Exceptions raised by the XKB → console keymap conversion."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class: the conversion was aborted."""


class KeymapCompileError(ConversionError):
    """The XKB keymap could not be built from the given names."""


class TooManyLayoutsError(ConversionError):
    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(
            f"too many layouts specified ({count}). "
            f"At the moment, you can use no more than {limit}"
        )


class MultipleSymbolsError(ConversionError):
    """A level is bound to more than one keysym."""

    def __init__(self, keycode: int, layout: int, level: int, count: int):
        self.keycode = keycode
        self.layout = layout
        self.level = level
        self.count = count
        super().__init__(
            f"keycode {keycode}: {count} symbols on layout {layout} level {level} are not supported"
        )


class KeymapSinkError(ConversionError):
    """The kernel keymap refused a value."""
