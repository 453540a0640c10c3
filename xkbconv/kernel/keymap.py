"""IKernelKeymap interface and the in-memory KernelKeymap implementation.

The keymap collects ``(table, keycode) → value`` entries produced by the
converter and renders them in the text format understood by ``loadkeys``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TextIO

from xkbconv.core.errors import KeymapSinkError
from xkbconv.kernel.ksyms import (
    K_HOLE,
    LK_KEYWORD_ALTISMETA,
    LK_KEYWORD_STRASUSUAL,
    MAX_NR_KEYMAPS,
    MODIFIER_NAMES,
    NR_KEYS,
    KernelSymbolTable,
)

logger = logging.getLogger(__name__)


class IKernelKeymap(ABC):
    @abstractmethod
    def ksym_to_unicode(self, name: str) -> int | None: ...

    @abstractmethod
    def is_known(self, name: str) -> bool: ...

    @abstractmethod
    def convert_code(self, code: int) -> int: ...

    @abstractmethod
    def add_capslock(self, code: int) -> int: ...

    @abstractmethod
    def set_keywords(self, flags: int) -> None: ...

    @abstractmethod
    def add_key(self, table: int, keycode: int, value: int) -> None: ...

    @abstractmethod
    def dump(self, out: TextIO) -> None: ...


def _format_ranges(indexes: list[int]) -> str:
    """[0, 1, 2, 4] → '0-2,4'"""
    parts = []
    start = prev = None
    for i in indexes:
        if start is None:
            start = prev = i
        elif i == prev + 1:
            prev = i
        else:
            parts.append(f'{start}-{prev}' if start != prev else f'{start}')
            start = prev = i
    if start is not None:
        parts.append(f'{start}-{prev}' if start != prev else f'{start}')
    return ','.join(parts)


def modifiers_prefix(table: int) -> str:
    """Return loadkeys modifier words for a table index, tab-terminated."""
    words = [name for bit, name in enumerate(MODIFIER_NAMES) if table & (1 << bit)]
    return ''.join(f'{w}\t' for w in words)


class KernelKeymap(IKernelKeymap):
    """Console keymap accumulated in memory."""

    def __init__(self, symbols: KernelSymbolTable | None = None) -> None:
        self.symbols = symbols or KernelSymbolTable()
        self.keywords = 0
        self._keys: dict[int, dict[int, int]] = {}

    # -- symbol table -------------------------------------------------------

    def ksym_to_unicode(self, name: str) -> int | None:
        return self.symbols.ksym_to_unicode(name)

    def is_known(self, name: str) -> bool:
        return self.symbols.is_known(name)

    def convert_code(self, code: int) -> int:
        return self.symbols.convert_code(code)

    def add_capslock(self, code: int) -> int:
        return self.symbols.add_capslock(code)

    # -- keymap -------------------------------------------------------------

    def set_keywords(self, flags: int) -> None:
        self.keywords |= flags

    def add_key(self, table: int, keycode: int, value: int) -> None:
        if not 0 <= table < MAX_NR_KEYMAPS:
            raise KeymapSinkError(f"keymap table {table} out of range")
        if not 0 <= keycode < NR_KEYS:
            raise KeymapSinkError(f"keycode {keycode} out of range")
        self._keys.setdefault(table, {})[keycode] = value

    def get_key(self, table: int, keycode: int) -> int:
        return self._keys.get(table, {}).get(keycode, K_HOLE)

    def keymaps(self) -> list[int]:
        """Table indexes holding at least one non-hole value."""
        return sorted(
            t for t, keys in self._keys.items()
            if any(v != K_HOLE for v in keys.values())
        )

    def keycodes(self) -> list[int]:
        return sorted({kc for keys in self._keys.values() for kc in keys})

    def dump(self, out: TextIO) -> None:
        """Write the keymap in loadkeys syntax, one entry per line."""
        tables = self.keymaps()
        out.write(f'keymaps {_format_ranges(tables)}\n')
        if self.keywords & LK_KEYWORD_ALTISMETA:
            out.write('alt_is_meta\n')
        if self.keywords & LK_KEYWORD_STRASUSUAL:
            out.write('strings as usual\n')

        for keycode in self.keycodes():
            for table in tables:
                value = self.get_key(table, keycode)
                if value == K_HOLE:
                    continue
                name = self.symbols.value_name(value)
                if table == 0:
                    out.write(f'keycode {keycode:3d} = {name}\n')
                else:
                    out.write(f'\t{modifiers_prefix(table)}keycode {keycode:3d} = {name}\n')
        logger.debug("Dumped %d keys over %d keymaps", len(self.keycodes()), len(tables))
