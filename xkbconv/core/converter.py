"""Conversion driver: RMLVO names in, console keymap out."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Callable, TextIO

from xkbconv.core.errors import KeymapCompileError, TooManyLayoutsError
from xkbconv.core.layouts import MAX_LAYOUTS
from xkbconv.core.printer import CellPrinter
from xkbconv.core.walker import KeymapWalker
from xkbconv.kernel.ksyms import LK_KEYWORD_ALTISMETA, LK_KEYWORD_STRASUSUAL
from xkbconv.platform.description import KeymapNames

if TYPE_CHECKING:
    from xkbconv.kernel.keymap import IKernelKeymap
    from xkbconv.platform.description import IKeyboardDescription

logger = logging.getLogger(__name__)

RULES = "evdev"

DescriptionFactory = Callable[[KeymapNames], "IKeyboardDescription"]


def _default_factory(names: KeymapNames) -> "IKeyboardDescription":
    # Imported lazily: compiling needs libxkbcommon, tests use fakes.
    from xkbconv.platform.xkb_adapter import XkbcommonKeyboard

    return XkbcommonKeyboard.from_names(names)


def keymap_names(params: dict) -> KeymapNames:
    """Build RMLVO names from a config dict (model/layout/variant/options)."""
    return KeymapNames(
        rules=RULES,
        model=params.get('model') or "",
        layout=params.get('layout') or "",
        variant=params.get('variant') or "",
        options=params.get('options') or "",
    )


def convert_xkb_keymap(
    keymap: "IKernelKeymap",
    params: dict,
    print_table: bool = False,
    debug: bool = False,
    description_factory: DescriptionFactory | None = None,
    out: TextIO | None = None,
) -> int:
    """Convert an XKB layout into *keymap*.

    Raises a ``ConversionError`` subclass on the first fatal condition.
    Returns the number of keys written.
    """
    names = keymap_names(params)
    factory = description_factory or _default_factory
    out = out or sys.stdout

    description = factory(names)
    if description is None:
        logger.warning("xkb_keymap_new_from_names failed")
        raise KeymapCompileError(f"failed to compile keymap {names}")

    num_layouts = description.num_layouts()
    if num_layouts > MAX_LAYOUTS:
        logger.warning(
            "too many layouts specified. At the moment, you can use no more than %d", MAX_LAYOUTS
        )
        raise TooManyLayoutsError(num_layouts, MAX_LAYOUTS)

    keymap.set_keywords(LK_KEYWORD_ALTISMETA | LK_KEYWORD_STRASUSUAL)

    logger.info("Converting %s (%d layouts)", names, num_layouts)
    walker = KeymapWalker(description, keymap, debug=debug,
                          printer=CellPrinter(description, keymap, out))
    emitted = walker.walk()
    logger.info("Converted %d keys", emitted)

    if print_table and not debug:
        keymap.dump(out)
    return emitted
