"""TRACE logging level for the keymap walker.

The walker reports every (layout, level) cell it stores in a console
table: keycode, XKB layout and level, the kernel mask and the value.
A full layout produces tens of thousands of such lines, so they sit
below DEBUG and are only shown with ``xkbconv --trace``.

    TRACE =  5   one line per stored cell
    DEBUG = 10   dropped masks, unresolved keysyms, config in effect
    WARNING      clamped keycode ranges, nameless keysyms, hex overflow

Importing this module adds ``Logger.trace``::

    import xkbconv.log  # noqa: F401
    logger = logging.getLogger(__name__)
    logger.trace("keycode %d layout=%d level=%d", keycode, layout, level)
"""

import logging

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")


def _trace(self: logging.Logger, message: object, *args: object, **kwargs: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)  # type: ignore[attr-defined]


logging.Logger.trace = _trace  # type: ignore[attr-defined]


def level_for(debug: bool = False, trace: bool = False) -> int:
    """Logger level for the ``--debug``/``--trace`` command line flags."""
    if trace:
        return TRACE
    if debug:
        return logging.DEBUG
    return logging.WARNING
