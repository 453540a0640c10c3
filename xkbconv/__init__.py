"""xkbconv — XKB layout to Linux console keymap converter."""

from xkbconv.__version__ import __version__

__all__ = ['__version__']
