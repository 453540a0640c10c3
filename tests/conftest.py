import os

import pytest

from xkbconv.kernel.keymap import KernelKeymap
from xkbconv.platform.description import IKeyboardDescription


def pytest_addoption(parser):
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Enable tests that compile real keymaps with libxkbcommon."
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-live") or os.path.isdir("/usr/share/X11/xkb"):
        return
    skip_live = pytest.mark.skip(reason="needs XKB data (use --run-live to force)")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


def pytest_configure(config):
    config.addinivalue_line("markers", "live: compiles a real keymap with libxkbcommon")


class FakeKeyboard(IKeyboardDescription):
    """In-memory keyboard description.

    ``keys`` maps an XKB keycode to one list of levels per layout. A level
    is None (empty), a keysym name, a raw keysym int, or a tuple of names
    for a level bound to several keysyms.
    """

    MODS = ("Shift", "Lock", "Control", "Mod1", "Mod2",
            "Mod3", "Mod4", "Mod5", "Alt", "LevelThree")

    # Modifier masks selecting each level, the first one is canonical.
    LEVEL_MASKS = (
        [()],
        [("Shift",), ("Lock",)],
        [("LevelThree",)],
        [("Shift", "LevelThree")],
    )

    KEYSYMS = {
        "a": (0x61, 0x61),
        "A": (0x41, 0x41),
        "b": (0x62, 0x62),
        "B": (0x42, 0x42),
        "c": (0x63, 0x63),
        "C": (0x43, 0x43),
        "1": (0x31, 0x31),
        "exclam": (0x21, 0x21),
        "Cyrillic_a": (0x6c1, 0x430),
        "Cyrillic_A": (0x6e1, 0x410),
        "ISO_Next_Group": (0xfe08, 0),
        "Shift_L": (0xffe1, 0),
        "Return": (0xff0d, 0x0d),
        "KP_End": (0xff9c, 0),
    }

    NAMELESS = 0x12345

    def __init__(self, keys, layout_names=None, min_keycode=None, max_keycode=None,
                 level_masks=None):
        self.keys = keys
        if layout_names is None:
            count = max((len(layouts) for layouts in keys.values()), default=1)
            layout_names = [f"Layout {i}" for i in range(count)]
        self.layout_names = list(layout_names)
        self._min = min_keycode if min_keycode is not None else min(keys, default=9)
        self._max = max_keycode if max_keycode is not None else max(keys, default=9)
        self.level_masks = level_masks or self.LEVEL_MASKS
        self._by_keysym = {ks: (name, utf32) for name, (ks, utf32) in self.KEYSYMS.items()}

    def _levels(self, keycode, layout):
        layouts = self.keys.get(keycode, [])
        return layouts[layout] if layout < len(layouts) else []

    def num_layouts(self):
        return len(self.layout_names)

    def layout_get_name(self, layout):
        return self.layout_names[layout]

    def min_keycode(self):
        return self._min

    def max_keycode(self):
        return self._max

    def num_levels_for_key(self, keycode, layout):
        return len(self._levels(keycode, layout))

    def key_get_syms_by_level(self, keycode, layout, level):
        entry = self._levels(keycode, layout)[level]
        if entry is None:
            return []
        if isinstance(entry, int):
            return [entry]
        if isinstance(entry, tuple):
            return [self.KEYSYMS[name][0] for name in entry]
        return [self.KEYSYMS[entry][0]]

    def key_get_mods_for_level(self, keycode, layout, level):
        masks = self.level_masks[level] if level < len(self.level_masks) else [()]
        return [sum(1 << self.MODS.index(m) for m in names) for names in masks]

    def num_mods(self):
        return len(self.MODS)

    def mod_get_name(self, mod):
        return self.MODS[mod]

    def keysym_get_name(self, keysym):
        found = self._by_keysym.get(keysym)
        return found[0] if found else None

    def keysym_to_utf32(self, keysym):
        found = self._by_keysym.get(keysym)
        return found[1] if found else 0


@pytest.fixture
def fake_keyboard():
    """The FakeKeyboard class, for building descriptions inside a test."""
    return FakeKeyboard


@pytest.fixture
def keymap():
    return KernelKeymap()
