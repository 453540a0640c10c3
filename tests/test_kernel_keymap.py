"""Tests for xkbconv.kernel — symbol table and in-memory keymap."""

from __future__ import annotations

import io

import pytest

from xkbconv.core.errors import KeymapSinkError
from xkbconv.kernel.keymap import KernelKeymap, _format_ranges, modifiers_prefix
from xkbconv.kernel.ksyms import (
    K,
    K_HOLE,
    KT_LETTER,
    LK_KEYWORD_ALTISMETA,
    LK_KEYWORD_STRASUSUAL,
    U,
    KernelSymbolTable,
    is_unicode,
)


@pytest.fixture
def symbols():
    return KernelSymbolTable()


class TestEncoding:

    def test_unicode_roundtrip(self):
        assert U(0x430) == 0xf430
        assert U(U(0x430)) == 0x430

    def test_is_unicode(self):
        assert is_unicode(0xf061)
        assert not is_unicode(0xb61)
        assert not is_unicode(K_HOLE)


class TestSymbolTable:

    def test_synonyms(self, symbols):
        assert symbols.ksym_to_unicode("Home") == symbols.ksym_to_unicode("Find")
        assert symbols.ksym_to_unicode("Shift_R") == 0x700

    def test_latin_names(self, symbols):
        assert symbols.ksym_to_unicode("zero") == 0xf030
        assert symbols.ksym_to_unicode("Escape") == 0x1b
        assert symbols.ksym_to_unicode("adiaeresis") == 0xf0e4

    def test_unknown(self, symbols):
        assert symbols.ksym_to_unicode("Cyrillic_a") is None
        assert not symbols.is_known("nonsense")

    def test_convert_code(self, symbols):
        assert symbols.convert_code(0x41) == 0xf041
        assert symbols.convert_code(0x1b) == 0x1b
        assert symbols.convert_code(0x201) == 0x201
        assert symbols.convert_code(0xf430) == 0xf430

    def test_add_capslock(self, symbols):
        assert symbols.add_capslock(U(0x61)) == K(KT_LETTER, 0x61)
        assert symbols.add_capslock(U(0xe4)) == K(KT_LETTER, 0xe4)
        assert symbols.add_capslock(U(0x31)) == U(0x31)
        assert symbols.add_capslock(U(0x430)) == U(0x430)
        assert symbols.add_capslock(0x201) == 0x201

    @pytest.mark.parametrize("code, name", [
        (K(KT_LETTER, 0x61), "+a"),
        (U(0x30), "zero"),
        (U(0x21), "exclam"),
        (0x201, "Return"),
        (0xa04, "ShiftL_Lock"),
        (0x1c, "Control_backslash"),
        (U(0x430), "U+0430"),
        (K_HOLE, "VoidSymbol"),
        (None, "VoidSymbol"),
    ])
    def test_value_name(self, symbols, code, name):
        assert symbols.value_name(code) == name

    def test_value_to_char(self, symbols):
        assert symbols.value_to_char(K(KT_LETTER, 0x61)) == "a"
        assert symbols.value_to_char(U(0x430)) == "\u0430"
        assert symbols.value_to_char(0x201) is None


class TestKernelKeymap:

    def test_add_key_range(self, keymap):
        with pytest.raises(KeymapSinkError):
            keymap.add_key(256, 30, 0xf061)
        with pytest.raises(KeymapSinkError):
            keymap.add_key(0, 256, 0xf061)
        with pytest.raises(KeymapSinkError):
            keymap.add_key(-1, 30, 0xf061)

    def test_get_key_defaults_to_hole(self, keymap):
        assert keymap.get_key(0, 30) == K_HOLE

    def test_keymaps_skip_hole_only_tables(self, keymap):
        keymap.add_key(0, 30, 0xb61)
        keymap.add_key(5, 30, K_HOLE)
        assert keymap.keymaps() == [0]
        assert keymap.keycodes() == [30]

    def test_set_keywords_accumulates(self, keymap):
        keymap.set_keywords(LK_KEYWORD_ALTISMETA)
        keymap.set_keywords(LK_KEYWORD_STRASUSUAL)
        assert keymap.keywords == LK_KEYWORD_ALTISMETA | LK_KEYWORD_STRASUSUAL

    def test_dump(self, keymap):
        keymap.set_keywords(LK_KEYWORD_ALTISMETA | LK_KEYWORD_STRASUSUAL)
        keymap.add_key(0, 30, K(KT_LETTER, 0x61))
        keymap.add_key(1, 30, K(KT_LETTER, 0x41))
        keymap.add_key(2, 30, K_HOLE)
        keymap.add_key(0, 2, U(0x31))

        out = io.StringIO()
        keymap.dump(out)
        assert out.getvalue() == (
            "keymaps 0-1\n"
            "alt_is_meta\n"
            "strings as usual\n"
            "keycode   2 = one\n"
            "keycode  30 = +a\n"
            "\tshift\tkeycode  30 = +A\n"
        )

    def test_dump_without_keywords(self):
        keymap = KernelKeymap()
        keymap.add_key(0, 1, 0x1b)
        out = io.StringIO()
        keymap.dump(out)
        assert out.getvalue() == "keymaps 0\nkeycode   1 = Escape\n"


class TestHelpers:

    def test_format_ranges(self):
        assert _format_ranges([0, 1, 2, 4]) == "0-2,4"
        assert _format_ranges([3]) == "3"
        assert _format_ranges([]) == ""

    def test_modifiers_prefix(self):
        assert modifiers_prefix(0) == ""
        assert modifiers_prefix(3) == "shift\taltgr\t"
        assert modifiers_prefix(16 | 8) == "alt\tshiftl\t"
