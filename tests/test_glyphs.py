"""Tests for the display character table."""

import string

import pytest

from kontrolhid.devices.kontrol1 import glyphs


@pytest.mark.unit
class TestEncode:
    """Test character to segment bitmap lookup."""

    @pytest.mark.parametrize("character", string.ascii_letters + string.digits)
    def test_letters_and_digits_are_not_blank(self, character):
        assert glyphs.encode(character) != glyphs.BLANK

    def test_deterministic(self):
        assert [glyphs.encode("Q") for _ in range(3)] == [(255, 128)] * 3

    def test_known_bitmaps(self):
        assert glyphs.encode("A") == (207, 24)
        assert glyphs.encode("Z") == (51, 36)
        assert glyphs.encode("0") == (255, 0)
        assert glyphs.encode("9") == (191, 24)

    def test_case_sensitive(self):
        assert glyphs.encode("b") == (248, 24)
        assert glyphs.encode("B") == (63, 82)
        assert glyphs.encode("b") != glyphs.encode("B")

    @pytest.mark.parametrize(
        "character,expected",
        [
            ("-", (0, 24)),
            ("+", (0, 90)),
            ("%", (153, 126)),
            (">", (0, 33)),
            ("'", (128, 0)),
            ("/", (0, 36)),
            ("\\", (0, 129)),
        ],
    )
    def test_symbols(self, character, expected):
        assert glyphs.encode(character) == expected

    @pytest.mark.parametrize("character", [" ", ".", "!", "?", "<", "_", "é", "\n"])
    def test_unmapped_renders_blank(self, character):
        assert glyphs.encode(character) == (0, 0)

    def test_not_a_single_character(self):
        assert glyphs.encode("") == glyphs.BLANK
        assert glyphs.encode("AB") == glyphs.BLANK
