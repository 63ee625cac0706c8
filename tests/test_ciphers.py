"""
Tests for the reverse and Caesar ciphers
"""

import pytest

from bazi_cipher import CaesarCipher, ReverseCipher

SAMPLES = ["", "abc", "Hello, World!", "八字神人", "mixed 🎉 ñ text"]


class TestReverseCipher:
    def test_reverses_characters(self):
        assert ReverseCipher().encode("abc") == "cba"

    def test_multibyte_characters_stay_intact(self):
        assert ReverseCipher().encode("八字🎉") == "🎉字八"

    @pytest.mark.parametrize("text", SAMPLES)
    def test_self_inverse(self, text):
        cipher = ReverseCipher()
        assert cipher.decode(cipher.encode(text)) == text
        assert cipher.encode(cipher.encode(text)) == text


class TestCaesarCipher:
    def test_default_shift(self):
        cipher = CaesarCipher()
        assert cipher.shift == 3
        assert cipher.encode("abc") == "def"

    def test_preserves_case_and_non_letters(self):
        assert CaesarCipher(3).encode("Abc, 123!") == "Def, 123!"

    def test_wraps_around(self):
        assert CaesarCipher(3).encode("xyz XYZ") == "abc ABC"

    def test_non_ascii_letters_pass_through(self):
        assert CaesarCipher(5).encode("é ß 字") == "é ß 字"

    @pytest.mark.parametrize("shift,expected", [(-1, "z"), (29, "d"), (26, "a"), (0, "a"), (-27, "z")])
    def test_shift_is_taken_mod_26(self, shift, expected):
        assert CaesarCipher(shift).encode("a") == expected

    @pytest.mark.parametrize("shift", [-30, -3, 0, 3, 13, 25, 100])
    def test_round_trip(self, shift):
        cipher = CaesarCipher(shift)
        text = "The Quick Brown Fox, 123! 八字"
        assert cipher.decode(cipher.encode(text)) == text

    def test_set_shift_updates_display_name(self):
        cipher = CaesarCipher()
        cipher.set_shift(-4)
        assert cipher.offset == 22
        assert cipher.display_name == "Caesar Cipher (shift: -4)"
