"""
Caesar Cipher - Rotates ASCII letters by a configurable shift

Letters move within their own case ring ('a'..'z' or 'A'..'Z'); digits,
punctuation and non-ASCII characters pass through untouched. The shift is
not embedded in the output, so the caller has to decode with the same
shift that was used to encode.
"""

from ..engine import CipherStrategy, register_cipher

DEFAULT_SHIFT = 3


@register_cipher
class CaesarCipher(CipherStrategy):
    """
    Caesar shift cipher.

    Any integer is accepted as the shift; only shift mod 26 matters, so
    -1 behaves like 25 and 29 like 3. display_name shows the shift as set.
    """

    name = "caesar"
    description = f"Shifts ASCII letters through the alphabet (default shift {DEFAULT_SHIFT})."

    def __init__(self, shift: int = DEFAULT_SHIFT):
        self.shift = shift

    def set_shift(self, shift: int):
        self.shift = int(shift)

    @property
    def offset(self) -> int:
        """The effective shift, normalized to 0..25."""
        return self.shift % 26

    @property
    def display_name(self) -> str:
        return f"Caesar Cipher (shift: {self.shift})"

    def _rotate(self, text: str, offset: int) -> str:
        result = []
        for char in text:
            if 'a' <= char <= 'z':
                result.append(chr((ord(char) - ord('a') + offset) % 26 + ord('a')))
            elif 'A' <= char <= 'Z':
                result.append(chr((ord(char) - ord('A') + offset) % 26 + ord('A')))
            else:
                result.append(char)
        return ''.join(result)

    def encode(self, text: str) -> str:
        return self._rotate(text, self.offset)

    def decode(self, text: str) -> str:
        return self._rotate(text, -self.offset)
