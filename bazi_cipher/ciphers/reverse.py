"""
Reverse Cipher - Reverses the order of the characters in the text

Python strings are sequences of code points, so reversal never splits a
multi-byte UTF-8 sequence. Reversing twice gives the original text back,
so encode and decode are the same operation.
"""

from ..engine import CipherStrategy, register_cipher


@register_cipher
class ReverseCipher(CipherStrategy):
    name = "reverse"
    description = "Reverses the character order of the text (self-inverse)."

    @property
    def display_name(self) -> str:
        return "Reverse Cipher"

    def encode(self, text: str) -> str:
        return text[::-1]

    def decode(self, text: str) -> str:
        return self.encode(text)
