"""
Dot Cipher - Encodes text as triples of symbols from an 8-symbol alphabet

Every UTF-8 byte of the input becomes three symbols, each carrying a 3-bit
code. The last code only holds the two low bits of the byte, shifted left
one place, so its lowest bit (the padding bit) is always 0 on output.

    byte 0x41 ('A') = 010 000 01
    codes           = 010, 000, 01<<1 = 010
    symbols         = 输 点 输

Multi-byte characters simply produce more triples, so any string survives
an encode/decode round trip.
"""

from typing import Sequence

from ..engine import CipherStrategy, register_cipher
from ..errors import InvalidLengthError, InvalidPaddingError, InvalidSymbolError

DEFAULT_SYMBOLS = ("点", "击", "输", "入", "文", "本", "，", "。")
GROUP_SIZE = 3


class Alphabet:
    """Two-way mapping between 3-bit codes (0-7) and single-character symbols."""

    SIZE = 8

    def __init__(self, symbols: Sequence[str] = DEFAULT_SYMBOLS):
        symbols = tuple(symbols)
        if len(symbols) != self.SIZE:
            raise ValueError(f"Alphabet needs exactly {self.SIZE} symbols, got {len(symbols)}")
        for s in symbols:
            if not isinstance(s, str) or len(s) != 1:
                raise ValueError(f"Alphabet symbols must be single characters, got {s!r}")
        if len(set(symbols)) != self.SIZE:
            raise ValueError("Alphabet symbols must be distinct")
        self.encoding = symbols
        self.decoding = {char: i for i, char in enumerate(symbols)}

    def __contains__(self, symbol: str) -> bool:
        return symbol in self.decoding

    def __iter__(self):
        return iter(self.encoding)

    def __len__(self) -> int:
        return self.SIZE


@register_cipher
class DotCipher(CipherStrategy):
    """
    Byte-level substitution cipher over an 8-symbol alphabet.

    Output length is always 3x the UTF-8 byte length of the input.

    With strict_padding=False (the default) a set padding bit is ignored
    on decode, so some inputs decode that encode() never produces. With
    strict_padding=True such input raises InvalidPaddingError.
    """

    name = "dot"
    description = "Maps each UTF-8 byte to three symbols of an 8-symbol alphabet (3 bits each)."

    def __init__(self, alphabet: Sequence[str] = DEFAULT_SYMBOLS, strict_padding: bool = False):
        self.alphabet = alphabet if isinstance(alphabet, Alphabet) else Alphabet(alphabet)
        self.strict_padding = strict_padding

    @property
    def display_name(self) -> str:
        return "Dot Cipher"

    def encode(self, text: str) -> str:
        """Encode text to symbol triples, one triple per UTF-8 byte."""
        symbols = self.alphabet.encoding
        encoded = []

        for byte in text.encode('utf-8'):
            encoded.append(symbols[(byte >> 5) & 0x07])
            encoded.append(symbols[(byte >> 2) & 0x07])
            encoded.append(symbols[(byte & 0x03) << 1])

        return ''.join(encoded)

    def decode(self, text: str) -> str:
        """
        Decode symbol triples back to text.

        Length is checked before any symbol. Bytes that do not form valid
        UTF-8 are replaced with U+FFFD rather than raising.
        """
        if len(text) % GROUP_SIZE != 0:
            raise InvalidLengthError(len(text), GROUP_SIZE)

        codes = self.alphabet.decoding
        decoded = bytearray()

        for i in range(0, len(text), GROUP_SIZE):
            parts = []
            for pos in range(i, i + GROUP_SIZE):
                try:
                    parts.append(codes[text[pos]])
                except KeyError:
                    raise InvalidSymbolError(text[pos], pos) from None

            if parts[2] & 0x01 and self.strict_padding:
                raise InvalidPaddingError(text[i + 2], i + 2)

            decoded.append((parts[0] << 5) | (parts[1] << 2) | (parts[2] >> 1))

        return bytes(decoded).decode('utf-8', errors='replace')
