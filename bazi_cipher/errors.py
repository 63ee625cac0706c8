"""Exception hierarchy shared by the ciphers, the ledger and the CLI."""


class BaziCipherError(Exception):
    """Base class for every error raised by bazi_cipher."""


class CipherError(BaziCipherError, ValueError):
    """A cipher could not transform its input."""


class InvalidLengthError(CipherError):
    """Encoded text length is not a multiple of the group size."""

    def __init__(self, length: int, group: int):
        self.length = length
        self.group = group
        super().__init__(f"Encoded text length {length} is not a multiple of {group}")


class InvalidSymbolError(CipherError):
    """Encoded text contains a character outside the cipher alphabet."""

    def __init__(self, symbol: str, position: int, message: str = None):
        self.symbol = symbol
        self.position = position
        super().__init__(message or f"Invalid symbol {symbol!r} at position {position}")


class InvalidPaddingError(InvalidSymbolError):
    """The padding bit of a group is set (strict mode only)."""

    def __init__(self, symbol: str, position: int):
        super().__init__(symbol, position,
                         f"Padding bit set on symbol {symbol!r} at position {position}")


class UnknownCipherError(CipherError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown cipher '{name}'")


class EmptyInputError(BaziCipherError, ValueError):
    """Raised by callers that refuse blank input."""


class PersistenceError(BaziCipherError):
    """The durable store could not be read or written."""


class DeserializationError(BaziCipherError):
    """The persisted history is malformed."""
