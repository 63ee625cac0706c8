"""Reversible character-level text ciphers with a local history ledger."""

from .engine import (
    CIPHER_REGISTRY,
    DEFAULT_CIPHER,
    CipherStrategy,
    Engine,
    Operation,
    register_cipher,
)
from .ciphers.caesar import CaesarCipher
from .ciphers.dot import Alphabet, DotCipher
from .ciphers.reverse import ReverseCipher
from .errors import (
    BaziCipherError,
    CipherError,
    DeserializationError,
    EmptyInputError,
    InvalidLengthError,
    InvalidPaddingError,
    InvalidSymbolError,
    PersistenceError,
    UnknownCipherError,
)
from .history import HistoryEntry, Ledger, export_bytes, export_filename, export_text
from .session import Session
from .storage import JsonFileStore, KeyValueStore, MemoryStore

__version__ = "0.1.0"

__all__ = [
    "CIPHER_REGISTRY",
    "DEFAULT_CIPHER",
    "CipherStrategy",
    "Engine",
    "Operation",
    "register_cipher",
    "Alphabet",
    "DotCipher",
    "ReverseCipher",
    "CaesarCipher",
    "BaziCipherError",
    "CipherError",
    "InvalidLengthError",
    "InvalidSymbolError",
    "InvalidPaddingError",
    "UnknownCipherError",
    "EmptyInputError",
    "PersistenceError",
    "DeserializationError",
    "HistoryEntry",
    "Ledger",
    "export_text",
    "export_bytes",
    "export_filename",
    "Session",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
]
