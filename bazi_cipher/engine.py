"""
Cipher framework and the engine API consumed by the shell.

Ciphers subclass CipherStrategy and register themselves with
@register_cipher. The registry holds classes, not instances: every Engine
builds its own cipher objects so per-cipher settings (the Caesar shift)
belong to the engine that owns them.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List

from .errors import UnknownCipherError
from .log import log_info

DEFAULT_CIPHER = "dot"

# ==========================================
#  FRAMEWORK: Abstract Base Class & Registry
# ==========================================

class Operation(Enum):
    ENCRYPT = "Encrypt"
    DECRYPT = "Decrypt"


# Chinese labels found in older history files
LEGACY_OPERATION_LABELS = {"加密": Operation.ENCRYPT, "解密": Operation.DECRYPT}


class CipherStrategy(ABC):
    """Abstract base class that all ciphers must implement."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The identifier used to select this cipher."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Short description for help text."""
        pass

    @property
    def display_name(self) -> str:
        """Human-readable name, recorded in the history."""
        return self.name

    @abstractmethod
    def encode(self, text: str) -> str:
        pass

    @abstractmethod
    def decode(self, text: str) -> str:
        pass


CIPHER_REGISTRY = {}

def register_cipher(cls):
    """Decorator to auto-register ciphers."""
    CIPHER_REGISTRY[cls.name] = cls
    return cls

# ==========================================
#  ENGINE
# ==========================================

class Engine:
    """Owns one instance of every registered cipher."""

    def __init__(self):
        self.ciphers = {name: cls() for name, cls in CIPHER_REGISTRY.items()}

    def list_ciphers(self) -> List[Dict[str, str]]:
        return [{"id": name, "display_name": cipher.display_name}
                for name, cipher in self.ciphers.items()]

    def get(self, cipher_id: str) -> CipherStrategy:
        try:
            return self.ciphers[cipher_id]
        except KeyError:
            raise UnknownCipherError(cipher_id) from None

    def transform(self, cipher_id: str, operation: Operation, text: str) -> str:
        """
        Run `text` through a cipher.

        `operation` may be an Operation or its value ("Encrypt"/"Decrypt");
        anything else raises ValueError. Cipher errors (InvalidLengthError,
        InvalidSymbolError, ...) are not caught here; the caller decides how
        to present them.
        """
        cipher = self.get(cipher_id)
        operation = Operation(operation)
        if operation is Operation.ENCRYPT:
            result = cipher.encode(text)
        else:
            result = cipher.decode(text)
        log_info(f"{operation.value} with {cipher.display_name}: "
                 f"{len(text)} -> {len(result)} chars")
        return result

    def set_shift_offset(self, offset: int):
        self.get("caesar").set_shift(offset)


# Built-in ciphers register themselves on import
from . import ciphers  # noqa: E402,F401
