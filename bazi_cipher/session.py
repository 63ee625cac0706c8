"""
One user session: an Engine, the currently selected cipher and the ledger.

Create it with Session.open() at start-up, which restores the history.
There is no save step at the end: the ledger writes itself after every change.
"""

from .engine import DEFAULT_CIPHER, Engine, Operation
from .errors import EmptyInputError
from .history import Ledger
from .log import log_info
from .storage import KeyValueStore


class Session:
    def __init__(self, engine: Engine, ledger: Ledger, cipher_id: str = DEFAULT_CIPHER,
                 record_history: bool = True):
        self.engine = engine
        self.ledger = ledger
        self.record_history = record_history
        self.cipher_id = DEFAULT_CIPHER
        self.select(cipher_id)

    @classmethod
    def open(cls, store: KeyValueStore, **kwargs) -> "Session":
        ledger = Ledger(store)
        ledger.restore()
        return cls(Engine(), ledger, **kwargs)

    @property
    def cipher(self):
        return self.engine.get(self.cipher_id)

    def select(self, cipher_id: str):
        """Switch the current cipher. Raises UnknownCipherError."""
        self.engine.get(cipher_id)
        self.cipher_id = cipher_id
        log_info(f"Switched to {self.cipher.display_name}")

    def set_shift(self, shift: int):
        self.engine.set_shift_offset(shift)
        log_info(f"Caesar shift set to {shift}")

    def perform(self, operation: Operation, text: str) -> str:
        """
        Encrypt or decrypt `text` with the current cipher and record it.

        Surrounding whitespace is stripped first; blank input raises
        EmptyInputError. Cipher errors propagate and nothing is recorded.
        """
        text = text.strip()
        if not text:
            raise EmptyInputError("Please enter some text")

        # Name captured before the transform so the entry matches the settings used
        algorithm = self.cipher.display_name
        result = self.engine.transform(self.cipher_id, operation, text)
        if self.record_history:
            self.ledger.append(operation, algorithm, text, result)
        return result
