"""
History ledger: an append-only, persisted log of cipher operations.

The ledger keeps entries in append (chronological) order and writes the
whole sequence to its key-value store after every change. The persisted
value is a JSON array of flat objects:

    {"id": "...", "timestamp": "<ISO-8601>", "operation": "Encrypt",
     "algorithm": "Dot Cipher", "original": "...", "result": "..."}

Restoring is all-or-nothing: if any element fails to parse the ledger
starts empty.
"""

import json
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from .engine import LEGACY_OPERATION_LABELS, Operation
from .errors import DeserializationError, PersistenceError
from .log import log_info, log_warn
from .storage import KeyValueStore

STORAGE_KEY = "baziCipherHistory"
SEPARATOR = "-" * 50
EXPORT_TITLE = "Bazi Cipher History"

_FIELDS = ("id", "timestamp", "operation", "algorithm", "original", "result")


def _parse_operation(label: str) -> Operation:
    if label in LEGACY_OPERATION_LABELS:
        return LEGACY_OPERATION_LABELS[label]
    return Operation(label)


def _parse_timestamp(value: str) -> datetime:
    # JavaScript toISOString() ends in "Z", which older fromisoformat rejects
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class HistoryEntry:
    id: str
    timestamp: datetime
    operation: Operation
    algorithm: str
    original: str
    result: str

    @classmethod
    def create(cls, operation: Operation, algorithm: str, original: str, result: str) -> "HistoryEntry":
        return cls(
            id=uuid.uuid4().hex,
            timestamp=datetime.now(timezone.utc),
            operation=operation,
            algorithm=algorithm,
            original=original,
            result=result,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "operation": self.operation.value,
            "algorithm": self.algorithm,
            "original": self.original,
            "result": self.result,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        if not isinstance(data, dict):
            raise DeserializationError(f"History entry must be an object, got {type(data).__name__}")
        for field in _FIELDS:
            if not isinstance(data.get(field), str):
                raise DeserializationError(f"History entry field '{field}' missing or not a string")
        try:
            return cls(
                id=data["id"],
                timestamp=_parse_timestamp(data["timestamp"]),
                operation=_parse_operation(data["operation"]),
                algorithm=data["algorithm"],
                original=data["original"],
                result=data["result"],
            )
        except ValueError as e:
            raise DeserializationError(f"Bad history entry {data['id']!r}: {e}") from e


def dumps_entries(entries: Iterable[HistoryEntry]) -> str:
    return json.dumps([e.to_dict() for e in entries], ensure_ascii=False)


def loads_entries(raw: str) -> List[HistoryEntry]:
    """Parse a persisted ledger. Raises DeserializationError on any problem."""
    if not isinstance(raw, str):
        raise DeserializationError(f"History must be stored as a string, got {type(raw).__name__}")
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise DeserializationError(f"History is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise DeserializationError("History must be a JSON array")

    entries = [HistoryEntry.from_dict(item) for item in data]
    ids = set()
    for entry in entries:
        if entry.id in ids:
            raise DeserializationError(f"Duplicate history id {entry.id!r}")
        ids.add(entry.id)
    return entries


class Ledger:
    """
    Ordered history of operations backed by a KeyValueStore.

    Every mutating call (append, delete, clear) persists before returning.
    A failed write is reported as a warning and recorded in `last_error`;
    the in-memory change is kept.
    """

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY):
        self.store = store
        self.key = key
        self._entries: List[HistoryEntry] = []
        self.last_error: Optional[Exception] = None

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[HistoryEntry]:
        """Entries in append order (oldest first)."""
        return list(self._entries)

    def list_entries(self) -> List[HistoryEntry]:
        """Entries for display, most recent first."""
        return self._entries[::-1]

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def append(self, operation: Operation, algorithm: str, original: str, result: str) -> HistoryEntry:
        entry = HistoryEntry.create(operation, algorithm, original, result)
        ids = {e.id for e in self._entries}
        while entry.id in ids:
            entry = HistoryEntry.create(operation, algorithm, original, result)
        self._entries = self._entries + [entry]
        self.persist()
        return entry

    def delete(self, entry_id: str) -> bool:
        """Remove the entry with `entry_id`. Returns False if there was none."""
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._entries = remaining
        self.persist()
        return True

    def clear(self):
        self._entries = []
        self.persist()

    def persist(self) -> bool:
        """Write the full ledger to the store, overwriting what was there."""
        try:
            self.store.set(self.key, dumps_entries(self._entries))
        except PersistenceError as e:
            self.last_error = e
            log_warn(f"Failed to save history: {e}", always=True)
            return False
        self.last_error = None
        return True

    def restore(self) -> bool:
        """
        Load the ledger from the store.

        Any read or parse failure leaves the ledger empty and returns False.
        A missing key is not a failure.
        """
        try:
            raw = self.store.get(self.key)
            self._entries = loads_entries(raw) if raw is not None else []
        except (PersistenceError, DeserializationError) as e:
            self.last_error = e
            self._entries = []
            log_warn(f"Failed to load history, starting empty: {e}", always=True)
            return False
        self.last_error = None
        log_info(f"Loaded {len(self._entries)} history entr{'y' if len(self._entries) == 1 else 'ies'}")
        return True

# ==========================================
#  EXPORT
# ==========================================

def format_timestamp(ts: datetime) -> str:
    """Local wall-clock rendering used in listings and exports."""
    return ts.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def export_text(entries: Iterable[HistoryEntry], exported_on: date = None) -> str:
    """Plain-text report: a dated header, then one block per entry."""
    if exported_on is None:
        exported_on = date.today()
    lines = [f"{EXPORT_TITLE} ({exported_on.isoformat()})", ""]
    for entry in entries:
        lines.append(f"Time: {format_timestamp(entry.timestamp)}")
        lines.append(f"Operation: {entry.operation.value}")
        lines.append(f"Algorithm: {entry.algorithm}")
        lines.append(f"Original: {entry.original}")
        lines.append(f"Result: {entry.result}")
        lines.append(SEPARATOR)
    return "\n".join(lines) + "\n"


def export_bytes(entries: Iterable[HistoryEntry], exported_on: date = None) -> bytes:
    return export_text(entries, exported_on).encode("utf-8")


def export_filename(exported_on: date = None) -> str:
    if exported_on is None:
        exported_on = date.today()
    return f"bazi-cipher-history_{exported_on.isoformat()}.txt"
