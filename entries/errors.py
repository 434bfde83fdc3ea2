# entries/errors.py
class EntryError(Exception):
    """Base class for errors raised by the entries core."""


class NotFound(EntryError):
    def __init__(self, entry_id: str):
        super().__init__(f"entry {entry_id} not found.")
        self.entry_id = entry_id


class ValidationError(EntryError):
    """Missing or malformed input (empty task, bad date, unknown kind...)."""


class ConflictError(EntryError):
    """A reorder references ids outside the target date group."""


class StorageError(EntryError):
    """The persistence layer failed (disk, lock timeout, aborted transaction)."""
