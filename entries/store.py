# entries/store.py
"""
Access to the persisted entries table.

Every operation that checks something and then writes based on the answer
(fingerprint lookup before insert, id lookup before a deterministic insert,
reorders, moves, deletes) must run inside `atomic()`: the process-wide lock
serializes request handlers and background imports, the database
transaction makes the batch all-or-nothing.
"""
from __future__ import annotations

import datetime as dt
import logging
import threading
from contextlib import contextmanager
from itertools import groupby
from typing import Dict, Iterator, List

from django.db import DatabaseError, transaction
from django.utils.dateparse import parse_date as _parse_iso_date

from .errors import NotFound, StorageError, ValidationError
from .models import Entry

logger = logging.getLogger(__name__)

_write_lock = threading.RLock()

KIND_ALIASES = {
    "compiti": Entry.Kind.TASK,
    "homework": Entry.Kind.TASK,
    "nota": Entry.Kind.NOTE,
    "verifica": Entry.Kind.EXAM,
    "studio": Entry.Kind.STUDY_SESSION,
}


@contextmanager
def _storage_errors() -> Iterator[None]:
    try:
        yield
    except DatabaseError as e:
        logger.error("storage failure: %s", e)
        raise StorageError(str(e)) from e


@contextmanager
def atomic() -> Iterator[None]:
    """Serialized read-check-write unit over the store."""
    with _write_lock, _storage_errors():
        with transaction.atomic():
            yield


def parse_date(value: str | dt.date) -> dt.date:
    """Parse a YYYY-MM-DD string (or pass a date through)."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        raise ValidationError("date must be YYYY-MM-DD.")
    try:
        d = _parse_iso_date(value.strip())
    except ValueError:
        d = None
    if d is None:
        raise ValidationError(f"invalid date: {value!r}.")
    return d


def normalize_kind(value: str | None) -> str:
    if not value:
        return Entry.Kind.TASK
    v = str(value).strip().lower()
    if v in Entry.Kind.values:
        return v
    if v in KIND_ALIASES:
        return KIND_ALIASES[v]
    raise ValidationError(f"unknown kind: {value!r}.")


def validate_task(task: str | None) -> str:
    if task is None or not str(task).strip():
        raise ValidationError("task is required.")
    return str(task)


def get(entry_id: str) -> Entry:
    with _storage_errors():
        obj = Entry.objects.filter(pk=entry_id).first()
    if obj is None:
        raise NotFound(entry_id)
    return obj


def exists(entry_id: str) -> bool:
    with _storage_errors():
        return Entry.objects.filter(pk=entry_id).exists()


def has_fingerprint(fp: str) -> bool:
    with _storage_errors():
        return Entry.objects.filter(fingerprint=fp).exists()


def list_entries() -> List[Entry]:
    """All entries, by date then position, ties broken by creation time."""
    with _storage_errors():
        return list(Entry.objects.order_by("date", "position", "created_at"))


def get_children(parent_id: str) -> List[Entry]:
    with _storage_errors():
        if not Entry.objects.filter(pk=parent_id).exists():
            raise NotFound(parent_id)
        return list(Entry.objects.filter(parent_id=parent_id).order_by("date", "position", "created_at"))


def count() -> int:
    with _storage_errors():
        return Entry.objects.count()


def group_by_date(entries: List[Entry]) -> List[Dict]:
    """Split an already ordered entry list into consecutive per-date groups."""
    return [
        {"date": d, "entries": list(items)}
        for d, items in groupby(entries, key=lambda e: e.date)
    ]
