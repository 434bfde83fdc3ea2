# entries/services.py
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from . import clock, ordering, store
from .errors import EntryError
from .fingerprint import fingerprint
from .models import Entry
from .scheduling import insert_study_sessions, should_generate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """One freshly parsed export row, before it is matched against the store."""
    date: str | dt.date
    subject: str
    task: str
    kind: str = Entry.Kind.TASK

    @property
    def fingerprint(self) -> str:
        # Hash the parsed day, so "2025-3-12" and "2025-03-12" match.
        return fingerprint(store.parse_date(self.date), self.subject, self.task)


@dataclass
class ReconcileResult:
    inserted: int = 0
    skipped: int = 0
    sessions_created: int = 0
    errors: List[Dict] = field(default_factory=list)

    def as_dict(self) -> Dict:
        return {
            "inserted": self.inserted,
            "skipped": self.skipped,
            "sessions_created": self.sessions_created,
            "errors": list(self.errors),
        }


def _insert_candidate(c: Candidate) -> Optional[Entry]:
    """Insert `c` unless an entry with its fingerprint exists; None means skipped."""
    day = store.parse_date(c.date)
    kind = store.normalize_kind(c.kind)
    task = store.validate_task(c.task)
    fp = fingerprint(day, c.subject, task)

    with store.atomic():
        if store.has_fingerprint(fp):
            return None
        return Entry.objects.create(
            fingerprint=fp,
            kind=kind,
            date=day,
            subject=c.subject or "",
            task=task,
            position=ordering.next_position(day),
        )


def reconcile(candidates: Iterable[Candidate], today: Optional[dt.date] = None) -> ReconcileResult:
    """
    Merge a batch of parsed export rows into the store.

    Rules:
      1) A row whose fingerprint is already stored is skipped, wherever the
         matching entry has since been moved, and whatever its state.
      2) New rows get a fresh id and are appended to the end of their day.
      3) A failing row is reported in `errors` and the batch goes on.
      4) New exam-like rows get their study sessions right away.
    """
    if today is None:
        today = clock.today()
    result = ReconcileResult()

    for index, c in enumerate(candidates):
        try:
            entry = _insert_candidate(c)
        except EntryError as e:
            logger.warning("import row %d rejected: %s", index, e)
            result.errors.append({"index": index, "error": str(e)})
            continue
        if entry is None:
            result.skipped += 1
            continue

        result.inserted += 1
        if should_generate(entry):
            try:
                result.sessions_created += insert_study_sessions(entry, today)
            except EntryError as e:
                logger.warning("study sessions for %s failed: %s", entry.id, e)
                result.errors.append({"index": index, "error": str(e)})

    logger.info(
        "import finished: %d inserted, %d skipped, %d study sessions, %d errors",
        result.inserted, result.skipped, result.sessions_created, len(result.errors),
    )
    return result


def create_entry(
    *,
    kind: Optional[str],
    date: str | dt.date,
    subject: str = "",
    task: str,
    position: Optional[int] = None,
    today: Optional[dt.date] = None,
) -> Entry:
    """Manually added entry: no fingerprint, appended to its day unless a position is given."""
    day = store.parse_date(date)
    kind = store.normalize_kind(kind)
    task = store.validate_task(task)

    with store.atomic():
        entry = Entry.objects.create(
            kind=kind,
            date=day,
            subject=subject or "",
            task=task,
            position=ordering.next_position(day) if position is None else int(position),
        )
    logger.debug("entry %s created on %s", entry.id, day)

    if should_generate(entry):
        insert_study_sessions(entry, today)
    return entry


def update_entry(
    entry_id: str,
    *,
    date: str | dt.date | None = None,
    completed: Optional[bool] = None,
    position: Optional[int] = None,
) -> Entry:
    """
    Partial update of date / completion / position.

    Changing the date without giving a position appends the entry to the
    bottom of the new day.
    """
    day = store.parse_date(date) if date is not None else None

    with store.atomic():
        entry = store.get(entry_id)
        if day is not None and day != entry.date and position is None:
            entry = ordering.move(entry.id, day, ordering.BOTTOM)
        elif day is not None:
            entry.date = day
        if completed is not None:
            entry.completed = bool(completed)
        if position is not None:
            entry.position = int(position)
        entry.save(update_fields=["date", "completed", "position", "updated_at"])
    return entry
