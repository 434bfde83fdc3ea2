# entries/scheduling.py
"""
Study sessions ahead of exams.

An exam dated D seen on day T gets up to ENTRIES_STUDY_SESSION_DAYS
preparation entries on D-1, D-2, ... and never on or before T. Session ids
are derived from (exam id, offset), so running the generator again for the
same exam yields the same ids and inserts nothing new.
"""
from __future__ import annotations

import datetime as dt
import hashlib
import logging
from typing import List, Optional

from django.conf import settings
from django.db import IntegrityError, transaction

from . import clock, store
from .models import Entry
from .ordering import next_position

logger = logging.getLogger(__name__)

DEFAULT_EXAM_KEYWORDS = ("verifica", "prova", "test", "interrogazione")
ELLIPSIS = "..."


def _keywords():
    return tuple(k.lower() for k in getattr(settings, "ENTRIES_EXAM_KEYWORDS", DEFAULT_EXAM_KEYWORDS))


def is_exam_like(task: str) -> bool:
    # Plain substring match: "attestato" matches "test" as well.
    t = (task or "").lower()
    return any(k in t for k in _keywords())


def should_generate(entry: Entry) -> bool:
    return entry.kind != Entry.Kind.STUDY_SESSION and is_exam_like(entry.task)


def study_session_id(parent_id: str, offset: int) -> str:
    digest = hashlib.sha256(f"study:{parent_id}:{offset}".encode("utf-8")).hexdigest()
    return f"study_{digest[:16]}"


def study_session_text(task: str) -> str:
    limit = getattr(settings, "ENTRIES_TASK_PREVIEW_CHARS", 100)
    preview = task[:limit] + ELLIPSIS if len(task) > limit else task
    return f"Study for: {preview}"


def generate_study_sessions(exam: Entry, today: dt.date) -> List[Entry]:
    """Unsaved study-session entries for `exam` as seen on `today`."""
    days_until = (exam.date - today).days
    if days_until < 1:
        return []
    max_days = getattr(settings, "ENTRIES_STUDY_SESSION_DAYS", 4)
    days_to_generate = max(0, min(max_days, days_until - 1))

    text = study_session_text(exam.task)
    return [
        Entry(
            id=study_session_id(exam.id, offset),
            kind=Entry.Kind.STUDY_SESSION,
            date=exam.date - dt.timedelta(days=offset),
            subject=exam.subject,
            task=text,
            completed=False,
            position=0,
            parent_id=exam.id,
        )
        for offset in range(1, days_to_generate + 1)
    ]


def insert_study_sessions(exam: Entry, today: Optional[dt.date] = None) -> int:
    """Persist the sessions for `exam` that are not stored yet; return how many were created."""
    if today is None:
        today = clock.today()
    created = 0
    for session in generate_study_sessions(exam, today):
        with store.atomic():
            if store.exists(session.id):
                continue
            session.position = next_position(session.date)
            try:
                with transaction.atomic():
                    session.save(force_insert=True)
            except IntegrityError:
                # Inserted by another process between the check and the write.
                continue
        created += 1
        logger.debug("study session %s created for %s on %s", session.id, exam.id, session.date)
    return created
