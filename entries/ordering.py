# entries/ordering.py
from __future__ import annotations

import datetime as dt
import logging
from typing import List, Optional, Sequence

from django.db.models import Max, Min
from django.utils import timezone

from . import store
from .errors import ConflictError, ValidationError
from .models import Entry

logger = logging.getLogger(__name__)

TOP = "top"
BOTTOM = "bottom"
PLACEMENTS = (TOP, BOTTOM)


def _group(date: dt.date, exclude_id: Optional[str]):
    qs = Entry.objects.filter(date=date)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    return qs


def max_position(date: dt.date, exclude_id: Optional[str] = None) -> int:
    """Highest position in the date group, -1 when the group is empty."""
    value = _group(date, exclude_id).aggregate(m=Max("position"))["m"]
    return -1 if value is None else value


def min_position(date: dt.date, exclude_id: Optional[str] = None) -> Optional[int]:
    return _group(date, exclude_id).aggregate(m=Min("position"))["m"]


def next_position(date: dt.date) -> int:
    return max_position(date) + 1


def reorder(date: str | dt.date, ordered_ids: Sequence[str]) -> List[Entry]:
    """
    Rewrite positions of the given ids to 0..n-1 in list order.

    All-or-nothing: an id that is unknown or scheduled on another day raises
    ConflictError and no position changes.
    """
    day = store.parse_date(date)
    ids = [str(i) for i in ordered_ids]
    if not ids:
        raise ValidationError("ids must not be empty.")
    if len(set(ids)) != len(ids):
        raise ValidationError("ids must not contain duplicates.")

    with store.atomic():
        found = {e.id: e for e in Entry.objects.filter(pk__in=ids)}
        missing = [i for i in ids if i not in found]
        if missing:
            raise ConflictError(f"unknown entries: {', '.join(missing)}.")
        foreign = [i for i in ids if found[i].date != day]
        if foreign:
            raise ConflictError(f"entries not scheduled on {day.isoformat()}: {', '.join(foreign)}.")

        now = timezone.now()
        ordered = []
        for pos, entry_id in enumerate(ids):
            e = found[entry_id]
            e.position = pos
            e.updated_at = now
            ordered.append(e)
        Entry.objects.bulk_update(ordered, ["position", "updated_at"])

    logger.debug("reordered %d entries on %s", len(ordered), day)
    return ordered


def move(entry_id: str, new_date: str | dt.date, placement: str = BOTTOM) -> Entry:
    """Reschedule an entry, placing it first or last in the destination day."""
    if placement not in PLACEMENTS:
        raise ValidationError("placement must be top|bottom.")
    day = store.parse_date(new_date)

    with store.atomic():
        entry = store.get(entry_id)
        if placement == TOP:
            lowest = min_position(day, exclude_id=entry.id)
            position = 0 if lowest is None else lowest - 1
        else:
            position = max_position(day, exclude_id=entry.id) + 1
        entry.date = day
        entry.position = position
        entry.save(update_fields=["date", "position", "updated_at"])

    logger.debug("moved %s to %s (%s, position %d)", entry.id, day, placement, position)
    return entry
