# entries/deletion.py
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, List

from django.utils import timezone

from . import store
from .errors import NotFound
from .models import Entry

logger = logging.getLogger(__name__)


@dataclass
class DeleteResult:
    had_children: bool
    orphaned_count: int

    def as_dict(self) -> Dict:
        return asdict(self)


@dataclass
class CascadeResult:
    deleted_count: int

    def as_dict(self) -> Dict:
        return asdict(self)


def delete(entry_id: str) -> DeleteResult:
    """Delete one entry; its children stay in the store with the parent link cleared."""
    with store.atomic():
        if not store.exists(entry_id):
            raise NotFound(entry_id)
        orphaned = Entry.objects.filter(parent_id=entry_id).update(
            parent=None, updated_at=timezone.now()
        )
        Entry.objects.filter(pk=entry_id).delete()

    logger.debug("deleted %s (orphaned %d children)", entry_id, orphaned)
    return DeleteResult(had_children=orphaned > 0, orphaned_count=orphaned)


def _descendant_ids(root_id: str) -> List[str]:
    ids: List[str] = []
    frontier = [root_id]
    while frontier:
        children = list(
            Entry.objects.filter(parent_id__in=frontier)
            .exclude(pk__in=ids)
            .values_list("pk", flat=True)
        )
        ids.extend(children)
        frontier = children
    return ids


def delete_cascade(entry_id: str) -> CascadeResult:
    """Delete an entry together with everything generated from it."""
    with store.atomic():
        if not store.exists(entry_id):
            raise NotFound(entry_id)
        doomed = [entry_id] + _descendant_ids(entry_id)
        Entry.objects.filter(pk__in=doomed).delete()

    logger.debug("cascade deleted %s (%d entries)", entry_id, len(doomed))
    return CascadeResult(deleted_count=len(doomed))
