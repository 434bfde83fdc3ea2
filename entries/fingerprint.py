# entries/fingerprint.py
from __future__ import annotations

import datetime as dt
import hashlib


def _normalize_date(d: str | dt.date) -> str:
    if isinstance(d, dt.date):
        return d.isoformat()
    return str(d).strip()


def fingerprint(date: str | dt.date, subject: str, task: str) -> str:
    """
    Content hash of an imported entry, used only to recognize it on re-import.

    Each field is length-prefixed before hashing, so ("a|b", "c") and
    ("a", "b|c") never produce the same input bytes.
    """
    h = hashlib.sha256()
    for part in (_normalize_date(date), subject or "", task or ""):
        raw = part.encode("utf-8")
        h.update(str(len(raw)).encode("ascii"))
        h.update(b":")
        h.update(raw)
    return h.hexdigest()
