# entries/tests/test_fingerprint.py
import datetime as dt

from entries.fingerprint import fingerprint


def test_same_inputs_same_fingerprint():
    a = fingerprint("2025-01-15", "MATEMATICA", "Pag. 100 es. 1-5")
    b = fingerprint("2025-01-15", "MATEMATICA", "Pag. 100 es. 1-5")
    assert a == b
    assert len(a) == 64


def test_date_object_and_iso_string_agree():
    assert fingerprint(dt.date(2025, 1, 15), "ITALIANO", "Leggere") == fingerprint("2025-01-15", "ITALIANO", "Leggere")


def test_any_field_change_changes_fingerprint():
    base = fingerprint("2025-01-15", "MATEMATICA", "Task A")
    assert fingerprint("2025-01-16", "MATEMATICA", "Task A") != base
    assert fingerprint("2025-01-15", "FISICA", "Task A") != base
    assert fingerprint("2025-01-15", "MATEMATICA", "Task B") != base


def test_field_boundaries_do_not_collide():
    # Same concatenated text, different split between subject and task.
    assert fingerprint("2025-01-15", "AB", "C") != fingerprint("2025-01-15", "A", "BC")
    assert fingerprint("2025-01-15", "A|B", "C") != fingerprint("2025-01-15", "A", "B|C")


def test_empty_fields_and_unicode():
    assert fingerprint("", "", "") != fingerprint("", "", " ")
    assert fingerprint("2025-01-15", "ITALIANO", "àèìòù & <test>") == fingerprint("2025-01-15", "ITALIANO", "àèìòù & <test>")
