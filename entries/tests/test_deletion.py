# entries/tests/test_deletion.py
import datetime as dt

import pytest

from entries import deletion, services, store
from entries.errors import NotFound
from entries.models import Entry

TODAY = dt.date(2025, 3, 10)


def _exam_with_sessions(days_out: int = 4):
    # days_out=4 -> three study sessions
    exam = services.create_entry(
        kind="exam",
        date=TODAY + dt.timedelta(days=days_out),
        subject="FISICA",
        task="Verifica sulle forze",
        today=TODAY,
    )
    return exam, list(Entry.objects.filter(parent_id=exam.id))


@pytest.mark.django_db
def test_manual_exam_gets_sessions():
    exam, sessions = _exam_with_sessions()
    assert len(sessions) == 3
    assert all(s.is_generated for s in sessions)
    assert exam.fingerprint is None


@pytest.mark.django_db
def test_plain_delete_orphans_children():
    exam, sessions = _exam_with_sessions()

    result = deletion.delete(exam.id)

    assert result.as_dict() == {"had_children": True, "orphaned_count": 3}
    assert not Entry.objects.filter(pk=exam.id).exists()
    remaining = Entry.objects.filter(pk__in=[s.id for s in sessions])
    assert remaining.count() == 3
    for s in remaining:
        assert s.parent_id is None
        assert s.kind == Entry.Kind.STUDY_SESSION
        assert s.is_orphaned


@pytest.mark.django_db
def test_plain_delete_without_children():
    (e,) = [services.create_entry(kind="task", date=TODAY, task="Esercizi")]
    result = deletion.delete(e.id)
    assert result.as_dict() == {"had_children": False, "orphaned_count": 0}
    assert store.count() == 0


@pytest.mark.django_db
def test_cascade_delete_removes_exam_and_sessions():
    exam, _ = _exam_with_sessions()
    keep = services.create_entry(kind="task", date=TODAY, task="Esercizi")

    result = deletion.delete_cascade(exam.id)

    assert result.deleted_count == 4
    assert list(Entry.objects.values_list("id", flat=True)) == [keep.id]


@pytest.mark.django_db
def test_cascade_on_childless_entry_counts_root_only():
    e = services.create_entry(kind="note", date=TODAY, task="Portare il libro")
    assert deletion.delete_cascade(e.id).as_dict() == {"deleted_count": 1}


@pytest.mark.django_db
def test_deleting_a_single_session_leaves_exam_alone():
    exam, sessions = _exam_with_sessions()
    deletion.delete(sessions[0].id)
    assert len(store.get_children(exam.id)) == 2


@pytest.mark.django_db
def test_missing_ids_are_not_found_and_change_nothing():
    _exam_with_sessions()
    before = store.count()
    with pytest.raises(NotFound):
        deletion.delete("missing")
    with pytest.raises(NotFound):
        deletion.delete_cascade("missing")
    assert store.count() == before


@pytest.mark.django_db
def test_orphaned_session_is_not_reparented_on_regeneration():
    exam, sessions = _exam_with_sessions()
    deletion.delete(exam.id)
    again, new_sessions = _exam_with_sessions()
    assert len(new_sessions) == 3
    assert not {s.id for s in new_sessions} & {s.id for s in sessions}
    assert Entry.objects.filter(kind=Entry.Kind.STUDY_SESSION, parent__isnull=True).count() == 3


@pytest.mark.django_db
def test_children_with_equal_positions_are_listed_by_creation_time():
    exam = services.create_entry(kind="note", date=TODAY, task="Portare il libro")
    later = Entry.objects.create(date=TODAY, task="b", parent=exam, kind=Entry.Kind.STUDY_SESSION)
    earlier = Entry.objects.create(date=TODAY, task="a", parent=exam, kind=Entry.Kind.STUDY_SESSION)
    Entry.objects.filter(pk=earlier.pk).update(created_at=later.created_at - dt.timedelta(seconds=5))
    assert [c.id for c in store.get_children(exam.id)] == [earlier.id, later.id]
