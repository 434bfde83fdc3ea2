import uuid

from django.db import models


def new_entry_id() -> str:
    return uuid.uuid4().hex


class Entry(models.Model):
    class Kind(models.TextChoices):
        TASK = "task", "Task"
        NOTE = "note", "Note"
        EXAM = "exam", "Exam"
        STUDY_SESSION = "study_session", "Study session"

    id = models.CharField(primary_key=True, max_length=64, default=new_entry_id, editable=False)  # Opaque id, never content-derived for imports
    fingerprint = models.CharField(max_length=64, null=True, blank=True, db_index=True)  # Content hash, imported entries only
    kind = models.CharField(max_length=16, choices=Kind.choices, default=Kind.TASK)
    date = models.DateField(db_index=True)                               # Scheduled day (may differ from the fingerprinted one)
    subject = models.CharField(max_length=255, blank=True, default="")
    task = models.TextField()                                            # Description, unbounded
    completed = models.BooleanField(default=False)
    position = models.IntegerField(default=0)                            # Order inside the date group
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="children",
    )                                                                    # Generating exam, cleared on orphaning
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date", "position", "created_at"]
        indexes = [
            models.Index(fields=["date", "position"], name="idx_entry_date_position"),
        ]

    def __str__(self) -> str:
        return f"{self.date} {self.subject}: {self.task[:40]}"

    @property
    def is_generated(self) -> bool:
        return self.parent_id is not None

    @property
    def is_orphaned(self) -> bool:
        return self.kind == self.Kind.STUDY_SESSION and self.parent_id is None
