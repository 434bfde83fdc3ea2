# entries/serializers.py
import datetime as dt

from django.utils import timezone
from rest_framework import serializers

from . import store
from .errors import ValidationError as EntryValidationError
from .models import Entry
from .ordering import PLACEMENTS


class AwareDateTimeField(serializers.DateTimeField):
    """
    Datetime field that always renders tz-aware UTC.
    - Naive values are assumed to be UTC.
    """
    def __init__(self, *args, **kwargs):
        kwargs.setdefault("default_timezone", dt.timezone.utc)
        super().__init__(*args, **kwargs)

    def to_representation(self, value):
        if value is None:
            return None
        if timezone.is_naive(value):
            value = timezone.make_aware(value, dt.timezone.utc)
        return super().to_representation(value.astimezone(dt.timezone.utc))


class KindField(serializers.CharField):
    """Entry kind, also accepting the labels used by the school export."""
    def to_internal_value(self, data):
        try:
            return str(store.normalize_kind(super().to_internal_value(data)))
        except EntryValidationError as e:
            raise serializers.ValidationError(str(e))


class EntrySerializer(serializers.ModelSerializer):
    """
    Read-only snapshot of an entry, with the derived flags the page layer
    uses to badge generated and orphaned study sessions.
    """
    parent_id = serializers.CharField(read_only=True, allow_null=True)
    is_generated = serializers.BooleanField(read_only=True)
    is_orphaned = serializers.BooleanField(read_only=True)
    created_at = AwareDateTimeField(read_only=True)
    updated_at = AwareDateTimeField(read_only=True)

    class Meta:
        model = Entry
        fields = (
            "id",
            "fingerprint",
            "kind",
            "date",
            "subject",
            "task",
            "completed",
            "position",
            "parent_id",
            "is_generated",
            "is_orphaned",
            "created_at",
            "updated_at",
        )


class EntryCreateSerializer(serializers.Serializer):
    kind = KindField(required=False, default=Entry.Kind.TASK)
    date = serializers.DateField(input_formats=["%Y-%m-%d"])
    subject = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    task = serializers.CharField(allow_blank=False, trim_whitespace=False)
    position = serializers.IntegerField(required=False, allow_null=True, default=None)

    def validate_task(self, v: str):
        if not v.strip():
            raise serializers.ValidationError("task is required.")
        return v


class EntryUpdateSerializer(serializers.Serializer):
    """Only date, completion and position are user-editable."""
    date = serializers.DateField(required=False, input_formats=["%Y-%m-%d"])
    completed = serializers.BooleanField(required=False)
    position = serializers.IntegerField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("nothing to update (date, completed or position).")
        return attrs


class MoveSerializer(serializers.Serializer):
    date = serializers.DateField(input_formats=["%Y-%m-%d"])
    placement = serializers.ChoiceField(choices=PLACEMENTS, default="bottom")


class ReorderSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.CharField(), allow_empty=False)


class CandidateSerializer(serializers.Serializer):
    """
    One parsed export row. Bad rows are reported per record by the import,
    so only the shape is checked here.
    """
    date = serializers.CharField()
    subject = serializers.CharField(required=False, allow_blank=True, default="")
    task = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)
    kind = serializers.CharField(required=False, allow_blank=True, default=Entry.Kind.TASK)


class ImportSerializer(serializers.Serializer):
    records = CandidateSerializer(many=True)
