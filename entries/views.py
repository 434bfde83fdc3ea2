# entries/views.py
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import deletion, ordering, services, store
from .errors import ConflictError, EntryError, NotFound, StorageError, ValidationError
from .serializers import (
    EntryCreateSerializer,
    EntrySerializer,
    EntryUpdateSerializer,
    ImportSerializer,
    MoveSerializer,
    ReorderSerializer,
)

logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    NotFound: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
}


def _error_response(e: EntryError) -> Response:
    """Map a core error to a rejected request; storage failures stay generic."""
    if isinstance(e, StorageError):
        return Response({'detail': 'Database error.'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    for kind, code in _ERROR_STATUS.items():
        if isinstance(e, kind):
            return Response({'detail': str(e)}, status=code)
    return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)


def _invalid(errors) -> Response:
    return Response({'detail': 'invalid request.', 'errors': errors}, status=status.HTTP_400_BAD_REQUEST)


class EntryListView(APIView):
    """GET /api/entries (ordered by date, position, created_at); POST /api/entries."""
    def get(self, request):
        try:
            entries = store.list_entries()
        except EntryError as e:
            return _error_response(e)
        return Response(EntrySerializer(entries, many=True).data)

    def post(self, request):
        s = EntryCreateSerializer(data=request.data or {})
        if not s.is_valid():
            return _invalid(s.errors)
        try:
            entry = services.create_entry(**s.validated_data)
        except EntryError as e:
            return _error_response(e)
        return Response(EntrySerializer(entry).data, status=status.HTTP_201_CREATED)


class EntryDetailView(APIView):
    """GET / PATCH / DELETE /api/entries/{id}. DELETE orphans generated children."""
    def get(self, request, entry_id: str):
        try:
            entry = store.get(entry_id)
        except EntryError as e:
            return _error_response(e)
        return Response(EntrySerializer(entry).data)

    def patch(self, request, entry_id: str):
        s = EntryUpdateSerializer(data=request.data or {})
        if not s.is_valid():
            return _invalid(s.errors)
        try:
            entry = services.update_entry(entry_id, **s.validated_data)
        except EntryError as e:
            return _error_response(e)
        return Response(EntrySerializer(entry).data)

    def delete(self, request, entry_id: str):
        try:
            result = deletion.delete(entry_id)
        except EntryError as e:
            return _error_response(e)
        return Response(dict(result.as_dict(), success=True))


class EntryCascadeView(APIView):
    """DELETE /api/entries/{id}/cascade (entry plus its study sessions)."""
    def delete(self, request, entry_id: str):
        try:
            result = deletion.delete_cascade(entry_id)
        except EntryError as e:
            return _error_response(e)
        return Response(dict(result.as_dict(), success=True))


class EntryChildrenView(APIView):
    """GET /api/entries/{id}/children"""
    def get(self, request, entry_id: str):
        try:
            children = store.get_children(entry_id)
        except EntryError as e:
            return _error_response(e)
        return Response(EntrySerializer(children, many=True).data)


class EntryMoveView(APIView):
    """POST /api/entries/{id}/move  body: {"date": "YYYY-MM-DD", "placement": "top"|"bottom"}"""
    def post(self, request, entry_id: str):
        s = MoveSerializer(data=request.data or {})
        if not s.is_valid():
            return _invalid(s.errors)
        try:
            entry = ordering.move(entry_id, s.validated_data['date'], s.validated_data['placement'])
        except EntryError as e:
            return _error_response(e)
        return Response(EntrySerializer(entry).data)


class DayListView(APIView):
    """GET /api/days: entries grouped per date, each group in display order."""
    def get(self, request):
        try:
            groups = store.group_by_date(store.list_entries())
        except EntryError as e:
            return _error_response(e)
        return Response([
            {
                'date': g['date'].isoformat(),
                'entries': EntrySerializer(g['entries'], many=True).data,
            }
            for g in groups
        ])


class DayReorderView(APIView):
    """POST /api/days/{date}/reorder  body: {"ids": [...]} (all-or-nothing, 409 on foreign ids)."""
    def post(self, request, day: str):
        s = ReorderSerializer(data=request.data or {})
        if not s.is_valid():
            return _invalid(s.errors)
        try:
            entries = ordering.reorder(day, s.validated_data['ids'])
        except EntryError as e:
            return _error_response(e)
        return Response(EntrySerializer(entries, many=True).data)


class ImportView(APIView):
    """
    POST /api/import  body: {"records": [{"date", "subject", "task", "kind"}, ...]}
    Re-posting the same export is a no-op (everything is skipped).
    """
    def post(self, request):
        s = ImportSerializer(data=request.data or {})
        if not s.is_valid():
            return _invalid(s.errors)
        candidates = [services.Candidate(**row) for row in s.validated_data['records']]
        result = services.reconcile(candidates)
        return Response(result.as_dict(), status=status.HTTP_200_OK)
