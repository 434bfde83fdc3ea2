from django.urls import path
from .views import (
    DayListView,
    DayReorderView,
    EntryCascadeView,
    EntryChildrenView,
    EntryDetailView,
    EntryListView,
    EntryMoveView,
    ImportView,
)

urlpatterns = [
    path("entries", EntryListView.as_view(), name="entry-list"),
    path("entries/<str:entry_id>", EntryDetailView.as_view(), name="entry-detail"),
    path("entries/<str:entry_id>/cascade", EntryCascadeView.as_view(), name="entry-cascade"),
    path("entries/<str:entry_id>/children", EntryChildrenView.as_view(), name="entry-children"),
    path("entries/<str:entry_id>/move", EntryMoveView.as_view(), name="entry-move"),
    path("days", DayListView.as_view(), name="day-list"),
    path("days/<str:day>/reorder", DayReorderView.as_view(), name="day-reorder"),
    path("import", ImportView.as_view(), name="import"),
]
