# entries/clock.py
import datetime as dt

import pytz
from django.conf import settings


def today() -> dt.date:
    """Current calendar date in the configured local time zone."""
    tzinfo = pytz.timezone(getattr(settings, "ENTRIES_TIMEZONE", settings.TIME_ZONE))
    return dt.datetime.now(dt.timezone.utc).astimezone(tzinfo).date()
