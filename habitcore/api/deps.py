"""
FastAPI dependencies (DB session, calendar convention)
"""
from datetime import date, tzinfo

from fastapi import Depends

from habitcore.config import get_settings
from habitcore.domain.dates import today_in
from habitcore.infrastructure.db.session import get_db as _get_db


# Re-export get_db for convenience
get_db = _get_db


def get_calendar_tz() -> tzinfo:
    """Timezone every completion instant is converted in"""
    return get_settings().get_timezone()


def get_today(tz: tzinfo = Depends(get_calendar_tz)) -> date:
    """
    Today's date in the calendar timezone.

    The only place the wall clock is read; overridden in tests.
    """
    return today_in(tz)
