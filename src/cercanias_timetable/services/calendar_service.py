"""Calendar resolution: which services run on the selected date."""

import logging
import re
from datetime import date

from cercanias_timetable.data.gtfs_tables import (
    WEEKDAY_COLUMNS,
    read_calendar,
    read_calendar_dates,
)
from cercanias_timetable.errors import InvalidDateError, NoActiveServiceError
from cercanias_timetable.models.gtfs import ExceptionType, ServiceDay

logger = logging.getLogger(__name__)

# Date picker format: YYYY-MM-DD, no timezone
SELECTED_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def date_to_gtfs_format(d: date) -> str:
    """Convert a date to GTFS date format (YYYYMMDD)."""
    return f"{d.year:04d}{d.month:02d}{d.day:02d}"


def date_to_display_format(d: date) -> str:
    """Convert a date to the printed format (DD/MM/YYYY)."""
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"


def gtfs_date_to_display_format(gtfs_date: str) -> str:
    """Convert YYYYMMDD to DD/MM/YYYY without validating it."""
    return f"{gtfs_date[6:8]}/{gtfs_date[4:6]}/{gtfs_date[0:4]}"


def weekday_column(d: date) -> str:
    """Return the calendar.txt weekday column for a date."""
    # date.weekday() counts from Monday; WEEKDAY_COLUMNS counts from Sunday
    return WEEKDAY_COLUMNS[(d.weekday() + 1) % 7]


def parse_selected_date(value: str) -> date:
    """Parse a YYYY-MM-DD string into a date.

    Raises:
        InvalidDateError: If the string is not 4-2-2 digits or not a real date.
    """
    match = SELECTED_DATE_PATTERN.match(value.strip())
    if match is None:
        raise InvalidDateError(value)
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateError(value) from e


def get_service_day(value: str | date) -> ServiceDay:
    """Resolve the selected date into every format the pipeline needs.

    Args:
        value: A ``datetime.date`` or a ``YYYY-MM-DD`` string.

    Returns:
        ServiceDay with the GTFS date, weekday column and display date.
    """
    selected = value if isinstance(value, date) else parse_selected_date(value)
    return ServiceDay(
        service_date=selected,
        gtfs_date=date_to_gtfs_format(selected),
        weekday=weekday_column(selected),
        display_date=date_to_display_format(selected),
    )


def resolve_active_services(
    calendar_text: str | None,
    calendar_dates_text: str | None,
    target_date: str,
    weekday: str,
) -> frozenset[str]:
    """Get service IDs active on a given date.

    Implements the GTFS service day algorithm in two phases:
    1. Find services from calendar.txt where the weekday flag is "1" and the
       date is within [start_date, end_date]. YYYYMMDD is fixed width, so
       string comparison is date comparison.
    2. Apply calendar_dates.txt rows for the date (exception_type 1 adds,
       2 removes), whether or not phase 1 selected the service.

    Both files are optional: a missing file, or one without the needed
    columns, contributes nothing.

    Args:
        calendar_text: Contents of calendar.txt, or None.
        calendar_dates_text: Contents of calendar_dates.txt, or None.
        target_date: Date in YYYYMMDD format.
        weekday: calendar.txt weekday column ("sunday".."saturday").

    Returns:
        Frozen set of active service IDs.

    Raises:
        NoActiveServiceError: If no service runs on the date.
    """
    active: set[str] = set()

    if calendar_text is not None:
        for rule in read_calendar(calendar_text, weekday):
            if rule.runs_on(weekday) and rule.start_date <= target_date <= rule.end_date:
                active.add(rule.service_id)
        logger.info(f"calendar.txt: {len(active)} services run on {weekday} {target_date}")

    if calendar_dates_text is not None:
        added = removed = 0
        for exception in read_calendar_dates(calendar_dates_text):
            if exception.date != target_date:
                continue
            if exception.exception_type == ExceptionType.ADDED:
                active.add(exception.service_id)
                added += 1
            elif exception.exception_type == ExceptionType.REMOVED:
                active.discard(exception.service_id)
                removed += 1
        logger.info(f"calendar_dates.txt: {added} additions, {removed} removals")

    if not active:
        raise NoActiveServiceError(gtfs_date_to_display_format(target_date))

    return frozenset(active)
