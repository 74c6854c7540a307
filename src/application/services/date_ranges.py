from datetime import datetime, timedelta
from typing import Optional, Union

from src.application.schemas.analytics import DateRange
from src.domain.common import DateRangeFilter

_LABELS = {
    DateRangeFilter.TODAY: "Today",
    DateRangeFilter.LAST_MONTH: "Last Month",
    DateRangeFilter.THIS_YEAR: "This Year",
    DateRangeFilter.LAST_YEAR: "Last Year",
    DateRangeFilter.CUSTOM: "Custom Range",
    DateRangeFilter.ALL: "All Time",
}


def coerce_filter(token: Union[DateRangeFilter, str, None]) -> DateRangeFilter:
    """Map a filter token onto the enum; anything unrecognised means ``ALL``."""
    try:
        return DateRangeFilter(token)
    except ValueError:
        return DateRangeFilter.ALL


def _day_start(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _day_end(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=0)


def month_range(moment: datetime) -> DateRange:
    """Calendar month containing ``moment``."""
    first_day = _day_start(moment.replace(day=1))
    next_month = (first_day + timedelta(days=32)).replace(day=1)
    last_day = next_month - timedelta(days=1)
    return DateRange(start=first_day, end=_day_end(last_day))


def year_range(year: int) -> DateRange:
    return DateRange(
        start=datetime(year, 1, 1, 0, 0, 0),
        end=datetime(year, 12, 31, 23, 59, 59),
    )


def get_date_range(
    date_filter: Union[DateRangeFilter, str, None],
    custom_start: Optional[datetime] = None,
    custom_end: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Optional[DateRange]:
    """Resolve a named filter into a closed local-time interval.

    ``None`` means no filtering. Custom ranges need both bounds.
    """
    date_filter = coerce_filter(date_filter)
    if now is None:
        now = datetime.now()

    if date_filter == DateRangeFilter.TODAY:
        return DateRange(start=_day_start(now), end=_day_end(now))

    if date_filter == DateRangeFilter.LAST_MONTH:
        last_day_of_previous = _day_start(now.replace(day=1)) - timedelta(days=1)
        return month_range(last_day_of_previous)

    if date_filter == DateRangeFilter.THIS_YEAR:
        return year_range(now.year)

    if date_filter == DateRangeFilter.LAST_YEAR:
        return year_range(now.year - 1)

    if date_filter == DateRangeFilter.CUSTOM:
        if custom_start is not None and custom_end is not None:
            return DateRange(start=custom_start, end=custom_end)
        return None

    return None


def previous_period(date_range: DateRange) -> DateRange:
    """The adjacent interval of equal length ending 1ms before ``date_range.start``."""
    return DateRange(
        start=date_range.start - date_range.duration,
        end=date_range.start - timedelta(milliseconds=1),
    )


def date_filter_label(date_filter: Union[DateRangeFilter, str, None]) -> str:
    return _LABELS[coerce_filter(date_filter)]
