import math
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Union

from src.application.repositories import AbstractBookingRepository, AbstractParkingRepository
from src.application.schemas.analytics import (
    BookingTypeAnalysis,
    DailyStats,
    DateRange,
    KPIData,
    MonthlyStats,
    ParkingStats,
    PeakHour,
    ReportData,
    ReportLocationRow,
    StatusBreakdown,
    TypeSplitEntry,
)
from src.application.services.date_ranges import (
    coerce_filter,
    date_filter_label,
    get_date_range,
    month_range,
    previous_period,
)
from src.config.settings_env import settings
from src.domain.common import BookingStatus, BookingType, DateRangeFilter, GrowthMetric
from src.domain.entities import Booking
from src.shared.utils import logger as default_logger

TYPE_SPLIT_NAMES = {
    BookingType.PRE_BOOKED: "On-App Bookings",
    BookingType.ON_SITE: "On-Site Bookings",
}

TYPE_ANALYSIS_LABELS = {
    BookingType.PRE_BOOKED: "On-App (Pre-booked)",
    BookingType.ON_SITE: "On-Site (Walk-in)",
}

UNASSIGNED_PARKING_NAME = "Unassigned"


def filter_by_date_range(bookings: Iterable[Booking], date_range: Optional[DateRange]) -> List[Booking]:
    if date_range is None:
        return list(bookings)
    return [booking for booking in bookings if date_range.contains(booking.start_time)]


def calculate_total_earnings(bookings: Iterable[Booking]) -> float:
    return math.fsum(booking.revenue for booking in bookings)


def count_cancellations(bookings: Iterable[Booking]) -> int:
    return sum(1 for booking in bookings if booking.is_cancelled)


def count_by_type(bookings: Iterable[Booking]) -> Dict[BookingType, int]:
    counts = {booking_type: 0 for booking_type in BookingType}
    for booking in bookings:
        counts[booking.booking_type] += 1
    return counts


def count_by_status(bookings: Iterable[Booking]) -> Dict[BookingStatus, int]:
    counts = {status: 0 for status in BookingStatus}
    for booking in bookings:
        counts[booking.status] += 1
    return counts


def bucket_bookings(bookings: Iterable[Booking], key_length: int) -> Dict[str, dict]:
    """Group bookings by a prefix of their ISO start date.

    ``key_length`` is 10 for days (``YYYY-MM-DD``) and 7 for months (``YYYY-MM``).
    Bookings without a start time are skipped. Keys come back in ascending order.
    """
    buckets: Dict[str, dict] = {}
    for booking in bookings:
        if booking.start_time is None:
            continue
        key = booking.start_time.date().isoformat()[:key_length]
        bucket = buckets.setdefault(key, {"bookings": 0, "earnings": 0.0, "cancellations": 0})
        bucket["bookings"] += 1
        if booking.is_cancelled:
            bucket["cancellations"] += 1
        else:
            bucket["earnings"] += booking.amount
    return dict(sorted(buckets.items()))


def count_peak_hours(bookings: Iterable[Booking], logger=default_logger) -> List[PeakHour]:
    """Histogram of bookings per start hour, busiest first.

    Ties keep the order in which the hours were first seen.
    """
    hourly: Dict[int, int] = {}
    for booking in bookings:
        if booking.start_time is None:
            logger.warning(f"Skipping booking {booking.id} in peak hours: start time is not parseable")
            continue
        hour = booking.start_time.hour
        hourly[hour] = hourly.get(hour, 0) + 1

    ranked = sorted(hourly.items(), key=lambda item: item[1], reverse=True)
    return [PeakHour(hour=hour, count=count) for hour, count in ranked]


def compute_growth(current: float, previous: float) -> float:
    """Percentage change from ``previous`` to ``current``; 0 when there is no baseline."""
    if previous == 0:
        return 0.0
    growth = (current - previous) / previous * 100
    return growth if math.isfinite(growth) else 0.0


def metric_value(bookings: List[Booking], metric: Union[GrowthMetric, str]) -> float:
    metric = GrowthMetric(metric)
    if metric == GrowthMetric.BOOKINGS:
        return len(bookings)
    if metric == GrowthMetric.EARNINGS:
        return calculate_total_earnings(bookings)
    if metric == GrowthMetric.CANCELLATIONS:
        return count_cancellations(bookings)
    raise ValueError(f"Unsupported growth metric: {metric}")


def build_parking_stats(
    parking_id: str,
    parking_name: str,
    capacity: int,
    bookings: List[Booking],
    logger=default_logger,
) -> ParkingStats:
    total_bookings = len(bookings)
    cancellations = count_cancellations(bookings)
    type_counts = count_by_type(bookings)

    return ParkingStats(
        parking_id=parking_id,
        parking_name=parking_name,
        total_bookings=total_bookings,
        earnings=calculate_total_earnings(bookings),
        cancellation_rate=(cancellations / total_bookings) * 100 if total_bookings > 0 else 0.0,
        peak_hours=count_peak_hours(bookings, logger),
        on_app_bookings=type_counts[BookingType.PRE_BOOKED],
        on_site_bookings=type_counts[BookingType.ON_SITE],
        utilization=(total_bookings / capacity) * 100 if capacity > 0 else 0.0,
    )


class AnalyticsService:
    """Aggregation engine over a booking and a parking data source.

    Every public method reads a fresh snapshot from the repositories and
    returns newly built result objects; inputs are never mutated.
    """

    def __init__(
        self,
        booking_repo: AbstractBookingRepository,
        parking_repo: AbstractParkingRepository,
        logger=None,
    ):
        self.booking_repo = booking_repo
        self.parking_repo = parking_repo
        self.logger = logger or default_logger

    def _bookings(self, date_range: Optional[DateRange] = None) -> List[Booking]:
        return filter_by_date_range(self.booking_repo.list(), date_range)

    def calculate_total_earnings(self, date_range: Optional[DateRange] = None) -> float:
        return calculate_total_earnings(self._bookings(date_range))

    def get_bookings_by_parking(self, parking_id: str) -> List[Booking]:
        return [booking for booking in self.booking_repo.list() if booking.parking_id == parking_id]

    def get_bookings_by_date_range(self, start: datetime, end: datetime) -> List[Booking]:
        return self._bookings(DateRange(start=start, end=end))

    def get_bookings_by_day(self, date_range: Optional[DateRange] = None) -> List[DailyStats]:
        buckets = bucket_bookings(self._bookings(date_range), 10)
        return [DailyStats(date=key, **bucket) for key, bucket in buckets.items()]

    def get_bookings_by_month(self, date_range: Optional[DateRange] = None) -> List[MonthlyStats]:
        buckets = bucket_bookings(self._bookings(date_range), 7)
        return [MonthlyStats(month=key, **bucket) for key, bucket in buckets.items()]

    def get_daily_chart_series(self, date_range: Optional[DateRange] = None) -> List[DailyStats]:
        """Trailing day buckets for the trend chart."""
        return self.get_bookings_by_day(date_range)[-settings.MAX_DAILY_POINTS:]

    def get_growth(self, metric: Union[GrowthMetric, str], date_range: Optional[DateRange]) -> float:
        if date_range is None:
            return 0.0
        bookings = self.booking_repo.list()
        current = metric_value(filter_by_date_range(bookings, date_range), metric)
        previous = metric_value(filter_by_date_range(bookings, previous_period(date_range)), metric)
        return compute_growth(current, previous)

    def _build_kpi(self, bookings: List[Booking], date_range: Optional[DateRange]) -> KPIData:
        if date_range is None:
            current_range = month_range(datetime.now())
            previous_range = get_date_range(DateRangeFilter.LAST_MONTH)
        else:
            current_range = date_range
            previous_range = previous_period(date_range)

        current = filter_by_date_range(bookings, date_range)
        current_period = filter_by_date_range(bookings, current_range)
        previous = filter_by_date_range(bookings, previous_range)
        type_counts = count_by_type(current)

        return KPIData(
            total_bookings=len(current),
            total_earnings=calculate_total_earnings(current),
            total_cancellations=count_cancellations(current),
            on_app_bookings=type_counts[BookingType.PRE_BOOKED],
            on_site_bookings=type_counts[BookingType.ON_SITE],
            bookings_growth=compute_growth(
                metric_value(current_period, GrowthMetric.BOOKINGS),
                metric_value(previous, GrowthMetric.BOOKINGS),
            ),
            earnings_growth=compute_growth(
                metric_value(current_period, GrowthMetric.EARNINGS),
                metric_value(previous, GrowthMetric.EARNINGS),
            ),
        )

    def get_kpi_data(self, date_range: Optional[DateRange] = None) -> KPIData:
        bookings = self.booking_repo.list()
        self.logger.debug(f"Computing KPI data over {len(bookings)} bookings")
        return self._build_kpi(bookings, date_range)

    def get_parking_wise_stats(self, parking_id: str, date_range: Optional[DateRange] = None) -> ParkingStats:
        parking = next((p for p in self.parking_repo.list() if p.id == parking_id), None)
        if parking is None:
            self.logger.warning(f"Parking {parking_id} not found, reporting it as Unknown")
        bookings = [b for b in self._bookings(date_range) if b.parking_id == parking_id]

        return build_parking_stats(
            parking_id=parking_id,
            parking_name=parking.name if parking else "Unknown",
            capacity=parking.capacity if parking else 0,
            bookings=bookings,
            logger=self.logger,
        )

    def _group_by_parking(self, bookings: List[Booking]) -> Dict[str, List[Booking]]:
        grouped: Dict[str, List[Booking]] = {}
        for booking in bookings:
            grouped.setdefault(booking.parking_id, []).append(booking)
        return grouped

    def get_all_parking_stats(self, date_range: Optional[DateRange] = None) -> List[ParkingStats]:
        """One record per known parking, including those without bookings."""
        grouped = self._group_by_parking(self._bookings(date_range))
        return [
            build_parking_stats(
                parking_id=parking.id,
                parking_name=parking.name,
                capacity=parking.capacity,
                bookings=grouped.get(parking.id, []),
                logger=self.logger,
            )
            for parking in self.parking_repo.list()
        ]

    def get_booking_type_split(self, date_range: Optional[DateRange] = None) -> List[TypeSplitEntry]:
        type_counts = count_by_type(self._bookings(date_range))
        return [
            TypeSplitEntry(name=TYPE_SPLIT_NAMES[booking_type], value=type_counts[booking_type])
            for booking_type in BookingType
        ]

    def get_top_parkings_by_earnings(
        self, limit: Optional[int] = None, date_range: Optional[DateRange] = None
    ) -> List[ParkingStats]:
        if limit is None:
            limit = settings.TOP_PARKINGS_LIMIT
        ranked = sorted(self.get_all_parking_stats(date_range), key=lambda stats: stats.earnings, reverse=True)
        return ranked[:limit]

    def get_recent_bookings(self, limit: Optional[int] = None) -> List[Booking]:
        if limit is None:
            limit = settings.RECENT_BOOKINGS_LIMIT
        ranked = sorted(
            self.booking_repo.list(),
            key=lambda booking: (booking.created_at is not None, booking.created_at or datetime.min),
            reverse=True,
        )
        return ranked[:limit]

    def get_report_data(
        self,
        date_filter: Union[DateRangeFilter, str, None],
        custom_start: Optional[datetime] = None,
        custom_end: Optional[datetime] = None,
    ) -> ReportData:
        date_filter = coerce_filter(date_filter)
        date_range = get_date_range(date_filter, custom_start, custom_end)
        all_bookings = self.booking_repo.list()
        bookings = filter_by_date_range(all_bookings, date_range)

        if date_range is None:
            days_in_period = settings.REPORT_DEFAULT_DAYS
        else:
            days_in_period = math.ceil(date_range.duration.total_seconds() / 86400)
        days_in_period = max(days_in_period, 1)

        grouped = self._group_by_parking(bookings)
        locations = [
            self._report_row(parking.id, parking.name, grouped.pop(parking.id, []), days_in_period)
            for parking in self.parking_repo.list()
        ]
        orphaned = [booking for group in grouped.values() for booking in group]
        if orphaned:
            self.logger.warning(f"{len(orphaned)} bookings reference unknown parkings")
            locations.append(self._report_row(None, UNASSIGNED_PARKING_NAME, orphaned, days_in_period))

        report = ReportData(
            date_filter=date_filter.value,
            date_filter_label=date_filter_label(date_filter),
            date_range=date_range,
            generated_at=datetime.now(),
            days_in_period=days_in_period,
            kpi=self._build_kpi(all_bookings, date_range),
            locations=locations,
            booking_types=self._booking_type_analysis(bookings),
            statuses=self._status_breakdown(bookings),
        )
        self.logger.info(f"Report data built for {report.date_filter_label}: {len(bookings)} bookings")
        return report

    def _report_row(
        self, parking_id: Optional[str], parking_name: str, bookings: List[Booking], days_in_period: int
    ) -> ReportLocationRow:
        total = len(bookings)
        return ReportLocationRow(
            parking_id=parking_id,
            parking_name=parking_name,
            bookings=total,
            revenue=calculate_total_earnings(bookings),
            cancellation_rate=(count_cancellations(bookings) / total) * 100 if total > 0 else 0.0,
            avg_per_day=total / days_in_period,
        )

    def _booking_type_analysis(self, bookings: List[Booking]) -> List[BookingTypeAnalysis]:
        analysis = []
        for booking_type in BookingType:
            typed = [booking for booking in bookings if booking.booking_type == booking_type]
            denominator = max(len(typed), 1)
            revenue = calculate_total_earnings(typed)
            analysis.append(
                BookingTypeAnalysis(
                    booking_type=booking_type,
                    label=TYPE_ANALYSIS_LABELS[booking_type],
                    count=len(typed),
                    revenue=revenue,
                    average_value=revenue / denominator,
                    cancellation_rate=count_cancellations(typed) / denominator * 100,
                )
            )
        return analysis

    def _status_breakdown(self, bookings: List[Booking]) -> List[StatusBreakdown]:
        status_counts = count_by_status(bookings)
        denominator = max(len(bookings), 1)
        return [
            StatusBreakdown(status=status, count=count, percentage=count / denominator * 100)
            for status, count in status_counts.items()
        ]
