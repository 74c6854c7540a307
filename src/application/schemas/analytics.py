from datetime import datetime, timedelta
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from src.domain.common import BookingType, BookingStatus


def to_local_naive(moment: datetime) -> datetime:
    """Drop timezone info, converting aware values to local wall-clock time first."""
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


class DateRange(BaseModel):
    """Closed interval ``[start, end]`` in local wall-clock time."""

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def to_wall_clock(cls, v):
        return to_local_naive(v)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, moment: Optional[datetime]) -> bool:
        if moment is None:
            return False
        return self.start <= to_local_naive(moment) <= self.end


class BucketStats(BaseModel):
    bookings: int = 0
    earnings: float = 0.0
    cancellations: int = 0


class DailyStats(BucketStats):
    date: str


class MonthlyStats(BucketStats):
    month: str


class PeakHour(BaseModel):
    hour: int = Field(..., ge=0, le=23)
    count: int


class ParkingStats(BaseModel):
    parking_id: str
    parking_name: str
    total_bookings: int
    earnings: float
    cancellation_rate: float = Field(..., ge=0, le=100)
    peak_hours: List[PeakHour]
    on_app_bookings: int
    on_site_bookings: int
    utilization: float = 0.0


class KPIData(BaseModel):
    total_bookings: int
    total_earnings: float
    total_cancellations: int
    on_app_bookings: int
    on_site_bookings: int
    bookings_growth: float
    earnings_growth: float


class TypeSplitEntry(BaseModel):
    name: str
    value: int


class ReportLocationRow(BaseModel):
    parking_id: Optional[str] = None
    parking_name: str
    bookings: int
    revenue: float
    cancellation_rate: float
    avg_per_day: float


class BookingTypeAnalysis(BaseModel):
    booking_type: BookingType
    label: str
    count: int
    revenue: float
    average_value: float
    cancellation_rate: float


class StatusBreakdown(BaseModel):
    status: BookingStatus
    count: int
    percentage: float


class ReportData(BaseModel):
    """Figures handed to the PDF renderer.

    The location revenues add up to ``kpi.total_earnings`` (to within float
    rounding, since both are totalled with ``math.fsum`` over different groupings).
    """

    date_filter: str
    date_filter_label: str
    date_range: Optional[DateRange] = None
    generated_at: datetime
    days_in_period: int
    kpi: KPIData
    locations: List[ReportLocationRow]
    booking_types: List[BookingTypeAnalysis]
    statuses: List[StatusBreakdown]
