from .analytics import (
    DateRange,
    DailyStats,
    MonthlyStats,
    PeakHour,
    ParkingStats,
    KPIData,
    TypeSplitEntry,
    ReportLocationRow,
    BookingTypeAnalysis,
    StatusBreakdown,
    ReportData,
)

__all__ = [
    "DateRange",
    "DailyStats",
    "MonthlyStats",
    "PeakHour",
    "ParkingStats",
    "KPIData",
    "TypeSplitEntry",
    "ReportLocationRow",
    "BookingTypeAnalysis",
    "StatusBreakdown",
    "ReportData",
]
