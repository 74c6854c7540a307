from enum import Enum


class BookingType(str, Enum):
    PRE_BOOKED = "prebooked"
    ON_SITE = "onsite"


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class VehicleType(str, Enum):
    TWO_WHEELER = "two_wheeler"
    FOUR_WHEELER = "four_wheeler"


class DateRangeFilter(str, Enum):
    TODAY = "today"
    LAST_MONTH = "lastMonth"
    THIS_YEAR = "thisYear"
    LAST_YEAR = "lastYear"
    ALL = "all"
    CUSTOM = "custom"


class GrowthMetric(str, Enum):
    BOOKINGS = "bookings"
    EARNINGS = "earnings"
    CANCELLATIONS = "cancellations"
