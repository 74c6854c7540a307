from datetime import datetime
from typing import Optional

from src.domain.common import BookingType, BookingStatus, VehicleType


class Parking:
    def __init__(
        self,
        id: str,
        name: str,
        location: str,
        capacity: int,
        price_per_hour: float,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ):
        self.id = id
        self.name = name
        self.location = location
        self.capacity = capacity
        self.price_per_hour = price_per_hour
        self.latitude = latitude
        self.longitude = longitude


class Booking:
    """A reservation as seen by the analytics engine.

    ``amount`` is always a finite float here: raw values are normalised once at
    the ingestion edge. ``start_time`` is ``None`` when the raw timestamp could
    not be parsed.
    """

    def __init__(
        self,
        id: str,
        parking_id: str,
        user_name: str,
        vehicle_number: str,
        booking_type: BookingType,
        status: BookingStatus,
        start_time: Optional[datetime],
        end_time: Optional[datetime],
        amount: float,
        duration: int,
        created_at: Optional[datetime] = None,
        cancelled_at: Optional[datetime] = None,
        parking_name: Optional[str] = None,
        vehicle_type: Optional[VehicleType] = None,
    ):
        self.id = id
        self.parking_id = parking_id
        self.user_name = user_name
        self.vehicle_number = vehicle_number
        self.booking_type = BookingType(booking_type)
        self.status = BookingStatus(status)
        self.start_time = start_time
        self.end_time = end_time
        self.amount = amount
        self.duration = duration
        self.created_at = created_at
        self.cancelled_at = cancelled_at
        self.parking_name = parking_name
        self.vehicle_type = VehicleType(vehicle_type) if vehicle_type is not None else None

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED

    @property
    def revenue(self) -> float:
        """Amount counted towards earnings; cancelled bookings earn nothing."""
        if self.is_cancelled:
            return 0.0
        return self.amount
