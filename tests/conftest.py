import pytest
from datetime import datetime

from src.application.services.analytics_service import AnalyticsService
from src.domain.common import BookingType, BookingStatus
from src.domain.entities import Booking
from src.infrastructure.persistence.in_memory_repositories import InMemoryBookingRepository, InMemoryParkingRepository


class RecordingLogger:
    """Collects log calls so tests can assert on diagnostics."""

    def __init__(self):
        self.records = []

    def _record(self, level, message):
        self.records.append((level, message))

    def debug(self, message):
        self._record("DEBUG", message)

    def info(self, message):
        self._record("INFO", message)

    def warning(self, message):
        self._record("WARNING", message)

    def messages(self, level):
        return [message for recorded_level, message in self.records if recorded_level == level]


def make_booking(
    id="b-1",
    parking_id="park-001",
    start_time=datetime(2025, 10, 5, 9, 0),
    amount=100.0,
    status=BookingStatus.COMPLETED,
    booking_type=BookingType.PRE_BOOKED,
    created_at=None,
    duration=2,
):
    return Booking(
        id=id,
        parking_id=parking_id,
        user_name="Rahul Sharma",
        vehicle_number="MH01AB1234",
        booking_type=booking_type,
        status=status,
        start_time=start_time,
        end_time=None,
        amount=amount,
        duration=duration,
        created_at=created_at,
    )


@pytest.fixture
def raw_parkings():
    return [
        {"id": "park-001", "name": "Dadar Station Parking", "location": "Dadar East, Mumbai",
         "capacity": 100, "pricePerHour": 35, "coordinates": {"lat": 19.0183, "lng": 72.8478}},
        {"id": "park-002", "name": "CST Metro Parking", "location": "CST, Mumbai",
         "capacity": 50, "pricePerHour": 35},
        {"id": "park-003", "name": "Bandra West Parking", "location": "Bandra West, Mumbai",
         "capacity": 120, "pricePerHour": 35},
    ]


@pytest.fixture
def raw_bookings():
    """Seven bookings across two months, including dirty amounts and one bad timestamp."""
    return [
        {"id": "b-1", "parkingId": "park-001", "userName": "Rahul Sharma", "vehicleNumber": "MH01AB1234",
         "bookingType": "prebooked", "status": "completed", "startTime": "2025-10-05T09:00:00",
         "amount": 100, "duration": 2, "createdAt": "2025-10-04T21:00:00"},
        {"id": "b-2", "parkingId": "park-001", "userName": "Priya Patel", "vehicleNumber": "MH02CD5678",
         "bookingType": "onsite", "status": "cancelled", "startTime": "2025-10-05T09:30:00",
         "amount": 70, "duration": 2, "createdAt": "2025-10-05T09:30:00",
         "cancelledAt": "2025-10-05T08:30:00"},
        {"id": "b-3", "parkingId": "park-001", "userName": "Amit Kumar", "vehicleNumber": "MH03EF9012",
         "bookingType": "prebooked", "status": "completed", "startTime": "2025-10-20T18:00:00",
         "amount": "₹1,050.50", "duration": 30, "createdAt": "2025-10-20T06:00:00"},
        {"id": "b-4", "parkingId": "park-002", "userName": "Neha Gupta", "vehicleNumber": "MH04GH3456",
         "bookingType": "onsite", "status": "active", "startTime": "2025-11-01T18:15:00",
         "amount": 35, "duration": 1, "createdAt": "2025-11-01T18:15:00"},
        {"id": "b-5", "parkingId": "park-002", "userName": "Vikram Singh", "vehicleNumber": "MH05IJ7890",
         "bookingType": "prebooked", "status": "confirmed", "startTime": "2025-11-01T07:00:00",
         "amount": None, "duration": 3, "createdAt": "2025-10-31T19:00:00"},
        {"id": "b-6", "parkingId": "park-999", "userName": "Anjali Desai", "vehicleNumber": "MH06KL1122",
         "bookingType": "onsite", "status": "completed", "startTime": "2025-11-02T10:00:00",
         "amount": 20, "duration": 1, "createdAt": "2025-11-02T10:00:00"},
        {"id": "b-7", "parkingId": "park-001", "userName": "Sanjay Mehta", "vehicleNumber": "MH07MN3344",
         "bookingType": "prebooked", "status": "completed", "startTime": "not-a-date",
         "amount": "40", "duration": 1},
    ]


@pytest.fixture
def booking_repo(raw_bookings):
    return InMemoryBookingRepository(raw_bookings)


@pytest.fixture
def parking_repo(raw_parkings):
    return InMemoryParkingRepository(raw_parkings)


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def analytics_service(booking_repo, parking_repo, recording_logger):
    """Create an AnalyticsService over the sample data with a recording logger."""
    return AnalyticsService(
        booking_repo=booking_repo,
        parking_repo=parking_repo,
        logger=recording_logger,
    )


@pytest.fixture
def empty_analytics_service(recording_logger):
    """Provides an analytics service with no bookings and no parkings."""
    return AnalyticsService(
        booking_repo=InMemoryBookingRepository(),
        parking_repo=InMemoryParkingRepository(),
        logger=recording_logger,
    )
