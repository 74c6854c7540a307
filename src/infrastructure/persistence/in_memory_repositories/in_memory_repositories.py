from typing import Iterable, List, Mapping, Union

from loguru import logger
from pydantic import ValidationError

from src.application.repositories import AbstractBookingRepository, AbstractParkingRepository
from src.domain.entities import Booking, Parking
from src.infrastructure.schemas.records import BookingRecord, ParkingRecord


def _record_id(raw) -> object:
    return raw.get("id") if isinstance(raw, Mapping) else None


class InMemoryBookingRepository(AbstractBookingRepository):
    """Bookings held in process memory.

    Accepts ready entities or raw mappings; mappings go through ``BookingRecord``
    so amounts and timestamps are normalised once, here. Mappings that fail
    validation are logged and left out.
    """

    def __init__(self, bookings: Iterable[Union[Booking, Mapping]] = ()):
        loaded = []
        for booking in bookings:
            if isinstance(booking, Booking):
                loaded.append(booking)
                continue
            try:
                loaded.append(BookingRecord.model_validate(booking).to_entity())
            except ValidationError as e:
                logger.warning(f"Skipping malformed booking {_record_id(booking)!r}: {e.error_count()} validation errors")
        self._bookings = tuple(loaded)

    def list(self) -> List[Booking]:
        return list(self._bookings)


class InMemoryParkingRepository(AbstractParkingRepository):
    def __init__(self, parkings: Iterable[Union[Parking, Mapping]] = ()):
        loaded = []
        for parking in parkings:
            if isinstance(parking, Parking):
                loaded.append(parking)
                continue
            try:
                loaded.append(ParkingRecord.model_validate(parking).to_entity())
            except ValidationError as e:
                logger.warning(f"Skipping malformed parking {_record_id(parking)!r}: {e.error_count()} validation errors")
        self._parkings = tuple(loaded)

    def list(self) -> List[Parking]:
        return list(self._parkings)
