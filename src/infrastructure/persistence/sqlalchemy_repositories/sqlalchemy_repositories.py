from typing import List

from loguru import logger
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from src.application.repositories import AbstractBookingRepository, AbstractParkingRepository
from src.domain.entities import Booking, Parking
from src.infrastructure.schemas.records import BookingRecord, ParkingRecord
from src.infrastructure.persistence.models.models import Booking as ORMBooking, Parking as ORMParking


class SQLAlchemyBookingRepository(AbstractBookingRepository):
    def __init__(self, session: Session):
        self.session = session

    def list(self) -> List[Booking]:
        result = self.session.execute(select(ORMBooking).order_by(ORMBooking.start_time))
        bookings = []
        for orm_booking in result.scalars():
            try:
                bookings.append(BookingRecord.model_validate(orm_booking.to_dict()).to_entity())
            except ValidationError as e:
                logger.warning(f"Skipping malformed booking row {orm_booking.id!r}: {e.error_count()} validation errors")
        return bookings


class SQLAlchemyParkingRepository(AbstractParkingRepository):
    def __init__(self, session: Session):
        self.session = session

    def list(self) -> List[Parking]:
        result = self.session.execute(select(ORMParking).order_by(ORMParking.id))
        parkings = []
        for orm_parking in result.scalars():
            coordinates = None
            if orm_parking.latitude is not None and orm_parking.longitude is not None:
                coordinates = {"lat": orm_parking.latitude, "lng": orm_parking.longitude}
            try:
                record = ParkingRecord(
                    id=orm_parking.id,
                    name=orm_parking.name,
                    location=orm_parking.location or "",
                    capacity=orm_parking.capacity or 0,
                    price_per_hour=orm_parking.price_per_hour,
                    coordinates=coordinates,
                )
            except ValidationError as e:
                logger.warning(f"Skipping malformed parking row {orm_parking.id!r}: {e.error_count()} validation errors")
                continue
            parkings.append(record.to_entity())
        return parkings
