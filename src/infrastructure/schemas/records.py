from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from src.application.schemas.analytics import to_local_naive
from src.domain.common import BookingType, BookingStatus, VehicleType
from src.domain.entities import Booking, Parking
from src.shared.amounts import normalize_amount


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a timestamp into a naive local datetime, or ``None`` if it can't be read."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    return to_local_naive(value)


def _reads_as_zero(value: Any) -> bool:
    """Whether a raw amount that normalised to 0 was an actual zero rather than junk."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_zero()
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, str):
        return any(ch.isdigit() for ch in value)
    return False


class RecordBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Coordinates(BaseModel):
    lat: float
    lng: float


class ParkingRecord(RecordBase):
    id: str = Field(..., min_length=1)
    name: str
    location: str = ""
    capacity: int = Field(default=0, ge=0)
    price_per_hour: float = 0.0
    coordinates: Optional[Coordinates] = None

    @field_validator("price_per_hour", mode="before")
    @classmethod
    def normalize_price(cls, v):
        return normalize_amount(v)

    def to_entity(self) -> Parking:
        return Parking(
            id=self.id,
            name=self.name,
            location=self.location,
            capacity=self.capacity,
            price_per_hour=self.price_per_hour,
            latitude=self.coordinates.lat if self.coordinates else None,
            longitude=self.coordinates.lng if self.coordinates else None,
        )


class BookingRecord(RecordBase):
    """Raw booking as delivered by a data source.

    This is the single place where amounts and timestamps are coerced; the
    resulting ``Booking`` entities always carry a float amount.
    """

    id: str = Field(..., min_length=1)
    parking_id: str
    parking_name: Optional[str] = None
    user_name: str = ""
    vehicle_number: str = ""
    vehicle_type: Optional[VehicleType] = None
    booking_type: BookingType
    status: BookingStatus
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    amount: float = 0.0
    duration: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @field_validator("amount", mode="before")
    @classmethod
    def normalize_raw_amount(cls, v, info: ValidationInfo):
        amount = normalize_amount(v)
        if amount == 0 and not _reads_as_zero(v):
            logger.warning(f"Booking {info.data.get('id')}: amount {v!r} is not parseable, using 0")
        return amount

    @field_validator("start_time", "end_time", "created_at", "cancelled_at", mode="before")
    @classmethod
    def parse_raw_timestamp(cls, v, info: ValidationInfo):
        parsed = parse_timestamp(v)
        if parsed is None and v not in (None, ""):
            logger.warning(f"Booking {info.data.get('id')}: {info.field_name} {v!r} is not parseable")
        return parsed

    def to_entity(self) -> Booking:
        end_time = self.end_time
        if end_time is None and self.start_time is not None:
            end_time = self.start_time + timedelta(hours=self.duration)

        return Booking(
            id=self.id,
            parking_id=self.parking_id,
            user_name=self.user_name,
            vehicle_number=self.vehicle_number,
            booking_type=self.booking_type,
            status=self.status,
            start_time=self.start_time,
            end_time=end_time,
            amount=self.amount,
            duration=self.duration,
            created_at=self.created_at,
            cancelled_at=self.cancelled_at if self.status == BookingStatus.CANCELLED else None,
            parking_name=self.parking_name,
            vehicle_type=self.vehicle_type,
        )
