from .abstract_repositories import (
    AbstractBookingRepository,
    AbstractParkingRepository,
)

__all__ = [
    "AbstractBookingRepository",
    "AbstractParkingRepository",
]
