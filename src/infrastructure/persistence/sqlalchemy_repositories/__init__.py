from .sqlalchemy_repositories import (
    SQLAlchemyBookingRepository,
    SQLAlchemyParkingRepository,
)

__all__ = [
    "SQLAlchemyBookingRepository",
    "SQLAlchemyParkingRepository",
]
