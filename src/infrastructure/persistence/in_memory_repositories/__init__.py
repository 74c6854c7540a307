from .in_memory_repositories import (
    InMemoryBookingRepository,
    InMemoryParkingRepository,
)

__all__ = [
    "InMemoryBookingRepository",
    "InMemoryParkingRepository",
]
