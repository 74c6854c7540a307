from abc import ABC, abstractmethod
from typing import List

from src.domain.entities import Booking, Parking


class AbstractBookingRepository(ABC):
    @abstractmethod
    def list(self) -> List[Booking]:
        pass


class AbstractParkingRepository(ABC):
    @abstractmethod
    def list(self) -> List[Parking]:
        pass
