from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Parking(Base):
    __tablename__ = "parkings"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    location = Column(String, default="")
    capacity = Column(Integer, default=0)
    price_per_hour = Column(Float, default=0.0)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String, primary_key=True, index=True)
    # No foreign key: bookings may reference parkings missing from the table
    parking_id = Column(String, nullable=False, index=True)
    parking_name = Column(String, nullable=True)
    user_name = Column(String, default="")
    vehicle_number = Column(String, default="")
    vehicle_type = Column(String, nullable=True)  # two_wheeler, four_wheeler
    booking_type = Column(String, nullable=False)  # prebooked, onsite
    status = Column(String, nullable=False)  # confirmed, active, completed, cancelled
    start_time = Column(DateTime, nullable=True, index=True)
    end_time = Column(DateTime, nullable=True)
    amount = Column(Float, nullable=True)
    duration = Column(Integer, default=0)
    created_at = Column(DateTime, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "parking_id": self.parking_id,
            "parking_name": self.parking_name,
            "user_name": self.user_name or "",
            "vehicle_number": self.vehicle_number or "",
            "vehicle_type": self.vehicle_type,
            "booking_type": self.booking_type,
            "status": self.status,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "amount": self.amount,
            "duration": self.duration or 0,
            "created_at": self.created_at,
            "cancelled_at": self.cancelled_at,
        }
