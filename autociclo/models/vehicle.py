# autociclo/models/vehicle.py
"""
Vehicles acquired for parting-out.
Plate is the business key: unique, uppercase, fixed 1234ABC format.
"""

from sqlalchemy import CheckConstraint, Column, Date, Float, Index, Integer, String, Text
from autociclo.database import Base
from autociclo.models.enums import VehicleStatus, check_in


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plate = Column(String(7), unique=True, nullable=False)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    color = Column(String(50))
    entry_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default=VehicleStatus.COMPLETE.value)
    purchase_price = Column(Float, nullable=False, default=0)
    mileage = Column(Integer, nullable=False, default=0)
    gps_location = Column(String(100))   # "lat,lng"
    notes = Column(Text)

    __table_args__ = (
        CheckConstraint(check_in("status", VehicleStatus), name="ck_vehicles_status"),
        CheckConstraint("purchase_price >= 0", name="ck_vehicles_purchase_price"),
        CheckConstraint("mileage >= 0", name="ck_vehicles_mileage"),
        Index("idx_vehicles_plate", "plate"),
        Index("idx_vehicles_status", "status"),
        Index("idx_vehicles_make", "make"),
    )

    def __repr__(self):
        return f"<Vehicle {self.plate} {self.make} {self.model} status={self.status}>"
