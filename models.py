from sqlalchemy import Column, Integer, String, Float, DateTime, JSON
from database import Base
import datetime
import uuid

def generate_id():
    # Time-based so ids still sort roughly by creation, like the mobile mock's Date.now() ids
    return str(uuid.uuid1())

def utcnow():
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)

class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, default=generate_id)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    name = Column(String)
    phone = Column(String)
    user_type = Column(String, nullable=False, index=True) # student, driver

    # Student-only
    student_id = Column(String, nullable=True)
    university = Column(String, nullable=True)

    # Driver-only
    driver_id = Column(String, nullable=True)
    vehicle = Column(JSON, nullable=True) # {model, plate, color, capacity}

class Ride(Base):
    __tablename__ = "rides"
    id = Column(String, primary_key=True, default=generate_id)
    # Plain ids, no foreign keys: bookings and requests may point at rides that are gone
    driver_id = Column(String, index=True)
    driver_name = Column(String)
    vehicle = Column(JSON, nullable=True)

    # {from, to, from_coords {lat, lng}, to_coords {lat, lng}}
    route = Column(JSON)
    departure_time = Column(DateTime)

    available_seats = Column(Integer, default=0)
    price = Column(Float)
    status = Column(String, default="available") # available, full
    passengers = Column(JSON, default=list)

class Booking(Base):
    __tablename__ = "bookings"
    id = Column(String, primary_key=True, default=generate_id)
    ride_id = Column(String, index=True)

    passenger_id = Column(String, index=True)
    passenger_name = Column(String)
    passenger_phone = Column(String)
    driver_id = Column(String, index=True)
    driver_name = Column(String)
    vehicle = Column(JSON, nullable=True)

    route = Column(JSON)
    departure_time = Column(DateTime)
    price = Column(Float)

    status = Column(String, default="pending") # pending, active, completed, cancelled
    created_at = Column(DateTime, default=utcnow)

class RideRequest(Base):
    __tablename__ = "ride_requests"
    id = Column(String, primary_key=True, default=generate_id)
    ride_id = Column(String, index=True)

    passenger_id = Column(String, index=True)
    passenger_name = Column(String)
    passenger_phone = Column(String)
    driver_id = Column(String, index=True)
    driver_name = Column(String)

    # Same shape as Ride.route, optionally with pickup_address
    route = Column(JSON)
    departure_time = Column(DateTime)
    price = Column(Float)

    status = Column(String, default="pending") # pending, accepted, rejected, cancelled
    created_at = Column(DateTime, default=utcnow)
