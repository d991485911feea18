from pydantic import BaseModel, Field, AfterValidator
from typing import Optional, List, Union, Literal, Annotated
from datetime import datetime, timezone
from enum import Enum

class UserType(str, Enum):
    STUDENT = "student"
    DRIVER = "driver"

class RideStatus(str, Enum):
    AVAILABLE = "available"
    FULL = "full"

class BookingStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class RequestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Departure times are stored as naive UTC."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

UtcDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]


# Shared value objects
class Coords(BaseModel):
    lat: float
    lng: float

class Route(BaseModel):
    from_: str = Field(..., alias="from")
    to: str
    from_coords: Optional[Coords] = None
    to_coords: Optional[Coords] = None
    pickup_address: Optional[str] = None

    class Config:
        populate_by_name = True

class Vehicle(BaseModel):
    model: str
    plate: str
    color: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=1)


# User Schemas
class UserBase(BaseModel):
    name: str
    email: str
    phone: Optional[str] = None

class StudentRegister(UserBase):
    user_type: Literal["student"]
    password: str = Field(..., min_length=1)
    student_id: Optional[str] = None
    university: Optional[str] = None

class DriverRegister(UserBase):
    user_type: Literal["driver"]
    password: str = Field(..., min_length=1)
    driver_id: Optional[str] = None
    vehicle: Optional[Vehicle] = None

RegisterRequest = Annotated[Union[StudentRegister, DriverRegister], Field(discriminator="user_type")]

class LoginRequest(BaseModel):
    email: str
    password: str
    user_type: UserType

class User(UserBase):
    id: str
    user_type: UserType
    student_id: Optional[str] = None
    university: Optional[str] = None
    driver_id: Optional[str] = None
    vehicle: Optional[Vehicle] = None

    class Config:
        from_attributes = True

class AuthResponse(BaseModel):
    success: bool = True
    user: User


# Ride Schemas
class RideBase(BaseModel):
    driver_id: str
    driver_name: Optional[str] = None
    vehicle: Optional[Vehicle] = None
    route: Route
    departure_time: UtcDatetime
    available_seats: int = Field(..., ge=0)
    price: float = Field(..., ge=0)

class RideCreate(RideBase):
    pass

class RideUpdate(BaseModel):
    """Fields a driver may change on an existing ride."""
    vehicle: Optional[Vehicle] = None
    route: Optional[Route] = None
    departure_time: Optional[UtcDatetime] = None
    available_seats: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)
    status: Optional[RideStatus] = None

class RideResponse(RideBase):
    id: str
    status: RideStatus
    passengers: List[str] = []

    class Config:
        from_attributes = True


# Booking Schemas
class BookingCreate(BaseModel):
    ride_id: str
    passenger_id: str
    passenger_name: Optional[str] = None
    passenger_phone: Optional[str] = None
    driver_id: str
    driver_name: Optional[str] = None
    vehicle: Optional[Vehicle] = None
    route: Optional[Route] = None
    departure_time: Optional[UtcDatetime] = None
    price: Optional[float] = Field(None, ge=0)

class BookingUpdate(BaseModel):
    status: Optional[BookingStatus] = None

class BookingResponse(BookingCreate):
    id: str
    status: BookingStatus
    created_at: datetime

    class Config:
        from_attributes = True


# Ride Request Schemas
class RideRequestCreate(BaseModel):
    ride_id: str
    passenger_id: str
    passenger_name: Optional[str] = None
    passenger_phone: Optional[str] = None
    driver_id: str
    driver_name: Optional[str] = None
    route: Optional[Route] = None
    departure_time: Optional[UtcDatetime] = None
    price: Optional[float] = Field(None, ge=0)

class RideRequestUpdate(BaseModel):
    status: Optional[RequestStatus] = None

class RideRequestResponse(RideRequestCreate):
    id: str
    status: RequestStatus
    created_at: datetime

    class Config:
        from_attributes = True


# Location Schemas
class CurrentLocation(BaseModel):
    lat: float
    lng: float
    accuracy: float

class RouteQuery(BaseModel):
    from_: Coords = Field(..., alias="from")
    to: Coords

    class Config:
        populate_by_name = True

class RouteEstimate(BaseModel):
    distance: float  # km
    duration: float  # minutes
    coordinates: List[Coords]


# Notification Schemas
class NotificationCreate(BaseModel):
    title: str
    body: str
    data: Optional[dict] = None

class SuccessResponse(BaseModel):
    success: bool = True
