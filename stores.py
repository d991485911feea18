import asyncio
import logging
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config import config
from models import User, Ride, Booking, RideRequest, generate_id, utcnow
from schemas import (
    StudentRegister, DriverRegister, UserType,
    RideCreate, RideUpdate, RideStatus,
    BookingCreate, BookingUpdate, BookingStatus,
    RideRequestCreate, RideRequestUpdate, RequestStatus,
)
from security import hash_password, verify_password

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for failures surfaced to API callers."""

class NotFoundError(StoreError):
    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity

class InvalidCredentialsError(StoreError):
    def __init__(self):
        super().__init__("Invalid credentials")

class UserAlreadyExistsError(StoreError):
    def __init__(self):
        super().__init__("User already exists")

class InvalidTransitionError(StoreError):
    pass


async def simulate_latency(operation: str):
    delay = config.latency_seconds(operation)
    if delay:
        await asyncio.sleep(delay)

def _value(value):
    return value.value if isinstance(value, Enum) else value

def _dump(model: Optional[BaseModel]) -> Optional[dict]:
    if model is None:
        return None
    return model.model_dump(by_alias=True, exclude_none=True)

def _patch(obj, updates: BaseModel):
    """
    Applies the fields explicitly set on a typed update model.
    Unset and null fields are left alone.
    """
    for field in updates.model_fields_set:
        value = getattr(updates, field)
        if value is None:
            continue
        value = _dump(value) if isinstance(value, BaseModel) else _value(value)
        setattr(obj, field, value)


class UserStore:
    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def _get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def login(self, email: str, password: str, user_type: Union[UserType, str]) -> User:
        await simulate_latency("login")
        result = await self.db.execute(
            select(User).where(User.email == email, User.user_type == _value(user_type))
        )
        user = result.scalar_one_or_none()
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected login for %s as %s", email, _value(user_type))
            raise InvalidCredentialsError()
        return user

    async def register(self, user_data: Union[StudentRegister, DriverRegister]) -> User:
        await simulate_latency("register")
        if await self._get_by_email(user_data.email):
            raise UserAlreadyExistsError()

        fields = user_data.model_dump(exclude={"password"})
        user = User(id=generate_id(), password_hash=hash_password(user_data.password), **fields)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent register for the same email
            await self.db.rollback()
            raise UserAlreadyExistsError()
        await self.db.refresh(user)
        logger.info("Registered %s %s", user.user_type, user.id)
        return user


class RideStore:
    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def _get(self, ride_id: str) -> Optional[Ride]:
        return await self.db.get(Ride, ride_id)

    async def get_available_rides(self) -> List[Ride]:
        await simulate_latency("get_available_rides")
        result = await self.db.execute(
            select(Ride).where(Ride.status == RideStatus.AVAILABLE.value).order_by(Ride.departure_time)
        )
        return result.scalars().all()

    async def get_ride(self, ride_id: str) -> Ride:
        await simulate_latency("get_ride")
        ride = await self._get(ride_id)
        if ride is None:
            raise NotFoundError("Ride")
        return ride

    async def get_rides_for_driver(self, driver_id: str) -> List[Ride]:
        await simulate_latency("get_rides_for_driver")
        result = await self.db.execute(
            select(Ride).where(Ride.driver_id == driver_id).order_by(Ride.departure_time)
        )
        return result.scalars().all()

    async def create_ride(self, ride_data: RideCreate) -> Ride:
        await simulate_latency("create_ride")
        vehicle = _dump(ride_data.vehicle)
        if vehicle is None:
            driver = await self.db.get(User, ride_data.driver_id)
            if driver is not None and driver.vehicle:
                vehicle = dict(driver.vehicle)

        ride = Ride(
            id=generate_id(),
            driver_id=ride_data.driver_id,
            driver_name=ride_data.driver_name,
            vehicle=vehicle,
            route=_dump(ride_data.route),
            departure_time=ride_data.departure_time,
            available_seats=ride_data.available_seats,
            price=ride_data.price,
            status=RideStatus.AVAILABLE.value,
            passengers=[],
        )
        self.db.add(ride)
        await self.db.commit()
        await self.db.refresh(ride)
        logger.info("Ride %s created by driver %s with %d seats", ride.id, ride.driver_id, ride.available_seats)
        return ride

    async def update_ride(self, ride_id: str, updates: RideUpdate) -> Ride:
        await simulate_latency("update_ride")
        ride = await self._get(ride_id)
        if ride is None:
            raise NotFoundError("Ride")

        _patch(ride, updates)
        if ride.available_seats <= 0:
            ride.available_seats = 0
            ride.status = RideStatus.FULL.value

        await self.db.commit()
        await self.db.refresh(ride)
        return ride

    async def delete_ride(self, ride_id: str) -> bool:
        await simulate_latency("delete_ride")
        ride = await self._get(ride_id)
        if ride is None:
            raise NotFoundError("Ride")
        await self.db.delete(ride)
        await self.db.commit()
        logger.info("Ride %s deleted", ride_id)
        return True

    async def reserve_seat(self, ride_id: str, passenger_id: str) -> Optional[Ride]:
        """
        Takes one seat on the ride for the passenger. Caller commits.

        A ride with no seats left is still booked (seat count stays clamped at 0);
        an unknown ride is ignored.
        """
        ride = await self._get(ride_id)
        if ride is None:
            logger.warning("Booking references unknown ride %s", ride_id)
            return None

        if ride.available_seats <= 0:
            logger.warning("Ride %s has no seats left, booking %s anyway", ride.id, passenger_id)

        ride.available_seats -= 1
        # JSON columns only track reassignment
        ride.passengers = [*(ride.passengers or []), passenger_id]
        if ride.available_seats <= 0:
            ride.available_seats = 0
            ride.status = RideStatus.FULL.value
        return ride


class BookingStore:
    def __init__(self, db_session: AsyncSession, rides: RideStore = None):
        self.db = db_session
        self.rides = rides or RideStore(db_session)

    async def add_booking(self, booking_data: BookingCreate, reserve_seat: bool = True) -> Booking:
        """Stages a pending booking in the current transaction without committing."""
        booking = Booking(
            id=generate_id(),
            ride_id=booking_data.ride_id,
            passenger_id=booking_data.passenger_id,
            passenger_name=booking_data.passenger_name,
            passenger_phone=booking_data.passenger_phone,
            driver_id=booking_data.driver_id,
            driver_name=booking_data.driver_name,
            vehicle=_dump(booking_data.vehicle),
            route=_dump(booking_data.route),
            departure_time=booking_data.departure_time,
            price=booking_data.price,
            status=BookingStatus.PENDING.value,
            created_at=utcnow(),
        )
        self.db.add(booking)
        if reserve_seat:
            await self.rides.reserve_seat(booking_data.ride_id, booking_data.passenger_id)
        await self.db.flush()
        return booking

    async def create_booking(self, booking_data: BookingCreate) -> Booking:
        await simulate_latency("create_booking")
        booking = await self.add_booking(booking_data)
        await self.db.commit()
        await self.db.refresh(booking)
        logger.info("Booking %s created for passenger %s on ride %s", booking.id, booking.passenger_id, booking.ride_id)
        return booking

    async def get_bookings(self, user_id: str, user_type: Union[UserType, str]) -> List[Booking]:
        await simulate_latency("get_bookings")
        if _value(user_type) == UserType.STUDENT.value:
            condition = Booking.passenger_id == user_id
        else:
            condition = Booking.driver_id == user_id
        result = await self.db.execute(select(Booking).where(condition).order_by(Booking.created_at))
        return result.scalars().all()

    async def update_booking(self, booking_id: str, updates: BookingUpdate) -> Booking:
        await simulate_latency("update_booking")
        booking = await self.db.get(Booking, booking_id)
        if booking is None:
            raise NotFoundError("Booking")
        _patch(booking, updates)
        await self.db.commit()
        await self.db.refresh(booking)
        return booking


class RequestStore:
    """
    Passenger requests to join a ride.

    A request starts pending and moves once, to accepted, rejected or cancelled.
    Accepting it books the passenger in the same transaction.
    """

    def __init__(self, db_session: AsyncSession, bookings: BookingStore = None):
        self.db = db_session
        self.bookings = bookings or BookingStore(db_session)

    async def create_request(self, request_data: RideRequestCreate) -> RideRequest:
        await simulate_latency("create_request")
        request = RideRequest(
            id=generate_id(),
            ride_id=request_data.ride_id,
            passenger_id=request_data.passenger_id,
            passenger_name=request_data.passenger_name,
            passenger_phone=request_data.passenger_phone,
            driver_id=request_data.driver_id,
            driver_name=request_data.driver_name,
            route=_dump(request_data.route),
            departure_time=request_data.departure_time,
            price=request_data.price,
            status=RequestStatus.PENDING.value,
            created_at=utcnow(),
        )
        self.db.add(request)
        await self.db.commit()
        await self.db.refresh(request)
        return request

    async def get_requests(self, driver_id: str) -> List[RideRequest]:
        await simulate_latency("get_requests")
        result = await self.db.execute(
            select(RideRequest).where(RideRequest.driver_id == driver_id).order_by(RideRequest.created_at)
        )
        return result.scalars().all()

    async def get_requests_for_passenger(self, passenger_id: str) -> List[RideRequest]:
        await simulate_latency("get_requests_for_passenger")
        result = await self.db.execute(
            select(RideRequest).where(RideRequest.passenger_id == passenger_id).order_by(RideRequest.created_at)
        )
        return result.scalars().all()

    async def update_request(self, request_id: str, updates: RideRequestUpdate) -> RideRequest:
        await simulate_latency("update_request")
        request = await self.db.get(RideRequest, request_id)
        if request is None:
            raise NotFoundError("Request")

        new_status = _value(updates.status)
        if new_status is not None and request.status != RequestStatus.PENDING.value:
            raise InvalidTransitionError(f"Request is already {request.status}")

        _patch(request, updates)
        try:
            if new_status == RequestStatus.ACCEPTED.value:
                booking = await self.bookings.add_booking(
                    self._booking_from(request),
                    reserve_seat=config.CASCADE_RESERVES_SEAT,
                )
                logger.info("Request %s accepted, booking %s created", request.id, booking.id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(request)
        return request

    @staticmethod
    def _booking_from(request: RideRequest) -> BookingCreate:
        return BookingCreate(
            ride_id=request.ride_id,
            passenger_id=request.passenger_id,
            passenger_name=request.passenger_name,
            passenger_phone=request.passenger_phone,
            driver_id=request.driver_id,
            driver_name=request.driver_name,
            route=request.route,
            departure_time=request.departure_time,
            price=request.price,
        )
