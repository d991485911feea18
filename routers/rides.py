from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
from datetime import timedelta

from database import get_db
from models import User, Ride, Booking, generate_id, utcnow
from schemas import RideCreate, RideUpdate, RideResponse, SuccessResponse
from security import hash_password
from stores import RideStore, NotFoundError

router = APIRouter(prefix="/rides", tags=["rides"])

@router.get("", response_model=List[RideResponse])
async def get_available_rides(db: AsyncSession = Depends(get_db)):
    return await RideStore(db).get_available_rides()

@router.post("", response_model=RideResponse, status_code=201)
async def create_ride(ride: RideCreate, db: AsyncSession = Depends(get_db)):
    return await RideStore(db).create_ride(ride)

@router.get("/driver/{driver_id}", response_model=List[RideResponse])
async def get_rides_for_driver(driver_id: str, db: AsyncSession = Depends(get_db)):
    return await RideStore(db).get_rides_for_driver(driver_id)

DEMO_STUDENTS = [
    ("student@example.com", "Ahmed Hassan", "+252 90 123 4567", "STU12345"),
    ("fatima@example.com", "Fatima Mohamed", "+252 90 234 5678", "STU12346"),
    ("mohamed@example.com", "Mohamed Ali", "+252 90 345 6789", "STU12347"),
    ("aisha@example.com", "Aisha Hassan", "+252 90 456 7890", "STU12348"),
]
DEMO_DRIVER_EMAIL = "driver@example.com"
DEMO_PASSWORD = "password123"

# Past trips for the earnings and history screens: (student email, destination, days ago, price)
DEMO_TRIPS = [
    ("fatima@example.com", "City Center", 3, 15.50),
    ("mohamed@example.com", "Airport", 3, 18.75),
    ("aisha@example.com", "City Center", 2, 12.00),
]

@router.post("/seed")
async def seed_data(db: AsyncSession = Depends(get_db)):
    """Helper to seed the demo students, driver, rides and past trips in one transaction"""
    try:
        # The driver owns every demo ride, so its presence means the seed already ran
        result = await db.execute(select(User).where(User.email == DEMO_DRIVER_EMAIL))
        if result.scalar_one_or_none():
            return {"message": "Data already seeded"}

        emails = [s[0] for s in DEMO_STUDENTS]
        result = await db.execute(select(User).where(User.email.in_(emails)))
        students = {u.email: u for u in result.scalars().all()}
        for email, name, phone, student_id in DEMO_STUDENTS:
            if email in students:
                continue
            students[email] = User(
                id=generate_id(), email=email, password_hash=hash_password(DEMO_PASSWORD),
                name=name, phone=phone, user_type="student",
                student_id=student_id, university="University of Hargeisa",
            )
            db.add(students[email])

        vehicle = {"model": "Toyota Noah", "plate": "HGA-123", "color": "White", "capacity": 7}
        driver = User(
            id=generate_id(), email=DEMO_DRIVER_EMAIL, password_hash=hash_password(DEMO_PASSWORD),
            name="Omar Ali", phone="+252 90 987 6543", user_type="driver",
            driver_id="DRV67890", vehicle=vehicle,
        )

        hargeisa = {"lat": 9.5632, "lng": 44.0672}
        now = utcnow().replace(minute=0, second=0, microsecond=0)
        tomorrow = now + timedelta(days=1)
        ride = Ride(
            id=generate_id(), driver_id=driver.id, driver_name=driver.name, vehicle=vehicle,
            route={"from": "University of Hargeisa", "to": "Amoud University",
                   "from_coords": hargeisa, "to_coords": {"lat": 9.4167, "lng": 43.6500}},
            departure_time=tomorrow.replace(hour=8, minute=30),
            available_seats=3, price=25, status="available", passengers=[],
        )
        db.add_all([driver, ride, Ride(
            id=generate_id(), driver_id=driver.id, driver_name=driver.name, vehicle=vehicle,
            route={"from": "Burao University", "to": "University of Hargeisa",
                   "from_coords": {"lat": 9.5221, "lng": 45.5336}, "to_coords": hargeisa},
            departure_time=tomorrow.replace(hour=14),
            available_seats=2, price=30, status="available", passengers=[],
        )])

        for email, destination, days_ago, price in DEMO_TRIPS:
            student = students[email]
            departure = now - timedelta(days=days_ago)
            db.add(Booking(
                id=generate_id(), ride_id=ride.id,
                passenger_id=student.id, passenger_name=student.name, passenger_phone=student.phone,
                driver_id=driver.id, driver_name=driver.name, vehicle=vehicle,
                route={"from": "University of Hargeisa", "to": destination},
                departure_time=departure, price=price,
                status="completed", created_at=departure - timedelta(minutes=30),
            ))

        await db.commit()
        return {"message": "Seeded demo data"}
    except Exception as e:
        await db.rollback()
        raise HTTPException(status_code=500, detail=f"Failed to seed data: {str(e)}")


@router.get("/{ride_id}", response_model=RideResponse)
async def get_ride(ride_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await RideStore(db).get_ride(ride_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.patch("/{ride_id}", response_model=RideResponse)
async def update_ride(ride_id: str, updates: RideUpdate, db: AsyncSession = Depends(get_db)):
    try:
        return await RideStore(db).update_ride(ride_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.delete("/{ride_id}", response_model=SuccessResponse)
async def delete_ride(ride_id: str, db: AsyncSession = Depends(get_db)):
    try:
        await RideStore(db).delete_ride(ride_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}
