from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from database import get_db
from schemas import BookingCreate, BookingUpdate, BookingResponse, UserType
from stores import BookingStore, NotFoundError

router = APIRouter(prefix="/bookings", tags=["bookings"])

@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(booking: BookingCreate, db: AsyncSession = Depends(get_db)):
    # Seats are taken on the referenced ride if it exists
    return await BookingStore(db).create_booking(booking)

@router.get("", response_model=List[BookingResponse])
async def get_bookings(user_id: str, user_type: UserType, db: AsyncSession = Depends(get_db)):
    return await BookingStore(db).get_bookings(user_id, user_type)

@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking(booking_id: str, updates: BookingUpdate, db: AsyncSession = Depends(get_db)):
    try:
        return await BookingStore(db).update_booking(booking_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
