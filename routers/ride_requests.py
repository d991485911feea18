from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from database import get_db
from schemas import RideRequestCreate, RideRequestUpdate, RideRequestResponse
from stores import RequestStore, NotFoundError, InvalidTransitionError

router = APIRouter(prefix="/requests", tags=["requests"])

@router.post("", response_model=RideRequestResponse, status_code=201)
async def create_request(request: RideRequestCreate, db: AsyncSession = Depends(get_db)):
    return await RequestStore(db).create_request(request)

@router.get("/driver/{driver_id}", response_model=List[RideRequestResponse])
async def get_requests(driver_id: str, db: AsyncSession = Depends(get_db)):
    return await RequestStore(db).get_requests(driver_id)

@router.get("/passenger/{passenger_id}", response_model=List[RideRequestResponse])
async def get_requests_for_passenger(passenger_id: str, db: AsyncSession = Depends(get_db)):
    return await RequestStore(db).get_requests_for_passenger(passenger_id)

@router.patch("/{request_id}", response_model=RideRequestResponse)
async def update_request(request_id: str, updates: RideRequestUpdate, db: AsyncSession = Depends(get_db)):
    """
    Drivers accept or reject, passengers cancel.
    Accepting books the passenger on the ride.
    """
    try:
        return await RequestStore(db).update_request(request_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
