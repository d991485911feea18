from fastapi import APIRouter

from location_service import LocationService
from schemas import CurrentLocation, RouteQuery, RouteEstimate

router = APIRouter(prefix="/location", tags=["location"])

@router.get("/current", response_model=CurrentLocation)
async def get_current_location():
    return await LocationService().get_current_location()

@router.post("/route", response_model=RouteEstimate)
async def get_route(query: RouteQuery):
    return await LocationService().get_route(query.from_, query.to)
