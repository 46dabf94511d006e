from datetime import date
from typing import Literal, Optional
from fastapi import APIRouter, Query
from app.catalog.common import paginate
from app.catalog.flights import get_schedule, search_flights
from app.schemas.common import success
from app.core.errors import NotFound

router = APIRouter(prefix="/flights", tags=["flights"])

CabinClass = Literal["economy", "premium_economy", "business", "first"]

@router.get("/search")
def search(
    departureDate: date,
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    passengers: int = Query(1, ge=1, le=9),
    cabinClass: Optional[CabinClass] = None,
    maxPrice: Optional[float] = Query(None, gt=0),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    results = search_flights(departureDate, origin, destination, passengers, cabinClass, maxPrice)
    items, pagination = paginate(results, page, limit)
    params = {
        "origin": origin, "destination": destination, "departureDate": departureDate.isoformat(),
        "passengers": passengers, "cabinClass": cabinClass,
    }
    return success({"flights": items, "searchParams": params}, pagination=pagination)

@router.get("/{flight_id}")
def get_one(flight_id: str):
    f = get_schedule(flight_id)
    if not f:
        raise NotFound("Flight not found")
    return success({"flight": f.model_dump()})
