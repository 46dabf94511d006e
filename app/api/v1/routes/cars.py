from datetime import date
from typing import Literal, Optional
from fastapi import APIRouter, Query
from app.catalog.common import paginate
from app.catalog.cars import get_car, search_cars
from app.schemas.common import success
from app.core.errors import NotFound, ValidationError

router = APIRouter(prefix="/cars", tags=["cars"])

@router.get("/search")
def search(
    location: str = Query(..., min_length=1),
    pickupDate: Optional[date] = None,
    dropoffDate: Optional[date] = None,
    carType: Optional[Literal["economy", "compact", "suv", "luxury", "van"]] = None,
    transmission: Optional[Literal["automatic", "manual"]] = None,
    minSeats: Optional[int] = Query(None, ge=1, le=15),
    maxPrice: Optional[float] = Query(None, gt=0),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    if pickupDate and dropoffDate and dropoffDate < pickupDate:
        raise ValidationError("Validation errors", [{"field": "dropoffDate", "message": "dropoffDate must not be before pickupDate"}])
    results = search_cars(location, pickupDate, dropoffDate, carType, transmission, minSeats, maxPrice)
    items, pagination = paginate(results, page, limit)
    params = {
        "location": location, "pickupDate": pickupDate.isoformat() if pickupDate else None,
        "dropoffDate": dropoffDate.isoformat() if dropoffDate else None,
    }
    return success({"cars": items, "searchParams": params}, pagination=pagination)

@router.get("/{car_id}")
def get_one(car_id: str):
    c = get_car(car_id)
    if not c:
        raise NotFound("Car not found")
    return success({"car": c.model_dump()})
