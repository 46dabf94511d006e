from datetime import date
from typing import Optional
from fastapi import APIRouter, Query
from app.catalog.common import paginate
from app.catalog.hotels import get_hotel, search_hotels
from app.schemas.common import success
from app.core.errors import NotFound, ValidationError

router = APIRouter(prefix="/hotels", tags=["hotels"])

@router.get("/search")
def search(
    location: str = Query(..., min_length=1),
    checkIn: Optional[date] = None,
    checkOut: Optional[date] = None,
    guests: int = Query(1, ge=1, le=20),
    minRating: Optional[float] = Query(None, ge=0, le=5),
    maxPrice: Optional[float] = Query(None, gt=0),
    amenities: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    if checkIn and checkOut and checkOut <= checkIn:
        raise ValidationError("Validation errors", [{"field": "checkOut", "message": "checkOut must be after checkIn"}])
    results = search_hotels(location, checkIn, checkOut, guests, minRating, maxPrice, amenities)
    items, pagination = paginate(results, page, limit)
    params = {
        "location": location, "checkIn": checkIn.isoformat() if checkIn else None,
        "checkOut": checkOut.isoformat() if checkOut else None, "guests": guests,
    }
    return success({"hotels": items, "searchParams": params}, pagination=pagination)

@router.get("/{hotel_id}")
def get_one(hotel_id: str):
    h = get_hotel(hotel_id)
    if not h:
        raise NotFound("Hotel not found")
    return success({"hotel": h.model_dump()})
