from typing import Optional
from fastapi import APIRouter, Depends, Query
from app.models.user import User
from app.catalog.common import paginate
from app.catalog.restaurants import PriceRange, get_restaurant, nearby_restaurants, search_restaurants
from app.schemas.common import success
from app.core.errors import NotFound
from app.api.deps import get_optional_user

router = APIRouter(prefix="/restaurants", tags=["restaurants"])

@router.get("/search")
def search(
    location: str = Query(..., min_length=1),
    cuisine: Optional[str] = None,
    priceRange: Optional[PriceRange] = None,
    rating: Optional[float] = Query(None, ge=1, le=5),
    features: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    me: User | None = Depends(get_optional_user),
):
    results = search_restaurants(location, cuisine, priceRange, rating, features)
    items, pagination = paginate(results, page, limit)
    params = {"location": location, "cuisine": cuisine, "priceRange": priceRange, "rating": rating}
    if me is not None:
        params["currency"] = me.pref_currency
    return success(
        {"restaurants": [r.model_dump() for r in items], "searchParams": params},
        pagination=pagination,
    )

@router.get("/nearby")
def nearby(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius: float = Query(5.0, ge=0.1, le=50),
    cuisine: Optional[str] = None,
    priceRange: Optional[PriceRange] = None,
    rating: Optional[float] = Query(None, ge=1, le=5),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    results = nearby_restaurants(lat, lng, radius, cuisine, priceRange, rating)
    items, pagination = paginate(results, page, limit)
    return success(
        {"restaurants": items, "searchParams": {"lat": lat, "lng": lng, "radius": radius}},
        pagination=pagination,
    )

@router.get("/{restaurant_id}")
def get_one(restaurant_id: str):
    r = get_restaurant(restaurant_id)
    if not r:
        raise NotFound("Restaurant not found")
    return success({"restaurant": r.model_dump()})
