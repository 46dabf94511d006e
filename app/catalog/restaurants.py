from typing import Literal, Optional
from pydantic import BaseModel, Field

from app.catalog.common import any_contains_ci, contains_ci, haversine_km, split_csv

PriceRange = Literal["$", "$$", "$$$", "$$$$"]


class Coordinates(BaseModel):
    lat: float
    lng: float


class RestaurantLocation(BaseModel):
    address: str
    city: str
    country: str
    coordinates: Coordinates


class Contact(BaseModel):
    phone: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None


class DayHours(BaseModel):
    open: str = ""
    close: str = ""
    closed: bool = False


class Restaurant(BaseModel):
    """Restaurant reference data (read-only)."""
    id: str
    name: str
    cuisine: list[str]
    rating: float = Field(ge=1, le=5)
    priceRange: PriceRange
    location: RestaurantLocation
    contact: Contact
    openingHours: dict[str, DayHours]
    images: list[str] = []
    features: list[str] = []
    description: str = ""


def _week(open_: str, close: str, **overrides: DayHours) -> dict[str, DayHours]:
    days = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
    hours = {d: DayHours(open=open_, close=close) for d in days}
    hours.update(overrides)
    return hours


RESTAURANTS = [
    Restaurant(
        id="REST001",
        name="The Golden Spoon",
        cuisine=["Italian", "Mediterranean"],
        rating=4.5,
        priceRange="$$$",
        location=RestaurantLocation(
            address="789 Restaurant Row", city="New York", country="USA",
            coordinates=Coordinates(lat=40.7580, lng=-73.9855),
        ),
        contact=Contact(phone="+1-555-0123", website="https://thegoldenspoon.com", email="info@thegoldenspoon.com"),
        openingHours=_week("17:00", "22:00",
                           thursday=DayHours(open="17:00", close="23:00"),
                           friday=DayHours(open="17:00", close="23:00"),
                           saturday=DayHours(open="16:00", close="23:00"),
                           sunday=DayHours(open="16:00", close="22:00")),
        images=["https://example.com/restaurant1-1.jpg", "https://example.com/restaurant1-2.jpg"],
        features=["Outdoor Seating", "Wine Bar", "Romantic", "Business Dining"],
        description="An elegant Italian restaurant featuring authentic Mediterranean cuisine in the heart of Manhattan.",
    ),
    Restaurant(
        id="REST002",
        name="Sakura Sushi",
        cuisine=["Japanese", "Sushi"],
        rating=4.8,
        priceRange="$$",
        location=RestaurantLocation(
            address="456 Sushi Street", city="Los Angeles", country="USA",
            coordinates=Coordinates(lat=34.0522, lng=-118.2437),
        ),
        contact=Contact(phone="+1-555-0456", website="https://sakurasushi.com"),
        openingHours=_week("11:30", "21:00",
                           friday=DayHours(open="11:30", close="22:00"),
                           saturday=DayHours(open="11:30", close="22:00"),
                           sunday=DayHours(open="12:00", close="21:00")),
        images=["https://example.com/restaurant2-1.jpg", "https://example.com/restaurant2-2.jpg"],
        features=["Fresh Fish", "Sushi Bar", "Takeout", "Lunch Specials"],
        description="Fresh, authentic sushi and Japanese cuisine made with the finest ingredients.",
    ),
    Restaurant(
        id="REST003",
        name="Le Petit Bistro",
        cuisine=["French"],
        rating=4.3,
        priceRange="$$$$",
        location=RestaurantLocation(
            address="123 French Quarter", city="Chicago", country="USA",
            coordinates=Coordinates(lat=41.8781, lng=-87.6298),
        ),
        contact=Contact(phone="+1-555-0789", website="https://lepetitbistro.com", email="reservations@lepetitbistro.com"),
        openingHours=_week("17:30", "22:00",
                           monday=DayHours(closed=True),
                           friday=DayHours(open="17:30", close="23:00"),
                           saturday=DayHours(open="17:30", close="23:00"),
                           sunday=DayHours(open="17:00", close="21:30")),
        images=["https://example.com/restaurant3-1.jpg", "https://example.com/restaurant3-2.jpg"],
        features=["Fine Dining", "Wine Cellar", "Chef's Table", "Private Dining"],
        description="Classic French cuisine in an intimate bistro setting with an extensive wine collection.",
    ),
    Restaurant(
        id="REST004",
        name="Taqueria del Sol",
        cuisine=["Mexican"],
        rating=4.1,
        priceRange="$",
        location=RestaurantLocation(
            address="22 Olvera Street", city="Los Angeles", country="USA",
            coordinates=Coordinates(lat=34.0574, lng=-118.2378),
        ),
        contact=Contact(phone="+1-555-0222"),
        openingHours=_week("10:00", "22:00"),
        images=["https://example.com/restaurant4-1.jpg"],
        features=["Takeout", "Outdoor Seating", "Family Friendly"],
        description="Street-style tacos and fresh salsas a short walk from downtown.",
    ),
]


def get_restaurant(restaurant_id: str) -> Restaurant | None:
    for r in RESTAURANTS:
        if r.id == restaurant_id:
            return r
    return None


def _matches_filters(r: Restaurant, cuisine: str | None, price_range: str | None, rating: float | None) -> bool:
    if cuisine and not any_contains_ci(r.cuisine, cuisine):
        return False
    if price_range and r.priceRange != price_range:
        return False
    if rating is not None and r.rating < rating:
        return False
    return True


def search_restaurants(location: str, cuisine: str | None = None, price_range: str | None = None,
                       rating: float | None = None, features: str | None = None) -> list[Restaurant]:
    """Location matches city or country; results sorted by rating, best first."""
    wanted = split_csv(features)
    results = []
    for r in RESTAURANTS:
        if not (contains_ci(r.location.city, location) or contains_ci(r.location.country, location)):
            continue
        if not _matches_filters(r, cuisine, price_range, rating):
            continue
        if wanted and not any(any_contains_ci(r.features, f) for f in wanted):
            continue
        results.append(r)
    results.sort(key=lambda r: r.rating, reverse=True)
    return results


def nearby_restaurants(lat: float, lng: float, radius_km: float = 5.0, cuisine: str | None = None,
                       price_range: str | None = None, rating: float | None = None) -> list[dict]:
    """Restaurants within radius_km of (lat, lng), closest first, each with its distance in km."""
    out = []
    for r in RESTAURANTS:
        c = r.location.coordinates
        distance = haversine_km(lat, lng, c.lat, c.lng)
        if distance > radius_km:
            continue
        if not _matches_filters(r, cuisine, price_range, rating):
            continue
        out.append({**r.model_dump(), "distance": distance})
    out.sort(key=lambda item: item["distance"])
    return out
