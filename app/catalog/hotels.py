from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.catalog.common import any_contains_ci, contains_ci, span_days, split_csv


class Hotel(BaseModel):
    """Hotel model."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, serialize_by_alias=True)

    id: str
    name: str
    city: str
    country: str
    description: str
    rating: float = Field(ge=0, le=5)
    price_per_night: float
    currency: str = "USD"
    max_guests: int
    amenities: list[str]
    image_url: str
    category: str  # economy, standard, premium, luxury


HOTELS = [
    Hotel(
        id="HOTEL001",
        name="Seaside Paradise Resort",
        city="Miami Beach",
        country="USA",
        description="Luxurious beachfront resort with stunning ocean views and world-class amenities.",
        rating=4.8,
        price_per_night=299.99,
        max_guests=4,
        amenities=["Pool", "Beach Access", "Spa", "Restaurant", "WiFi", "Gym"],
        image_url="https://example.com/hotel1.jpg",
        category="luxury",
    ),
    Hotel(
        id="HOTEL002",
        name="Downtown Business Hotel",
        city="New York",
        country="USA",
        description="Modern hotel in the heart of Manhattan, perfect for business travelers.",
        rating=4.4,
        price_per_night=249.99,
        max_guests=2,
        amenities=["Business Center", "WiFi", "Gym", "Restaurant", "Room Service"],
        image_url="https://example.com/hotel2.jpg",
        category="standard",
    ),
    Hotel(
        id="HOTEL003",
        name="Times Square Budget Inn",
        city="New York",
        country="USA",
        description="Affordable rooms steps away from Broadway theatres.",
        rating=3.9,
        price_per_night=129.0,
        max_guests=3,
        amenities=["WiFi", "Breakfast"],
        image_url="https://example.com/hotel3.jpg",
        category="economy",
    ),
    Hotel(
        id="HOTEL004",
        name="Rive Gauche Boutique",
        city="Paris",
        country="France",
        description="Charming boutique hotel on the Left Bank with a quiet courtyard.",
        rating=4.7,
        price_per_night=219.0,
        currency="EUR",
        max_guests=2,
        amenities=["WiFi", "Bar", "Concierge"],
        image_url="https://example.com/hotel4.jpg",
        category="premium",
    ),
    Hotel(
        id="HOTEL005",
        name="Shinjuku Skyline Hotel",
        city="Tokyo",
        country="Japan",
        description="High-rise hotel with city views and direct station access.",
        rating=4.5,
        price_per_night=180.0,
        max_guests=3,
        amenities=["WiFi", "Restaurant", "Gym", "Laundry"],
        image_url="https://example.com/hotel5.jpg",
        category="standard",
    ),
]


def get_hotel(hotel_id: str) -> Hotel | None:
    for h in HOTELS:
        if h.id == hotel_id:
            return h
    return None


def search_hotels(location: str, check_in: date | None = None, check_out: date | None = None,
                  guests: int = 1, min_rating: float | None = None, max_price: float | None = None,
                  amenities: str | None = None) -> list[dict]:
    """Hotels in a city/country that fit the party, best rated first, priced for the stay."""
    nights = span_days(check_in, check_out)
    wanted = split_csv(amenities)
    out = []
    for h in HOTELS:
        if not (contains_ci(h.city, location) or contains_ci(h.country, location)):
            continue
        if h.max_guests < guests:
            continue
        if min_rating is not None and h.rating < min_rating:
            continue
        if max_price is not None and h.price_per_night > max_price:
            continue
        if wanted and not all(any_contains_ci(h.amenities, a) for a in wanted):
            continue
        out.append({**h.model_dump(), "nights": nights, "totalPrice": round(h.price_per_night * nights, 2)})
    out.sort(key=lambda item: item["rating"], reverse=True)
    return out
