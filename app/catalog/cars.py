from datetime import date
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.catalog.common import contains_ci, span_days


class RentalCar(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, serialize_by_alias=True)

    id: str
    company: str
    model: str
    car_type: str
    transmission: str  # automatic, manual
    seats: int
    city: str
    country: str
    price_per_day: float
    currency: str = "USD"
    features: list[str] = []


CARS = [
    RentalCar(id="CAR001", company="Metro Rentals", model="Toyota Corolla", car_type="compact",
              transmission="automatic", seats=5, city="Los Angeles", country="USA", price_per_day=49.0,
              features=["Bluetooth", "Air Conditioning"]),
    RentalCar(id="CAR002", company="Metro Rentals", model="Ford Explorer", car_type="suv",
              transmission="automatic", seats=7, city="Los Angeles", country="USA", price_per_day=89.0,
              features=["GPS", "Third Row", "Air Conditioning"]),
    RentalCar(id="CAR003", company="Coastal Cars", model="BMW 5 Series", car_type="luxury",
              transmission="automatic", seats=5, city="Los Angeles", country="USA", price_per_day=149.0,
              features=["Leather Seats", "GPS"]),
    RentalCar(id="CAR004", company="Big Apple Auto", model="Honda Fit", car_type="economy",
              transmission="manual", seats=4, city="New York", country="USA", price_per_day=39.0),
    RentalCar(id="CAR005", company="Autoroute", model="Renault Clio", car_type="economy",
              transmission="manual", seats=5, city="Paris", country="France", price_per_day=35.0, currency="EUR"),
]


def get_car(car_id: str) -> RentalCar | None:
    for c in CARS:
        if c.id == car_id:
            return c
    return None


def search_cars(location: str, pickup_date: date | None = None, dropoff_date: date | None = None,
                car_type: str | None = None, transmission: str | None = None, min_seats: int | None = None,
                max_price: float | None = None) -> list[dict]:
    """Cars available in a city/country, cheapest daily rate first."""
    days = span_days(pickup_date, dropoff_date)
    out = []
    for c in CARS:
        if not (contains_ci(c.city, location) or contains_ci(c.country, location)):
            continue
        if car_type and c.car_type != car_type.lower():
            continue
        if transmission and c.transmission != transmission.lower():
            continue
        if min_seats is not None and c.seats < min_seats:
            continue
        if max_price is not None and c.price_per_day > max_price:
            continue
        out.append({**c.model_dump(), "days": days, "totalPrice": round(c.price_per_day * days, 2)})
    out.sort(key=lambda item: item["pricePerDay"])
    return out
