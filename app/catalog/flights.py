from datetime import date, datetime, timedelta
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.catalog.common import contains_ci


class Airport(BaseModel):
    code: str
    city: str
    country: str


class ScheduledFlight(BaseModel):
    """A daily service; concrete flights are built per departure date."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, serialize_by_alias=True)

    id: str
    airline: str
    flight_number: str
    origin: Airport
    destination: Airport
    departure_time: str  # HH:MM local
    duration_minutes: int
    cabin_class: str
    price: float
    currency: str = "USD"
    seats_available: int


JFK = Airport(code="JFK", city="New York", country="USA")
LAX = Airport(code="LAX", city="Los Angeles", country="USA")
ORD = Airport(code="ORD", city="Chicago", country="USA")
CDG = Airport(code="CDG", city="Paris", country="France")
LHR = Airport(code="LHR", city="London", country="United Kingdom")

SCHEDULES = [
    ScheduledFlight(id="FL001", airline="SkyWays", flight_number="SW101", origin=JFK, destination=LAX,
                    departure_time="08:00", duration_minutes=360, cabin_class="economy", price=289.0, seats_available=42),
    ScheduledFlight(id="FL002", airline="SkyWays", flight_number="SW105", origin=JFK, destination=LAX,
                    departure_time="17:30", duration_minutes=365, cabin_class="business", price=849.0, seats_available=8),
    ScheduledFlight(id="FL003", airline="Coastline Air", flight_number="CA220", origin=JFK, destination=LAX,
                    departure_time="12:15", duration_minutes=375, cabin_class="economy", price=239.0, seats_available=3),
    ScheduledFlight(id="FL004", airline="Lakefront", flight_number="LF310", origin=ORD, destination=JFK,
                    departure_time="06:45", duration_minutes=135, cabin_class="economy", price=159.0, seats_available=60),
    ScheduledFlight(id="FL005", airline="Atlantic Link", flight_number="AL7", origin=JFK, destination=CDG,
                    departure_time="19:00", duration_minutes=445, cabin_class="economy", price=612.0, seats_available=25),
    ScheduledFlight(id="FL006", airline="Atlantic Link", flight_number="AL9", origin=JFK, destination=LHR,
                    departure_time="21:10", duration_minutes=420, cabin_class="first", price=3150.0, seats_available=4),
]


def get_schedule(flight_id: str) -> ScheduledFlight | None:
    for f in SCHEDULES:
        if f.id == flight_id:
            return f
    return None


def _airport_matches(airport: Airport, query: str) -> bool:
    return airport.code.lower() == query.strip().lower() or contains_ci(airport.city, query)


def flight_on(schedule: ScheduledFlight, departure_date: date) -> dict:
    hh, mm = (int(p) for p in schedule.departure_time.split(":"))
    departs = datetime.combine(departure_date, datetime.min.time()).replace(hour=hh, minute=mm)
    arrives = departs + timedelta(minutes=schedule.duration_minutes)
    out = schedule.model_dump()
    out["departure"] = {"airport": schedule.origin.code, "city": schedule.origin.city, "date": departs.isoformat()}
    out["arrival"] = {"airport": schedule.destination.code, "city": schedule.destination.city, "date": arrives.isoformat()}
    return out


def search_flights(departure_date: date, origin: str | None = None, destination: str | None = None,
                   passengers: int = 1, cabin_class: str | None = None, max_price: float | None = None) -> list[dict]:
    """Flights leaving on departure_date, cheapest first."""
    out = []
    for f in SCHEDULES:
        if origin and not _airport_matches(f.origin, origin):
            continue
        if destination and not _airport_matches(f.destination, destination):
            continue
        if f.seats_available < passengers:
            continue
        if cabin_class and f.cabin_class != cabin_class:
            continue
        if max_price is not None and f.price > max_price:
            continue
        out.append(flight_on(f, departure_date))
    out.sort(key=lambda item: item["price"])
    return out
