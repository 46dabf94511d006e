import math
from datetime import date

import pytest

from app.catalog.common import haversine_km, paginate, span_days
from app.catalog.restaurants import nearby_restaurants, search_restaurants
from conftest import auth, register

LA = (34.0522, -118.2437)


def test_haversine_same_point_is_zero():
    assert haversine_km(*LA, *LA) == 0


def test_haversine_new_york_to_los_angeles():
    assert haversine_km(40.7128, -74.0060, *LA) == pytest.approx(3936, rel=0.01)


@pytest.mark.parametrize("total,limit", [(0, 20), (5, 2), (6, 3), (1, 100)])
def test_paginate_total_pages(total, limit):
    items, p = paginate(list(range(total)), 1, limit)
    assert p.totalPages == math.ceil(total / limit)
    assert p.total == total
    assert items == list(range(min(total, limit)))


def test_paginate_past_the_end_is_empty():
    items, p = paginate(list(range(5)), page=4, limit=2)
    assert items == []
    assert p.totalPages == 3


def test_span_days_minimum_one():
    assert span_days(None, None) == 1
    assert span_days(date(2030, 1, 1), date(2030, 1, 1)) == 1
    assert span_days(date(2030, 1, 1), date(2030, 1, 4)) == 3


def test_nearby_includes_exact_location():
    results = nearby_restaurants(*LA, radius_km=1)
    assert results[0]["id"] == "REST002"
    assert results[0]["distance"] == 0
    assert all(r["distance"] <= 1 for r in results)
    distances = [r["distance"] for r in results]
    assert distances == sorted(distances)


def test_search_restaurants_sorted_by_rating():
    results = search_restaurants("usa")
    ratings = [r.rating for r in results]
    assert ratings == sorted(ratings, reverse=True)
    assert len(results) == 4


def test_restaurant_search_endpoint(client):
    r = client.get("/api/v1/restaurants/search", params={"location": "los angeles", "cuisine": "mex"})
    assert r.status_code == 200
    body = r.json()
    assert [x["id"] for x in body["data"]["restaurants"]] == ["REST004"]
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 1, "totalPages": 1}


def test_restaurant_search_features_overlap(client):
    r = client.get("/api/v1/restaurants/search", params={"location": "USA", "features": "wine cellar,sushi bar"})
    ids = {x["id"] for x in r.json()["data"]["restaurants"]}
    assert ids == {"REST002", "REST003"}


def test_restaurant_search_price_and_rating(client):
    r = client.get("/api/v1/restaurants/search", params={"location": "USA", "priceRange": "$$$", "rating": 4})
    assert [x["id"] for x in r.json()["data"]["restaurants"]] == ["REST001"]


def test_restaurant_search_no_match_is_empty(client):
    r = client.get("/api/v1/restaurants/search", params={"location": "Atlantis"})
    assert r.status_code == 200
    assert r.json()["data"]["restaurants"] == []
    assert r.json()["pagination"]["total"] == 0
    assert r.json()["pagination"]["totalPages"] == 0


def test_restaurant_search_requires_location(client):
    r = client.get("/api/v1/restaurants/search", params={"priceRange": "$$$$$"})
    assert r.status_code == 400
    assert {e["field"] for e in r.json()["errors"]} == {"location", "priceRange"}


def test_restaurant_search_page_past_end(client):
    r = client.get("/api/v1/restaurants/search", params={"location": "USA", "limit": 3, "page": 3})
    body = r.json()
    assert body["data"]["restaurants"] == []
    assert body["pagination"] == {"page": 3, "limit": 3, "total": 4, "totalPages": 2}


def test_restaurant_search_personalizes_for_known_caller(client):
    token = register(client)["token"]
    client.put("/api/v1/users/preferences", headers=auth(token), json={"currency": "GBP"})
    r = client.get("/api/v1/restaurants/search", params={"location": "USA"}, headers=auth(token))
    assert r.json()["data"]["searchParams"]["currency"] == "GBP"
    r = client.get("/api/v1/restaurants/search", params={"location": "USA"}, headers=auth("bogus"))
    assert r.status_code == 200
    assert "currency" not in r.json()["data"]["searchParams"]


def test_nearby_endpoint(client):
    r = client.get("/api/v1/restaurants/nearby", params={"lat": LA[0], "lng": LA[1], "radius": 1})
    assert r.status_code == 200
    items = r.json()["data"]["restaurants"]
    assert [x["id"] for x in items] == ["REST002", "REST004"]
    assert items[0]["distance"] == 0


@pytest.mark.parametrize("radius", [0.05, 50.5])
def test_nearby_radius_bounds(client, radius):
    r = client.get("/api/v1/restaurants/nearby", params={"lat": LA[0], "lng": LA[1], "radius": radius})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "radius"


def test_nearby_requires_coordinates(client):
    r = client.get("/api/v1/restaurants/nearby")
    assert r.status_code == 400
    assert {e["field"] for e in r.json()["errors"]} == {"lat", "lng"}


def test_restaurant_detail(client):
    assert client.get("/api/v1/restaurants/REST003").json()["data"]["restaurant"]["name"] == "Le Petit Bistro"
    r = client.get("/api/v1/restaurants/REST999")
    assert r.status_code == 404
    assert r.json() == {"status": "error", "message": "Restaurant not found"}


def test_flight_search_cheapest_first(client):
    r = client.get("/api/v1/flights/search", params={"origin": "jfk", "destination": "Los Angeles", "departureDate": "2030-06-01"})
    assert r.status_code == 200
    flights = r.json()["data"]["flights"]
    assert [f["id"] for f in flights] == ["FL003", "FL001", "FL002"]
    assert flights[0]["departure"]["date"] == "2030-06-01T12:15:00"
    assert flights[0]["arrival"]["date"] == "2030-06-01T18:30:00"


def test_flight_search_filters_seats_and_cabin(client):
    params = {"origin": "JFK", "destination": "LAX", "departureDate": "2030-06-01", "passengers": 4}
    ids = [f["id"] for f in client.get("/api/v1/flights/search", params=params).json()["data"]["flights"]]
    assert ids == ["FL001", "FL002"]
    params["cabinClass"] = "business"
    ids = [f["id"] for f in client.get("/api/v1/flights/search", params=params).json()["data"]["flights"]]
    assert ids == ["FL002"]


def test_flight_search_requires_date(client):
    r = client.get("/api/v1/flights/search", params={"origin": "JFK"})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "departureDate"


def test_hotel_search(client):
    r = client.get("/api/v1/hotels/search", params={
        "location": "new york", "checkIn": "2030-03-01", "checkOut": "2030-03-04", "guests": 3,
    })
    hotels = r.json()["data"]["hotels"]
    assert [h["id"] for h in hotels] == ["HOTEL003"]
    assert hotels[0]["nights"] == 3
    assert hotels[0]["totalPrice"] == 387.0


def test_hotel_search_sorted_by_rating_and_amenities(client):
    r = client.get("/api/v1/hotels/search", params={"location": "USA", "amenities": "wifi,gym"})
    assert [h["id"] for h in r.json()["data"]["hotels"]] == ["HOTEL001", "HOTEL002"]


def test_hotel_search_rejects_inverted_dates(client):
    r = client.get("/api/v1/hotels/search", params={"location": "Paris", "checkIn": "2030-03-04", "checkOut": "2030-03-01"})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "checkOut"


def test_car_search(client):
    r = client.get("/api/v1/cars/search", params={"location": "Los Angeles", "pickupDate": "2030-05-01", "dropoffDate": "2030-05-03"})
    cars = r.json()["data"]["cars"]
    assert [c["id"] for c in cars] == ["CAR001", "CAR002", "CAR003"]
    assert cars[0]["totalPrice"] == 98.0
    r = client.get("/api/v1/cars/search", params={"location": "Los Angeles", "minSeats": 6})
    assert [c["id"] for c in r.json()["data"]["cars"]] == ["CAR002"]


def test_catalog_detail_not_found(client):
    for path in ("/api/v1/flights/FL999", "/api/v1/hotels/HOTEL999", "/api/v1/cars/CAR999"):
        r = client.get(path)
        assert r.status_code == 404
        assert r.json()["status"] == "error"


def test_unknown_route_uses_envelope(client):
    r = client.get("/api/v1/nowhere")
    assert r.status_code == 404
    assert r.json() == {"status": "error", "message": "Route /api/v1/nowhere not found"}


def test_catalog_results_use_camel_case_keys(client):
    car = client.get("/api/v1/cars/search", params={"location": "Paris"}).json()["data"]["cars"][0]
    assert {"carType", "pricePerDay", "totalPrice"} <= car.keys()
    hotel = client.get("/api/v1/hotels/search", params={"location": "Paris"}).json()["data"]["hotels"][0]
    assert {"pricePerNight", "maxGuests", "imageUrl", "nights"} <= hotel.keys()
    flight = client.get("/api/v1/flights/FL001").json()["data"]["flight"]
    assert {"flightNumber", "departureTime", "durationMinutes", "cabinClass", "seatsAvailable"} <= flight.keys()
    for item in (car, hotel, flight):
        assert not [k for k in item if "_" in k]
