from fastapi import APIRouter
from app.api.v1.routes.auth import router as auth_router
from app.api.v1.routes.users import router as users_router
from app.api.v1.routes.bookings import router as bookings_router
from app.api.v1.routes.restaurants import router as restaurants_router
from app.api.v1.routes.flights import router as flights_router
from app.api.v1.routes.hotels import router as hotels_router
from app.api.v1.routes.cars import router as cars_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(bookings_router)
api_router.include_router(restaurants_router)
api_router.include_router(flights_router)
api_router.include_router(hotels_router)
api_router.include_router(cars_router)
