"""HTTP routers for owners, dogs and bookings."""

from api.src.routers.bookings import router as bookings_router
from api.src.routers.dogs import router as dogs_router
from api.src.routers.owners import router as owners_router

__all__ = ["bookings_router", "dogs_router", "owners_router"]
