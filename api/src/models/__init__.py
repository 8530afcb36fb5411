"""Data models for the dog walking booking API.

This package contains Pydantic models for request validation, MongoDB
documents, and the aggregated booking view.
"""

from api.src.models.booking import Booking, BookingRequest, FullBooking, UpdateOutcome
from api.src.models.dog import Dog, DogRequest
from api.src.models.owner import Owner, OwnerRequest

__all__ = [
    "Booking",
    "BookingRequest",
    "FullBooking",
    "UpdateOutcome",
    "Dog",
    "DogRequest",
    "Owner",
    "OwnerRequest",
]
