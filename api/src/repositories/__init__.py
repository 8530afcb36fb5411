"""MongoDB repositories."""

from api.src.repositories.booking_repo import DogWalkingRepository

__all__ = ["DogWalkingRepository"]
