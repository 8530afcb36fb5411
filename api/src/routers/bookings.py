"""
Booking endpoints.

Provides REST API endpoints for:
- Creating a booking
- Listing upcoming bookings with owner and dogs
- Cancelling a booking
"""

import structlog
from typing import List
from fastapi import APIRouter, Depends, status

from api.src.dependencies import get_repository
from api.src.models.booking import Booking, BookingRequest, FullBooking, UpdateOutcome
from api.src.repositories.booking_repo import DogWalkingRepository

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Bookings"])


@router.post(
    "/booking",
    response_model=Booking,
    status_code=status.HTTP_200_OK,
    summary="Create Booking",
)
async def create_booking(
    request: BookingRequest,
    repository: DogWalkingRepository = Depends(get_repository),
) -> Booking:
    """
    Create a booking from an RFC 3339 start time.

    **Error Responses:**
    - 400: invalid ``owner`` identifier or ``start_time``
    """
    booking = request.to_booking()
    await repository.create_booking(booking)
    return booking


@router.get(
    "/bookings",
    response_model=List[FullBooking],
    status_code=status.HTTP_200_OK,
    summary="List Upcoming Bookings",
)
async def get_bookings(
    repository: DogWalkingRepository = Depends(get_repository),
) -> List[FullBooking]:
    """List uncancelled bookings that have not started yet."""
    return await repository.get_bookings()


@router.put(
    "/booking/{booking_id}/cancel",
    response_model=UpdateOutcome,
    status_code=status.HTTP_200_OK,
    summary="Cancel Booking",
)
async def cancel_booking(
    booking_id: str,
    repository: DogWalkingRepository = Depends(get_repository),
) -> UpdateOutcome:
    """
    Cancel a booking. Repeating the call is harmless.

    **Error Responses:**
    - 400: ``booking_id`` is not a valid ObjectId
    """
    outcome = await repository.cancel_booking(booking_id)
    logger.debug("booking_cancel_requested", booking_id=booking_id, matched=outcome.matched_count)
    return outcome
