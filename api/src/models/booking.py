"""
Booking models.

Provides:
- Booking: the persisted walk booking
- BookingRequest: client payload, converted with ``to_booking``
- FullBooking: read-only projection joining the owner and their dogs
- UpdateOutcome: result of a cancellation
"""

from typing import Annotated, List

from bson import ObjectId
from pydantic import BaseModel, Field

from api.src.models.base import DocumentModel, PyObjectId, UTCDateTime
from api.src.models.dog import Dog
from api.src.models.owner import Owner
from api.src.utils.identifiers import parse_object_id
from api.src.utils.timestamps import parse_rfc3339

# Durations are stored as an unsigned byte
DurationMinutes = Annotated[int, Field(ge=0, le=255)]


class Booking(DocumentModel):
    """A scheduled walk. Only ever mutated by cancellation."""

    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    owner: PyObjectId
    start_time: UTCDateTime
    duration_in_minutes: DurationMinutes
    cancelled: bool = False


class BookingRequest(BaseModel):
    """Client payload for creating a booking."""

    owner: str = Field(..., description="Owner ObjectId as hex text")
    start_time: str = Field(..., description="RFC 3339 timestamp with offset")
    duration_in_minutes: DurationMinutes

    def to_booking(self) -> Booking:
        """
        Convert this request into a new, uncancelled Booking.

        Returns:
            Booking with a fresh identifier and ``start_time`` in UTC

        Raises:
            InvalidTimestamp: If ``start_time`` is not RFC 3339
            InvalidIdentifier: If ``owner`` is not a valid ObjectId
        """
        start_time = parse_rfc3339(self.start_time)
        owner = parse_object_id(self.owner, field="owner")

        return Booking(
            id=ObjectId(),
            owner=owner,
            start_time=start_time,
            duration_in_minutes=self.duration_in_minutes,
            cancelled=False,
        )


class FullBooking(DocumentModel):
    """A booking with its owner embedded and the owner's dogs attached."""

    id: PyObjectId = Field(..., alias="_id")
    owner: Owner
    dogs: List[Dog] = Field(default_factory=list)
    start_time: UTCDateTime
    duration_in_minutes: DurationMinutes
    cancelled: bool


class UpdateOutcome(BaseModel):
    """Counts reported by MongoDB for a single-document update."""

    matched_count: int
    modified_count: int
