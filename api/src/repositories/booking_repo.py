"""
Dog walking repository for MongoDB operations.

Provides async create operations for owners, dogs and bookings, booking
cancellation, and the aggregated listing of upcoming bookings. Uses the
pymongo async API; every driver failure is logged and re-raised as
StoreError.
"""

import structlog
from datetime import datetime
from typing import Callable, List, Optional

from bson import ObjectId
from bson.errors import BSONError
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from api.src.config import Settings, get_settings
from api.src.errors import StoreError
from api.src.models.booking import Booking, FullBooking, UpdateOutcome
from api.src.models.dog import Dog
from api.src.models.owner import Owner
from api.src.repositories.aggregation import build_future_bookings_pipeline
from api.src.utils.identifiers import parse_object_id
from api.src.utils.timestamps import utc_now

logger = structlog.get_logger(__name__)

DRIVER_ERRORS = (PyMongoError, BSONError)


class DogWalkingRepository:
    """Repository for owner, dog and booking collections."""

    def __init__(
        self,
        database: AsyncDatabase,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the repository.

        Args:
            database: pymongo async database handle, shared and safe for
                concurrent use
            settings: Settings providing collection names (defaults to the
                cached application settings)
            clock: Source of the current UTC instant for listings
        """
        self.settings = settings or get_settings()
        self.clock = clock

        self.owner = database[self.settings.owner_collection]
        self.dog = database[self.settings.dog_collection]
        self.booking = database[self.settings.booking_collection]

    async def create_owner(self, owner: Owner) -> ObjectId:
        """
        Insert a new owner.

        Args:
            owner: Owner to insert

        Returns:
            Inserted identifier

        Raises:
            StoreError: On database error
        """
        try:
            result = await self.owner.insert_one(owner.to_document())
        except DRIVER_ERRORS as e:
            logger.error("owner_create_failed", error=str(e), owner_id=str(owner.id))
            raise StoreError("create_owner", str(e)) from e

        logger.info("owner_created", owner_id=str(result.inserted_id))
        return result.inserted_id

    async def create_dog(self, dog: Dog) -> ObjectId:
        """
        Insert a new dog.

        The referenced owner is not checked; dogs of unknown owners are
        simply never joined into a listing.

        Raises:
            StoreError: On database error
        """
        try:
            result = await self.dog.insert_one(dog.to_document())
        except DRIVER_ERRORS as e:
            logger.error("dog_create_failed", error=str(e), dog_id=str(dog.id), owner_id=str(dog.owner))
            raise StoreError("create_dog", str(e)) from e

        logger.info("dog_created", dog_id=str(result.inserted_id), owner_id=str(dog.owner))
        return result.inserted_id

    async def create_booking(self, booking: Booking) -> ObjectId:
        """
        Insert a new booking.

        Raises:
            StoreError: On database error
        """
        try:
            result = await self.booking.insert_one(booking.to_document())
        except DRIVER_ERRORS as e:
            logger.error(
                "booking_create_failed",
                error=str(e),
                booking_id=str(booking.id),
                owner_id=str(booking.owner)
            )
            raise StoreError("create_booking", str(e)) from e

        logger.info(
            "booking_created",
            booking_id=str(result.inserted_id),
            owner_id=str(booking.owner),
            start_time=booking.start_time.isoformat()
        )
        return result.inserted_id

    async def cancel_booking(self, booking_id: str) -> UpdateOutcome:
        """
        Mark a booking as cancelled.

        Cancelling twice is not an error: the second call matches the
        booking without modifying it.

        Args:
            booking_id: Booking identifier as hex text

        Returns:
            Matched and modified counts

        Raises:
            InvalidIdentifier: If booking_id is not a valid ObjectId
            StoreError: On database error
        """
        object_id = parse_object_id(booking_id, field="booking_id")

        try:
            result = await self.booking.update_one(
                {"_id": object_id},
                {"$set": {"cancelled": True}}
            )
        except DRIVER_ERRORS as e:
            logger.error("booking_cancel_failed", error=str(e), booking_id=booking_id)
            raise StoreError("cancel_booking", str(e)) from e

        outcome = UpdateOutcome(
            matched_count=result.matched_count,
            modified_count=result.modified_count
        )

        if outcome.matched_count:
            logger.info("booking_cancelled", booking_id=booking_id, modified=outcome.modified_count)
        else:
            logger.debug("booking_not_found", booking_id=booking_id)

        return outcome

    async def get_bookings(self) -> List[FullBooking]:
        """
        List upcoming, uncancelled bookings with owner and dogs joined.

        Bookings whose owner does not exist are left out. The whole call
        fails if any result document does not match FullBooking.

        Returns:
            Bookings ordered by start time

        Raises:
            StoreError: On database error or malformed documents
        """
        now = self.clock()
        pipeline = build_future_bookings_pipeline(
            now,
            owner_collection=self.settings.owner_collection,
            dog_collection=self.settings.dog_collection,
        )

        bookings: List[FullBooking] = []
        try:
            async with await self.booking.aggregate(pipeline) as cursor:
                async for document in cursor:
                    bookings.append(FullBooking.from_document(document))
        except StoreError as e:
            logger.error("booking_decode_failed", error=str(e))
            raise
        except DRIVER_ERRORS as e:
            logger.error("booking_list_failed", error=str(e))
            raise StoreError("get_bookings", str(e)) from e

        logger.debug("bookings_listed", count=len(bookings), now=now.isoformat())
        return bookings
