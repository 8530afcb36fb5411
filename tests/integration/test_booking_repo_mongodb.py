"""
Integration tests for DogWalkingRepository against a real MongoDB.

Tests cover:
- Aggregation filter: past and cancelled bookings are excluded
- Aggregation completeness: owner embedded, all dogs attached
- Orphan exclusion: bookings of unknown owners are dropped silently
- Cancellation idempotence
- Empty listings

These tests use testcontainers for MongoDB and require Docker.
"""

import pytest
import pytest_asyncio
from datetime import datetime, timedelta, timezone

from bson import ObjectId
from faker import Faker
from pymongo import AsyncMongoClient

from api.src.config import Settings
from api.src.errors import StoreError
from api.src.models import Booking, BookingRequest, Dog, DogRequest, Owner, OwnerRequest
from api.src.repositories.booking_repo import DogWalkingRepository
from api.src.utils.timestamps import to_rfc3339
from tests.testcontainers.containers import MongoDBContainer

pytestmark = pytest.mark.integration

NOW = datetime(2030, 6, 1, 12, 0, tzinfo=timezone.utc)
TEST_DATABASE = "dog_walking_test"


@pytest.fixture(scope="module")
def mongodb_container():
    """Start MongoDB container."""
    container = MongoDBContainer()
    container.start()
    yield container
    container.stop()


@pytest_asyncio.fixture
async def database(mongodb_container):
    """Get a clean test database."""
    client = AsyncMongoClient(mongodb_container.get_direct_connection_url(), tz_aware=True)
    yield client[TEST_DATABASE]
    await client.drop_database(TEST_DATABASE)
    await client.close()


@pytest.fixture
def repository(database):
    return DogWalkingRepository(database, Settings(_env_file=None), clock=lambda: NOW)


@pytest.fixture
def fake():
    Faker.seed(1234)
    return Faker()


def make_owner(fake: Faker) -> Owner:
    return OwnerRequest(
        name=fake.name(),
        email=fake.email(),
        phone=fake.phone_number(),
        address=fake.street_address(),
    ).to_owner()


def make_dog(fake: Faker, owner: Owner) -> Dog:
    return DogRequest(owner=str(owner.id), name=fake.first_name(), age=fake.random_int(0, 15)).to_dog()


def make_booking(owner_id: ObjectId, start_time: datetime, duration: int = 30) -> Booking:
    return BookingRequest(
        owner=str(owner_id),
        start_time=to_rfc3339(start_time),
        duration_in_minutes=duration,
    ).to_booking()


@pytest.mark.asyncio
async def test_empty_store_returns_empty_list(repository):
    """Test listing with nothing stored"""
    assert await repository.get_bookings() == []


@pytest.mark.asyncio
async def test_full_booking_joins_owner_and_dogs(repository, fake):
    """Test one owner, two dogs and one future booking give one full row"""
    owner = make_owner(fake)
    dogs = [make_dog(fake, owner), make_dog(fake, owner)]
    booking = make_booking(owner.id, NOW + timedelta(days=1), duration=45)

    await repository.create_owner(owner)
    for dog in dogs:
        await repository.create_dog(dog)
    await repository.create_booking(booking)

    bookings = await repository.get_bookings()

    assert len(bookings) == 1
    full_booking = bookings[0]
    assert full_booking.id == booking.id
    assert full_booking.owner == owner
    assert sorted(d.id for d in full_booking.dogs) == sorted(d.id for d in dogs)
    assert full_booking.start_time == booking.start_time
    assert full_booking.duration_in_minutes == 45
    assert full_booking.cancelled is False


@pytest.mark.asyncio
async def test_past_and_cancelled_bookings_excluded(repository, fake):
    """Test neither a past booking nor a cancelled future booking is listed"""
    owner = make_owner(fake)
    await repository.create_owner(owner)

    past = make_booking(owner.id, NOW - timedelta(hours=1))
    cancelled = make_booking(owner.id, NOW + timedelta(days=2))
    await repository.create_booking(past)
    await repository.create_booking(cancelled)
    await repository.cancel_booking(str(cancelled.id))

    assert await repository.get_bookings() == []


@pytest.mark.asyncio
async def test_booking_starting_now_included(repository, fake):
    """Test the start_time filter is inclusive"""
    owner = make_owner(fake)
    await repository.create_owner(owner)
    booking = make_booking(owner.id, NOW)
    await repository.create_booking(booking)

    assert [b.id for b in await repository.get_bookings()] == [booking.id]


@pytest.mark.asyncio
async def test_orphan_booking_excluded(repository, fake):
    """Test a booking whose owner does not exist is dropped without error"""
    owner = make_owner(fake)
    await repository.create_owner(owner)
    kept = make_booking(owner.id, NOW + timedelta(days=1))
    orphan = make_booking(ObjectId(), NOW + timedelta(days=1))
    await repository.create_booking(kept)
    await repository.create_booking(orphan)

    assert [b.id for b in await repository.get_bookings()] == [kept.id]


@pytest.mark.asyncio
async def test_owner_without_dogs_has_empty_list(repository, fake):
    """Test an owner with no dogs still yields a row"""
    owner = make_owner(fake)
    await repository.create_owner(owner)
    await repository.create_booking(make_booking(owner.id, NOW + timedelta(days=1)))

    bookings = await repository.get_bookings()

    assert len(bookings) == 1
    assert bookings[0].dogs == []


@pytest.mark.asyncio
async def test_dogs_of_other_owners_not_attached(repository, fake):
    """Test each row only carries its own owner's dogs"""
    first, second = make_owner(fake), make_owner(fake)
    for owner in (first, second):
        await repository.create_owner(owner)
    await repository.create_dog(make_dog(fake, first))
    await repository.create_dog(make_dog(fake, second))
    await repository.create_dog(make_dog(fake, second))
    await repository.create_booking(make_booking(first.id, NOW + timedelta(days=1)))
    await repository.create_booking(make_booking(second.id, NOW + timedelta(days=2)))

    bookings = await repository.get_bookings()

    assert [len(b.dogs) for b in bookings] == [1, 2]
    for full_booking in bookings:
        assert all(dog.owner == full_booking.owner.id for dog in full_booking.dogs)


@pytest.mark.asyncio
async def test_cancel_is_idempotent(repository, database, fake):
    """Test cancelling twice succeeds and leaves cancelled=True"""
    owner = make_owner(fake)
    booking = make_booking(owner.id, NOW + timedelta(days=1))
    await repository.create_booking(booking)

    first = await repository.cancel_booking(str(booking.id))
    second = await repository.cancel_booking(str(booking.id))

    assert (first.matched_count, first.modified_count) == (1, 1)
    assert (second.matched_count, second.modified_count) == (1, 0)

    stored = await database["booking"].find_one({"_id": booking.id})
    assert stored["cancelled"] is True


@pytest.mark.asyncio
async def test_duplicate_insert_is_store_error(repository, fake):
    """Test a duplicate _id is reported, not fatal"""
    owner = make_owner(fake)
    await repository.create_owner(owner)

    with pytest.raises(StoreError):
        await repository.create_owner(owner)


@pytest.mark.asyncio
async def test_malformed_stored_document_fails_listing(repository, database, fake):
    """Test a row that does not decode fails the whole listing"""
    owner = make_owner(fake)
    await repository.create_owner(owner)
    await repository.create_booking(make_booking(owner.id, NOW + timedelta(days=1)))
    await database["booking"].insert_one({
        "owner": owner.id,
        "start_time": NOW + timedelta(days=3),
        "duration_in_minutes": "an hour",
        "cancelled": False,
    })

    with pytest.raises(StoreError):
        await repository.get_bookings()
