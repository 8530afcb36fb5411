"""
Future bookings aggregation.

Builds the MongoDB pipeline that joins bookings with their owner and the
owner's dogs. Each result document decodes as a FullBooking.

Join semantics:
- only uncancelled bookings starting at or after ``now`` are kept
- the owner lookup is an inner join, bookings without an owner are dropped
- an owner without dogs yields an empty ``dogs`` list
"""

from datetime import datetime
from typing import Any, Dict, List


def build_future_bookings_pipeline(
    now: datetime,
    owner_collection: str = "owner",
    dog_collection: str = "dog",
) -> List[Dict[str, Any]]:
    """
    Build the aggregation pipeline run against the booking collection.

    Args:
        now: Current instant in UTC; earlier bookings are filtered out
        owner_collection: Name of the owner collection to join
        dog_collection: Name of the dog collection to join

    Returns:
        Aggregation pipeline stages
    """
    return [
        {
            "$match": {
                "cancelled": False,
                "start_time": {"$gte": now},
            }
        },
        {
            "$lookup": {
                "from": owner_collection,
                "localField": "owner",
                "foreignField": "_id",
                "as": "owner",
            }
        },
        # No preserveNullAndEmptyArrays: orphaned bookings disappear here
        {"$unwind": {"path": "$owner"}},
        {
            "$lookup": {
                "from": dog_collection,
                "localField": "owner._id",
                "foreignField": "owner",
                "as": "dogs",
            }
        },
        {"$sort": {"start_time": 1, "_id": 1}},
    ]
