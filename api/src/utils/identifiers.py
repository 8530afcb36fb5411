"""ObjectId parsing for client-supplied identifiers."""

from bson import ObjectId
from bson.errors import InvalidId

from api.src.errors import InvalidIdentifier


def parse_object_id(value: str, field: str = "id") -> ObjectId:
    """
    Parse a 24 character hex string into an ObjectId.

    Args:
        value: Identifier text
        field: Name of the field being parsed, used in the error message

    Raises:
        InvalidIdentifier: If the text is not a valid ObjectId
    """
    if not isinstance(value, str) or len(value) != 24:
        raise InvalidIdentifier(str(value), field)
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifier(value, field) from e
