"""
Error taxonomy for the dog walking booking API.

Conversion errors are raised while turning client requests into entities.
Store errors wrap any failure of the underlying MongoDB driver. All of them
are recoverable: the transport layer reports them and keeps serving.
"""


class DogWalkingError(Exception):
    """Base class for all errors raised by the booking core."""


class ConversionError(DogWalkingError):
    """A client request could not be converted into an entity."""


class InvalidTimestamp(ConversionError):
    """Text is not a valid RFC 3339 timestamp."""

    def __init__(self, value: str, reason: str = "not a valid RFC 3339 timestamp"):
        self.value = value
        self.reason = reason
        super().__init__(f"Failed to parse start_time {value!r}: {reason}")


class InvalidIdentifier(ConversionError):
    """Text is not a well-formed ObjectId."""

    def __init__(self, value: str, field: str = "id"):
        self.value = value
        self.field = field
        super().__init__(f"Failed to parse {field} {value!r}: not a valid ObjectId")


class StoreError(DogWalkingError):
    """
    Failure in the persistence layer.

    Covers connectivity problems, write errors and stored documents that do
    not match the expected shape. The driver exception is kept as
    ``__cause__``.
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")
