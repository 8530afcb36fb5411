"""
Shared pydantic plumbing for MongoDB-backed models.

ObjectIds stay native in document mode and render as hex strings in JSON.
Documents read back from MongoDB go through ``from_document`` so a shape
mismatch surfaces as a StoreError instead of an unchecked attribute error.
In that mode datetimes must already be BSON dates, not RFC 3339 text.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Mapping, Type, TypeVar

from bson import ObjectId
from pydantic import (
    BaseModel,
    ConfigDict,
    PlainSerializer,
    PlainValidator,
    ValidationError,
    ValidationInfo,
    WithJsonSchema,
)

from api.src.errors import InvalidTimestamp, StoreError
from api.src.utils.timestamps import parse_rfc3339, to_rfc3339

ModelT = TypeVar("ModelT", bound="DocumentModel")

# Validation context marking data read back from MongoDB
DOCUMENT_CONTEXT = {"source": "document"}


def _validate_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value) and len(value) == 24:
        return ObjectId(value)
    raise ValueError(f"{value!r} is not a valid ObjectId")


def _validate_utc_datetime(value: Any, info: ValidationInfo) -> datetime:
    # RFC 3339 text only outside documents, which hold BSON dates
    if isinstance(value, str) and info.context != DOCUMENT_CONTEXT:
        try:
            return parse_rfc3339(value)
        except InvalidTimestamp as e:
            raise ValueError(str(e)) from e
    if not isinstance(value, datetime):
        raise ValueError(f"{value!r} is not a datetime")
    # BSON dates come back naive unless the client is tz_aware
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


PyObjectId = Annotated[
    ObjectId,
    PlainValidator(_validate_object_id),
    PlainSerializer(lambda v: str(v), return_type=str, when_used="json"),
    WithJsonSchema({"type": "string", "pattern": "^[0-9a-f]{24}$"}),
]

UTCDateTime = Annotated[
    datetime,
    PlainValidator(_validate_utc_datetime),
    PlainSerializer(to_rfc3339, return_type=str, when_used="json"),
    WithJsonSchema({"type": "string", "format": "date-time"}),
]


class DocumentModel(BaseModel):
    """Base class for entities stored in (or read from) MongoDB."""

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        frozen=True,
    )

    def to_document(self) -> Dict[str, Any]:
        """Dump as a BSON-ready document keyed by ``_id``."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_document(cls: Type[ModelT], document: Mapping[str, Any]) -> ModelT:
        """
        Validate a raw MongoDB document into this model.

        Raises:
            StoreError: If the document does not match the model shape
        """
        try:
            return cls.model_validate(dict(document), context=DOCUMENT_CONTEXT)
        except ValidationError as e:
            raise StoreError(
                f"decode_{cls.__name__.lower()}",
                f"document {document.get('_id')!r} does not match {cls.__name__}: "
                f"{e.error_count()} validation error(s)",
            ) from e
