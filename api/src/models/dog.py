"""Dog entity and its creation request."""

from typing import Optional

from bson import ObjectId
from pydantic import BaseModel, Field

from api.src.models.base import DocumentModel, PyObjectId
from api.src.utils.identifiers import parse_object_id


class Dog(DocumentModel):
    """A dog, referencing its owner by identifier."""

    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    owner: PyObjectId
    name: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=255)
    breed: Optional[str] = None


class DogRequest(BaseModel):
    """Client payload for registering a dog."""

    owner: str
    name: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=255)
    breed: Optional[str] = None

    def to_dog(self) -> Dog:
        """
        Build a new Dog from this request.

        Raises:
            InvalidIdentifier: If ``owner`` is not a valid ObjectId
        """
        return Dog(
            id=ObjectId(),
            owner=parse_object_id(self.owner, field="owner"),
            name=self.name,
            age=self.age,
            breed=self.breed,
        )
