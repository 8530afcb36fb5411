"""Owner entity and its creation request."""

from bson import ObjectId
from pydantic import BaseModel, Field

from api.src.models.base import DocumentModel, PyObjectId


class Owner(DocumentModel):
    """A customer who books walks for their dogs."""

    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    name: str
    email: str
    phone: str
    address: str


class OwnerRequest(BaseModel):
    """Client payload for registering an owner."""

    name: str = Field(..., min_length=1)
    email: str
    phone: str
    address: str

    def to_owner(self) -> Owner:
        """Build a new Owner with a freshly generated identifier."""
        return Owner(
            id=ObjectId(),
            name=self.name,
            email=self.email,
            phone=self.phone,
            address=self.address,
        )
