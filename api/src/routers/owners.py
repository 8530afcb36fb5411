"""Owner endpoints."""

from fastapi import APIRouter, Depends, status

from api.src.dependencies import get_repository
from api.src.models.owner import Owner, OwnerRequest
from api.src.repositories.booking_repo import DogWalkingRepository

router = APIRouter(tags=["Owners"])


@router.post(
    "/owner",
    response_model=Owner,
    status_code=status.HTTP_200_OK,
    summary="Register Owner",
)
async def create_owner(
    request: OwnerRequest,
    repository: DogWalkingRepository = Depends(get_repository),
) -> Owner:
    """Register a new owner and return it with its generated identifier."""
    owner = request.to_owner()
    await repository.create_owner(owner)
    return owner
