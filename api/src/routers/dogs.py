"""Dog endpoints."""

from fastapi import APIRouter, Depends, status

from api.src.dependencies import get_repository
from api.src.models.dog import Dog, DogRequest
from api.src.repositories.booking_repo import DogWalkingRepository

router = APIRouter(tags=["Dogs"])


@router.post(
    "/dog",
    response_model=Dog,
    status_code=status.HTTP_200_OK,
    summary="Register Dog",
)
async def create_dog(
    request: DogRequest,
    repository: DogWalkingRepository = Depends(get_repository),
) -> Dog:
    """
    Register a dog for an owner.

    **Error Responses:**
    - 400: ``owner`` is not a valid ObjectId
    """
    dog = request.to_dog()
    await repository.create_dog(dog)
    return dog
