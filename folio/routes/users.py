"""User registration and profile routes."""
from fastapi import APIRouter, Depends

from ..application.services import AuthService
from ..dependencies import get_auth_service, get_repositories, require_session
from ..domain.entities import Session
from ..errors import ValidationError
from ..infrastructure.repositories import Repositories
from ..logger import logger
from ..schemas import ProfileUpdateInput, RegistrationInput

router = APIRouter(prefix="/users", tags=["users"])


@router.post("")
async def register(data: RegistrationInput, service: AuthService = Depends(get_auth_service)):
    """Register a user and return their first session."""
    session = await service.register(data.username, data.password)
    return session.to_dict()


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    session: Session = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
):
    """Get a user profile with the favorite book decoded."""
    user = await repos.users.find(user_id)
    return user.to_dict()


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    data: ProfileUpdateInput,
    session: Session = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
):
    """Update username, password and/or favorite book."""
    current = await repos.users.find(user_id)
    if data.username is not None and data.username != current.username:
        existing = await repos.users.find_by_username(data.username)
        if existing is not None and existing.id != current.id:
            raise ValidationError({"username": ["Username already taken"]})

    user = await repos.users.update(current.id, data.to_patch())
    logger.info("User updated: id={} by user_id={}", user.id, session.user_id)
    return user.to_dict()


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    session: Session = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
):
    """Delete a user together with their sessions and posts."""
    await repos.users.delete(user_id)
    logger.info("User deleted: id={} by user_id={}", user_id, session.user_id)
    return {"message": "User deleted"}
