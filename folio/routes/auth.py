"""Authentication routes."""
from fastapi import APIRouter, Depends

from ..application.services import AuthService
from ..dependencies import get_auth_service
from ..schemas import LoginInput

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(data: LoginInput, service: AuthService = Depends(get_auth_service)):
    """Verify credentials and return a new session."""
    session = await service.login(data.username, data.password)
    return session.to_dict()
