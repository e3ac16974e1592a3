"""Auth endpoints: register, login, current user."""

from fastapi import APIRouter, Depends

from training_log.api.deps import get_auth_service, get_current_user_id
from training_log.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from training_log.services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    """Create an account and return it with a bearer token (400 invalid, 409 email taken)."""
    user, token = await auth.register(payload)
    return AuthResponse(user=user, token=token)


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    user, token = await auth.login(payload)
    return AuthResponse(user=user, token=token)


@router.get("/me", response_model=MeResponse)
async def me(
    user_id: str = Depends(get_current_user_id),
    auth: AuthService = Depends(get_auth_service),
):
    """The account behind the bearer token (404 if it no longer exists)."""
    return MeResponse(user=await auth.get_user(user_id))
