from fastapi import APIRouter, Depends
from app.core.dependencies import get_auth_service, get_current_token, get_current_user
from app.database.supabase_client import SupabaseClients, get_clients
from app.modules.auth.schemas import (
    LoginRequest, LoginResponse, SignupRequest, SignupResponse, CurrentUserResponse
)
from app.modules.auth.service import AuthService, DemoAuthService
from app.modules.profiles.schemas import AuthIdentity
from app.modules.profiles.service import ProfileService
from typing import Union

router = APIRouter(tags=["auth"])

AnyAuthService = Union[AuthService, DemoAuthService]


@router.post("/signup", response_model=SignupResponse)
async def signup(
    signup_data: SignupRequest,
    service: AnyAuthService = Depends(get_auth_service)
):
    """Create a Supabase Auth user and their profile"""
    return service.signup(signup_data)


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    service: AnyAuthService = Depends(get_auth_service)
):
    """Login, provision the profile if missing, and return the session tokens"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AnyAuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def me(
    current_user: AuthIdentity = Depends(get_current_user),
    clients: SupabaseClients = Depends(get_clients)
):
    """Current user and their profile (no profile in demo mode)"""
    profile = None
    if clients.configured:
        profile = ProfileService(clients.get_client()).get_profile(current_user.id)
    return CurrentUserResponse(user=current_user, profile=profile)
