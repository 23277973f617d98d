"""
Core dependencies for route protection and service wiring
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.errors import AuthenticationError, PermissionDeniedError
from app.database.supabase_client import SupabaseClients, get_clients, get_supabase
from app.modules.auth.service import AuthService, DemoAuthService
from app.modules.profiles.schemas import AuthIdentity, ADMIN_ROLE
from app.modules.profiles.service import ProfileService
from supabase import Client
from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_auth_service(clients: SupabaseClients = Depends(get_clients)) -> Union[AuthService, DemoAuthService]:
    if not clients.configured:
        return DemoAuthService()
    return AuthService(
        clients.new_session_client(),
        clients.get_client(),
        clients.get_service_client(),
    )


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: Union[AuthService, DemoAuthService] = Depends(get_auth_service)
) -> AuthIdentity:
    return auth_service.get_current_user(token)


def is_admin(user: AuthIdentity, profile_service: ProfileService) -> bool:
    """Admin if app_metadata says so (set server-side) or the profile role is admin"""
    if user.app_metadata.get("role") == ADMIN_ROLE:
        return True
    try:
        profile = profile_service.get_profile(user.id)
    except Exception as e:
        logger.error(f"Error checking admin role for {user.id}: {e}")
        return False
    return bool(profile and profile.role == ADMIN_ROLE)


def require_admin(
    user: AuthIdentity = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
) -> AuthIdentity:
    """Dependency that only lets administrators through"""
    if not is_admin(user, profile_service):
        raise PermissionDeniedError("Administrator access required")
    return user
