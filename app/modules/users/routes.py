from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_admin_supabase
from app.modules.users.schemas import UserCreate, UserCreateResponse, UserDeleteResponse
from app.modules.users.service import UserService
from app.modules.profiles.schemas import AuthIdentity, ProfileResponse
from app.core.dependencies import require_admin
from app.core.errors import ValidationError
from supabase import Client
from typing import List

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(
    supabase: Client = Depends(get_supabase),
    admin_client: Client = Depends(get_admin_supabase)
) -> UserService:
    return UserService(supabase, admin_client)


@router.get("", response_model=List[ProfileResponse])
async def list_users(
    admin: AuthIdentity = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """List all user profiles, newest first"""
    return service.list_users()


@router.post("", response_model=UserCreateResponse, status_code=201)
async def create_user(
    user_data: UserCreate,
    admin: AuthIdentity = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """Create a confirmed user account and profile on behalf of a student"""
    return service.create_user(user_data)


@router.delete("/{user_id}", response_model=UserDeleteResponse)
async def delete_user(
    user_id: str,
    admin: AuthIdentity = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """Delete a user account and its profile"""
    if user_id == admin.id:
        raise ValidationError("Administrators cannot delete their own account")
    return service.delete_user(user_id)
