from supabase import AuthError, Client
from app.core.errors import ProviderError, UnexpectedError, provider_message
from app.modules.users.schemas import UserCreate, UserCreateResponse, UserDeleteResponse
from app.modules.profiles.schemas import AuthIdentity, ProfileResponse
from app.modules.profiles.service import ProfileService
from typing import List
import logging

logger = logging.getLogger(__name__)


class UserService:
    """Administrator user management: auth users via the service role, rows via profiles"""

    def __init__(self, supabase: Client, admin_client: Client):
        self.supabase = supabase
        self.admin_client = admin_client
        self.profiles = ProfileService(supabase)

    def list_users(self) -> List[ProfileResponse]:
        return self.profiles.list_profiles()

    def create_user(self, user_data: UserCreate) -> UserCreateResponse:
        """Create a confirmed auth user with a profile; the profile insert must succeed"""
        logger.info(f"Creating user: {user_data.email}")
        try:
            auth_response = self.admin_client.auth.admin.create_user({
                "email": user_data.email,
                "password": user_data.password,
                "email_confirm": True,
                "user_metadata": {"full_name": user_data.full_name},
            })
        except AuthError as e:
            raise ProviderError(provider_message(e))
        except Exception as e:
            logger.exception(f"Error creating user {user_data.email}: {e}")
            raise UnexpectedError("Server error creating user")

        if not auth_response or not auth_response.user:
            raise ProviderError("Failed to create user")

        identity = AuthIdentity.from_provider_user(auth_response.user)
        logger.info(f"Auth user created: {identity.id}")
        profile = self.profiles.create_profile(identity, role=user_data.role)
        return UserCreateResponse(
            message="User created successfully",
            user=identity,
            profile=profile,
        )

    def delete_user(self, user_id: str) -> UserDeleteResponse:
        """Delete the auth user, then its profile row"""
        try:
            self.admin_client.auth.admin.delete_user(user_id)
        except AuthError as e:
            raise ProviderError(provider_message(e))
        except Exception as e:
            logger.exception(f"Error deleting user {user_id}: {e}")
            raise UnexpectedError("Server error deleting user")

        # The profiles.id foreign key may already cascade; an empty delete is fine
        profile_deleted = self.profiles.delete_profile(user_id)
        logger.info(f"User deleted: {user_id} (profile row removed: {profile_deleted})")
        return UserDeleteResponse(
            message="User deleted successfully",
            user_id=user_id,
            profile_deleted=profile_deleted,
        )
