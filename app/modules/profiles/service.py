from supabase import Client
from app.core.errors import ProviderError, UnexpectedError, provider_message
from app.modules.profiles.schemas import AuthIdentity, ProfileResponse, DEFAULT_ROLE
from datetime import datetime, timezone
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"


def fallback_full_name(identity: AuthIdentity) -> Optional[str]:
    """Display name, else the part of the email before '@'."""
    if identity.display_name:
        return identity.display_name
    if identity.email:
        return identity.email.split("@")[0]
    return None


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> Optional[ProfileResponse]:
        """Fetch a profile by id; None when there is no row."""
        result = self.supabase.table(PROFILES_TABLE)\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return ProfileResponse(**result.data[0])

    def ensure_profile(self, identity: AuthIdentity) -> Optional[ProfileResponse]:
        """
        Return the user's profile, creating it on first sight.

        An existing row is returned untouched. A missing row is written with
        an upsert that ignores conflicts on id, so a concurrent first login
        for the same user cannot produce a second row. Failures are logged
        and swallowed (returns None); provisioning runs again on the next login.
        """
        try:
            existing = self.get_profile(identity.id)
        except Exception as e:
            logger.error(f"Error fetching profile for user {identity.id}: {e}")
            return None

        if existing:
            logger.debug(f"Profile exists for user {identity.id}")
            return existing

        logger.info(f"Profile not found for user {identity.id}, creating")
        try:
            result = self.supabase.table(PROFILES_TABLE)\
                .upsert(self._new_profile_row(identity), on_conflict="id", ignore_duplicates=True)\
                .execute()
            if result.data:
                logger.info(f"Profile created for user {identity.id}")
                return ProfileResponse(**result.data[0])
            # Another request inserted the row first
            return self.get_profile(identity.id)
        except Exception as e:
            logger.error(f"Profile creation failed for user {identity.id}: {e}")
            return None

    def create_profile(
        self,
        identity: AuthIdentity,
        role: str = DEFAULT_ROLE,
    ) -> ProfileResponse:
        """Insert a profile row and fail loudly (admin-created users)."""
        try:
            result = self.supabase.table(PROFILES_TABLE)\
                .insert(self._new_profile_row(identity, role=role))\
                .execute()
        except Exception as e:
            raise ProviderError(provider_message(e))
        if not result.data:
            raise UnexpectedError("Failed to create profile")
        return ProfileResponse(**result.data[0])

    def list_profiles(self) -> List[ProfileResponse]:
        """All profiles, newest first."""
        try:
            result = self.supabase.table(PROFILES_TABLE)\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            raise ProviderError(provider_message(e))
        return [ProfileResponse(**row) for row in result.data or []]

    def delete_profile(self, user_id: str) -> bool:
        try:
            result = self.supabase.table(PROFILES_TABLE)\
                .delete()\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            raise ProviderError(provider_message(e))
        return bool(result.data)

    def _new_profile_row(self, identity: AuthIdentity, role: str = DEFAULT_ROLE) -> dict:
        return {
            "id": identity.id,
            "email": identity.email,
            "full_name": fallback_full_name(identity),
            "grade_level": None,
            "school": None,
            "role": role,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
