from fastapi import Depends, Request
from supabase import create_client, Client
from supabase.lib.client_options import SyncClientOptions
from app.config.settings import Settings
from app.core.errors import NotConfiguredError
from typing import Optional


class SupabaseClients:
    """Provider handles owned by one application instance (kept on app.state)."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: Optional[Client] = None
        self._service_client: Optional[Client] = None

    @property
    def configured(self) -> bool:
        return self.settings.is_supabase_configured

    def get_client(self) -> Client:
        """Client used for table and storage calls; service role when available."""
        if not self.configured:
            raise NotConfiguredError("Supabase is not configured")
        if self._client is None:
            key = self.settings.supabase_service_role_key or self.settings.supabase_anon_key
            self._client = create_client(self.settings.supabase_url, key)
        return self._client

    def get_service_client(self) -> Optional[Client]:
        """Client with service_role key; bypasses RLS. None when the key is not set."""
        if not self.configured or not self.settings.supabase_service_role_key:
            return None
        if self._service_client is None:
            self._service_client = create_client(
                self.settings.supabase_url, self.settings.supabase_service_role_key
            )
        return self._service_client

    def new_session_client(self) -> Client:
        """Fresh anon client for one request; sign-in stores the session on it.

        No background token refresh: the caller owns the returned refresh token.
        """
        if not self.configured:
            raise NotConfiguredError("Supabase is not configured")
        return create_client(
            self.settings.supabase_url,
            self.settings.supabase_anon_key,
            options=SyncClientOptions(auto_refresh_token=False, persist_session=False),
        )

    def reset(self):
        self._client = None
        self._service_client = None


def get_clients(request: Request) -> SupabaseClients:
    return request.app.state.supabase


def get_supabase(clients: SupabaseClients = Depends(get_clients)) -> Client:
    return clients.get_client()


def get_admin_supabase(clients: SupabaseClients = Depends(get_clients)) -> Client:
    client = clients.get_service_client()
    if client is None:
        raise NotConfiguredError("Service role key not configured. Admin operations are unavailable.")
    return client
