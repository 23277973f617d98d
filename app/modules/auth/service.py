from supabase import AuthError, Client
from app.core.errors import AuthenticationError, ProviderError, UnexpectedError, provider_message
from app.modules.auth.schemas import LoginRequest, LoginResponse, SignupRequest, SignupResponse
from app.modules.profiles.schemas import AuthIdentity
from app.modules.profiles.service import ProfileService
from typing import Optional
import logging

logger = logging.getLogger(__name__)

DEMO_TOKEN_PREFIX = "demo:"


class AuthService:
    def __init__(self, auth_client: Client, supabase: Client, admin_client: Optional[Client] = None):
        # auth_client is request scoped: sign-in stores the user's session on it
        self.auth_client = auth_client
        self.supabase = supabase
        self.admin_client = admin_client
        # Without the service role, profile writes go through the signed-in
        # user's client so row-level security sees auth.uid()
        self.profiles = ProfileService(supabase if admin_client is not None else auth_client)

    def signup(self, signup_data: SignupRequest) -> SignupResponse:
        """Create an auth user and provision their profile"""
        full_name = signup_data.full_name or signup_data.email.split("@")[0]
        try:
            if self.admin_client is not None:
                auth_response = self.admin_client.auth.admin.create_user({
                    "email": signup_data.email,
                    "password": signup_data.password,
                    "email_confirm": True,
                    "user_metadata": {"full_name": full_name},
                })
            else:
                auth_response = self.auth_client.auth.sign_up({
                    "email": signup_data.email,
                    "password": signup_data.password,
                    "options": {
                        "data": {"full_name": full_name}
                    }
                })
        except AuthError as e:
            logger.warning(f"Signup rejected for {signup_data.email}: {e}")
            raise ProviderError(provider_message(e))
        except Exception as e:
            logger.exception(f"Signup error: {e}")
            raise UnexpectedError("Server error during signup")

        if not auth_response or not auth_response.user:
            raise ProviderError("Failed to register user")
        if getattr(auth_response.user, "identities", None) == []:
            # sign_up answers an already registered email with an obfuscated user
            logger.warning(f"Signup rejected for {signup_data.email}: already registered")
            raise ProviderError("User already registered")

        identity = AuthIdentity.from_provider_user(auth_response.user)
        logger.info(f"User created: {identity.id}")
        if self.admin_client is None and not auth_response.session:
            # Email confirmation pending: no session for RLS, login provisions it
            logger.info(f"Profile for {identity.id} deferred until first login")
        else:
            self.profiles.ensure_profile(identity)
        return SignupResponse(message="Signup successful", user=identity)

    def login(self, login_data: LoginRequest) -> LoginResponse:
        """Authenticate with email and password, then make sure a profile exists"""
        try:
            auth_response = self.auth_client.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except AuthError as e:
            logger.warning(f"Login failed for {login_data.email}: {e}")
            raise AuthenticationError(provider_message(e))
        except Exception as e:
            logger.exception(f"Login error: {e}")
            raise UnexpectedError("Server error during login")

        if not auth_response.user or not auth_response.session:
            raise AuthenticationError("Invalid email or password")

        identity = AuthIdentity.from_provider_user(auth_response.user)
        profile = self.profiles.ensure_profile(identity)
        return LoginResponse(
            access_token=auth_response.session.access_token,
            refresh_token=auth_response.session.refresh_token,
            user=identity,
            profile=profile,
        )

    def get_current_user(self, token: str) -> AuthIdentity:
        """Resolve a bearer token to the provider user"""
        try:
            user_response = self.auth_client.auth.get_user(jwt=token)
        except AuthError as e:
            logger.debug(f"Token rejected: {e}")
            raise AuthenticationError()
        except Exception as e:
            logger.exception(f"Token lookup error: {e}")
            raise AuthenticationError("Authentication failed")
        if not user_response or not user_response.user:
            raise AuthenticationError()
        return AuthIdentity.from_provider_user(user_response.user)

    def logout(self, token: str) -> bool:
        """Revoke the session behind token where the service role allows it"""
        try:
            if self.admin_client is not None:
                self.admin_client.auth.admin.sign_out(token)
            else:
                # Supabase tokens are stateless JWTs; without the service role
                # the token simply runs until it expires
                self.auth_client.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Logout failed: {e}")
            return False


class DemoAuthService:
    """Provider-less stand-in used when Supabase is not configured."""

    def _identity(self, email: str) -> AuthIdentity:
        return AuthIdentity(
            id="1",
            email=email,
            user_metadata={"full_name": email.split("@")[0]},
        )

    def signup(self, signup_data: SignupRequest) -> SignupResponse:
        return SignupResponse(
            message="Supabase not configured. Using demo mode.",
            user=self._identity(signup_data.email),
        )

    def login(self, login_data: LoginRequest) -> LoginResponse:
        return LoginResponse(
            access_token=f"{DEMO_TOKEN_PREFIX}{login_data.email}",
            user=self._identity(login_data.email),
            demo=True,
        )

    def get_current_user(self, token: str) -> AuthIdentity:
        if not token.startswith(DEMO_TOKEN_PREFIX) or "@" not in token:
            raise AuthenticationError()
        return self._identity(token[len(DEMO_TOKEN_PREFIX):])

    def logout(self, token: str) -> bool:
        return True
