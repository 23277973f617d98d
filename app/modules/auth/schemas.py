from pydantic import BaseModel, EmailStr
from typing import Optional
from app.modules.profiles.schemas import AuthIdentity, ProfileResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user: AuthIdentity
    profile: Optional[ProfileResponse] = None
    demo: bool = False


class SignupRequest(BaseModel):
    email: EmailStr
    password: str
    full_name: Optional[str] = None


class SignupResponse(BaseModel):
    message: str
    user: AuthIdentity


class CurrentUserResponse(BaseModel):
    user: AuthIdentity
    profile: Optional[ProfileResponse] = None
