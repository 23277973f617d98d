from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from app.modules.profiles.schemas import AuthIdentity, ProfileResponse, DEFAULT_ROLE, ADMIN_ROLE

ROLES = (DEFAULT_ROLE, ADMIN_ROLE)


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    full_name: str
    role: str = DEFAULT_ROLE

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("full_name must not be empty")
        return value.strip()

    @field_validator("role")
    @classmethod
    def known_role(cls, value: str) -> str:
        if value not in ROLES:
            raise ValueError(f"role must be one of: {', '.join(ROLES)}")
        return value


class UserCreateResponse(BaseModel):
    message: str
    user: AuthIdentity
    profile: ProfileResponse


class UserDeleteResponse(BaseModel):
    message: str
    user_id: str
    profile_deleted: Optional[bool] = None
