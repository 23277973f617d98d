from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime

DEFAULT_ROLE = "student"
ADMIN_ROLE = "admin"


class AuthIdentity(BaseModel):
    """The parts of an authenticated provider user that the API relies on."""
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    app_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None

    @classmethod
    def from_provider_user(cls, user: Any) -> "AuthIdentity":
        if isinstance(user, dict):
            data = user
        else:
            data = {
                "id": getattr(user, "id", None),
                "email": getattr(user, "email", None),
                "user_metadata": getattr(user, "user_metadata", None),
                "app_metadata": getattr(user, "app_metadata", None),
                "created_at": getattr(user, "created_at", None),
            }
        return cls(
            id=str(data["id"]),
            email=data.get("email"),
            user_metadata=data.get("user_metadata") or {},
            app_metadata=data.get("app_metadata") or {},
            created_at=data.get("created_at"),
        )

    @property
    def display_name(self) -> Optional[str]:
        name = self.user_metadata.get("full_name")
        return name.strip() if isinstance(name, str) and name.strip() else None


class ProfileResponse(BaseModel):
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    grade_level: Optional[str] = None
    school: Optional[str] = None
    role: str = DEFAULT_ROLE
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
