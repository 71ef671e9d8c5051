"""
Pydantic models for session data.

Field names on the wire follow the API (camelCase, e.g. ``userType``);
Python code uses snake_case attributes.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UserType = Literal["tenant", "owner", "admin"]


class User(BaseModel):
    """The signed-in user's profile as returned by the auth endpoints."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    email: Optional[str] = None
    mobile: Optional[str] = None
    user_type: UserType = Field(alias="userType")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Some endpoints return numeric ids.
        if isinstance(value, int):
            return str(value)
        return value

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PersistedSession(BaseModel):
    """The triple mirrored to durable storage. ``has_hydrated`` is never stored."""

    model_config = ConfigDict(populate_by_name=True)

    user: Optional[User] = None
    token: Optional[str] = None
    is_authenticated: bool = Field(default=False, alias="isAuthenticated")

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.user.to_dict() if self.user else None,
            "token": self.token,
            "isAuthenticated": self.is_authenticated,
        }
