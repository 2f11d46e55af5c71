"""
Users module data models.

These models define the user record owned by the User Store and the
projection that is safe to hand to other modules.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    """Roles that can be granted to a user."""

    USER = "ROLE_USER"
    ADMIN = "ROLE_ADMIN"


class User(BaseModel):
    """
    A user account as persisted in the User Store.

    The id is generated at creation and never changes. Email is the login
    principal and is unique across the store (stored lower-cased). The
    password is only ever held as a one-way hash, and the hash is kept out
    of repr() so the record can be logged safely.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4, frozen=True, description="User ID")
    email: EmailStr = Field(..., description="Login email address")
    password_hash: str = Field(..., repr=False, description="Password hash")
    roles: set[Role] = Field(default_factory=set, description="Granted roles")
    enabled: bool = Field(default=True, description="Whether the account is active")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    def touch(self) -> None:
        """Mark the record as modified now."""
        self.updated_at = _utcnow()

    def to_public(self) -> "UserPublic":
        return UserPublic(
            id=self.id,
            email=self.email,
            roles=set(self.roles),
            enabled=self.enabled,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class UserPublic(BaseModel):
    """User projection without credentials, for listings and responses."""

    id: UUID
    email: EmailStr
    roles: set[Role] = Field(default_factory=set)
    enabled: bool = True
    created_at: datetime
    updated_at: datetime

    model_config = {"frozen": True}
