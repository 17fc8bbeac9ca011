"""User-related Pydantic schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from vouchboard.core.permissions import Role

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=3, max_length=20, description="Public handle")
    email: EmailStr = Field(..., description="Login email address")
    password: str = Field(..., min_length=6, max_length=128, description="Plain-text password")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Strip whitespace and restrict usernames to URL-safe characters."""
        v = v.strip()
        if not USERNAME_PATTERN.match(v):
            raise ValueError("Username may only contain letters, digits, '.', '_' and '-'")
        return v


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileOut(BaseModel):
    """Public profile block nested under ``profile``."""

    avatar: str
    bio: str | None = None
    custom_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class VouchSummary(BaseModel):
    """Ids of users vouched for (``given``) and vouching (``received``)."""

    given: list[int] = Field(default_factory=list)
    received: list[int] = Field(default_factory=list)


class _UserBase(BaseModel):
    """Fields shared by every user representation."""

    id: int
    username: str
    profile: ProfileOut
    role: Role
    reputation: int
    post_count: int
    created_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _nest_profile(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                if hasattr(data, field_name):
                    extracted[field_name] = getattr(data, field_name)
            extracted["profile"] = ProfileOut.model_validate(data)
            data = extracted
        return data

    model_config = ConfigDict(from_attributes=True)


class UserPublic(_UserBase):
    """Profile returned by ``GET /users/{username}``."""

    vouches: VouchSummary = Field(default_factory=VouchSummary)
    last_active: datetime


class UserPrivate(_UserBase):
    """Account view returned to the account owner and to admins."""

    email: str
    is_active: bool
    last_active: datetime


class AuthResponse(BaseModel):
    """Response returned after successful registration or login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type (always 'bearer')")
    user: UserPrivate


class ProfileUpdateRequest(BaseModel):
    """Schema for updating the caller's profile; omitted fields are kept."""

    bio: str | None = Field(None, max_length=500)
    custom_url: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    avatar: str | None = Field(None, min_length=1)

    @field_validator("custom_url")
    @classmethod
    def validate_custom_url(cls, v: str | None) -> str | None:
        """Trim the custom URL and require URL-safe characters."""
        if v is None:
            return v
        v = v.strip()
        if not USERNAME_PATTERN.match(v):
            raise ValueError("Custom URL may only contain letters, digits, '.', '_' and '-'")
        return v


class VouchResponse(BaseModel):
    """Target user's vouch sets after a toggle."""

    vouches: VouchSummary


class ReputationResponse(BaseModel):
    """Target user's reputation after an increment."""

    reputation: int


class RoleUpdateRequest(BaseModel):
    """Admin request to change a user's role."""

    role: Role
