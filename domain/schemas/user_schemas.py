from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Any, Optional
from datetime import datetime

from domain.enums import UserRole


class UserCreate(BaseModel):
    name: Optional[str] = Field(None, max_length=200)
    email: EmailStr
    role: UserRole = UserRole.USER
    bio: Optional[str] = Field(
        None, description="When given, a profile is created together with the user"
    )


class ProfileCreate(BaseModel):
    bio: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Full replace of the profile biography"""

    bio: Optional[str] = None


class ProfileResponse(BaseModel):
    id: int
    user_id: str
    bio: Optional[str]

    model_config = {"from_attributes": True}


class UserSummaryResponse(BaseModel):
    id: str
    name: Optional[str]
    email: str
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserResponse(UserSummaryResponse):
    profile: Optional[ProfileResponse] = None


class PreferenceCreate(BaseModel):
    user_id: Optional[str] = Field(None, alias="userId")
    key: str = Field(..., min_length=1, max_length=100)
    value: Any = None

    model_config = {"populate_by_name": True}

    @field_validator("key")
    @classmethod
    def normalize_key(cls, v):
        return v.strip()


class PreferenceUpdate(BaseModel):
    """Only the supplied fields are replaced"""

    key: Optional[str] = Field(None, min_length=1, max_length=100)
    value: Any = None


class PreferenceResponse(BaseModel):
    id: int
    user_id: str
    key: str
    value: Any

    model_config = {"from_attributes": True}
