"""Account Schemas — request bodies for admin registration/login and user management.

Invariants:
    - Unknown fields are rejected (extra="forbid") on every body
    - password: 8-500 chars on create; never part of an update
    - email is fixed after creation (no email in UserUpdate)
    - gender is one of GENDERS
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from artist_registry.core.domain_types import Gender


class AccountCreate(BaseModel):
    """Admin registration and user creation share one shape."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=8, max_length=500)
    phone: str = Field(min_length=1, max_length=20)
    dob: date
    gender: Gender
    address: str = Field(min_length=1, max_length=255)


class AdminRegister(AccountCreate):
    pass


class UserCreate(AccountCreate):
    pass


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=1, max_length=500)


class UserUpdate(BaseModel):
    """Partial user update — every field optional."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    first_name: str | None = Field(None, min_length=1, max_length=255)
    last_name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, min_length=1, max_length=20)
    dob: date | None = None
    gender: Gender | None = None
    address: str | None = Field(None, min_length=1, max_length=255)
