"""
Pydantic models for user data.

Defines schemas for creating, updating and reading users.  Passwords
are accepted on input only and are never part of ``UserRead``.  The
validators implement the field rules the service layer relies on:
a non-blank name, a syntactically valid e-mail and a non-blank
password of at least six characters on registration.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

MIN_PASSWORD_LENGTH = 6


class UserBase(BaseModel):
    name: str = Field(..., examples=["Ana Souza"])
    email: EmailStr = Field(..., examples=["ana@example.com"])

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v


class UserCreate(UserBase):
    """Schema for registering a user."""

    password: str = Field(..., examples=["s3cret!"])

    @field_validator("password")
    @classmethod
    def password_rules(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Password is required")
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        return v


class UserUpdate(UserBase):
    """Schema for replacing a user's name, e-mail and password.

    The password must be present and non-blank but its length is not
    checked again on update.
    """

    password: str = Field(..., examples=["s3cret!"])

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Password is mandatory")
        return v


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    name: str
    email: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
