"""
Authentication and user schemas.

These schemas define the contracts for registration, login, logout and
profile management.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """User registration request schema."""

    username: str = Field(min_length=1, description="Unique username")
    password: str = Field(min_length=1, description="User password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"username": "alice", "password": "pw1"}}
    )


class LoginRequest(BaseModel):
    """User login request schema."""

    username: str = Field(min_length=1, description="Username")
    password: str = Field(min_length=1, description="User password")


class UserResponse(BaseModel):
    """Public user fields. The password hash never leaves the core."""

    id: str = Field(description="User unique identifier")
    username: str = Field(description="Username")

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Token issued on register/login."""

    message: str = Field(description="Human-readable result")
    token: str = Field(description="Bearer token, valid for 24 hours")
    user: UserResponse = Field(description="User information")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Login successful",
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "user": {"id": "123e4567-e89b-12d3-a456-426614174000", "username": "alice"},
            }
        }
    )


class UserUpdateRequest(BaseModel):
    """User profile update request schema. Empty fields are left unchanged."""

    username: Optional[str] = Field(default=None, description="New username")
    password: Optional[str] = Field(default=None, description="New password")
