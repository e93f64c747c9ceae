"""Pydantic schemas for authentication."""

from pydantic import BaseModel, field_validator

from components.core.validators import check_credential


class LoginRequest(BaseModel):
    """Schema for login."""
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return check_credential(value, "Username", 6)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_credential(value, "Password", 8)


class LoginResponse(BaseModel):
    """Schema for login response."""
    token: str
    token_type: str = "bearer"
