"""Pydantic schemas for accountant data validation."""

from pydantic import BaseModel, field_validator

from components.core.validators import check_name, check_new_password, check_new_username


class AccountantRegisterRequest(BaseModel):
    """Schema for accountant registration."""
    first_name: str
    last_name: str
    username: str
    password: str

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, value: str) -> str:
        return check_name(value, "First name")

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, value: str) -> str:
        return check_name(value, "Last name")

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return check_new_username(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_new_password(value)


class AccountantProfile(BaseModel):
    """Schema for accountant registration response."""
    accountant_id: int
    first_name: str
    last_name: str
    username: str
