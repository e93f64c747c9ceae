"""Pydantic schemas for user data validation."""

from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

from components.core.validators import check_name, check_new_password, check_new_username
from components.user.models import Credentials, User


class RegisterRequest(BaseModel):
    """Schema for user registration."""
    first_name: str
    last_name: str
    age: int
    email: EmailStr
    salary: Optional[int] = 0
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

    @field_validator("age")
    @classmethod
    def validate_age(cls, value: int) -> int:
        if value < 18:
            raise ValueError("Age must be 18 or older.")
        return value

    @field_validator("salary")
    @classmethod
    def validate_salary(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("Salary cannot be negative.")
        return value

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return check_new_username(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_new_password(value)


class UserProfile(BaseModel):
    """Schema for user profile response."""
    user_id: int
    first_name: str
    last_name: str
    email: str
    age: int
    salary: int
    username: Optional[str] = None
    is_blocked: bool = False

    @classmethod
    def from_model(cls, user: User, credentials: Optional[Credentials] = None) -> "UserProfile":
        """Build a profile; credentials must be passed or already loaded on the user."""
        if credentials is None:
            credentials = user.credentials
        return cls(
            user_id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            age=user.age,
            salary=user.salary,
            username=credentials.username if credentials else None,
            is_blocked=user.is_blocked,
        )
