"""Pydantic schemas for registration, login and user responses."""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from schemas.validators import validate_email


class UserRegister(BaseModel):
    """Schema for registering a new account."""

    username: str = Field(..., min_length=2, max_length=40)
    email: str
    password: str = Field(..., min_length=8, max_length=128)
    confirm_password: str = Field(..., min_length=8, max_length=128)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: str) -> str:
        """Trim surrounding whitespace before length checks."""
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        """Validate email shape."""
        return validate_email(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "UserRegister":
        """Require the confirmation to match the password."""
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class UserLogin(BaseModel):
    """Schema for signing in."""

    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        """Validate email shape."""
        return validate_email(v)


class UserResponse(BaseModel):
    """Public user projection. The password credential is never part of a response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: int
