"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class UserCredentials(BaseModel):
    """Username and password, used for both registration and login."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        """Reject passwords bcrypt would silently truncate (72 bytes, not characters)."""
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes")
        return value


class LoginResponse(BaseModel):
    """Successful login response carrying a bearer token."""

    message: str = "Login successful!"
    token: str


class UserResponse(BaseModel):
    """User information response. The password hash is never included."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    username: str
    created_at: datetime
