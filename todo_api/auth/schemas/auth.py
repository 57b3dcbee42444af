"""Pydantic schemas for users and session tokens.

Output shapes are declared explicitly: UserResponse is the only user shape
that leaves the service layer, and it has no password or token fields.
Serialize responses with model_dump(by_alias=True) to get the "_id" key.

Emails are stored exactly as sent (after trimming). The grammar check never
rewrites the address, so signup and login match on the same string.
"""

from typing import Literal

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_PASSWORD_LENGTH = 6
AUTH_ACCESS = "auth"


class UserBase(BaseModel):
    """Fields shared by user input schemas."""

    email: str = Field(..., description="User email, trimmed")

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        """Trim surrounding whitespace before the email grammar check."""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("email")
    @classmethod
    def check_email_grammar(cls, value: str) -> str:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"value is not a valid email address: {e}")
        return value


class UserCreate(UserBase):
    """Signup request body."""

    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        description=f"Plaintext password, at least {MIN_PASSWORD_LENGTH} characters"
    )


class UserLogin(BaseModel):
    """Login request body.

    No format rules here: any mismatch is reported as invalid credentials.
    """

    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class UserResponse(BaseModel):
    """Public projection of a user: {"_id", "email"}."""

    id: str = Field(..., serialization_alias="_id")
    email: str


class TokenPayload(BaseModel):
    """Claims carried by a signed session token."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="_id")
    access: Literal["auth"]
    iat: int | None = None
    jti: str | None = None
    exp: int | None = None
