"""Auth Schemas — shape of a credentials sign-in submission.

Invariants:
    - email is trimmed and must look like an address
    - password has at least 6 characters
"""

from pydantic import BaseModel, Field, field_validator


class SignInForm(BaseModel):
    """Credentials as submitted on the login form."""
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255)
    password: str = Field(min_length=6)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v
