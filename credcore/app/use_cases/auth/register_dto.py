"""
Register Use Case DTOs

Command carrying a validated registration intent.
"""

from pydantic import BaseModel, EmailStr, field_validator


class RegisterCommand(BaseModel):
    """
    Registration command (validated business intent).

    The email is normalized to lower case so lookups and uniqueness are
    case-insensitive.
    """

    email: EmailStr
    password: str
    first_name: str
    last_name: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()
