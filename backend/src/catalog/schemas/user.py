"""Account schemas.

Password rules are enforced here, before any service or repository runs:
6 to 20 characters with at least one uppercase letter, one lowercase letter
and one digit.
"""

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, EmailStr

from catalog.schemas.common import ShortName

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")


def check_password_strength(value: str) -> str:
    if not 6 <= len(value) <= 20:
        raise ValueError("password must be between 6 and 20 characters long")
    if not (_UPPER.search(value) and _LOWER.search(value) and _DIGIT.search(value)):
        raise ValueError("password needs at least one uppercase letter, one lowercase letter and one number")
    return value


StrongPassword = Annotated[str, AfterValidator(check_password_strength)]


class RegisterRequest(BaseModel):
    name: ShortName
    email: EmailStr
    password: StrongPassword


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ResetRequest(BaseModel):
    email: EmailStr


class NewPasswordRequest(BaseModel):
    password: StrongPassword


class UserResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    status: int
