# app/schemas/user.py
import re

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from app.database.models import UserRole

NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z \-]*")
MOBILE_PATTERN = re.compile(r"\+?[0-9]{8,15}")
PASSWORD_RULES = (
    re.compile(r"[a-z]"),
    re.compile(r"[A-Z]"),
    re.compile(r"[0-9]"),
    re.compile(r"[^A-Za-z0-9]"),
)
PASSWORD_MESSAGE = (
    "Password must be at least 8 characters long & should contain at least "
    "1 lowercase, 1 uppercase, 1 number & 1 symbol"
)


def _field_error(message: str) -> PydanticCustomError:
    return PydanticCustomError("field_rule", message)


class PersonCreate(BaseModel):
    """Rules for the add-user form. Missing fields fail with their own message."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True, extra="ignore")

    name: str = ""
    email: str = ""
    mobile: str = ""
    password: str = ""
    role: UserRole = UserRole.USER

    @field_validator("name", "email", "mobile", "password", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise _field_error("Name is required")
        if not NAME_PATTERN.fullmatch(value):
            raise _field_error("Name must not contain anything other than alphabet")
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        value = value.strip()
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise _field_error("Invalid email address")
        return value.lower()

    @field_validator("mobile")
    @classmethod
    def _check_mobile(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise _field_error("Mobile number is required")
        if not MOBILE_PATTERN.fullmatch(value):
            raise _field_error("Mobile number must be a valid mobile number")
        return value

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        if len(value) < 8 or not all(rule.search(value) for rule in PASSWORD_RULES):
            raise _field_error(PASSWORD_MESSAGE)
        return value

    @field_validator("role", mode="before")
    @classmethod
    def _blank_role_is_default(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return UserRole.USER
        return value.strip().lower() if isinstance(value, str) else value
