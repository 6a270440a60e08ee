import re
from typing import Optional

from pydantic import field_validator

from projectdb.lib.validation.exceptions import ValidationError
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.view_models import record_type_validator, set_record_type
from projectdb.view_models.base.base import BaseModel

USERNAME_MIN_LENGTH = 4
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 20

# An upper case letter, a lower case letter, and a digit or a symbol.
STRONG_PASSWORD_REGEX = re.compile(r"((?=.*\d)|(?=.*\W+))(?![.\n])(?=.*[A-Z])(?=.*[a-z]).*$")


def validate_username(username: str) -> str:
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters long"
        )

    return username


def validate_password(password: str) -> str:
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        raise ValidationError(
            f"password must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters long"
        )
    if not STRONG_PASSWORD_REGEX.match(password):
        raise ValidationError("password is too weak")

    return password


class EmployeeBase(BaseModel):
    """Base class for employee view models."""

    username: str
    role: EmployeeRole


class EmployeeCreate(EmployeeBase):
    """View model for registering a new employee."""

    password: str

    @field_validator("username")
    def username_has_valid_length(cls, v: str) -> str:
        return validate_username(v)

    @field_validator("password")
    def password_is_strong(cls, v: str) -> str:
        return validate_password(v)


class EmployeeModify(BaseModel):
    """View model for changing an employee. Omitted properties are left as they are."""

    username: Optional[str] = None
    role: Optional[EmployeeRole] = None
    password: Optional[str] = None

    @field_validator("username")
    def username_has_valid_length(cls, v: Optional[str]) -> Optional[str]:
        return validate_username(v) if v is not None else None

    @field_validator("password")
    def password_is_strong(cls, v: Optional[str]) -> Optional[str]:
        return validate_password(v) if v is not None else None


class SignIn(BaseModel):
    """Credentials exchanged for an access token."""

    username: str
    password: str


class EmployeeSummary(BaseModel):
    """The identifying properties of an employee, as embedded in other records."""

    id: int
    username: str

    class Config:
        from_attributes = True


class SavedEmployee(EmployeeBase):
    """Base class for employee view models representing saved records."""

    id: int
    record_type: str = None  # type: ignore

    _record_type_factory = record_type_validator()(set_record_type)

    class Config:
        from_attributes = True


class Employee(SavedEmployee):
    """Employee view model. Password hashes are never exposed."""

    pass


class SignedInEmployee(Employee):
    """The employee who just signed in, with the token to present on later requests."""

    access_token: str
