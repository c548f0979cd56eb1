# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.user import Role

# Blank strings count as missing, same as an absent key
NonEmptyStr = Annotated[str, Field(min_length=1)]


# -- Requests --------------------------------------------------------------


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: NonEmptyStr
    email: NonEmptyStr
    contact: NonEmptyStr
    password: NonEmptyStr
    role: Role
    office_name: Optional[str] = Field(default=None, alias="officeName")

    @field_validator("office_name", mode="before")
    @classmethod
    def _blank_office_is_missing(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class LoginRequest(BaseModel):
    username: NonEmptyStr
    password: NonEmptyStr
    role: Role


# The reset flow only needs to know admin vs. everyone else; the web client
# sends "user" for any non-admin account, so role is not checked against Role.


class ForgotPasswordRequest(BaseModel):
    email: NonEmptyStr
    role: NonEmptyStr


class ResetPasswordRequest(BaseModel):
    password: NonEmptyStr
    role: NonEmptyStr


# -- Responses -------------------------------------------------------------


class MessageResponse(BaseModel):
    message: str


class LoggedInUser(BaseModel):
    username: str
    email: str
    # Neither credential table has a designation column yet; the key is part
    # of the client contract and is always null.
    designation: Optional[str] = None
    role: Role


class LoginResponse(BaseModel):
    message: str
    user: LoggedInUser
