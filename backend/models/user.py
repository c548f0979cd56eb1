# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Credential ORM models.

Citizens and organizations live in ``users``; admins live in their own
``admins`` table, which has no role column.  ``model_for_role`` is the one
place that decides which table backs a given role.
"""

import enum

from sqlalchemy import Column, Integer, String, Enum, DateTime

from database import Base


class Role(str, enum.Enum):
    CITIZEN = "citizen"
    ORGANIZATION = "organization"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    contact = Column(String(20), nullable=False)
    # Full passlib hash string; the salt is embedded in it
    password = Column(String(255), nullable=False)
    role = Column(
        Enum(Role.CITIZEN.value, Role.ORGANIZATION.value, name="user_role"),
        nullable=False,
        default=Role.CITIZEN.value,
    )
    office_name = Column("officeName", String(255), nullable=True)
    reset_token = Column(String(64), nullable=True, index=True)
    reset_token_expiry = Column(DateTime(timezone=True), nullable=True)


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    contact = Column(String(20), nullable=False)
    password = Column(String(255), nullable=False)
    reset_token = Column(String(64), nullable=True, index=True)
    reset_token_expiry = Column(DateTime(timezone=True), nullable=True)

    # Membership in this table *is* the role; nothing is stored.
    @property
    def role(self) -> str:
        return Role.ADMIN.value


def model_for_role(role: str):
    """
    Return the ORM class whose table holds principals of *role*.

    Accepts a Role or a raw role string; anything other than "admin"
    resolves to ``users``.
    """
    if role == Role.ADMIN:
        return Admin
    return User
