# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – register, login, forgot-password, reset-password.

Every endpoint takes the caller's ``role`` and resolves the backing table
through ``model_for_role``: admins live in ``admins``, citizens and
organizations in ``users``.  No session or token is issued on login; the
client keeps the returned profile and sends its role/email on later calls.

Security notes
--------------
* Login returns the *same* error whether the username doesn't exist or the
  password is wrong.  This prevents user-enumeration attacks.
* A reset token is single use: it is cleared in the same UPDATE that
  stores the new password.
"""

import smtplib
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from core import mailer
from core.logger import logger
from core.security import generate_reset_token, hash_password, verify_password
from models.user import Role, model_for_role
from auth.schemas import (
    ForgotPasswordRequest,
    LoggedInUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
)

router = APIRouter(prefix="/auth", tags=["auth"])

# Generic message used for both "no such username" and "wrong password"
_LOGIN_FAIL = "Invalid credentials"


# ---------------------------------------------------------------------------
# POST /auth/register
# ---------------------------------------------------------------------------


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create a citizen, organization or admin account."""
    if body.role == Role.ORGANIZATION and not body.office_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Organization name is required for the organization role.",
        )

    model = model_for_role(body.role)

    try:
        # Uniqueness checks are per table: an admin and a citizen may share
        # a username.
        if db.query(model).filter(model.username == body.username).first():
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken.")
        if db.query(model).filter(model.email == body.email).first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email address already registered.",
            )

        fields = dict(
            username=body.username,
            email=body.email,
            contact=body.contact,
            password=hash_password(body.password),
        )
        if body.role != Role.ADMIN:
            fields.update(role=body.role.value, office_name=body.office_name or None)

        db.add(model(**fields))
        db.commit()
    except IntegrityError:
        # A concurrent registration won the race between check and insert
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this information already exists.",
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Register failed | username=%s role=%s", body.username, body.role.value)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error during registration.",
        )

    logger.info("Registered %s | username=%s", body.role.value, body.username)
    return MessageResponse(message=f"{body.role.value.capitalize()} registered successfully!")


# ---------------------------------------------------------------------------
# POST /auth/login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Check the credentials and return the public profile."""
    model = model_for_role(body.role)

    try:
        principal = db.query(model).filter(model.username == body.username).first()
    except SQLAlchemyError:
        logger.exception("Login lookup failed | username=%s", body.username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error during login.",
        )

    # Unified failure path – no information leaks about whether the username exists
    if not principal or not verify_password(body.password, principal.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=_LOGIN_FAIL)

    return LoginResponse(
        message="Logged in successfully!",
        user=LoggedInUser(
            username=principal.username,
            email=principal.email,
            role=principal.role,
        ),
    )


# ---------------------------------------------------------------------------
# POST /auth/forgot-password
# ---------------------------------------------------------------------------


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(body: ForgotPasswordRequest, db: Session = Depends(get_db)):
    """
    Issue a reset token valid for ``reset_token_expire_minutes`` and mail a
    link to the account's address.  A new request overwrites any earlier
    token for the same account.
    """
    model = model_for_role(body.role)

    try:
        principal = db.query(model).filter(model.email == body.email).first()
        if not principal:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"User with role '{body.role}' not found.",
            )

        token, expires_at = generate_reset_token()
        principal.reset_token = token
        principal.reset_token_expiry = expires_at
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Storing reset token failed | email=%s", body.email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while sending reset email.",
        )

    try:
        mailer.send_reset_email(body.email, mailer.build_reset_link(token, body.role))
    except (smtplib.SMTPException, OSError):
        logger.exception("Sending reset email failed | email=%s", body.email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while sending reset email.",
        )

    return MessageResponse(message="Reset link sent to your email")


# ---------------------------------------------------------------------------
# POST /auth/reset-password/{token}
# ---------------------------------------------------------------------------


@router.post("/reset-password/{token}", response_model=MessageResponse)
def reset_password(token: str, body: ResetPasswordRequest, db: Session = Depends(get_db)):
    """Consume a still-valid reset token and store the new password."""
    model = model_for_role(body.role)

    try:
        principal = (
            db.query(model)
            .filter(model.reset_token == token)
            .filter(model.reset_token_expiry > datetime.now(timezone.utc))
            .first()
        )
        if not principal:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid or expired token. Please try again.",
            )

        username = principal.username
        principal.password = hash_password(body.password)
        principal.reset_token = None
        principal.reset_token_expiry = None
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Password reset failed | role=%s", body.role)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reset password.",
        )

    logger.info("Password reset | role=%s username=%s", body.role, username)
    return MessageResponse(message="Password has been updated successfully.")
