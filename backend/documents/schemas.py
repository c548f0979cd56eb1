# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the document endpoints."""

from datetime import date
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

# The web client speaks camelCase (senderOrg, receiptDate, ...)
_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -- Requests --------------------------------------------------------------
# ``role`` is a plain string, not the Role enum: an unknown role must be
# refused with 403 like any other non-admin, not rejected as malformed.
# Required-field checks happen in the handler, after the role check.


class DocumentCreate(BaseModel):
    model_config = _CAMEL

    id: Optional[str] = None
    sender_org: Optional[str] = None
    applicant_name: Optional[str] = None
    org_email: Optional[str] = None
    contact_number: Optional[str] = None
    received_office: Optional[str] = None
    receipt_date: Optional[date] = None
    purpose: Optional[str] = None
    details: Optional[str] = None
    status: Optional[str] = None
    submitted_by: Optional[str] = None
    role: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class StatusUpdateRequest(BaseModel):
    status: Optional[str] = None
    role: Optional[str] = None


class RoleRequest(BaseModel):
    role: Optional[str] = None


# -- Responses -------------------------------------------------------------


class DocumentCreated(BaseModel):
    model_config = _CAMEL

    success: bool = True
    message: str
    document_id: str


class StatusSummary(BaseModel):
    model_config = _CAMEL

    total: int
    by_status: Dict[str, int]
