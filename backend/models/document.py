# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Document ORM model."""

import enum

from sqlalchemy import Column, String, Text, Date, Enum

from database import Base


class DocumentStatus(str, enum.Enum):
    SUBMITTED = "Submitted"
    PROCESSING = "Processing"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Document(Base):
    __tablename__ = "document"

    # Chosen by the submitting client, e.g. "DOC-2026-4821"
    document_id = Column(String(64), primary_key=True)
    sender_org = Column("senderOrg", String(255), nullable=False)
    applicant_name = Column("applicantName", String(255), nullable=False)
    org_email = Column("orgEmail", String(255), nullable=True)
    contact_number = Column("contactNumber", String(20), nullable=False, index=True)
    received_office = Column("receivedOffice", String(255), nullable=False)
    receipt_date = Column("receiptDate", Date, nullable=False)
    purpose = Column(String(255), nullable=True)
    details = Column(Text, nullable=True)
    status = Column(
        Enum(*[s.value for s in DocumentStatus], name="document_status"),
        nullable=False,
        default=DocumentStatus.SUBMITTED.value,
    )
    # Email of the submitting account.  Not a foreign key: the submitter may
    # live in either credential table.
    submitted_by = Column("submittedBy", String(255), nullable=False, index=True)
