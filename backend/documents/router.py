# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Document endpoints – submit, search, status triage, delete, status report
and spreadsheet export.

Access rules
------------
* Citizens may only search, and only by document id or contact number.
  They never see ``orgEmail``.
* Organizations (any role that is neither citizen nor admin) submit
  documents and search within their own submissions (``submittedBy``).
* Admins see everything and are the only role that may change a status,
  delete a document or export the register.

The caller's role and email arrive in the request itself; there is no
server-side session to check them against.
"""

import io
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from core.logger import logger
from core.security import generate_document_id
from models.document import Document, DocumentStatus
from models.user import Role
from documents.schemas import (
    DocumentCreate,
    DocumentCreated,
    RoleRequest,
    StatusSummary,
    StatusUpdateRequest,
)

router = APIRouter(tags=["documents"])

_VALID_STATUSES = {s.value for s in DocumentStatus}

# Projection shared by every role; admins additionally get orgEmail.
_BASE_COLUMNS = (
    Document.document_id.label("id"),
    Document.sender_org.label("senderOrg"),
    Document.applicant_name.label("applicantName"),
)
_TAIL_COLUMNS = (
    Document.received_office.label("receivedOffice"),
    Document.receipt_date.label("receiptDate"),
    Document.purpose.label("purpose"),
    Document.details.label("details"),
    Document.status.label("status"),
    Document.submitted_by.label("submittedBy"),
)
_CITIZEN_COLUMNS = _BASE_COLUMNS + _TAIL_COLUMNS
_FULL_COLUMNS = _BASE_COLUMNS + (Document.org_email.label("orgEmail"),) + _TAIL_COLUMNS


def _require_admin(role: Optional[str], detail: str) -> None:
    if role != Role.ADMIN.value:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def _server_error(db: Session, detail: str, what: str, document_id: Optional[str] = None):
    db.rollback()
    logger.exception("%s failed | document_id=%s", what, document_id)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


# ---------------------------------------------------------------------------
# POST /new-document
# ---------------------------------------------------------------------------


@router.post("/new-document", response_model=DocumentCreated, status_code=status.HTTP_201_CREATED)
def create_document(body: DocumentCreate, db: Session = Depends(get_db)):
    """Record a received physical document.  Citizens may not submit."""
    if body.role == Role.CITIZEN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Citizens are not allowed to submit documents.",
        )

    required = (
        body.sender_org,
        body.applicant_name,
        body.received_office,
        body.submitted_by,
        body.contact_number,
    )
    if not all(required):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")

    doc_status = body.status or DocumentStatus.SUBMITTED.value
    if doc_status not in _VALID_STATUSES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid status")

    document_id = body.id or generate_document_id()
    doc = Document(
        document_id=document_id,
        sender_org=body.sender_org,
        applicant_name=body.applicant_name,
        org_email=body.org_email,
        contact_number=body.contact_number,
        received_office=body.received_office,
        receipt_date=body.receipt_date or date.today(),
        purpose=body.purpose,
        details=body.details,
        status=doc_status,
        submitted_by=body.submitted_by,
    )

    try:
        db.add(doc)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Document '{document_id}' already exists",
        )
    except SQLAlchemyError:
        raise _server_error(db, "Failed to submit document", "Create", document_id)

    logger.info("Document created | document_id=%s submitted_by=%s", document_id, body.submitted_by)
    return DocumentCreated(message="Document submitted", document_id=document_id)


# ---------------------------------------------------------------------------
# GET /search-documents
# ---------------------------------------------------------------------------


@router.get("/search-documents")
def search_documents(
    query: Optional[str] = Query(None, description="Free-text fragment, matched with LIKE"),
    email: Optional[str] = Query(None, description="Submitter email (organization searches)"),
    role: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Return matching document rows, unpaginated.  What is searched and which
    columns come back depend on the caller's role:

    * citizen – ``query`` required; matches ``document_id`` or
      ``contactNumber``; no ``orgEmail`` in the result.
    * admin – ``query`` optional (absent means every row); matches id,
      sender org, applicant name or org email.
    * anything else – ``query`` and ``email`` required; only rows with
      ``submittedBy == email`` that match id, sender org or applicant name.
    """
    query = (query or "").strip()
    pattern = f"%{query}%"

    if role == Role.CITIZEN.value:
        if not query:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Search query is required for citizens",
            )
        stmt = select(*_CITIZEN_COLUMNS).where(
            or_(Document.document_id.like(pattern), Document.contact_number.like(pattern))
        )
    elif role != Role.ADMIN.value:
        if not query or not email:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Search query and email are required",
            )
        stmt = select(*_FULL_COLUMNS).where(
            Document.submitted_by == email,
            or_(
                Document.document_id.like(pattern),
                Document.sender_org.like(pattern),
                Document.applicant_name.like(pattern),
            ),
        )
    else:
        stmt = select(*_FULL_COLUMNS)
        if query:
            stmt = stmt.where(
                or_(
                    Document.document_id.like(pattern),
                    Document.sender_org.like(pattern),
                    Document.applicant_name.like(pattern),
                    Document.org_email.like(pattern),
                )
            )

    try:
        rows = db.execute(stmt).mappings().all()
    except SQLAlchemyError:
        logger.exception("Search failed | role=%s", role)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

    return [dict(row) for row in rows]


# ---------------------------------------------------------------------------
# GET /documents/summary  – counts per status
# ---------------------------------------------------------------------------


@router.get("/documents/summary", response_model=StatusSummary)
def summarize_documents(
    email: Optional[str] = Query(None),
    role: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Status-tracking report.  Admins count the whole register; other
    submitters count only their own documents.  Statuses with no documents
    are left out of ``byStatus``.
    """
    if role == Role.CITIZEN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Citizens cannot view the status report",
        )

    stmt = select(Document.status, func.count()).group_by(Document.status)
    if role != Role.ADMIN.value:
        if not email:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is required")
        stmt = stmt.where(Document.submitted_by == email)

    try:
        counts = {doc_status: count for doc_status, count in db.execute(stmt).all()}
    except SQLAlchemyError:
        logger.exception("Summary failed | role=%s", role)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

    return StatusSummary(total=sum(counts.values()), by_status=counts)


# ---------------------------------------------------------------------------
# GET /documents/export  – download the register as Excel (admin only)
# ---------------------------------------------------------------------------

_HEADER_FONT  = Font(name="Calibri", size=11, bold=True, color="FFFFFF")
_HEADER_FILL  = PatternFill(start_color="2F5597", end_color="2F5597", fill_type="solid")
_HEADER_ALIGN = Alignment(horizontal="center", vertical="center")
_THIN_BORDER  = Border(
    left=Side(style="thin", color="CCCCCC"),
    right=Side(style="thin", color="CCCCCC"),
    top=Side(style="thin", color="CCCCCC"),
    bottom=Side(style="thin", color="CCCCCC"),
)

EXPORT_HEADERS = [
    "Document ID", "Sender Org", "Applicant", "Org Email", "Contact",
    "Received Office", "Receipt Date", "Purpose", "Details", "Status", "Submitted By",
]
_COL_MIN = [18, 24, 22, 26, 14, 22, 14, 24, 40, 12, 26]


@router.get("/documents/export")
def export_documents(role: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """Export every document as an Excel file, newest receipt date first."""
    _require_admin(role, "Forbidden: only admin can export documents")

    try:
        docs = (
            db.query(Document)
            .order_by(Document.receipt_date.desc(), Document.document_id)
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Export failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

    wb = Workbook()
    ws = wb.active
    ws.title = "Documents"

    ws.append(EXPORT_HEADERS)
    for cell in ws[1]:
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _HEADER_ALIGN
        cell.border = _THIN_BORDER

    for doc in docs:
        ws.append([
            doc.document_id,
            doc.sender_org,
            doc.applicant_name,
            doc.org_email or "",
            doc.contact_number,
            doc.received_office,
            doc.receipt_date.isoformat() if doc.receipt_date else "",
            doc.purpose or "",
            doc.details or "",
            doc.status,
            doc.submitted_by,
        ])
        row_idx = ws.max_row
        for col_idx in range(1, len(EXPORT_HEADERS) + 1):
            ws.cell(row=row_idx, column=col_idx).border = _THIN_BORDER

    for col_idx, min_w in enumerate(_COL_MIN, start=1):
        ws.column_dimensions[chr(64 + col_idx)].width = min_w

    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    wb.close()

    return StreamingResponse(
        buf,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": 'attachment; filename="documents.xlsx"'},
    )


# ---------------------------------------------------------------------------
# PUT /documents/{document_id}  – change status (admin only)
# ---------------------------------------------------------------------------


@router.put("/documents/{document_id}")
def update_status(
    document_id: str,
    body: Optional[StatusUpdateRequest] = None,
    db: Session = Depends(get_db),
):
    """Move a document to another status."""
    _require_admin(body.role if body else None, "Unauthorized: Only admin can update status")

    if body.status not in _VALID_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status. Must be one of: {', '.join(s.value for s in DocumentStatus)}",
        )

    try:
        updated = (
            db.query(Document)
            .filter(Document.document_id == document_id)
            .update({Document.status: body.status}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        raise _server_error(db, "Failed to update", "Status update", document_id)

    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")

    logger.info("Document status updated | document_id=%s status=%s", document_id, body.status)
    return {"message": "Document status updated"}


# ---------------------------------------------------------------------------
# DELETE /documents/{document_id}  (admin only)
# ---------------------------------------------------------------------------


@router.delete("/documents/{document_id}")
def delete_document(
    document_id: str,
    body: Optional[RoleRequest] = None,
    db: Session = Depends(get_db),
):
    """Remove a document from the register."""
    _require_admin(body.role if body else None, "Forbidden: You do not have permission to delete.")

    try:
        deleted = (
            db.query(Document)
            .filter(Document.document_id == document_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        raise _server_error(db, "Failed to delete", "Delete", document_id)

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")

    logger.info("Document deleted | document_id=%s", document_id)
    return {"message": "Document deleted successfully"}
