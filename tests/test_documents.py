import io
import re
from datetime import date

from openpyxl import load_workbook

from documents.router import EXPORT_HEADERS
from models.document import Document
from conftest import login, new_document, register


def _search(client, **params):
    return client.get("/search-documents", params=params)


def _delete(client, document_id, body=None):
    return client.request("DELETE", f"/documents/{document_id}", json=body)


# -- create ----------------------------------------------------------------


def test_create_document(client, db_session):
    resp = new_document(client)
    assert resp.status_code == 201
    assert resp.json() == {
        "success": True,
        "message": "Document submitted",
        "documentId": "DOC-2026-0001",
    }

    doc = db_session.get(Document, "DOC-2026-0001")
    assert doc.status == "Submitted"
    assert doc.receipt_date == date(2026, 10, 1)
    assert doc.submitted_by == "org@x.com"


def test_citizen_cannot_create_document(client, db_session):
    assert new_document(client, role="citizen").status_code == 403

    # Incomplete payloads are still refused on role, not on validation
    resp = client.post("/new-document", json={"role": "citizen"})
    assert resp.status_code == 403
    assert resp.json() == {"error": "Citizens are not allowed to submit documents."}
    assert db_session.query(Document).count() == 0


def test_create_document_missing_required_field(client):
    for field in ("senderOrg", "applicantName", "receivedOffice", "submittedBy", "contactNumber"):
        resp = new_document(client, **{field: ""})
        assert resp.status_code == 400, field
        assert resp.json() == {"error": "Missing required fields"}


def test_create_document_defaults(client, db_session):
    resp = new_document(
        client,
        id=None,
        receiptDate="",
        orgEmail="",
        purpose=None,
        details=None,
    )
    assert resp.status_code == 201
    document_id = resp.json()["documentId"]
    assert re.fullmatch(r"DOC-\d{4}-\d{4}", document_id)

    doc = db_session.get(Document, document_id)
    assert doc.receipt_date == date.today()
    assert doc.org_email is None
    assert doc.status == "Submitted"


def test_create_document_duplicate_id_conflicts(client):
    assert new_document(client).status_code == 201
    assert new_document(client).status_code == 409


def test_create_document_rejects_unknown_status(client):
    assert new_document(client, status="Lost").status_code == 400


# -- search ----------------------------------------------------------------


def _seed_documents(client):
    new_document(client)
    new_document(
        client,
        id="DOC-2026-0002",
        senderOrg="Roads Dept",
        applicantName="Carol Das",
        orgEmail="roads@gov.in",
        contactNumber="7777777777",
        submittedBy="roads@x.com",
    )
    new_document(
        client,
        id="DOC-2026-0003",
        senderOrg="Water Board",
        applicantName="Dev Rao",
        contactNumber="6666666666",
    )


def test_citizen_search_requires_query(client):
    resp = _search(client, role="citizen")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Search query is required for citizens"}


def test_citizen_search_by_contact_number_hides_org_email(client):
    _seed_documents(client)
    resp = _search(client, role="citizen", query="7777777777")
    assert resp.status_code == 200
    rows = resp.json()
    assert [r["id"] for r in rows] == ["DOC-2026-0002"]
    assert "orgEmail" not in rows[0]
    assert rows[0]["status"] == "Submitted"


def test_citizen_search_ignores_org_and_name(client):
    _seed_documents(client)
    assert _search(client, role="citizen", query="Water").json() == []
    assert _search(client, role="citizen", query="Carol").json() == []


def test_organization_search_requires_email(client):
    _seed_documents(client)
    resp = _search(client, role="organization", query="Water")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Search query and email are required"}


def test_organization_search_requires_query(client):
    assert _search(client, role="organization", email="org@x.com").status_code == 400


def test_organization_search_is_scoped_to_submitter(client):
    _seed_documents(client)
    rows = _search(client, role="organization", query="DOC", email="org@x.com").json()
    assert sorted(r["id"] for r in rows) == ["DOC-2026-0001", "DOC-2026-0003"]

    rows = _search(client, role="organization", query="Roads", email="org@x.com").json()
    assert rows == []

    rows = _search(client, role="organization", query="Carol", email="roads@x.com").json()
    assert [r["id"] for r in rows] == ["DOC-2026-0002"]
    assert rows[0]["orgEmail"] == "roads@gov.in"


def test_admin_search_without_query_returns_everything(client):
    _seed_documents(client)
    rows = _search(client, role="admin").json()
    assert len(rows) == 3
    assert all("orgEmail" in r for r in rows)


def test_admin_search_matches_org_email(client):
    _seed_documents(client)
    rows = _search(client, role="admin", query="gov.in").json()
    assert [r["id"] for r in rows] == ["DOC-2026-0002"]


def test_search_row_shape(client):
    new_document(client)
    (row,) = _search(client, role="admin", query="0001").json()
    assert row == {
        "id": "DOC-2026-0001",
        "senderOrg": "Water Board",
        "applicantName": "Bob Kumar",
        "orgEmail": "desk@waterboard.org",
        "receivedOffice": "Central Registry",
        "receiptDate": "2026-10-01",
        "purpose": "Connection request",
        "details": "Two copies, stamped",
        "status": "Submitted",
        "submittedBy": "org@x.com",
    }


# -- update status ---------------------------------------------------------


def test_update_status_requires_admin(client):
    new_document(client)
    for role in ("citizen", "organization", None):
        resp = client.put("/documents/DOC-2026-0001", json={"status": "Approved", "role": role})
        assert resp.status_code == 403


def test_update_status_unknown_document(client):
    resp = client.put("/documents/DOC-404", json={"status": "Approved", "role": "admin"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Document not found"}


def test_update_status_rejects_unknown_status(client):
    new_document(client)
    resp = client.put("/documents/DOC-2026-0001", json={"status": "Shredded", "role": "admin"})
    assert resp.status_code == 400


def test_update_status(client):
    new_document(client)
    resp = client.put("/documents/DOC-2026-0001", json={"status": "Processing", "role": "admin"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Document status updated"}

    (row,) = _search(client, role="admin", query="0001").json()
    assert row["status"] == "Processing"


# -- delete ----------------------------------------------------------------


def test_delete_requires_admin(client):
    new_document(client)
    assert _delete(client, "DOC-2026-0001").status_code == 403
    assert _delete(client, "DOC-2026-0001", {"role": "organization"}).status_code == 403


def test_delete_unknown_document(client):
    assert _delete(client, "DOC-404", {"role": "admin"}).status_code == 404


def test_delete_document(client):
    new_document(client)
    resp = _delete(client, "DOC-2026-0001", {"role": "admin"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Document deleted successfully"}
    assert _search(client, role="admin").json() == []


# -- summary / export ------------------------------------------------------


def test_summary_for_admin_counts_everything(client):
    _seed_documents(client)
    client.put("/documents/DOC-2026-0002", json={"status": "Rejected", "role": "admin"})

    resp = client.get("/documents/summary", params={"role": "admin"})
    assert resp.status_code == 200
    assert resp.json() == {"total": 3, "byStatus": {"Submitted": 2, "Rejected": 1}}


def test_summary_for_organization_is_scoped(client):
    _seed_documents(client)
    resp = client.get("/documents/summary", params={"role": "organization", "email": "roads@x.com"})
    assert resp.json() == {"total": 1, "byStatus": {"Submitted": 1}}

    assert client.get("/documents/summary", params={"role": "organization"}).status_code == 400
    assert client.get("/documents/summary", params={"role": "citizen"}).status_code == 403


def test_export_requires_admin(client):
    assert client.get("/documents/export", params={"role": "organization"}).status_code == 403


def test_export_workbook(client):
    _seed_documents(client)
    new_document(client, id="DOC-2026-0009", receiptDate="2026-10-15")

    resp = client.get("/documents/export", params={"role": "admin"})
    assert resp.status_code == 200
    assert "documents.xlsx" in resp.headers["content-disposition"]

    wb = load_workbook(io.BytesIO(resp.content))
    ws = wb["Documents"]
    rows = list(ws.iter_rows(values_only=True))
    assert list(rows[0]) == EXPORT_HEADERS
    assert len(rows) == 5
    # newest receipt date first
    assert rows[1][0] == "DOC-2026-0009"


# -- end to end ------------------------------------------------------------


def test_citizen_and_admin_flow(client):
    assert register(client).status_code == 201
    assert login(client).json()["user"]["role"] == "citizen"

    assert new_document(client, role="citizen", submittedBy="alice@x.com").status_code == 403

    assert new_document(client).status_code == 201

    assert register(client, username="root", email="root@x.com", role="admin").status_code == 201
    admin = login(client, username="root", role="admin").json()["user"]
    assert admin["role"] == "admin"

    resp = client.put("/documents/DOC-2026-0001", json={"status": "Approved", "role": admin["role"]})
    assert resp.status_code == 200

    (row,) = _search(client, role="citizen", query="DOC-2026-0001").json()
    assert row["status"] == "Approved"


def test_update_status_without_body_is_forbidden(client, db_session):
    new_document(client)
    resp = client.put("/documents/DOC-2026-0001")
    assert resp.status_code == 403
    assert db_session.get(Document, "DOC-2026-0001").status == "Submitted"
