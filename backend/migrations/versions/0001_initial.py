"""Initial schema – users, admins and document

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

Citizens and organizations share ``users``; admins have their own table
with no role column.  ``document.submittedBy`` holds the submitter's email
and is deliberately not a foreign key, since it may point into either
credential table.
"""

from alembic import op
import sqlalchemy as sa

# Alembic revision identifiers
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _credential_columns():
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(100), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("contact", sa.String(20), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
    ]


def _reset_columns():
    return [
        sa.Column("reset_token", sa.String(64), nullable=True),
        sa.Column("reset_token_expiry", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    # -- users ----------------------------------------------------------
    op.create_table(
        "users",
        *_credential_columns(),
        sa.Column(
            "role",
            sa.Enum("citizen", "organization", name="user_role"),
            nullable=False,
            server_default="citizen",
        ),
        sa.Column("officeName", sa.String(255), nullable=True),
        *_reset_columns(),
    )
    op.create_index("idx_users_reset_token", "users", ["reset_token"])

    # -- admins ---------------------------------------------------------
    op.create_table("admins", *_credential_columns(), *_reset_columns())
    op.create_index("idx_admins_reset_token", "admins", ["reset_token"])

    # -- document -------------------------------------------------------
    op.create_table(
        "document",
        sa.Column("document_id", sa.String(64), primary_key=True),
        sa.Column("senderOrg", sa.String(255), nullable=False),
        sa.Column("applicantName", sa.String(255), nullable=False),
        sa.Column("orgEmail", sa.String(255), nullable=True),
        sa.Column("contactNumber", sa.String(20), nullable=False),
        sa.Column("receivedOffice", sa.String(255), nullable=False),
        sa.Column("receiptDate", sa.Date(), nullable=False),
        sa.Column("purpose", sa.String(255), nullable=True),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("Submitted", "Processing", "Approved", "Rejected", name="document_status"),
            nullable=False,
            server_default="Submitted",
        ),
        sa.Column("submittedBy", sa.String(255), nullable=False),
    )
    # The two filters every search uses
    op.create_index("idx_document_submitted_by", "document", ["submittedBy"])
    op.create_index("idx_document_contact_number", "document", ["contactNumber"])


def downgrade() -> None:
    op.drop_index("idx_document_contact_number", table_name="document")
    op.drop_index("idx_document_submitted_by", table_name="document")
    op.drop_table("document")
    op.drop_index("idx_admins_reset_token", table_name="admins")
    op.drop_table("admins")
    op.drop_index("idx_users_reset_token", table_name="users")
    op.drop_table("users")
