"""Initial schema: users, children, attendance, evaluations, notifications, reports

Revision ID: 3f1c2a7b9d10
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a7b9d10"  # pragma: allowlist secret
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
            comment="Creation timestamp (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
            comment="Last update timestamp (UTC)",
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="bcrypt hash, never serialized",
        ),
        sa.Column("full_name", sa.String(length=200), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("phone_number", sa.String(length=20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_users_role", "users", ["role"])

    op.create_table(
        "children",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("gender", sa.String(length=20), nullable=False),
        sa.Column(
            "registration_number",
            sa.String(length=50),
            nullable=False,
            comment="Alternate lookup key",
        ),
        sa.Column("parent_id", sa.Uuid(), nullable=False),
        sa.Column("guardian_id", sa.Uuid(), nullable=True),
        sa.Column(
            "emergency_contact",
            sa.JSON(),
            nullable=False,
            comment="{name, relationship, phone_number}",
        ),
        sa.Column(
            "medical_info",
            sa.JSON(),
            nullable=True,
            comment="{allergies, medications, special_needs}",
        ),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("enrollment_date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["parent_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["guardian_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("registration_number"),
    )
    op.create_index("idx_children_parent", "children", ["parent_id"])
    op.create_index("idx_children_guardian", "children", ["guardian_id"])
    op.create_index("idx_children_status", "children", ["status"])

    op.create_table(
        "attendance",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("child_id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("check_in_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("check_out_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("notes", sa.String(length=1000), nullable=True),
        sa.Column("recorded_by", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["child_id"], ["children.id"]),
        sa.ForeignKeyConstraint(["recorded_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("child_id", "date", name="uq_attendance_child_date"),
    )
    op.create_index("idx_attendance_date", "attendance", ["date"])

    op.create_table(
        "evaluations",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("child_id", sa.Uuid(), nullable=False),
        sa.Column("evaluator_id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("observation", sa.Text(), nullable=False),
        sa.Column("recommendation", sa.Text(), nullable=True),
        sa.Column(
            "attachments", sa.JSON(), nullable=False, comment="Opaque attachment references"
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["child_id"], ["children.id"]),
        sa.ForeignKeyConstraint(["evaluator_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_evaluations_child_date", "evaluations", ["child_id", "date"])
    op.create_index("idx_evaluations_evaluator", "evaluations", ["evaluator_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("sender_id", sa.Uuid(), nullable=False),
        sa.Column("receiver_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["receiver_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notifications_receiver_read", "notifications", ["receiver_id", "is_read"]
    )
    op.create_index("idx_notifications_sender", "notifications", ["sender_id"])

    op.create_table(
        "reports",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("child_id", sa.Uuid(), nullable=True),
        sa.Column("generated_by", sa.Uuid(), nullable=False),
        sa.Column("period_start", sa.Date(), nullable=False),
        sa.Column("period_end", sa.Date(), nullable=False),
        sa.Column(
            "data",
            sa.JSON(),
            nullable=False,
            comment="{attendance, evaluations, activities, health_incidents}",
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["child_id"], ["children.id"]),
        sa.ForeignKeyConstraint(["generated_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_reports_child", "reports", ["child_id"])
    op.create_index("idx_reports_type", "reports", ["type"])


def downgrade() -> None:
    op.drop_index("idx_reports_type", table_name="reports")
    op.drop_index("idx_reports_child", table_name="reports")
    op.drop_table("reports")

    op.drop_index("idx_notifications_sender", table_name="notifications")
    op.drop_index("idx_notifications_receiver_read", table_name="notifications")
    op.drop_table("notifications")

    op.drop_index("idx_evaluations_evaluator", table_name="evaluations")
    op.drop_index("idx_evaluations_child_date", table_name="evaluations")
    op.drop_table("evaluations")

    op.drop_index("idx_attendance_date", table_name="attendance")
    op.drop_table("attendance")

    op.drop_index("idx_children_status", table_name="children")
    op.drop_index("idx_children_guardian", table_name="children")
    op.drop_index("idx_children_parent", table_name="children")
    op.drop_table("children")

    op.drop_index("idx_users_role", table_name="users")
    op.drop_table("users")
