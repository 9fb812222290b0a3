"""create_workflow_tables

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-10-18 09:12:44.201733

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1c3e5f7b9d2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "workflow_definition",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("event_type", sa.String(), nullable=False),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False
        ),
        sa.Column("conditions", sa.JSON(), nullable=False),
        sa.Column("actions", sa.JSON(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_workflow_definition_event_type", "workflow_definition", ["event_type"]
    )
    op.create_index(
        "ix_workflow_definition_event_type_active",
        "workflow_definition",
        ["event_type", "is_active"],
    )

    op.create_table(
        "workflow_execution_record",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("workflow_id", sa.String(), nullable=False),
        sa.Column("event_type", sa.String(), nullable=False),
        sa.Column("triggered_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("action_results", sa.JSON(), nullable=False),
        sa.Column("total_duration_ms", sa.Float(), nullable=False),
        sa.CheckConstraint(
            "status IN ('success', 'partial', 'failed')",
            name="workflow_execution_record_status_check",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("workflow_id", "event_type", "triggered_at", "status"):
        op.create_index(
            f"ix_workflow_execution_record_{column}",
            "workflow_execution_record",
            [column],
        )
    op.create_index(
        "ix_workflow_execution_record_workflow_triggered",
        "workflow_execution_record",
        ["workflow_id", "triggered_at"],
    )

    op.create_table(
        "notification",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("priority", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column(
            "is_read", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notification_type", "notification", ["type"])
    op.create_index("ix_notification_user_id", "notification", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_notification_user_id", table_name="notification")
    op.drop_index("ix_notification_type", table_name="notification")
    op.drop_table("notification")

    op.drop_index(
        "ix_workflow_execution_record_workflow_triggered",
        table_name="workflow_execution_record",
    )
    for column in ("status", "triggered_at", "event_type", "workflow_id"):
        op.drop_index(
            f"ix_workflow_execution_record_{column}",
            table_name="workflow_execution_record",
        )
    op.drop_table("workflow_execution_record")

    op.drop_index(
        "ix_workflow_definition_event_type_active", table_name="workflow_definition"
    )
    op.drop_index("ix_workflow_definition_event_type", table_name="workflow_definition")
    op.drop_table("workflow_definition")
