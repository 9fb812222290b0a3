"""Workflow definition and execution record ORM models."""

from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from bookflow.infrastructure.persistence.database import Base
from bookflow.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from bookflow.shared.enums import ExecutionStatus


def _in_check(column: str, values: list[str]) -> str:
    return "{} IN ({})".format(
        column, ", ".join("'{}'".format(v.replace("'", "''")) for v in values)
    )


class WorkflowDefinitionModel(CuidMixin, TimestampMixin, Base):
    """Workflow definition. Table: workflow_definition. Conditions + actions JSON."""

    __tablename__ = "workflow_definition"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    event_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=sa.text("true")
    )
    conditions: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    actions: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)

    __table_args__ = (
        Index("ix_workflow_definition_event_type_active", "event_type", "is_active"),
    )


class ExecutionRecordModel(CuidMixin, Base):
    """Append-only execution audit. Table: workflow_execution_record.

    workflow_id is deliberately not a foreign key: records outlive deleted
    workflows.
    """

    __tablename__ = "workflow_execution_record"

    workflow_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    event_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    triggered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    action_results: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    total_duration_ms: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    __table_args__ = (
        Index(
            "ix_workflow_execution_record_workflow_triggered",
            "workflow_id",
            "triggered_at",
        ),
        CheckConstraint(
            _in_check("status", ExecutionStatus.values()),
            name="workflow_execution_record_status_check",
        ),
    )
