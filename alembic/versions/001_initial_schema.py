"""Initial schema — staff, queries, rules and assignment history.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Staff
    op.create_table(
        "staff",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column(
            "role", sa.String(100), nullable=False, server_default="Travel Consultant"
        ),
        sa.Column("active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column(
            "expertise", ARRAY(sa.String(100)), nullable=False, server_default="{}"
        ),
        sa.Column("workload_capacity", sa.Integer, nullable=False, server_default="10"),
        sa.Column("assigned", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "auto_assign_enabled", sa.Boolean, nullable=False, server_default="true"
        ),
        sa.Column("sequence_order", sa.Integer, nullable=True),
        sa.CheckConstraint("workload_capacity > 0", name="ck_staff_capacity_positive"),
        sa.CheckConstraint("assigned >= 0", name="ck_staff_assigned_non_negative"),
    )
    op.create_index("idx_staff_sequence", "staff", ["sequence_order"])

    # Agent ↔ staff relationships
    op.create_table(
        "agent_staff_relations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("agent_id", sa.String(100), nullable=False),
        sa.Column(
            "staff_id",
            sa.Integer,
            sa.ForeignKey("staff.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("is_primary", sa.Boolean, nullable=False, server_default="false"),
        sa.Column(
            "created_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
        sa.UniqueConstraint("agent_id", "staff_id", name="uq_agent_staff"),
    )
    op.create_index("idx_relations_agent", "agent_staff_relations", ["agent_id"])

    # Queries
    op.create_table(
        "queries",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column(
            "cities", ARRAY(sa.String(100)), nullable=False, server_default="{}"
        ),
        sa.Column("adults", sa.Integer, nullable=False, server_default="1"),
        sa.Column("children", sa.Integer, nullable=False, server_default="0"),
        sa.Column("infants", sa.Integer, nullable=False, server_default="0"),
        sa.Column("travel_from", sa.Date, nullable=True),
        sa.Column("travel_to", sa.Date, nullable=True),
        sa.Column("trip_duration", sa.Integer, nullable=True),
        sa.Column("agent_id", sa.String(100), nullable=True),
        sa.Column("agent_name", sa.String(200), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="new"),
        sa.Column("assigned_to", sa.Integer, sa.ForeignKey("staff.id"), nullable=True),
        sa.Column("assignment_rule", sa.String(50), nullable=True),
        sa.Column("assignment_reason", sa.Text, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime,
            nullable=False,
            server_default=sa.func.clock_timestamp(),
        ),
        sa.CheckConstraint(
            "travel_from IS NULL OR travel_to IS NULL OR travel_to >= travel_from",
            name="ck_queries_travel_dates",
        ),
    )
    op.create_index("idx_queries_status", "queries", ["status"])
    op.create_index("idx_queries_assigned_to", "queries", ["assigned_to"])

    # Assignment rules
    op.create_table(
        "assignment_rules",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("rule_type", sa.String(50), nullable=False),
        sa.Column("priority", sa.Integer, nullable=False),
        sa.Column("enabled", sa.Boolean, nullable=False, server_default="true"),
        sa.Column(
            "updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
    )

    # Assignment history
    op.create_table(
        "assignments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "query_id",
            sa.String(50),
            sa.ForeignKey("queries.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("staff_id", sa.Integer, sa.ForeignKey("staff.id"), nullable=False),
        sa.Column("previous_staff_id", sa.Integer, nullable=True),
        sa.Column("rule_type", sa.String(50), nullable=True),
        sa.Column("reason", sa.Text, nullable=False),
        sa.Column(
            "capacity_exceeded", sa.Boolean, nullable=False, server_default="false"
        ),
        sa.Column(
            "assigned_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_assignments_query", "assignments", ["query_id"])
    op.create_index("idx_assignments_staff", "assignments", ["staff_id"])


def downgrade() -> None:
    op.drop_table("assignments")
    op.drop_table("assignment_rules")
    op.drop_table("queries")
    op.drop_table("agent_staff_relations")
    op.drop_table("staff")
