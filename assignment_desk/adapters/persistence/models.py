"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from assignment_desk.adapters.persistence.database import Base


class StaffModel(Base):
    __tablename__ = "staff"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[str] = mapped_column(String(100), nullable=False, default="Travel Consultant")
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expertise: Mapped[list[str]] = mapped_column(ARRAY(String(100)), nullable=False, default=list)
    workload_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    assigned: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    auto_assign_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sequence_order: Mapped[int | None] = mapped_column(Integer, nullable=True)

    agent_links: Mapped[list["AgentStaffRelationModel"]] = relationship(
        back_populates="staff", lazy="selectin"
    )
    assignments: Mapped[list["AssignmentModel"]] = relationship(back_populates="staff")

    __table_args__ = (
        CheckConstraint("workload_capacity > 0", name="ck_staff_capacity_positive"),
        CheckConstraint("assigned >= 0", name="ck_staff_assigned_non_negative"),
        Index("idx_staff_sequence", "sequence_order"),
    )


class AgentStaffRelationModel(Base):
    __tablename__ = "agent_staff_relations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    agent_id: Mapped[str] = mapped_column(String(100), nullable=False)
    staff_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False
    )
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    staff: Mapped["StaffModel"] = relationship(back_populates="agent_links")

    __table_args__ = (
        UniqueConstraint("agent_id", "staff_id", name="uq_agent_staff"),
        Index("idx_relations_agent", "agent_id"),
    )


class QueryModel(Base):
    __tablename__ = "queries"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    cities: Mapped[list[str]] = mapped_column(ARRAY(String(100)), nullable=False, default=list)
    adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    infants: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    travel_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    travel_to: Mapped[date | None] = mapped_column(Date, nullable=True)
    trip_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    agent_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    agent_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="new")
    assigned_to: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("staff.id"), nullable=True
    )
    assignment_rule: Mapped[str | None] = mapped_column(String(50), nullable=True)
    assignment_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.clock_timestamp()
    )

    __table_args__ = (
        CheckConstraint(
            "travel_from IS NULL OR travel_to IS NULL OR travel_to >= travel_from",
            name="ck_queries_travel_dates",
        ),
        Index("idx_queries_status", "status"),
        Index("idx_queries_assigned_to", "assigned_to"),
    )


class AssignmentRuleModel(Base):
    __tablename__ = "assignment_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    rule_type: Mapped[str] = mapped_column(String(50), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )


class AssignmentModel(Base):
    """Assignment history — one row per decision; the newest is current."""

    __tablename__ = "assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    query_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("queries.id", ondelete="CASCADE"), nullable=False
    )
    staff_id: Mapped[int] = mapped_column(Integer, ForeignKey("staff.id"), nullable=False)
    previous_staff_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rule_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    capacity_exceeded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    staff: Mapped["StaffModel"] = relationship(back_populates="assignments")

    __table_args__ = (
        Index("idx_assignments_query", "query_id"),
        Index("idx_assignments_staff", "staff_id"),
    )
