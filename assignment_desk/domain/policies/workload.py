"""Workload summary — dashboard metrics over a roster/query snapshot."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from assignment_desk.domain.entities.query import Query
from assignment_desk.domain.entities.staff_member import StaffMember

MEDIUM_LOAD_PCT = 70
HIGH_LOAD_PCT = 90


def load_band(utilization_pct: float) -> str:
    if utilization_pct >= HIGH_LOAD_PCT:
        return "high"
    if utilization_pct >= MEDIUM_LOAD_PCT:
        return "medium"
    return "low"


@dataclass(frozen=True)
class StaffLoad:
    staff_id: int
    name: str
    assigned: int
    capacity: int
    utilization_pct: int
    band: str


@dataclass(frozen=True)
class WorkloadSummary:
    total_unassigned: int
    available_staff: int
    avg_workload_pct: int
    high_priority_unassigned: int
    staff: list[StaffLoad] = field(default_factory=list)


def summarize_workload(
    queries: Iterable[Query], roster: Iterable[StaffMember]
) -> WorkloadSummary:
    unassigned = [q for q in queries if q.is_new()]
    active = [s for s in roster if s.active]

    rows = []
    for s in sorted(active, key=lambda m: m.id):
        pct = s.utilization() * 100
        rows.append(StaffLoad(
            staff_id=s.id,
            name=s.name,
            assigned=s.assigned,
            capacity=s.workload_capacity,
            utilization_pct=round(pct),
            band=load_band(pct),
        ))

    avg = round(sum(s.utilization() * 100 for s in active) / len(active)) if active else 0

    return WorkloadSummary(
        total_unassigned=len(unassigned),
        available_staff=len(active),
        avg_workload_pct=avg,
        high_priority_unassigned=sum(1 for q in unassigned if q.is_high_priority()),
        staff=rows,
    )
