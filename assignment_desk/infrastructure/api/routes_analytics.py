"""Analytics endpoints — workload summary for the dashboard."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from assignment_desk.application.ports.query_repo import QueryRepository
from assignment_desk.application.ports.staff_repo import StaffRepository
from assignment_desk.domain.policies.workload import summarize_workload
from assignment_desk.infrastructure.api.dependencies import get_query_repo, get_staff_repo

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/workload")
async def workload_summary(
    query_repo: QueryRepository = Depends(get_query_repo),
    staff_repo: StaffRepository = Depends(get_staff_repo),
):
    """Unassigned backlog and per-staff load bands."""
    summary = summarize_workload(await query_repo.get_all(), await staff_repo.get_all())

    return {
        "total_unassigned": summary.total_unassigned,
        "available_staff": summary.available_staff,
        "avg_workload_pct": summary.avg_workload_pct,
        "high_priority_unassigned": summary.high_priority_unassigned,
        "staff": [
            {
                "staff_id": row.staff_id,
                "name": row.name,
                "assigned": row.assigned,
                "capacity": row.capacity,
                "utilization_pct": row.utilization_pct,
                "band": row.band,
            }
            for row in summary.staff
        ],
    }
