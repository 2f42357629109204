"""Query endpoints — listing, recommendation, manual assignment and lifecycle."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from assignment_desk.application.ports.assignment_repo import AssignmentRepository
from assignment_desk.application.ports.query_repo import QueryRepository
from assignment_desk.application.use_cases.assign_query import (
    AssignQueryUseCase,
    QueryLifecycleUseCase,
    RecommendStaffUseCase,
)
from assignment_desk.domain.errors import (
    InvalidTransitionError,
    NotFoundError,
    StaffInactiveError,
)
from assignment_desk.domain.value_objects.enums import QueryStatus
from assignment_desk.infrastructure.api.dependencies import (
    get_assign_query_uc,
    get_assignment_repo,
    get_lifecycle_uc,
    get_query_repo,
    get_recommend_uc,
)
from assignment_desk.infrastructure.api.serializers import (
    serialize_decision,
    serialize_match,
    serialize_query,
    serialize_recommendation,
)

router = APIRouter(prefix="/queries", tags=["queries"])


class AssignRequest(BaseModel):
    staff_id: int


@router.get("")
async def list_queries(
    status: QueryStatus | None = None,
    query_repo: QueryRepository = Depends(get_query_repo),
):
    """List queries in arrival order, optionally filtered by status."""
    queries = await query_repo.get_all()
    if status is not None:
        queries = [q for q in queries if q.status == status]
    return {
        "total": len(queries),
        "queries": [serialize_query(q) for q in queries],
    }


@router.get("/{query_id}")
async def get_query(
    query_id: str,
    query_repo: QueryRepository = Depends(get_query_repo),
    assignment_repo: AssignmentRepository = Depends(get_assignment_repo),
):
    """Get a single query with its assignment history."""
    query = await query_repo.get_by_id(query_id)
    if not query:
        raise HTTPException(status_code=404, detail="Query not found")

    history = await assignment_repo.get_by_query(query_id)
    return {
        **serialize_query(query),
        "history": [serialize_decision(d) for d in history],
    }


@router.get("/{query_id}/recommendation")
async def recommend_staff(
    query_id: str,
    recommend_uc: RecommendStaffUseCase = Depends(get_recommend_uc),
):
    """What auto-assignment would pick, plus every active staff member ranked."""
    try:
        rec = await recommend_uc.execute(query_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {
        "query_id": rec.query_id,
        "best": serialize_match(rec.best),
        "candidates": [serialize_recommendation(c) for c in rec.candidates],
    }


@router.post("/{query_id}/assign")
async def assign_query(
    query_id: str,
    body: AssignRequest,
    assign_uc: AssignQueryUseCase = Depends(get_assign_query_uc),
):
    """Manually assign (or reassign) a query to a staff member."""
    try:
        decision = await assign_uc.execute(query_id, body.staff_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StaffInactiveError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {"status": "ok", **serialize_decision(decision)}


@router.post("/{query_id}/start")
async def start_query(
    query_id: str,
    lifecycle_uc: QueryLifecycleUseCase = Depends(get_lifecycle_uc),
):
    """Mark an assigned query as in progress."""
    try:
        query = await lifecycle_uc.start(query_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return serialize_query(query)


@router.post("/{query_id}/complete")
async def complete_query(
    query_id: str,
    lifecycle_uc: QueryLifecycleUseCase = Depends(get_lifecycle_uc),
):
    """Complete a query and release the staff member's slot."""
    try:
        query = await lifecycle_uc.complete(query_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return serialize_query(query)
