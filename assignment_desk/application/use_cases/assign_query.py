"""AssignQueryUseCase — manual assignment, recommendation and query lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from assignment_desk.application.command_lock import CommandLock, Commit
from assignment_desk.application.ports.assignment_repo import AssignmentRepository
from assignment_desk.application.ports.query_repo import QueryRepository
from assignment_desk.application.ports.rule_repo import RuleRepository
from assignment_desk.application.ports.staff_repo import StaffRepository
from assignment_desk.domain.entities.assignment import AssignmentDecision
from assignment_desk.domain.entities.query import Query
from assignment_desk.domain.errors import QueryNotFoundError
from assignment_desk.domain.policies.matcher import (
    MatchResult,
    StaffRecommendation,
    find_best_match,
    rank_candidates,
)
from assignment_desk.domain.policies.rule_catalog import RuleCatalog
from assignment_desk.domain.services.assignment_executor import (
    AssignmentState,
    assign,
    complete,
    start_work,
)

logger = logging.getLogger(__name__)


@dataclass
class Recommendation:
    """Best automatic match plus the full ranking for a manual pick."""

    query_id: str
    best: MatchResult | None
    candidates: list[StaffRecommendation]


def snapshot_loads(state: AssignmentState) -> dict[int, int]:
    return {s.id: s.assigned for s in state.staff.values()}


async def persist_load_changes(
    staff_repo: StaffRepository,
    before: dict[int, int],
    state: AssignmentState,
) -> int:
    """Write back every staff member whose counter moved. Returns the count."""
    changed = 0
    for staff in state.roster():
        if before.get(staff.id) != staff.assigned:
            await staff_repo.update(staff)
            changed += 1
    return changed


async def _load_query(
    queries: QueryRepository, query_id: str, for_update: bool = False
) -> Query:
    query = await queries.get_by_id(query_id, for_update=for_update)
    if query is None:
        raise QueryNotFoundError(query_id)
    return query


class AssignQueryUseCase:
    """Assign one query to a staff member chosen by a human."""

    def __init__(
        self,
        query_repo: QueryRepository,
        staff_repo: StaffRepository,
        assignment_repo: AssignmentRepository,
        command_lock: CommandLock,
        tenant_id: str = "default",
        commit: Commit | None = None,
    ):
        self._queries = query_repo
        self._staff = staff_repo
        self._assignments = assignment_repo
        self._lock = command_lock
        self._tenant = tenant_id
        self._commit = commit

    async def execute(self, query_id: str, staff_id: int) -> AssignmentDecision:
        async with self._lock.hold(self._tenant, self._commit):
            # staff rows first, then the query row, in every command
            roster = await self._staff.get_all(for_update=True)
            query = await _load_query(self._queries, query_id, for_update=True)
            state = AssignmentState.from_lists([query], roster)
            before = snapshot_loads(state)

            decision = assign(state, query_id, staff_id)

            await self._queries.update(query)
            await persist_load_changes(self._staff, before, state)
            await self._assignments.save(decision)

        staff = state.staff[staff_id]
        if decision.is_reassignment:
            logger.info(
                "Query %s reassigned: staff %s → %s (%s)",
                query_id, decision.previous_staff_id, staff.name, decision.reason,
            )
        else:
            logger.info("Query %s → %s (%s)", query_id, staff.name, decision.reason)
        if decision.capacity_exceeded:
            logger.warning(
                "Query %s: %s is over capacity (%d/%d)",
                query_id, staff.name, staff.assigned, staff.workload_capacity,
            )
        return decision


class RecommendStaffUseCase:
    """Read-only: what the engine would pick, and how everyone ranks."""

    def __init__(
        self,
        query_repo: QueryRepository,
        staff_repo: StaffRepository,
        rule_repo: RuleRepository,
    ):
        self._queries = query_repo
        self._staff = staff_repo
        self._rules = rule_repo

    async def execute(self, query_id: str) -> Recommendation:
        query = await _load_query(self._queries, query_id)
        roster = await self._staff.get_all()
        catalog = RuleCatalog(await self._rules.get_all())

        best = find_best_match(query, roster, catalog.list_enabled_by_priority())
        if best is None:
            logger.info("Query %s: no eligible staff for recommendation", query_id)
        return Recommendation(
            query_id=query_id,
            best=best,
            candidates=rank_candidates(query, roster),
        )


class QueryLifecycleUseCase:
    """Move an assigned query through in-progress to completed."""

    def __init__(
        self,
        query_repo: QueryRepository,
        staff_repo: StaffRepository,
        command_lock: CommandLock,
        tenant_id: str = "default",
        commit: Commit | None = None,
    ):
        self._queries = query_repo
        self._staff = staff_repo
        self._lock = command_lock
        self._tenant = tenant_id
        self._commit = commit

    async def start(self, query_id: str) -> Query:
        async with self._lock.hold(self._tenant, self._commit):
            query = await _load_query(self._queries, query_id, for_update=True)
            state = AssignmentState.from_lists([query], [])
            start_work(state, query_id)
            await self._queries.update(query)
        logger.info("Query %s: work started", query_id)
        return query

    async def complete(self, query_id: str) -> Query:
        async with self._lock.hold(self._tenant, self._commit):
            roster = await self._staff.get_all(for_update=True)
            query = await _load_query(self._queries, query_id, for_update=True)
            state = AssignmentState.from_lists([query], roster)
            before = snapshot_loads(state)

            holder = complete(state, query_id)

            await self._queries.update(query)
            await persist_load_changes(self._staff, before, state)
        logger.info(
            "Query %s completed (released %s)",
            query_id, holder.name if holder else "nobody",
        )
        return query
