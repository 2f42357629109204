"""AutoAssignUseCase — assign every pending query through the rule hierarchy."""

from __future__ import annotations

import logging

from assignment_desk.application.command_lock import CommandLock, Commit
from assignment_desk.application.ports.assignment_repo import AssignmentRepository
from assignment_desk.application.ports.query_repo import QueryRepository
from assignment_desk.application.ports.rule_repo import RuleRepository
from assignment_desk.application.ports.staff_repo import StaffRepository
from assignment_desk.application.use_cases.assign_query import (
    persist_load_changes,
    snapshot_loads,
)
from assignment_desk.domain.policies.rule_catalog import RuleCatalog
from assignment_desk.domain.services.assignment_executor import (
    AssignmentState,
    BatchResult,
    auto_assign_batch,
)
from assignment_desk.domain.value_objects.enums import OutcomeStatus

logger = logging.getLogger(__name__)


class AutoAssignUseCase:
    """Process all ``new`` queries in arrival order."""

    def __init__(
        self,
        query_repo: QueryRepository,
        staff_repo: StaffRepository,
        rule_repo: RuleRepository,
        assignment_repo: AssignmentRepository,
        command_lock: CommandLock,
        tenant_id: str = "default",
        commit: Commit | None = None,
    ):
        self._queries = query_repo
        self._staff = staff_repo
        self._rules = rule_repo
        self._assignments = assignment_repo
        self._lock = command_lock
        self._tenant = tenant_id
        self._commit = commit

    async def execute(self) -> BatchResult:
        async with self._lock.hold(self._tenant, self._commit):
            roster = await self._staff.get_all(for_update=True)
            pending = await self._queries.get_pending(for_update=True)
            rules = RuleCatalog(await self._rules.get_all()).list_enabled_by_priority()
            logger.info(
                "Auto-assigning %d pending queries across %d staff (%d rules enabled)",
                len(pending), len(roster), len(rules),
            )

            state = AssignmentState.from_lists(pending, roster)
            before = snapshot_loads(state)
            result = auto_assign_batch(state, pending, rules)

            for outcome in result.outcomes:
                if outcome.decision is None:
                    if outcome.status == OutcomeStatus.NO_MATCH:
                        logger.warning("Query %s: %s", outcome.query_id, outcome.detail)
                    continue
                await self._queries.update(state.queries[outcome.query_id])
                await self._assignments.save(outcome.decision)
                if outcome.decision.capacity_exceeded:
                    logger.warning(
                        "Query %s: staff %s assigned over capacity",
                        outcome.query_id, outcome.decision.staff_id,
                    )
            await persist_load_changes(self._staff, before, state)

        logger.info(
            "Auto-assign complete: %d assigned, %d without eligible staff, %d skipped",
            result.count(OutcomeStatus.ASSIGNED),
            result.count(OutcomeStatus.NO_MATCH),
            result.count(OutcomeStatus.SKIPPED),
        )
        return result
