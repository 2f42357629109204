"""AssignmentExecutor — the only code allowed to change assignment state.

All functions take an explicit ``AssignmentState`` and mutate it in place.
Every check runs before the first mutation, so a failed call leaves the state
untouched and a successful one changes the query status and the staff
counters together.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from assignment_desk.domain.entities.assignment import (
    MANUAL_REASON,
    AssignmentDecision,
    AssignmentOutcome,
)
from assignment_desk.domain.entities.assignment_rule import AssignmentRule
from assignment_desk.domain.entities.query import Query
from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.errors import (
    InvalidTransitionError,
    QueryNotFoundError,
    StaffInactiveError,
    StaffNotFoundError,
)
from assignment_desk.domain.policies.matcher import find_best_match
from assignment_desk.domain.value_objects.enums import (
    OutcomeStatus,
    QueryStatus,
    RuleType,
)

NO_ELIGIBLE_STAFF = "No eligible staff"


@dataclass
class AssignmentState:
    """Snapshot of queries and staff that the executor works on."""

    queries: dict[str, Query] = field(default_factory=dict)
    staff: dict[int, StaffMember] = field(default_factory=dict)

    @classmethod
    def from_lists(
        cls, queries: Iterable[Query], staff: Iterable[StaffMember]
    ) -> AssignmentState:
        return cls(
            queries={q.id: q for q in queries},
            staff={s.id: s for s in staff},
        )

    def roster(self) -> list[StaffMember]:
        return sorted(self.staff.values(), key=lambda s: s.id)

    def get_query(self, query_id: str) -> Query:
        query = self.queries.get(query_id)
        if query is None:
            raise QueryNotFoundError(query_id)
        return query

    def get_staff(self, staff_id: int) -> StaffMember:
        staff = self.staff.get(staff_id)
        if staff is None:
            raise StaffNotFoundError(staff_id)
        return staff

    def total_assigned(self) -> int:
        return sum(s.assigned for s in self.staff.values())


@dataclass
class BatchResult:
    outcomes: list[AssignmentOutcome]
    state: AssignmentState

    @property
    def decisions(self) -> list[AssignmentDecision]:
        return [o.decision for o in self.outcomes if o.decision is not None]

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)


def _release(state: AssignmentState, query: Query) -> StaffMember | None:
    """Staff member whose counter currently includes this query, if any."""
    if not query.is_open():
        return None
    return state.staff.get(query.assigned_to)


def assign(
    state: AssignmentState,
    query_id: str,
    staff_id: int,
    *,
    reason: str = MANUAL_REASON,
    rule_type: RuleType | None = None,
) -> AssignmentDecision:
    """Assign (or reassign) a query to a staff member.

    Raises:
        QueryNotFoundError, StaffNotFoundError: unknown ids.
        StaffInactiveError: the target staff member is inactive.
    """
    query = state.get_query(query_id)
    staff = state.get_staff(staff_id)
    if not staff.active:
        raise StaffInactiveError(staff_id)

    previous = _release(state, query)
    load_after = staff.assigned if previous is staff else staff.assigned + 1
    decision = AssignmentDecision(
        query_id=query.id,
        staff_id=staff.id,
        rule_type=rule_type,
        reason=reason,
        capacity_exceeded=load_after > staff.workload_capacity,
        previous_staff_id=previous.id if previous is not None else None,
    )

    if previous is not None:
        previous.assigned = max(previous.assigned - 1, 0)
    staff.assigned += 1
    query.status = QueryStatus.ASSIGNED
    query.assigned_to = staff.id
    query.assignment_rule = rule_type
    query.assignment_reason = reason
    return decision


def auto_assign_batch(
    state: AssignmentState,
    pending_queries: Sequence[Query],
    enabled_rules: Sequence[AssignmentRule],
) -> BatchResult:
    """Auto-assign queries strictly in input (arrival) order.

    Each query is matched against the roster as left by the previous
    iteration, so load-sensitive rules see this batch's earlier assignments.
    Queries that are no longer ``new`` are skipped; unmatched ones stay ``new``.
    """
    outcomes: list[AssignmentOutcome] = []
    for pending in pending_queries:
        query = state.queries.setdefault(pending.id, pending)
        if not query.is_new():
            outcomes.append(AssignmentOutcome(
                query_id=query.id,
                status=OutcomeStatus.SKIPPED,
                detail=f"Query is already {query.status.value}",
            ))
            continue

        match = find_best_match(query, state.roster(), enabled_rules)
        if match is None:
            outcomes.append(AssignmentOutcome(
                query_id=query.id,
                status=OutcomeStatus.NO_MATCH,
                detail=NO_ELIGIBLE_STAFF,
            ))
            continue

        decision = assign(
            state, query.id, match.staff.id,
            reason=match.reason, rule_type=match.rule_type,
        )
        outcomes.append(AssignmentOutcome(
            query_id=query.id,
            status=OutcomeStatus.ASSIGNED,
            decision=decision,
        ))
    return BatchResult(outcomes=outcomes, state=state)


def start_work(state: AssignmentState, query_id: str) -> Query:
    """assigned → in-progress. The staff counter is unchanged."""
    query = state.get_query(query_id)
    if query.status != QueryStatus.ASSIGNED:
        raise InvalidTransitionError(query.id, query.status.value, QueryStatus.IN_PROGRESS.value)
    query.status = QueryStatus.IN_PROGRESS
    return query


def complete(state: AssignmentState, query_id: str) -> StaffMember | None:
    """assigned / in-progress → completed, releasing the staff member's slot.

    Returns the staff member whose load was decremented.
    """
    query = state.get_query(query_id)
    if query.status not in (QueryStatus.ASSIGNED, QueryStatus.IN_PROGRESS):
        raise InvalidTransitionError(query.id, query.status.value, QueryStatus.COMPLETED.value)

    holder = _release(state, query)
    if holder is not None:
        holder.assigned = max(holder.assigned - 1, 0)
    query.status = QueryStatus.COMPLETED
    return holder
