"""Tests for the AssignmentExecutor — assignment, batches and lifecycle."""

import pytest

from assignment_desk.domain.entities.assignment import MANUAL_REASON
from assignment_desk.domain.entities.assignment_rule import AssignmentRule
from assignment_desk.domain.entities.query import Query
from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.errors import (
    InvalidTransitionError,
    QueryNotFoundError,
    StaffInactiveError,
    StaffNotFoundError,
)
from assignment_desk.domain.policies.rule_catalog import RuleCatalog
from assignment_desk.domain.services.assignment_executor import (
    NO_ELIGIBLE_STAFF,
    AssignmentState,
    assign,
    auto_assign_batch,
    complete,
    start_work,
)
from assignment_desk.domain.value_objects.destination import Destination
from assignment_desk.domain.value_objects.enums import OutcomeStatus, QueryStatus, RuleType


def _query(qid: str, country: str = "Japan") -> Query:
    return Query(id=qid, destination=Destination(country))


def _state(queries=None, staff=None) -> AssignmentState:
    if queries is None:
        queries = [_query("Q-1"), _query("Q-2")]
    if staff is None:
        staff = [
            StaffMember(id=1, name="A", assigned=0, workload_capacity=2),
            StaffMember(id=2, name="B", assigned=0, workload_capacity=2),
            StaffMember(id=3, name="Off", active=False),
        ]
    return AssignmentState.from_lists(queries, staff)


WORKLOAD_ONLY = [AssignmentRule(id=3, rule_type=RuleType.WORKLOAD_BALANCE, priority=1)]


# ─── assign ──────────────────────────────────────────────────────────


def test_manual_assign_sets_status_and_load():
    state = _state()
    decision = assign(state, "Q-1", 2)

    q = state.queries["Q-1"]
    assert q.status == QueryStatus.ASSIGNED
    assert q.assigned_to == 2
    assert q.assignment_reason == MANUAL_REASON
    assert q.assignment_rule is None
    assert state.staff[2].assigned == 1
    assert decision.is_manual
    assert not decision.capacity_exceeded


def test_assign_raises_monotonically_by_one():
    state = _state()
    assign(state, "Q-2", 2)
    before = state.total_assigned()
    loads = {s.id: s.assigned for s in state.staff.values()}

    assign(state, "Q-1", 1)

    assert state.total_assigned() == before + 1
    assert state.staff[1].assigned == loads[1] + 1
    assert {sid: s.assigned for sid, s in state.staff.items() if sid != 1} == {
        sid: load for sid, load in loads.items() if sid != 1
    }


def test_reassign_conserves_total_load():
    state = _state()
    assign(state, "Q-1", 1)
    before = state.total_assigned()

    decision = assign(state, "Q-1", 2)

    assert state.total_assigned() == before
    assert state.staff[1].assigned == 0
    assert state.staff[2].assigned == 1
    assert decision.previous_staff_id == 1


def test_reassign_in_progress_query_moves_load():
    state = _state()
    assign(state, "Q-1", 1)
    start_work(state, "Q-1")
    assert state.queries["Q-1"].status == QueryStatus.IN_PROGRESS
    before = state.total_assigned()

    decision = assign(state, "Q-1", 2)

    q = state.queries["Q-1"]
    assert q.status == QueryStatus.ASSIGNED
    assert q.assigned_to == 2
    assert state.staff[1].assigned == 0
    assert state.staff[2].assigned == 1
    assert state.total_assigned() == before
    assert decision.previous_staff_id == 1


def test_reassign_to_same_staff_keeps_counters():
    state = _state()
    assign(state, "Q-1", 1)
    assign(state, "Q-1", 1)
    assert state.staff[1].assigned == 1


def test_assign_over_capacity_is_flagged_not_refused():
    state = _state(queries=[_query("Q-1"), _query("Q-2"), _query("Q-3")])
    assign(state, "Q-1", 1)
    assign(state, "Q-2", 1)
    decision = assign(state, "Q-3", 1)
    assert decision.capacity_exceeded
    assert state.staff[1].assigned == 3


def test_assign_to_inactive_staff_changes_nothing():
    state = _state()
    with pytest.raises(StaffInactiveError):
        assign(state, "Q-1", 3)
    assert state.queries["Q-1"].status == QueryStatus.NEW
    assert state.total_assigned() == 0


def test_assign_unknown_ids():
    state = _state()
    with pytest.raises(QueryNotFoundError):
        assign(state, "nope", 1)
    with pytest.raises(StaffNotFoundError):
        assign(state, "Q-1", 99)


def test_reassign_completed_query_only_increments_new_staff():
    state = _state()
    assign(state, "Q-1", 1)
    complete(state, "Q-1")
    decision = assign(state, "Q-1", 2)
    assert state.staff[1].assigned == 0
    assert state.staff[2].assigned == 1
    assert decision.previous_staff_id is None


# ─── auto_assign_batch ───────────────────────────────────────────────


def test_batch_spreads_load_in_arrival_order():
    state = _state()
    pending = list(state.queries.values())
    result = auto_assign_batch(state, pending, WORKLOAD_ONLY)

    assigned_to = [d.staff_id for d in result.decisions]
    assert assigned_to == [1, 2]
    assert result.count(OutcomeStatus.ASSIGNED) == 2


def test_batch_result_threads_state():
    state = _state()
    result = auto_assign_batch(state, list(state.queries.values()), WORKLOAD_ONLY)
    assert result.state is state
    assert result.state.total_assigned() == 2


def test_batch_records_rule_and_reason():
    state = _state()
    result = auto_assign_batch(state, [state.queries["Q-1"]], WORKLOAD_ONLY)
    q = state.queries["Q-1"]
    assert q.assignment_rule == RuleType.WORKLOAD_BALANCE
    assert q.assignment_reason.startswith("Workload Balance: ")
    assert result.decisions[0].rule_type == RuleType.WORKLOAD_BALANCE


def test_batch_no_match_leaves_queries_new():
    state = _state(staff=[])
    result = auto_assign_batch(state, list(state.queries.values()), [])

    assert result.count(OutcomeStatus.NO_MATCH) == 2
    assert all(o.detail == NO_ELIGIBLE_STAFF for o in result.outcomes)
    assert all(q.status == QueryStatus.NEW for q in state.queries.values())


def test_batch_skips_queries_that_are_no_longer_new():
    state = _state()
    assign(state, "Q-1", 2)
    result = auto_assign_batch(state, list(state.queries.values()), WORKLOAD_ONLY)

    assert [o.status for o in result.outcomes] == [OutcomeStatus.SKIPPED, OutcomeStatus.ASSIGNED]
    assert state.queries["Q-1"].assigned_to == 2


def test_batch_with_default_rules_is_deterministic():
    rules = RuleCatalog.default().list_enabled_by_priority()
    runs = []
    for _ in range(2):
        state = _state()
        result = auto_assign_batch(state, list(state.queries.values()), rules)
        runs.append([(d.query_id, d.staff_id, d.reason) for d in result.decisions])
    assert runs[0] == runs[1]


# ─── lifecycle ───────────────────────────────────────────────────────


def test_start_then_complete_releases_slot():
    state = _state()
    assign(state, "Q-1", 1)
    start_work(state, "Q-1")
    assert state.queries["Q-1"].status == QueryStatus.IN_PROGRESS
    assert state.staff[1].assigned == 1

    holder = complete(state, "Q-1")

    assert holder.id == 1
    assert state.staff[1].assigned == 0
    assert state.queries["Q-1"].status == QueryStatus.COMPLETED


def test_start_requires_assigned():
    state = _state()
    with pytest.raises(InvalidTransitionError):
        start_work(state, "Q-1")


def test_complete_twice_is_rejected():
    state = _state()
    assign(state, "Q-1", 1)
    complete(state, "Q-1")
    with pytest.raises(InvalidTransitionError):
        complete(state, "Q-1")
    assert state.staff[1].assigned == 0


def test_complete_never_drops_load_below_zero():
    state = _state()
    assign(state, "Q-1", 1)
    state.staff[1].assigned = 0
    complete(state, "Q-1")
    assert state.staff[1].assigned == 0
