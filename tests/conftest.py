"""Pytest configuration and shared fixtures.

The in-memory repositories hand out copies, like the SQL repositories map
fresh objects per read, so a use case that forgets to write back loses its
change here too.
"""

from __future__ import annotations

import copy
from datetime import datetime, timedelta

import pytest

from assignment_desk.application.command_lock import CommandLock
from assignment_desk.application.ports.assignment_repo import AssignmentRepository
from assignment_desk.application.ports.query_repo import QueryRepository
from assignment_desk.application.ports.rule_repo import RuleRepository
from assignment_desk.application.ports.staff_repo import StaffRepository
from assignment_desk.domain.entities.query import Query
from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.policies.rule_catalog import default_rules
from assignment_desk.domain.value_objects.destination import Destination
from assignment_desk.domain.value_objects.enums import QueryStatus

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeQueryRepo(QueryRepository):
    def __init__(self, queries=()):
        self.queries: dict[str, Query] = {q.id: copy.deepcopy(q) for q in queries}
        self.updates = 0

    async def save(self, query):
        self.queries[query.id] = copy.deepcopy(query)
        return query

    async def get_by_id(self, query_id, for_update=False):
        q = self.queries.get(query_id)
        return copy.deepcopy(q) if q else None

    async def get_all(self):
        return [copy.deepcopy(q) for q in self.queries.values()]

    async def get_pending(self, for_update=False):
        return [copy.deepcopy(q) for q in self.queries.values() if q.status == QueryStatus.NEW]

    async def update(self, query):
        self.updates += 1
        self.queries[query.id] = copy.deepcopy(query)
        return query


class FakeStaffRepo(StaffRepository):
    def __init__(self, staff=()):
        self.staff: dict[int, StaffMember] = {s.id: copy.deepcopy(s) for s in staff}
        self.locked_reads = 0

    async def save(self, staff):
        staff.id = max(self.staff, default=0) + 1
        self.staff[staff.id] = copy.deepcopy(staff)
        return staff

    async def get_by_id(self, staff_id):
        s = self.staff.get(staff_id)
        return copy.deepcopy(s) if s else None

    async def get_all(self, for_update=False):
        if for_update:
            self.locked_reads += 1
        return [copy.deepcopy(s) for s in sorted(self.staff.values(), key=lambda s: s.id)]

    async def update(self, staff):
        self.staff[staff.id] = copy.deepcopy(staff)
        return staff

    async def add_agent_relationship(self, agent_id, staff_id, is_primary=False):
        self.staff[staff_id].agent_ids.add(agent_id)


class FakeRuleRepo(RuleRepository):
    def __init__(self, rules=None):
        rules = default_rules() if rules is None else rules
        self.rules = {r.id: copy.deepcopy(r) for r in rules}
        self.updates = 0

    async def get_all(self):
        return [copy.deepcopy(r) for r in self.rules.values()]

    async def update(self, rule):
        self.updates += 1
        self.rules[rule.id] = copy.deepcopy(rule)
        return rule

    async def save(self, rule):
        rule.id = max(self.rules, default=0) + 1
        self.rules[rule.id] = copy.deepcopy(rule)
        return rule


class FakeAssignmentRepo(AssignmentRepository):
    def __init__(self):
        self.decisions = []

    async def save(self, decision):
        decision.id = len(self.decisions) + 1
        self.decisions.append(copy.deepcopy(decision))
        return decision

    async def get_by_query(self, query_id):
        return [d for d in self.decisions if d.query_id == query_id]

    async def get_all(self):
        return list(self.decisions)


# ─── Sample data ────────────────────────────────────────────────────

BASE_TIME = datetime(2025, 3, 1, 9, 0)


def _query(query_id, country, *cities, agent_id=None, minutes=0, **kwargs) -> Query:
    return Query(
        id=query_id,
        destination=Destination(country=country, cities=tuple(cities)),
        agent_id=agent_id,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        **kwargs,
    )


@pytest.fixture
def roster() -> list[StaffMember]:
    return [
        StaffMember(id=1, name="Anna", expertise={"France", "Paris"}, workload_capacity=5, assigned=2,
                    sequence_order=1, agent_ids={"AG-7"}),
        StaffMember(id=2, name="Bruno", expertise=set(), workload_capacity=5, assigned=0,
                    sequence_order=2),
        StaffMember(id=3, name="Chen", expertise={"Japan"}, workload_capacity=4, assigned=4,
                    sequence_order=3),
        StaffMember(id=4, name="Dana", active=False, expertise={"France"}, workload_capacity=5,
                    assigned=0),
    ]


@pytest.fixture
def pending() -> list[Query]:
    return [
        _query("Q-1", "France", "Paris", minutes=0),
        _query("Q-2", "Italy", "Rome", minutes=1),
        _query("Q-3", "Spain", agent_id="AG-7", minutes=2),
    ]


@pytest.fixture
def query_repo(pending) -> FakeQueryRepo:
    return FakeQueryRepo(pending)


@pytest.fixture
def staff_repo(roster) -> FakeStaffRepo:
    return FakeStaffRepo(roster)


@pytest.fixture
def rule_repo() -> FakeRuleRepo:
    return FakeRuleRepo()


@pytest.fixture
def assignment_repo() -> FakeAssignmentRepo:
    return FakeAssignmentRepo()


@pytest.fixture
def command_lock() -> CommandLock:
    return CommandLock()
