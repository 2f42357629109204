"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from assignment_desk.adapters.persistence.models import (
    AgentStaffRelationModel,
    AssignmentModel,
    AssignmentRuleModel,
    QueryModel,
    StaffModel,
)
from assignment_desk.application.ports.assignment_repo import AssignmentRepository
from assignment_desk.application.ports.query_repo import QueryRepository
from assignment_desk.application.ports.rule_repo import RuleRepository
from assignment_desk.application.ports.staff_repo import StaffRepository
from assignment_desk.domain.entities.assignment import AssignmentDecision
from assignment_desk.domain.entities.assignment_rule import AssignmentRule
from assignment_desk.domain.entities.query import Query
from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.value_objects.destination import (
    Destination,
    PaxDetails,
    TravelDates,
)
from assignment_desk.domain.value_objects.enums import QueryStatus, RuleType

# ─── Mappers ─────────────────────────────────────────────────────────


def _staff_to_domain(m: StaffModel) -> StaffMember:
    return StaffMember(
        id=m.id,
        name=m.name,
        role=m.role,
        active=m.active,
        expertise=set(m.expertise) if m.expertise else set(),
        workload_capacity=m.workload_capacity,
        assigned=m.assigned,
        auto_assign_enabled=m.auto_assign_enabled,
        sequence_order=m.sequence_order,
        agent_ids={link.agent_id for link in m.agent_links},
    )


def _query_to_domain(m: QueryModel) -> Query:
    dates = None
    if m.travel_from is not None and m.travel_to is not None:
        dates = TravelDates(start=m.travel_from, end=m.travel_to)
    return Query(
        id=m.id,
        destination=Destination(country=m.country, cities=tuple(m.cities or ())),
        pax=PaxDetails(adults=m.adults, children=m.children, infants=m.infants),
        travel_dates=dates,
        trip_duration=m.trip_duration,
        agent_id=m.agent_id,
        agent_name=m.agent_name,
        status=QueryStatus(m.status),
        assigned_to=m.assigned_to,
        assignment_rule=RuleType(m.assignment_rule) if m.assignment_rule else None,
        assignment_reason=m.assignment_reason,
        created_at=m.created_at,
    )


def _rule_to_domain(m: AssignmentRuleModel) -> AssignmentRule:
    return AssignmentRule(
        id=m.id,
        name=m.name,
        rule_type=RuleType(m.rule_type),
        priority=m.priority,
        enabled=m.enabled,
    )


def _assignment_to_domain(m: AssignmentModel) -> AssignmentDecision:
    return AssignmentDecision(
        id=m.id,
        query_id=m.query_id,
        staff_id=m.staff_id,
        rule_type=RuleType(m.rule_type) if m.rule_type else None,
        reason=m.reason,
        capacity_exceeded=m.capacity_exceeded,
        previous_staff_id=m.previous_staff_id,
        decided_at=m.assigned_at,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlStaffRepository(StaffRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, staff: StaffMember) -> StaffMember:
        m = StaffModel(
            name=staff.name,
            role=staff.role,
            active=staff.active,
            expertise=sorted(staff.expertise),
            workload_capacity=staff.workload_capacity,
            assigned=staff.assigned,
            auto_assign_enabled=staff.auto_assign_enabled,
            sequence_order=staff.sequence_order,
        )
        self._s.add(m)
        await self._s.flush()
        staff.id = m.id
        for agent_id in sorted(staff.agent_ids):
            await self.add_agent_relationship(agent_id, m.id)
        return staff

    async def get_by_id(self, staff_id: int) -> StaffMember | None:
        m = await self._s.get(StaffModel, staff_id)
        return _staff_to_domain(m) if m else None

    async def get_all(self, for_update: bool = False) -> list[StaffMember]:
        stmt = select(StaffModel).order_by(StaffModel.id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self._s.execute(stmt)
        return [_staff_to_domain(m) for m in result.scalars()]

    async def update(self, staff: StaffMember) -> StaffMember:
        await self._s.execute(
            update(StaffModel)
            .where(StaffModel.id == staff.id)
            .values(
                active=staff.active,
                assigned=staff.assigned,
                auto_assign_enabled=staff.auto_assign_enabled,
                sequence_order=staff.sequence_order,
            )
        )
        await self._s.flush()
        return staff

    async def add_agent_relationship(
        self, agent_id: str, staff_id: int, is_primary: bool = False
    ) -> None:
        existing = await self._s.execute(
            select(AgentStaffRelationModel).where(
                AgentStaffRelationModel.agent_id == agent_id,
                AgentStaffRelationModel.staff_id == staff_id,
            )
        )
        if existing.scalar_one_or_none():
            return
        self._s.add(AgentStaffRelationModel(
            agent_id=agent_id, staff_id=staff_id, is_primary=is_primary,
        ))
        await self._s.flush()


class SqlQueryRepository(QueryRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, query: Query) -> Query:
        dates = query.travel_dates
        m = QueryModel(
            id=query.id,
            country=query.destination.country,
            cities=list(query.destination.cities),
            adults=query.pax.adults,
            children=query.pax.children,
            infants=query.pax.infants,
            travel_from=dates.start if dates else None,
            travel_to=dates.end if dates else None,
            trip_duration=query.trip_duration,
            agent_id=query.agent_id,
            agent_name=query.agent_name,
            status=query.status.value,
            assigned_to=query.assigned_to,
            assignment_rule=query.assignment_rule.value if query.assignment_rule else None,
            assignment_reason=query.assignment_reason,
        )
        self._s.add(m)
        await self._s.flush()
        return query

    async def get_by_id(self, query_id: str, for_update: bool = False) -> Query | None:
        stmt = select(QueryModel).where(QueryModel.id == query_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        m = (await self._s.execute(stmt)).scalar_one_or_none()
        return _query_to_domain(m) if m else None

    async def get_all(self) -> list[Query]:
        result = await self._s.execute(
            select(QueryModel).order_by(QueryModel.created_at, QueryModel.id)
        )
        return [_query_to_domain(m) for m in result.scalars()]

    async def get_pending(self, for_update: bool = False) -> list[Query]:
        stmt = (
            select(QueryModel)
            .where(QueryModel.status == QueryStatus.NEW.value)
            .order_by(QueryModel.created_at, QueryModel.id)
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self._s.execute(stmt)
        return [_query_to_domain(m) for m in result.scalars()]

    async def update(self, query: Query) -> Query:
        await self._s.execute(
            update(QueryModel)
            .where(QueryModel.id == query.id)
            .values(
                status=query.status.value,
                assigned_to=query.assigned_to,
                assignment_rule=query.assignment_rule.value if query.assignment_rule else None,
                assignment_reason=query.assignment_reason,
            )
        )
        await self._s.flush()
        return query


class SqlRuleRepository(RuleRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_all(self) -> list[AssignmentRule]:
        result = await self._s.execute(
            select(AssignmentRuleModel).order_by(AssignmentRuleModel.priority, AssignmentRuleModel.id)
        )
        return [_rule_to_domain(m) for m in result.scalars()]

    async def update(self, rule: AssignmentRule) -> AssignmentRule:
        await self._s.execute(
            update(AssignmentRuleModel)
            .where(AssignmentRuleModel.id == rule.id)
            .values(enabled=rule.enabled, priority=rule.priority)
        )
        await self._s.flush()
        return rule

    async def save(self, rule: AssignmentRule) -> AssignmentRule:
        m = AssignmentRuleModel(
            name=rule.name,
            rule_type=rule.rule_type.value,
            priority=rule.priority,
            enabled=rule.enabled,
        )
        self._s.add(m)
        await self._s.flush()
        rule.id = m.id
        return rule


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, decision: AssignmentDecision) -> AssignmentDecision:
        m = AssignmentModel(
            query_id=decision.query_id,
            staff_id=decision.staff_id,
            previous_staff_id=decision.previous_staff_id,
            rule_type=decision.rule_type.value if decision.rule_type else None,
            reason=decision.reason,
            capacity_exceeded=decision.capacity_exceeded,
            assigned_at=decision.decided_at,
        )
        self._s.add(m)
        await self._s.flush()
        decision.id = m.id
        return decision

    async def get_by_query(self, query_id: str) -> list[AssignmentDecision]:
        result = await self._s.execute(
            select(AssignmentModel)
            .where(AssignmentModel.query_id == query_id)
            .order_by(AssignmentModel.assigned_at, AssignmentModel.id)
        )
        return [_assignment_to_domain(m) for m in result.scalars()]

    async def get_all(self) -> list[AssignmentDecision]:
        result = await self._s.execute(select(AssignmentModel).order_by(AssignmentModel.id))
        return [_assignment_to_domain(m) for m in result.scalars()]
