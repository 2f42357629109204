"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assignment_desk.adapters.persistence.database import get_session
from assignment_desk.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlQueryRepository,
    SqlRuleRepository,
    SqlStaffRepository,
)
from assignment_desk.application.command_lock import CommandLock
from assignment_desk.application.use_cases.assign_query import (
    AssignQueryUseCase,
    QueryLifecycleUseCase,
    RecommendStaffUseCase,
)
from assignment_desk.application.use_cases.auto_assign import AutoAssignUseCase
from assignment_desk.application.use_cases.manage_rules import ManageRulesUseCase
from assignment_desk.application.use_cases.manage_sequence import ManageSequenceUseCase
from assignment_desk.config import settings


# One lock registry per process; commands for a tenant run one at a time and
# commit before the next one starts.
_command_lock = CommandLock()


def get_query_repo(session: AsyncSession = Depends(get_session)) -> SqlQueryRepository:
    return SqlQueryRepository(session)


def get_staff_repo(session: AsyncSession = Depends(get_session)) -> SqlStaffRepository:
    return SqlStaffRepository(session)


def get_rule_repo(session: AsyncSession = Depends(get_session)) -> SqlRuleRepository:
    return SqlRuleRepository(session)


def get_assignment_repo(session: AsyncSession = Depends(get_session)) -> SqlAssignmentRepository:
    return SqlAssignmentRepository(session)


def get_assign_query_uc(
    session: AsyncSession = Depends(get_session),
) -> AssignQueryUseCase:
    return AssignQueryUseCase(
        query_repo=SqlQueryRepository(session),
        staff_repo=SqlStaffRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
        command_lock=_command_lock,
        tenant_id=settings.tenant_id,
        commit=session.commit,
    )


def get_recommend_uc(
    session: AsyncSession = Depends(get_session),
) -> RecommendStaffUseCase:
    return RecommendStaffUseCase(
        query_repo=SqlQueryRepository(session),
        staff_repo=SqlStaffRepository(session),
        rule_repo=SqlRuleRepository(session),
    )


def get_lifecycle_uc(
    session: AsyncSession = Depends(get_session),
) -> QueryLifecycleUseCase:
    return QueryLifecycleUseCase(
        query_repo=SqlQueryRepository(session),
        staff_repo=SqlStaffRepository(session),
        command_lock=_command_lock,
        tenant_id=settings.tenant_id,
        commit=session.commit,
    )


def get_auto_assign_uc(
    session: AsyncSession = Depends(get_session),
) -> AutoAssignUseCase:
    return AutoAssignUseCase(
        query_repo=SqlQueryRepository(session),
        staff_repo=SqlStaffRepository(session),
        rule_repo=SqlRuleRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
        command_lock=_command_lock,
        tenant_id=settings.tenant_id,
        commit=session.commit,
    )


def get_manage_rules_uc(
    session: AsyncSession = Depends(get_session),
) -> ManageRulesUseCase:
    return ManageRulesUseCase(
        rule_repo=SqlRuleRepository(session),
        command_lock=_command_lock,
        tenant_id=settings.tenant_id,
        commit=session.commit,
    )


def get_manage_sequence_uc(
    session: AsyncSession = Depends(get_session),
) -> ManageSequenceUseCase:
    return ManageSequenceUseCase(
        staff_repo=SqlStaffRepository(session),
        command_lock=_command_lock,
        tenant_id=settings.tenant_id,
        commit=session.commit,
    )
