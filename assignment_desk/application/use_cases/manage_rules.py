"""Rule catalog use cases — list and toggle assignment rules."""

from __future__ import annotations

import logging

from assignment_desk.application.command_lock import CommandLock, Commit
from assignment_desk.application.ports.rule_repo import RuleRepository
from assignment_desk.domain.entities.assignment_rule import AssignmentRule
from assignment_desk.domain.policies.rule_catalog import RuleCatalog

logger = logging.getLogger(__name__)


class ManageRulesUseCase:
    def __init__(
        self,
        rule_repo: RuleRepository,
        command_lock: CommandLock,
        tenant_id: str = "default",
        commit: Commit | None = None,
    ):
        self._rules = rule_repo
        self._lock = command_lock
        self._tenant = tenant_id
        self._commit = commit

    async def list_rules(self) -> list[AssignmentRule]:
        return RuleCatalog(await self._rules.get_all()).all()

    async def set_enabled(self, rule_id: int, enabled: bool) -> tuple[AssignmentRule, bool]:
        """Toggle a rule. Returns the rule and its previous enabled value."""
        async with self._lock.hold(self._tenant, self._commit):
            catalog = RuleCatalog(await self._rules.get_all())
            previous = catalog.set_enabled(rule_id, enabled)
            rule = catalog.get(rule_id)
            if previous != enabled:
                await self._rules.update(rule)
        logger.info(
            "Rule %s (%s): enabled %s → %s",
            rule.id, rule.rule_type.value, previous, enabled,
        )
        return rule, previous
