"""RuleCatalog — ordered, toggleable list of assignment rules."""

from __future__ import annotations

from collections.abc import Iterable

from assignment_desk.domain.entities.assignment_rule import AssignmentRule
from assignment_desk.domain.errors import RuleNotFoundError
from assignment_desk.domain.value_objects.enums import RuleType


def default_rules() -> list[AssignmentRule]:
    """The rule hierarchy shipped with a fresh installation."""
    return [
        AssignmentRule(
            id=1, name="Agent-Staff Relationship",
            rule_type=RuleType.AGENT_STAFF_RELATIONSHIP, priority=1, enabled=True,
        ),
        AssignmentRule(
            id=2, name="Destination Expertise Match",
            rule_type=RuleType.EXPERTISE_MATCH, priority=2, enabled=True,
        ),
        AssignmentRule(
            id=3, name="Workload Balance",
            rule_type=RuleType.WORKLOAD_BALANCE, priority=3, enabled=True,
        ),
        AssignmentRule(
            id=4, name="Round Robin Assignment",
            rule_type=RuleType.ROUND_ROBIN, priority=4, enabled=False,
        ),
    ]


class RuleCatalog:
    """In-memory view over the configured rules.

    Duplicate rule types are accepted as-is; the matcher simply reaches the
    first one by priority before any later duplicate.
    """

    def __init__(self, rules: Iterable[AssignmentRule]):
        self._rules: list[AssignmentRule] = list(rules)

    @classmethod
    def default(cls) -> RuleCatalog:
        return cls(default_rules())

    def all(self) -> list[AssignmentRule]:
        # sorted() is stable: equal priorities keep their configured order
        return sorted(self._rules, key=lambda r: r.priority)

    def get(self, rule_id: int) -> AssignmentRule:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        raise RuleNotFoundError(rule_id)

    def list_enabled_by_priority(self) -> list[AssignmentRule]:
        return [r for r in self.all() if r.enabled]

    def set_enabled(self, rule_id: int, enabled: bool) -> bool:
        """Toggle a rule and return its previous enabled value."""
        rule = self.get(rule_id)
        previous = rule.enabled
        rule.enabled = enabled
        return previous
