"""AssignmentRule entity — one configurable step of the matching hierarchy."""

from dataclasses import dataclass

from assignment_desk.domain.value_objects.enums import RuleType


@dataclass
class AssignmentRule:
    id: int
    rule_type: RuleType
    priority: int
    enabled: bool = True
    name: str | None = None

    @property
    def label(self) -> str:
        return self.name or self.rule_type.value
