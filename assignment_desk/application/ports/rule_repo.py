"""Port interface for assignment rule configuration."""

from abc import ABC, abstractmethod

from assignment_desk.domain.entities.assignment_rule import AssignmentRule


class RuleRepository(ABC):
    @abstractmethod
    async def get_all(self) -> list[AssignmentRule]:
        ...

    @abstractmethod
    async def update(self, rule: AssignmentRule) -> AssignmentRule:
        ...

    @abstractmethod
    async def save(self, rule: AssignmentRule) -> AssignmentRule:
        ...
