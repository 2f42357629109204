"""Port interface for assignment decision history."""

from abc import ABC, abstractmethod

from assignment_desk.domain.entities.assignment import AssignmentDecision


class AssignmentRepository(ABC):
    @abstractmethod
    async def save(self, decision: AssignmentDecision) -> AssignmentDecision:
        ...

    @abstractmethod
    async def get_by_query(self, query_id: str) -> list[AssignmentDecision]:
        """All decisions for a query, oldest first; the last one is current."""
        ...

    @abstractmethod
    async def get_all(self) -> list[AssignmentDecision]:
        ...
