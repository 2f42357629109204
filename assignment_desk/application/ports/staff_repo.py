"""Port interface for staff roster persistence."""

from abc import ABC, abstractmethod

from assignment_desk.domain.entities.staff_member import StaffMember


class StaffRepository(ABC):
    @abstractmethod
    async def save(self, staff: StaffMember) -> StaffMember:
        ...

    @abstractmethod
    async def get_by_id(self, staff_id: int) -> StaffMember | None:
        ...

    @abstractmethod
    async def get_all(self, for_update: bool = False) -> list[StaffMember]:
        """Return the full roster ordered by id.

        With ``for_update`` the rows stay locked until the transaction ends.
        """
        ...

    @abstractmethod
    async def update(self, staff: StaffMember) -> StaffMember:
        """Persist load, activity and sequence fields."""
        ...

    @abstractmethod
    async def add_agent_relationship(
        self, agent_id: str, staff_id: int, is_primary: bool = False
    ) -> None:
        ...
