"""Port interface for query (enquiry) persistence."""

from abc import ABC, abstractmethod

from assignment_desk.domain.entities.query import Query


class QueryRepository(ABC):
    @abstractmethod
    async def save(self, query: Query) -> Query:
        ...

    @abstractmethod
    async def get_by_id(self, query_id: str, for_update: bool = False) -> Query | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Query]:
        ...

    @abstractmethod
    async def get_pending(self, for_update: bool = False) -> list[Query]:
        """Return ``new`` queries in arrival order.

        With ``for_update`` the rows stay locked until the transaction ends.
        """
        ...

    @abstractmethod
    async def update(self, query: Query) -> Query:
        """Persist status and assignment metadata."""
        ...
