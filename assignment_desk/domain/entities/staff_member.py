"""StaffMember entity — an employee who handles enquiries."""

from dataclasses import dataclass, field

from assignment_desk.domain.value_objects.destination import normalize_term


@dataclass
class StaffMember:
    id: int
    name: str
    role: str = "Travel Consultant"
    active: bool = True
    expertise: set[str] = field(default_factory=set)
    workload_capacity: int = 10
    assigned: int = 0
    auto_assign_enabled: bool = True
    sequence_order: int | None = None
    agent_ids: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.workload_capacity <= 0:
            raise ValueError(
                f"Staff {self.id}: workload capacity must be positive, got {self.workload_capacity}"
            )
        if self.assigned < 0:
            raise ValueError(f"Staff {self.id}: assigned count cannot be negative")

    def expertise_terms(self) -> set[str]:
        return {normalize_term(e) for e in self.expertise if e and e.strip()}

    def has_expertise(self, term: str) -> bool:
        return normalize_term(term) in self.expertise_terms()

    def has_relationship_with(self, agent_id: str | None) -> bool:
        if not agent_id:
            return False
        return agent_id in self.agent_ids

    def utilization(self) -> float:
        return self.assigned / self.workload_capacity

    def is_at_capacity(self) -> bool:
        return self.assigned >= self.workload_capacity

    def is_sequenced(self) -> bool:
        return self.sequence_order is not None
