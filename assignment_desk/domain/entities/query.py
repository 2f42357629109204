"""Query entity — a customer travel enquiry waiting to be handled."""

from dataclasses import dataclass, field
from datetime import datetime

from assignment_desk.domain.value_objects.destination import (
    Destination,
    PaxDetails,
    TravelDates,
)
from assignment_desk.domain.value_objects.enums import (
    OPEN_STATUSES,
    QueryStatus,
    RuleType,
)

HIGH_PRIORITY_PAX = 6


@dataclass
class Query:
    id: str
    destination: Destination
    pax: PaxDetails = field(default_factory=PaxDetails)
    travel_dates: TravelDates | None = None
    trip_duration: int | None = None
    agent_id: str | None = None
    agent_name: str | None = None
    status: QueryStatus = QueryStatus.NEW
    assigned_to: int | None = None
    assignment_rule: RuleType | None = None
    assignment_reason: str | None = None
    created_at: datetime | None = None

    def is_new(self) -> bool:
        return self.status == QueryStatus.NEW

    def is_open(self) -> bool:
        """Assigned and not yet completed — counted in the staff workload."""
        return self.status in OPEN_STATUSES and self.assigned_to is not None

    def is_high_priority(self) -> bool:
        return self.pax.total >= HIGH_PRIORITY_PAX

    def nights(self) -> int | None:
        if self.trip_duration is not None:
            return self.trip_duration
        if self.travel_dates is not None:
            return self.travel_dates.nights
        return None
