"""Assignment decision and batch outcome — the results of routing a query."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from assignment_desk.domain.value_objects.enums import OutcomeStatus, RuleType

MANUAL_REASON = "Manual"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AssignmentDecision:
    query_id: str
    staff_id: int
    rule_type: RuleType | None
    reason: str
    capacity_exceeded: bool = False
    previous_staff_id: int | None = None
    decided_at: datetime = field(default_factory=_utcnow)
    id: int | None = None

    @property
    def is_manual(self) -> bool:
        return self.rule_type is None

    @property
    def is_reassignment(self) -> bool:
        return self.previous_staff_id is not None


@dataclass
class AssignmentOutcome:
    """What happened to one query during a bulk auto-assignment."""

    query_id: str
    status: OutcomeStatus
    decision: AssignmentDecision | None = None
    detail: str | None = None
