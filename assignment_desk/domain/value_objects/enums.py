"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class QueryStatus(str, Enum):
    NEW = "new"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class RuleType(str, Enum):
    AGENT_STAFF_RELATIONSHIP = "agent-staff-relationship"
    EXPERTISE_MATCH = "expertise-match"
    WORKLOAD_BALANCE = "workload-balance"
    ROUND_ROBIN = "round-robin"


class MatchType(str, Enum):
    PERFECT = "perfect"
    PARTIAL = "partial"
    NONE = "none"


class OutcomeStatus(str, Enum):
    ASSIGNED = "assigned"
    NO_MATCH = "no-match"
    SKIPPED = "skipped"


# Statuses that count towards a staff member's open workload
OPEN_STATUSES = frozenset({QueryStatus.ASSIGNED, QueryStatus.IN_PROGRESS})
