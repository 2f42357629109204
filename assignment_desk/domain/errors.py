"""Typed domain errors for the assignment desk.

No-eligible-staff is deliberately absent: the matcher reports it as a
``None`` result and the executor as a ``no-match`` outcome.
"""

from __future__ import annotations


class AssignmentDeskError(Exception):
    """Base error for the assignment domain."""


class NotFoundError(AssignmentDeskError):
    entity = "Entity"

    def __init__(self, entity_id: object):
        self.entity_id = entity_id
        super().__init__(f"{self.entity} {entity_id!r} not found")


class QueryNotFoundError(NotFoundError):
    entity = "Query"


class StaffNotFoundError(NotFoundError):
    entity = "Staff member"


class RuleNotFoundError(NotFoundError):
    entity = "Assignment rule"


class StaffInactiveError(AssignmentDeskError):
    def __init__(self, staff_id: int):
        self.staff_id = staff_id
        super().__init__(f"Staff member {staff_id} is inactive and cannot take assignments")


class InvalidTransitionError(AssignmentDeskError):
    def __init__(self, query_id: str, current: str, target: str):
        self.query_id = query_id
        self.current = current
        self.target = target
        super().__init__(f"Query {query_id}: cannot move from '{current}' to '{target}'")
