"""RoundRobinPolicy — deterministic pick along the staff sequence."""

from __future__ import annotations

from assignment_desk.domain.entities.staff_member import StaffMember


def sequence_key(staff: StaffMember) -> tuple[int, int, int]:
    """Sort key: sequenced staff by order, unsequenced last, then by id."""
    if staff.sequence_order is None:
        return (1, 0, staff.id)
    return (0, staff.sequence_order, staff.id)


def order_by_sequence(staff: list[StaffMember]) -> list[StaffMember]:
    return sorted(staff, key=sequence_key)


def pick_next(candidates: list[StaffMember]) -> StaffMember:
    """Pick the first staff member in sequence who still has spare capacity.

    1. Sort candidates by (sequence_order ASC with unset last, id ASC).
    2. Return the first one with ``assigned < workload_capacity``.
    3. If everyone is at capacity, return the first in sequence anyway.

    Raises:
        ValueError: if candidates list is empty.
    """
    if not candidates:
        raise ValueError("Cannot pick from an empty candidate list")

    ordered = order_by_sequence(candidates)
    for staff in ordered:
        if not staff.is_at_capacity():
            return staff
    return ordered[0]
