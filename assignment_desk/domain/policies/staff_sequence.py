"""StaffSequencer — maintains the ordered fallback list used by round-robin.

Orders are kept contiguous from 1. Editing the sequence never assigns work
and never touches ``assigned``.
"""

from __future__ import annotations

from collections.abc import Mapping

from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.errors import StaffNotFoundError
from assignment_desk.domain.policies.round_robin import sequence_key


class StaffSequencer:
    def __init__(self, staff: Mapping[int, StaffMember]):
        self._staff = staff

    def get(self, staff_id: int) -> StaffMember:
        staff = self._staff.get(staff_id)
        if staff is None:
            raise StaffNotFoundError(staff_id)
        return staff

    def sequence(self) -> list[StaffMember]:
        return sorted(
            (s for s in self._staff.values() if s.is_sequenced()),
            key=sequence_key,
        )

    def _renumber(self, ordered: list[StaffMember]) -> list[StaffMember]:
        """Rewrite orders as 1..n; return the members whose order changed."""
        changed = []
        for position, staff in enumerate(ordered, start=1):
            if staff.sequence_order != position:
                staff.sequence_order = position
                changed.append(staff)
        return changed

    def add_to_sequence(self, staff_id: int) -> int:
        """Append a staff member to the end of the sequence and return its order."""
        staff = self.get(staff_id)
        if staff.is_sequenced():
            return staff.sequence_order
        current = [s.sequence_order for s in self.sequence()]
        staff.sequence_order = max(current, default=0) + 1
        return staff.sequence_order

    def remove_from_sequence(self, staff_id: int) -> list[StaffMember]:
        """Drop a staff member from the sequence and compact the rest.

        Returns every member whose order changed, the removed one included.
        """
        staff = self.get(staff_id)
        if not staff.is_sequenced():
            return []
        staff.sequence_order = None
        return [staff, *self._renumber(self.sequence())]

    def _swap(self, staff_id: int, offset: int) -> list[StaffMember]:
        staff = self.get(staff_id)
        ordered = self.sequence()
        if staff not in ordered:
            return []
        index = ordered.index(staff)
        target = index + offset
        if target < 0 or target >= len(ordered):
            return []
        ordered[index], ordered[target] = ordered[target], ordered[index]
        return self._renumber(ordered)

    def move_up(self, staff_id: int) -> list[StaffMember]:
        return self._swap(staff_id, -1)

    def move_down(self, staff_id: int) -> list[StaffMember]:
        return self._swap(staff_id, 1)

    def set_auto_assign(self, staff_id: int, enabled: bool) -> bool:
        """Toggle round-robin eligibility and return the previous value."""
        staff = self.get(staff_id)
        previous = staff.auto_assign_enabled
        staff.auto_assign_enabled = enabled
        return previous
