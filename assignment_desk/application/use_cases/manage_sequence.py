"""Staff sequence use cases — edit the round-robin fallback order."""

from __future__ import annotations

import logging

from assignment_desk.application.command_lock import CommandLock, Commit
from assignment_desk.application.ports.staff_repo import StaffRepository
from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.policies.staff_sequence import StaffSequencer

logger = logging.getLogger(__name__)


class ManageSequenceUseCase:
    def __init__(
        self,
        staff_repo: StaffRepository,
        command_lock: CommandLock,
        tenant_id: str = "default",
        commit: Commit | None = None,
    ):
        self._staff = staff_repo
        self._lock = command_lock
        self._tenant = tenant_id
        self._commit = commit

    async def _sequencer(self, for_update: bool = False) -> StaffSequencer:
        roster = await self._staff.get_all(for_update=for_update)
        return StaffSequencer({s.id: s for s in roster})

    async def _save(self, changed: list[StaffMember]) -> None:
        for staff in changed:
            await self._staff.update(staff)

    async def list_sequence(self) -> list[StaffMember]:
        return (await self._sequencer()).sequence()

    async def add(self, staff_id: int) -> list[StaffMember]:
        async with self._lock.hold(self._tenant, self._commit):
            sequencer = await self._sequencer(for_update=True)
            order = sequencer.add_to_sequence(staff_id)
            await self._save([sequencer.get(staff_id)])
        logger.info("Staff %s added to sequence at #%d", staff_id, order)
        return sequencer.sequence()

    async def remove(self, staff_id: int) -> list[StaffMember]:
        async with self._lock.hold(self._tenant, self._commit):
            sequencer = await self._sequencer(for_update=True)
            await self._save(sequencer.remove_from_sequence(staff_id))
        logger.info("Staff %s removed from sequence", staff_id)
        return sequencer.sequence()

    async def move_up(self, staff_id: int) -> list[StaffMember]:
        async with self._lock.hold(self._tenant, self._commit):
            sequencer = await self._sequencer(for_update=True)
            await self._save(sequencer.move_up(staff_id))
        return sequencer.sequence()

    async def move_down(self, staff_id: int) -> list[StaffMember]:
        async with self._lock.hold(self._tenant, self._commit):
            sequencer = await self._sequencer(for_update=True)
            await self._save(sequencer.move_down(staff_id))
        return sequencer.sequence()

    async def set_auto_assign(self, staff_id: int, enabled: bool) -> StaffMember:
        async with self._lock.hold(self._tenant, self._commit):
            sequencer = await self._sequencer(for_update=True)
            sequencer.set_auto_assign(staff_id, enabled)
            staff = sequencer.get(staff_id)
            await self._staff.update(staff)
        logger.info("Staff %s: auto-assign %s", staff_id, "on" if enabled else "off")
        return staff
