"""Staff endpoints — roster and round-robin sequence management."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from assignment_desk.application.ports.staff_repo import StaffRepository
from assignment_desk.application.use_cases.manage_sequence import ManageSequenceUseCase
from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.errors import NotFoundError
from assignment_desk.infrastructure.api.dependencies import (
    get_manage_sequence_uc,
    get_staff_repo,
)
from assignment_desk.infrastructure.api.serializers import serialize_staff

router = APIRouter(prefix="/staff", tags=["staff"])


class AutoAssignToggleRequest(BaseModel):
    enabled: bool


def _sequence_response(sequence: list[StaffMember]) -> dict:
    return {
        "total": len(sequence),
        "sequence": [serialize_staff(s) for s in sequence],
    }


@router.get("")
async def list_staff(staff_repo: StaffRepository = Depends(get_staff_repo)):
    """All staff members with their current load."""
    roster = await staff_repo.get_all()
    return {
        "total": len(roster),
        "staff": [serialize_staff(s) for s in roster],
    }


@router.get("/sequence")
async def get_sequence(seq_uc: ManageSequenceUseCase = Depends(get_manage_sequence_uc)):
    return _sequence_response(await seq_uc.list_sequence())


@router.post("/sequence/{staff_id}")
async def add_to_sequence(
    staff_id: int,
    seq_uc: ManageSequenceUseCase = Depends(get_manage_sequence_uc),
):
    """Append a staff member to the end of the sequence."""
    try:
        sequence = await seq_uc.add(staff_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _sequence_response(sequence)


@router.delete("/sequence/{staff_id}")
async def remove_from_sequence(
    staff_id: int,
    seq_uc: ManageSequenceUseCase = Depends(get_manage_sequence_uc),
):
    try:
        sequence = await seq_uc.remove(staff_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _sequence_response(sequence)


@router.post("/sequence/{staff_id}/up")
async def move_up(
    staff_id: int,
    seq_uc: ManageSequenceUseCase = Depends(get_manage_sequence_uc),
):
    try:
        sequence = await seq_uc.move_up(staff_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _sequence_response(sequence)


@router.post("/sequence/{staff_id}/down")
async def move_down(
    staff_id: int,
    seq_uc: ManageSequenceUseCase = Depends(get_manage_sequence_uc),
):
    try:
        sequence = await seq_uc.move_down(staff_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _sequence_response(sequence)


@router.patch("/{staff_id}/auto-assign")
async def set_auto_assign(
    staff_id: int,
    body: AutoAssignToggleRequest,
    seq_uc: ManageSequenceUseCase = Depends(get_manage_sequence_uc),
):
    """Include or exclude a staff member from round-robin picks."""
    try:
        staff = await seq_uc.set_auto_assign(staff_id, body.enabled)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return serialize_staff(staff)
