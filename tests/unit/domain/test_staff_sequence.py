"""Tests for StaffSequencer."""

import pytest

from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.errors import StaffNotFoundError
from assignment_desk.domain.policies.staff_sequence import StaffSequencer


def _sequencer(*orders: int | None) -> StaffSequencer:
    staff = {
        i: StaffMember(id=i, name=f"S{i}", sequence_order=order)
        for i, order in enumerate(orders, start=1)
    }
    return StaffSequencer(staff)


def _ids(sequencer: StaffSequencer) -> list[int]:
    return [s.id for s in sequencer.sequence()]


def test_sequence_excludes_unsequenced():
    seq = _sequencer(2, None, 1)
    assert _ids(seq) == [3, 1]


def test_add_appends_at_end():
    seq = _sequencer(1, 2, None)
    assert seq.add_to_sequence(3) == 3
    assert _ids(seq) == [1, 2, 3]


def test_add_to_empty_sequence_starts_at_one():
    seq = _sequencer(None, None)
    assert seq.add_to_sequence(2) == 1


def test_add_is_idempotent():
    seq = _sequencer(1, 2)
    assert seq.add_to_sequence(1) == 1
    assert _ids(seq) == [1, 2]


def test_remove_compacts_orders():
    seq = _sequencer(1, 2, 3, 4)
    changed = seq.remove_from_sequence(2)
    assert _ids(seq) == [1, 3, 4]
    assert [s.sequence_order for s in seq.sequence()] == [1, 2, 3]
    assert {s.id for s in changed} == {2, 3, 4}
    assert seq.get(2).sequence_order is None


def test_remove_unsequenced_is_noop():
    seq = _sequencer(1, None)
    assert seq.remove_from_sequence(2) == []


def test_move_up_swaps_with_previous():
    seq = _sequencer(1, 2, 3)
    changed = seq.move_up(3)
    assert _ids(seq) == [1, 3, 2]
    assert {s.id for s in changed} == {2, 3}


def test_move_down_swaps_with_next():
    seq = _sequencer(1, 2, 3)
    seq.move_down(1)
    assert _ids(seq) == [2, 1, 3]


def test_move_at_boundaries_is_noop():
    seq = _sequencer(1, 2, 3)
    assert seq.move_up(1) == []
    assert seq.move_down(3) == []
    assert _ids(seq) == [1, 2, 3]


def test_move_unsequenced_is_noop():
    seq = _sequencer(1, None)
    assert seq.move_up(2) == []


def test_gapped_orders_are_renumbered_on_move():
    seq = _sequencer(10, 20, 30)
    seq.move_up(2)
    assert [(s.id, s.sequence_order) for s in seq.sequence()] == [(2, 1), (1, 2), (3, 3)]


def test_set_auto_assign_returns_previous():
    seq = _sequencer(1)
    assert seq.set_auto_assign(1, False) is True
    assert seq.get(1).auto_assign_enabled is False


def test_sequence_edits_never_touch_load():
    seq = _sequencer(1, 2)
    seq.get(1).assigned = 3
    seq.move_down(1)
    seq.remove_from_sequence(1)
    assert seq.get(1).assigned == 3


def test_unknown_staff_raises():
    with pytest.raises(StaffNotFoundError):
        _sequencer(1).add_to_sequence(42)
