"""Tests for the workload summary."""

from assignment_desk.domain.entities.query import Query
from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.policies.workload import load_band, summarize_workload
from assignment_desk.domain.value_objects.destination import Destination, PaxDetails
from assignment_desk.domain.value_objects.enums import QueryStatus


def test_load_bands():
    assert load_band(0) == "low"
    assert load_band(69.9) == "low"
    assert load_band(70) == "medium"
    assert load_band(90) == "high"
    assert load_band(120) == "high"


def test_summary_counts_and_average():
    queries = [
        Query(id="Q-1", destination=Destination("France"), pax=PaxDetails(adults=6)),
        Query(id="Q-2", destination=Destination("France")),
        Query(id="Q-3", destination=Destination("France"), status=QueryStatus.ASSIGNED, assigned_to=1),
    ]
    roster = [
        StaffMember(id=2, name="B", assigned=9, workload_capacity=10),
        StaffMember(id=1, name="A", assigned=1, workload_capacity=2),
        StaffMember(id=3, name="Off", active=False, assigned=0),
    ]

    summary = summarize_workload(queries, roster)

    assert summary.total_unassigned == 2
    assert summary.high_priority_unassigned == 1
    assert summary.available_staff == 2
    assert summary.avg_workload_pct == 70
    assert [(s.staff_id, s.utilization_pct, s.band) for s in summary.staff] == [
        (1, 50, "low"),
        (2, 90, "high"),
    ]


def test_summary_empty_roster():
    summary = summarize_workload([], [])
    assert summary.avg_workload_pct == 0
    assert summary.staff == []
