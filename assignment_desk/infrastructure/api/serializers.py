"""Domain objects → API response dicts."""

from __future__ import annotations

from assignment_desk.domain.entities.assignment import AssignmentDecision
from assignment_desk.domain.entities.assignment_rule import AssignmentRule
from assignment_desk.domain.entities.query import Query
from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.policies.matcher import MatchResult, StaffRecommendation


def serialize_query(q: Query) -> dict:
    dates = q.travel_dates
    return {
        "id": q.id,
        "country": q.destination.country,
        "cities": list(q.destination.cities),
        "pax": {
            "adults": q.pax.adults,
            "children": q.pax.children,
            "infants": q.pax.infants,
            "total": q.pax.total,
        },
        "travel_from": dates.start.isoformat() if dates else None,
        "travel_to": dates.end.isoformat() if dates else None,
        "nights": q.nights(),
        "agent_id": q.agent_id,
        "agent_name": q.agent_name,
        "status": q.status.value,
        "assigned_to": q.assigned_to,
        "assignment_rule": q.assignment_rule.value if q.assignment_rule else None,
        "assignment_reason": q.assignment_reason,
        "high_priority": q.is_high_priority(),
        "created_at": q.created_at.isoformat() if q.created_at else None,
    }


def serialize_staff(s: StaffMember) -> dict:
    return {
        "id": s.id,
        "name": s.name,
        "role": s.role,
        "active": s.active,
        "expertise": sorted(s.expertise),
        "workload_capacity": s.workload_capacity,
        "assigned": s.assigned,
        "utilization": round(s.utilization(), 4),
        "at_capacity": s.is_at_capacity(),
        "auto_assign_enabled": s.auto_assign_enabled,
        "sequence_order": s.sequence_order,
        "agent_ids": sorted(s.agent_ids),
    }


def serialize_rule(r: AssignmentRule) -> dict:
    return {
        "id": r.id,
        "name": r.label,
        "rule_type": r.rule_type.value,
        "priority": r.priority,
        "enabled": r.enabled,
    }


def serialize_decision(d: AssignmentDecision) -> dict:
    return {
        "query_id": d.query_id,
        "staff_id": d.staff_id,
        "previous_staff_id": d.previous_staff_id,
        "rule_type": d.rule_type.value if d.rule_type else None,
        "reason": d.reason,
        "capacity_exceeded": d.capacity_exceeded,
        "decided_at": d.decided_at.isoformat(),
    }


def serialize_match(m: MatchResult | None) -> dict | None:
    if m is None:
        return None
    return {
        "staff_id": m.staff.id,
        "staff_name": m.staff.name,
        "rule_type": m.rule_type.value,
        "rule_id": m.rule_id,
        "reason": m.reason,
    }


def serialize_recommendation(r: StaffRecommendation) -> dict:
    return {
        "staff_id": r.staff.id,
        "staff_name": r.staff.name,
        "match_type": r.match_type.value,
        "expertise_score": r.expertise.score,
        "matched_cities": list(r.expertise.matched_cities),
        "assigned": r.staff.assigned,
        "workload_capacity": r.staff.workload_capacity,
        "utilization": round(r.utilization, 4),
        "at_capacity": r.at_capacity,
    }
