"""Matcher — pick the best staff member for a query by walking the rule hierarchy.

Each rule type maps to a pure strategy ``(query, roster) -> Candidate | None``.
Rules are evaluated in priority order and the first strategy that produces a
candidate wins. When no enabled rule produces one, the query has no eligible
staff and ``find_best_match`` returns ``None``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from assignment_desk.domain.entities.assignment_rule import AssignmentRule
from assignment_desk.domain.entities.query import Query
from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.policies.expertise import ExpertiseScore, score_expertise
from assignment_desk.domain.policies.round_robin import pick_next
from assignment_desk.domain.value_objects.enums import MatchType, RuleType

REASON_LABELS: dict[RuleType, str] = {
    RuleType.AGENT_STAFF_RELATIONSHIP: "Agent–Staff Relationship",
    RuleType.EXPERTISE_MATCH: "Expertise Match",
    RuleType.WORKLOAD_BALANCE: "Workload Balance",
    RuleType.ROUND_ROBIN: "Round Robin",
}


@dataclass(frozen=True)
class Candidate:
    staff: StaffMember
    detail: str


@dataclass(frozen=True)
class MatchResult:
    """The chosen staff member and the rule that justified the choice."""

    staff: StaffMember
    rule_type: RuleType
    reason: str
    rule_id: int | None = None


@dataclass(frozen=True)
class StaffRecommendation:
    staff: StaffMember
    expertise: ExpertiseScore
    utilization: float
    at_capacity: bool

    @property
    def match_type(self) -> MatchType:
        return self.expertise.match_type


Strategy = Callable[[Query, Sequence[StaffMember]], "Candidate | None"]


# ─── Helpers ─────────────────────────────────────────────────────────


def _active(roster: Sequence[StaffMember]) -> list[StaffMember]:
    return [s for s in roster if s.active]


def _with_spare_capacity(
    candidates: list[StaffMember], active: list[StaffMember]
) -> list[StaffMember]:
    """Drop at-capacity candidates while anyone on the active roster has room."""
    if any(not s.is_at_capacity() for s in active):
        return [c for c in candidates if not c.is_at_capacity()]
    return candidates


def _load_text(staff: StaffMember) -> str:
    return f"{staff.assigned}/{staff.workload_capacity} ({staff.utilization():.0%})"


# ─── Strategies ──────────────────────────────────────────────────────


def match_agent_relationship(query: Query, roster: Sequence[StaffMember]) -> Candidate | None:
    if not query.agent_id:
        return None
    active = _active(roster)
    related = [s for s in active if s.has_relationship_with(query.agent_id)]
    related = _with_spare_capacity(related, active)
    if not related:
        return None

    chosen = min(related, key=lambda s: (s.assigned, s.id))
    agent = query.agent_name or query.agent_id
    return Candidate(chosen, f"{chosen.name} already works with agent {agent}")


def match_expertise(query: Query, roster: Sequence[StaffMember]) -> Candidate | None:
    active = _active(roster)
    eligible = _with_spare_capacity(active, active)

    scored = [(s, score_expertise(s, query.destination)) for s in eligible]
    scored = [(s, e) for s, e in scored if e.score > 0]
    if not scored:
        return None

    chosen, expertise = min(scored, key=lambda p: (-p[1].score, p[0].assigned, p[0].id))
    if expertise.country_hit:
        covered = query.destination.country
    else:
        covered = ", ".join(expertise.matched_cities)
    return Candidate(
        chosen,
        f"{chosen.name} covers {covered} (score {expertise.score:.2f})",
    )


def match_workload(query: Query, roster: Sequence[StaffMember]) -> Candidate | None:
    active = _active(roster)
    if not active:
        return None

    pool = [s for s in active if not s.is_at_capacity()]
    overloaded = not pool
    if overloaded:
        pool = active

    chosen = min(pool, key=lambda s: (s.utilization(), s.assigned, s.id))
    detail = f"{chosen.name} has the lightest load at {_load_text(chosen)}"
    if overloaded:
        detail += ", all staff at capacity"
    return Candidate(chosen, detail)


def match_round_robin(query: Query, roster: Sequence[StaffMember]) -> Candidate | None:
    pool = [s for s in roster if s.active and s.auto_assign_enabled]
    if not pool:
        return None

    chosen = pick_next(pool)
    if chosen.sequence_order is None:
        position = "unsequenced"
    else:
        position = f"#{chosen.sequence_order} in sequence"
    return Candidate(chosen, f"{chosen.name} is next ({position}, load {_load_text(chosen)})")


STRATEGIES: dict[RuleType, Strategy] = {
    RuleType.AGENT_STAFF_RELATIONSHIP: match_agent_relationship,
    RuleType.EXPERTISE_MATCH: match_expertise,
    RuleType.WORKLOAD_BALANCE: match_workload,
    RuleType.ROUND_ROBIN: match_round_robin,
}


# ─── Public API ──────────────────────────────────────────────────────


def find_best_match(
    query: Query,
    roster: Sequence[StaffMember],
    enabled_rules: Sequence[AssignmentRule],
) -> MatchResult | None:
    """Walk the enabled rules by priority and return the first match.

    Disabled rules are skipped even if passed in, so a raw catalog listing is
    safe to hand over.
    """
    for rule in sorted(enabled_rules, key=lambda r: r.priority):
        if not rule.enabled:
            continue
        candidate = STRATEGIES[rule.rule_type](query, roster)
        if candidate is None:
            continue
        return MatchResult(
            staff=candidate.staff,
            rule_type=rule.rule_type,
            reason=f"{REASON_LABELS[rule.rule_type]}: {candidate.detail}",
            rule_id=rule.id,
        )
    return None


def rank_candidates(query: Query, roster: Sequence[StaffMember]) -> list[StaffRecommendation]:
    """Rank every active staff member for the manual assignment dialog.

    Staff with spare capacity come first, then by expertise score (desc),
    current load and id.
    """
    recommendations = [
        StaffRecommendation(
            staff=s,
            expertise=score_expertise(s, query.destination),
            utilization=s.utilization(),
            at_capacity=s.is_at_capacity(),
        )
        for s in _active(roster)
    ]
    recommendations.sort(
        key=lambda r: (r.at_capacity, -r.expertise.score, r.staff.assigned, r.staff.id)
    )
    return recommendations
