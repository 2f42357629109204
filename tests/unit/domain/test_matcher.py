"""Tests for the Matcher — rule hierarchy evaluation and strategies."""

from assignment_desk.domain.entities.assignment_rule import AssignmentRule
from assignment_desk.domain.entities.query import Query
from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.policies.matcher import (
    find_best_match,
    match_agent_relationship,
    match_expertise,
    match_round_robin,
    match_workload,
    rank_candidates,
)
from assignment_desk.domain.policies.rule_catalog import RuleCatalog
from assignment_desk.domain.value_objects.destination import Destination
from assignment_desk.domain.value_objects.enums import MatchType, RuleType


def _rule(rule_type: RuleType, priority: int, enabled: bool = True, rule_id: int | None = None) -> AssignmentRule:
    return AssignmentRule(id=rule_id or priority, rule_type=rule_type, priority=priority, enabled=enabled)


def _query(country: str, *cities: str, agent_id: str | None = None) -> Query:
    return Query(id="Q-1", destination=Destination(country, cities), agent_id=agent_id)


def _staff_a_b() -> list[StaffMember]:
    return [
        StaffMember(id=1, name="A", expertise={"France"}, assigned=2, workload_capacity=5),
        StaffMember(id=2, name="B", expertise=set(), assigned=0, workload_capacity=5),
    ]


# ─── Hierarchy ───────────────────────────────────────────────────────


def test_expertise_beats_lower_load_when_it_has_priority():
    rules = [_rule(RuleType.EXPERTISE_MATCH, 1), _rule(RuleType.WORKLOAD_BALANCE, 2)]
    result = find_best_match(_query("France"), _staff_a_b(), rules)
    assert result.staff.name == "A"
    assert result.rule_type == RuleType.EXPERTISE_MATCH


def test_falls_through_to_workload_when_nobody_has_expertise():
    rules = [_rule(RuleType.EXPERTISE_MATCH, 1), _rule(RuleType.WORKLOAD_BALANCE, 2)]
    result = find_best_match(_query("Japan"), _staff_a_b(), rules)
    assert result.staff.name == "B"
    assert result.rule_type == RuleType.WORKLOAD_BALANCE


def test_priority_order_not_list_order():
    rules = [_rule(RuleType.WORKLOAD_BALANCE, 2), _rule(RuleType.EXPERTISE_MATCH, 1)]
    result = find_best_match(_query("France"), _staff_a_b(), rules)
    assert result.rule_type == RuleType.EXPERTISE_MATCH


def test_workload_first_wins_over_expertise():
    rules = [_rule(RuleType.WORKLOAD_BALANCE, 1), _rule(RuleType.EXPERTISE_MATCH, 2)]
    result = find_best_match(_query("France"), _staff_a_b(), rules)
    assert result.staff.name == "B"
    assert result.rule_type == RuleType.WORKLOAD_BALANCE


def test_disabled_rules_are_skipped():
    rules = [_rule(RuleType.EXPERTISE_MATCH, 1, enabled=False), _rule(RuleType.WORKLOAD_BALANCE, 2)]
    result = find_best_match(_query("France"), _staff_a_b(), rules)
    assert result.rule_type == RuleType.WORKLOAD_BALANCE


def test_no_rules_returns_none():
    assert find_best_match(_query("France"), _staff_a_b(), []) is None


def test_empty_roster_returns_none():
    rules = RuleCatalog.default().list_enabled_by_priority()
    assert find_best_match(_query("France"), [], rules) is None


def test_only_inactive_staff_returns_none():
    roster = [StaffMember(id=1, name="A", active=False, expertise={"France"})]
    rules = RuleCatalog.default().list_enabled_by_priority()
    assert find_best_match(_query("France"), roster, rules) is None


def test_match_is_deterministic():
    rules = RuleCatalog.default().list_enabled_by_priority()
    roster = _staff_a_b()
    first = find_best_match(_query("Japan"), roster, rules)
    second = find_best_match(_query("Japan"), roster, rules)
    assert first == second


def test_reason_carries_rule_label_and_id():
    rules = [_rule(RuleType.EXPERTISE_MATCH, 1, rule_id=42)]
    result = find_best_match(_query("France"), _staff_a_b(), rules)
    assert result.reason.startswith("Expertise Match: A covers France")
    assert result.rule_id == 42


# ─── Strategies ──────────────────────────────────────────────────────


def test_relationship_picks_related_staff():
    roster = _staff_a_b()
    roster[0].agent_ids = {"AG-1"}
    candidate = match_agent_relationship(_query("Japan", agent_id="AG-1"), roster)
    assert candidate.staff.name == "A"


def test_relationship_without_agent_is_no_match():
    assert match_agent_relationship(_query("Japan"), _staff_a_b()) is None


def test_relationship_prefers_lower_load():
    roster = _staff_a_b()
    for s in roster:
        s.agent_ids = {"AG-1"}
    candidate = match_agent_relationship(_query("Japan", agent_id="AG-1"), roster)
    assert candidate.staff.name == "B"


def test_relationship_skips_full_staff_while_others_have_room():
    roster = _staff_a_b()
    roster[0].agent_ids = {"AG-1"}
    roster[0].assigned = 5
    assert match_agent_relationship(_query("Japan", agent_id="AG-1"), roster) is None


def test_relationship_ignores_inactive_staff():
    roster = _staff_a_b()
    roster[0].agent_ids = {"AG-1"}
    roster[0].active = False
    assert match_agent_relationship(_query("Japan", agent_id="AG-1"), roster) is None


def test_expertise_prefers_higher_score():
    roster = [
        StaffMember(id=1, name="Cities", expertise={"Rome"}),
        StaffMember(id=2, name="Country", expertise={"Italy"}, assigned=3),
    ]
    candidate = match_expertise(_query("Italy", "Rome"), roster)
    assert candidate.staff.name == "Country"


def test_expertise_tie_broken_by_load_then_id():
    roster = [
        StaffMember(id=3, name="C", expertise={"Italy"}, assigned=1),
        StaffMember(id=1, name="A", expertise={"Italy"}, assigned=2),
        StaffMember(id=2, name="B", expertise={"Italy"}, assigned=1),
    ]
    candidate = match_expertise(_query("Italy"), roster)
    assert candidate.staff.name == "B"


def test_expertise_skips_full_expert_while_others_have_room():
    roster = _staff_a_b()
    roster[0].assigned = 5
    assert match_expertise(_query("France"), roster) is None


def test_expertise_keeps_full_expert_when_everyone_is_full():
    roster = _staff_a_b()
    roster[0].assigned = 5
    roster[1].assigned = 5
    assert match_expertise(_query("France"), roster).staff.name == "A"


def test_workload_uses_utilization_not_raw_count():
    roster = [
        StaffMember(id=1, name="Small", assigned=2, workload_capacity=4),
        StaffMember(id=2, name="Large", assigned=3, workload_capacity=10),
    ]
    assert match_workload(_query("Japan"), roster).staff.name == "Large"


def test_workload_all_full_still_assigns_and_says_so():
    roster = [
        StaffMember(id=1, name="A", assigned=6, workload_capacity=5),
        StaffMember(id=2, name="B", assigned=5, workload_capacity=5),
    ]
    candidate = match_workload(_query("Japan"), roster)
    assert candidate.staff.name == "B"
    assert candidate.detail.endswith("all staff at capacity")


def test_round_robin_follows_sequence():
    roster = [
        StaffMember(id=1, name="A", sequence_order=2),
        StaffMember(id=2, name="B", sequence_order=1),
    ]
    assert match_round_robin(_query("Japan"), roster).staff.name == "B"


def test_round_robin_excludes_opted_out_and_inactive():
    roster = [
        StaffMember(id=1, name="A", sequence_order=1, auto_assign_enabled=False),
        StaffMember(id=2, name="B", sequence_order=2, active=False),
        StaffMember(id=3, name="C", sequence_order=3),
    ]
    assert match_round_robin(_query("Japan"), roster).staff.name == "C"


def test_round_robin_nobody_eligible():
    roster = [StaffMember(id=1, name="A", auto_assign_enabled=False)]
    assert match_round_robin(_query("Japan"), roster) is None


# ─── Ranking ─────────────────────────────────────────────────────────


def test_rank_candidates_order():
    roster = [
        StaffMember(id=1, name="Full", expertise={"France"}, assigned=5, workload_capacity=5),
        StaffMember(id=2, name="None", expertise=set(), assigned=0),
        StaffMember(id=3, name="Expert", expertise={"France"}, assigned=3),
        StaffMember(id=4, name="Away", active=False, expertise={"France"}),
    ]
    ranked = rank_candidates(_query("France"), roster)
    assert [r.staff.name for r in ranked] == ["Expert", "None", "Full"]
    assert ranked[0].match_type == MatchType.PERFECT
    assert ranked[1].match_type == MatchType.NONE
    assert ranked[2].at_capacity
