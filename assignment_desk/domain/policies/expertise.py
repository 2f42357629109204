"""ExpertisePolicy — how well a staff member's expertise covers a destination."""

from __future__ import annotations

from dataclasses import dataclass

from assignment_desk.domain.entities.staff_member import StaffMember
from assignment_desk.domain.value_objects.destination import Destination
from assignment_desk.domain.value_objects.enums import MatchType

# Share of the score carried by a country hit when the query also lists cities.
# Anything above 0.5 makes a country hit outrank every cities-only match.
COUNTRY_WEIGHT = 0.6
CITY_WEIGHT = 1.0 - COUNTRY_WEIGHT


@dataclass(frozen=True)
class ExpertiseScore:
    score: float
    country_hit: bool
    matched_cities: tuple[str, ...]

    @property
    def match_type(self) -> MatchType:
        if self.country_hit:
            return MatchType.PERFECT
        if self.matched_cities:
            return MatchType.PARTIAL
        return MatchType.NONE


def score_expertise(staff: StaffMember, destination: Destination) -> ExpertiseScore:
    """Pure function: score in [0, 1] for ``{country} ∪ cities`` against expertise.

    Business rules:
      1. No cities on the query  →  1.0 on a country hit, else 0.
      2. No country on the query  →  fraction of cities covered.
      3. Both present  →  COUNTRY_WEIGHT·country_hit + CITY_WEIGHT·city_fraction.
    """
    expertise = staff.expertise_terms()
    country = destination.country_term()
    cities = destination.city_terms()

    country_hit = country is not None and country in expertise
    matched = tuple(c for c in cities if c in expertise)
    city_fraction = len(matched) / len(cities) if cities else 0.0

    if not cities:
        score = 1.0 if country_hit else 0.0
    elif country is None:
        score = city_fraction
    else:
        score = COUNTRY_WEIGHT * float(country_hit) + CITY_WEIGHT * city_fraction

    return ExpertiseScore(
        score=round(score, 4),
        country_hit=country_hit,
        matched_cities=matched,
    )
