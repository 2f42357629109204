"""Destination, pax and travel-window value objects."""

from dataclasses import dataclass, field
from datetime import date


def normalize_term(value: str) -> str:
    """Case- and whitespace-insensitive form used for destination matching."""
    return " ".join(value.split()).lower()


@dataclass(frozen=True)
class Destination:
    country: str
    cities: tuple[str, ...] = field(default_factory=tuple)

    def country_term(self) -> str | None:
        term = normalize_term(self.country) if self.country else ""
        return term or None

    def city_terms(self) -> list[str]:
        """Normalized city names in travel order, duplicates dropped."""
        seen: list[str] = []
        for city in self.cities:
            term = normalize_term(city) if city else ""
            if term and term not in seen:
                seen.append(term)
        return seen


@dataclass(frozen=True)
class PaxDetails:
    adults: int = 1
    children: int = 0
    infants: int = 0

    @property
    def total(self) -> int:
        """Travellers occupying a seat — infants are not counted."""
        return self.adults + self.children


@dataclass(frozen=True)
class TravelDates:
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("Travel end date precedes start date")

    @property
    def nights(self) -> int:
        return (self.end - self.start).days
