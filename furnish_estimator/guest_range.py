"""
Guest-count and square-footage bounds.

Bounds come from `validation.global` only. Square footage is accepted by the
guest functions so callers can pass the pair they have, but per-footprint
envelopes are not enforced here; advisory matching is the only place sqft
matters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .rules import AutoConfigRules


# Floors used when the published bounds are zero or missing
MIN_GUESTS_FLOOR = 1
MAX_GUESTS_FALLBACK = 50
MIN_SQFT_FLOOR = 1
MAX_SQFT_FALLBACK = 10000


@dataclass(frozen=True)
class AllowedRange:
    min: float
    max: float

    def clamp(self, value):
        return min(max(value, self.min), self.max)

    def __contains__(self, value) -> bool:
        return self.min <= value <= self.max


def get_allowed_guest_range(rules: AutoConfigRules, sqft: Optional[float] = None) -> AllowedRange:
    bounds = rules.validation
    min_guests = max(bounds.min_guests or MIN_GUESTS_FLOOR, MIN_GUESTS_FLOOR)
    max_guests = max(bounds.max_guests or MAX_GUESTS_FALLBACK, min_guests)
    return AllowedRange(min=min_guests, max=max_guests)


def clamp_guests_for_sqft(desired: int, rules: AutoConfigRules, sqft: Optional[float] = None) -> int:
    return int(get_allowed_guest_range(rules, sqft).clamp(desired))


def is_valid_sqft_guest_combination(guest_count: int, rules: AutoConfigRules, sqft: Optional[float] = None) -> bool:
    return guest_count in get_allowed_guest_range(rules, sqft)


def get_allowed_sqft_range(rules: AutoConfigRules) -> AllowedRange:
    bounds = rules.validation
    min_sqft = max(bounds.min_sqft or MIN_SQFT_FLOOR, MIN_SQFT_FLOOR)
    max_sqft = max(bounds.max_sqft or MAX_SQFT_FALLBACK, min_sqft)
    return AllowedRange(min=min_sqft, max=max_sqft)


def clamp_sqft(value: float, rules: AutoConfigRules) -> float:
    return get_allowed_sqft_range(rules).clamp(value)
