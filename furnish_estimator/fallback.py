"""
Heuristic bedroom mix for properties no authored rule covers.

Policy, applied in order:
    1. Two single bedrooms once the party reaches four guests.
    2. One bunk room for the rest: the smallest bunk that fits, otherwise the
       largest one available.
    3. Double bedrooms only for large homes or large parties, and only when
       enough guests remain to fill them.
    4. Single bedrooms for whatever is left.

The thresholds were tuned by hand rather than derived, so they live in a
`FallbackPolicy` instead of being hard-coded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import ceil
from typing import Optional

from .capacity import DOUBLE_BEDROOM_CAPACITY, SINGLE_BEDROOM_CAPACITY, bedroom_capacity
from .rules import AutoConfigRules, BedroomMix, BunkSize


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FallbackPolicy:
    doubles_sqft_threshold: float = 3000
    doubles_guest_threshold: int = 18
    min_guests_for_double: int = 4
    seed_singles_guest_threshold: int = 4
    seed_singles: int = 2

    def doubles_allowed(self, sqft: float, guest_count: int) -> bool:
        return sqft >= self.doubles_sqft_threshold or guest_count >= self.doubles_guest_threshold


DEFAULT_POLICY = FallbackPolicy()


def select_bunk_size(guests: int, rules: AutoConfigRules) -> Optional[BunkSize]:
    """Smallest bunk sleeping `guests`, else the largest bunk with any capacity."""
    for size in BunkSize:
        cap = rules.bunk_capacities[size]
        if cap > 0 and cap >= guests:
            return size

    for size in reversed(list(BunkSize)):
        if rules.bunk_capacities[size] > 0:
            return size

    return None


def generate_bedroom_fallback(
    sqft: float,
    guest_count: int,
    rules: AutoConfigRules,
    policy: FallbackPolicy = DEFAULT_POLICY,
) -> BedroomMix:
    singles = 0
    doubles = 0
    bunk = None

    if guest_count >= policy.seed_singles_guest_threshold:
        singles = policy.seed_singles

    remaining = max(0, guest_count - singles * SINGLE_BEDROOM_CAPACITY)

    if remaining > 0:
        bunk = select_bunk_size(remaining, rules)
        if bunk is not None:
            remaining = max(0, remaining - rules.bunk_capacities[bunk])

    if remaining >= policy.min_guests_for_double and policy.doubles_allowed(sqft, guest_count):
        doubles = ceil(remaining / DOUBLE_BEDROOM_CAPACITY)
        remaining = 0

    if remaining > 0:
        singles += ceil(remaining / SINGLE_BEDROOM_CAPACITY)

    mix = BedroomMix(single=singles, double=doubles, bunk=bunk)

    capacity = bedroom_capacity(mix, rules)
    if capacity < guest_count:
        logger.error("Fallback mix %s sleeps %s, below %s guests", mix.to_dict(), capacity, guest_count)

    logger.info(
        "Generated fallback bedrooms for %s sqft / %s guests: %s",
        sqft,
        guest_count,
        mix.to_dict(),
    )
    return mix
