"""
Bedroom rule matching.

Selects the authored bedroom-mix rule that fits a property, or reports that
none does. Square footage is the primary key because room count scales with
footprint; the guest range is secondary and every candidate is checked for
sleeping capacity before it is trusted.

A failed match is a result, not an error: callers branch on `result.matched`
and hand `NoMatch` over to the fallback generator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .capacity import has_sufficient_capacity
from .rules import AutoConfigRules, BedroomMixRule


logger = logging.getLogger(__name__)

NO_RULES = "no_rules"
CLOSEST_RULE_UNDER_CAPACITY = "closest_rule_under_capacity"
EXACT_RULE_UNDER_CAPACITY = "exact_rule_under_capacity"
NO_GUEST_MATCH = "no_guest_match"


@dataclass(frozen=True)
class Matched:
    rule: BedroomMixRule

    @property
    def matched(self) -> bool:
        return True


@dataclass(frozen=True)
class NoMatch:
    reason: str
    rule_id: Optional[str] = None

    @property
    def matched(self) -> bool:
        return False


MatchResult = Union[Matched, NoMatch]


def _closest_by_sqft(sqft: float, rules: AutoConfigRules) -> Optional[BedroomMixRule]:
    closest = None
    min_distance = float("inf")
    for rule in rules.bedroom_mix_rules:
        distance = abs(rule.sqft_center - sqft)
        if distance < min_distance:
            min_distance = distance
            closest = rule
    return closest


def match_rule(sqft: float, guest_count: int, rules: AutoConfigRules) -> MatchResult:
    """
    Find the bedroom rule for a property.

    Args:
        sqft: Total square footage
        guest_count: Guests the property must sleep
        rules: Published auto-configuration rules

    Returns:
        Matched(rule) when a capacity-sufficient rule fits, otherwise NoMatch

    Logic:
        1. Keep rules whose sqft range contains `sqft`.
        2. None kept: use the rule whose range center is closest to `sqft`,
           provided it sleeps `guest_count`.
        3. Otherwise the first kept rule whose guest range contains
           `guest_count`, provided it sleeps `guest_count`.
        4. No such rule: NoMatch. Nearby guest ranges are never substituted.
    """
    if not rules.bedroom_mix_rules:
        return NoMatch(NO_RULES)

    sqft_matches = [r for r in rules.bedroom_mix_rules if r.covers_sqft(sqft)]

    if not sqft_matches:
        closest = _closest_by_sqft(sqft, rules)
        if not has_sufficient_capacity(closest, guest_count, rules):
            logger.debug("Closest rule %s cannot sleep %s guests", closest.id, guest_count)
            return NoMatch(CLOSEST_RULE_UNDER_CAPACITY, closest.id)
        return Matched(closest)

    exact = next((r for r in sqft_matches if r.covers_guests(guest_count)), None)
    if exact is None:
        return NoMatch(NO_GUEST_MATCH)

    if not has_sufficient_capacity(exact, guest_count, rules):
        # Authored rule is mis-specified for its own guest range
        logger.warning(
            "Rule %s covers %s guests but its bedrooms sleep fewer", exact.id, guest_count
        )
        return NoMatch(EXACT_RULE_UNDER_CAPACITY, exact.id)

    return Matched(exact)
