"""
Auto-configuration: property specs in, recommended room mix out.

The recommendation is advisory. It is recomputed on every input change and the
user is free to select different rooms afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .bedroom_matcher import match_rule
from .capacity import BUNK_ROOM_TYPE, DOUBLE_BEDROOM_TYPE, SINGLE_BEDROOM_TYPE
from .catalog import SelectedRoom
from .common_areas import CommonAreas, derive_common_areas, generate_common_area_fallback
from .fallback import DEFAULT_POLICY, FallbackPolicy, generate_bedroom_fallback
from .rules import AutoConfigRules, BedroomMix, CommonSize


logger = logging.getLogger(__name__)

SOURCE_RULE = "rule"
SOURCE_FALLBACK = "fallback"

DEFAULT_BEDROOM_SIZE = "medium"


@dataclass(frozen=True)
class ComputedConfiguration:
    bedrooms: BedroomMix
    common_areas: CommonAreas
    source: str = SOURCE_RULE
    rule_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bedrooms": self.bedrooms.to_dict(),
            "commonAreas": self.common_areas.to_dict(),
        }


def compute_auto_configuration(
    sqft: float,
    guest_count: int,
    rules: AutoConfigRules,
    policy: FallbackPolicy = DEFAULT_POLICY,
) -> ComputedConfiguration:
    result = match_rule(sqft, guest_count, rules)

    if result.matched:
        rule = result.rule
        common_areas = derive_common_areas(sqft, rules)
        return ComputedConfiguration(
            bedrooms=rule.bedrooms,
            common_areas=common_areas,
            source=SOURCE_RULE,
            rule_id=rule.id,
        )

    logger.info("No bedroom rule for %s sqft / %s guests (%s); using fallback", sqft, guest_count, result.reason)
    return ComputedConfiguration(
        bedrooms=generate_bedroom_fallback(sqft, guest_count, rules, policy),
        common_areas=generate_common_area_fallback(sqft, rules),
        source=SOURCE_FALLBACK,
    )


# (room type, display name, common area) in the order rooms are suggested
_COMMON_SUGGESTIONS = (
    ("living_room", "Living Room", "living"),
    ("kitchen", "Kitchen", "kitchen"),
    ("dining_room", "Dining Room", "dining"),
)


def suggest_room_configuration(config: ComputedConfiguration) -> List[SelectedRoom]:
    """Starter room selections for a computed configuration."""
    suggestions: List[SelectedRoom] = []

    for room_type, display_name, area in _COMMON_SUGGESTIONS:
        size = config.common_areas.get(area)
        if size is not CommonSize.NONE:
            suggestions.append(SelectedRoom(room_type, size.value, 1, display_name))

    bedrooms = config.bedrooms
    if bedrooms.single > 0:
        suggestions.append(
            SelectedRoom(SINGLE_BEDROOM_TYPE, DEFAULT_BEDROOM_SIZE, bedrooms.single, "Single Bedroom")
        )
    if bedrooms.double > 0:
        suggestions.append(
            SelectedRoom(DOUBLE_BEDROOM_TYPE, DEFAULT_BEDROOM_SIZE, bedrooms.double, "Double Bedroom")
        )
    if bedrooms.bunk is not None:
        suggestions.append(SelectedRoom(BUNK_ROOM_TYPE, bedrooms.bunk.value, 1, "Bunk Room"))

    if config.common_areas.rec_room is not CommonSize.NONE:
        suggestions.append(SelectedRoom("rec_room", config.common_areas.rec_room.value, 1, "Rec Room"))

    return suggestions
