"""
Common-area derivation from square footage.

Guest count does not gate shared spaces; only the footprint does. Size
thresholds are evaluated in authoring order and the first match wins, so a
broad threshold placed last acts as a catch-all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .rules import COMMON_AREA_KEYS, AutoConfigRules, CommonAreaRule, CommonSize


@dataclass(frozen=True)
class CommonAreas:
    kitchen: CommonSize = CommonSize.NONE
    dining: CommonSize = CommonSize.NONE
    living: CommonSize = CommonSize.NONE
    rec_room: CommonSize = CommonSize.NONE

    def get(self, area: str) -> CommonSize:
        return getattr(self, _ATTRS[area])

    def to_dict(self) -> Dict[str, str]:
        return {area: self.get(area).value for area in COMMON_AREA_KEYS}


_ATTRS = {"kitchen": "kitchen", "dining": "dining", "living": "living", "recRoom": "rec_room"}


def area_size(sqft: float, rule: CommonAreaRule) -> CommonSize:
    present = rule.present_if_sqft_gte is not None and sqft >= rule.present_if_sqft_gte
    if not present:
        return rule.default

    for threshold in rule.thresholds:
        if threshold.contains(sqft):
            return threshold.size

    return rule.default


def derive_common_areas(sqft: float, rules: AutoConfigRules) -> CommonAreas:
    return CommonAreas(**{_ATTRS[area]: area_size(sqft, rules.common_area(area)) for area in COMMON_AREA_KEYS})


# Used on the no-match branch; same thresholds, same answer.
generate_common_area_fallback = derive_common_areas
