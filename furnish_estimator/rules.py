"""
Auto-configuration rule repository.

Typed, immutable view over the versioned rules document that drives bedroom
and common-area recommendations. The document arrives as plain JSON from the
configuration collaborator; `AutoConfigRules.from_dict` is the only place that
knows its layout.

KEY PRINCIPLE: computation code asks for typed records, never raw dict paths.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple


DEFAULT_RULES_PATH = Path(__file__).resolve().parent / "data" / "autoconfig.json"

COMMON_AREA_KEYS = ("kitchen", "dining", "living", "recRoom")


class BunkSize(Enum):
    """Bunk room sizes, smallest first"""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class CommonSize(Enum):
    """Size of a shared space; NONE means the space is not recommended"""
    NONE = "none"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


def _int(value: Any, name: str, default: int = 0) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"{name} must be numeric (got {value!r})")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be numeric (got {value!r})") from None


def _optional_number(value: Any, name: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{name} must be numeric (got {value!r})")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be numeric (got {value!r})") from None


def parse_bunk_size(value: Any) -> Optional[BunkSize]:
    if value in (None, "", "none"):
        return None
    if isinstance(value, BunkSize):
        return value
    try:
        return BunkSize(str(value).lower())
    except ValueError:
        raise ValueError(f"Unknown bunk size {value!r}") from None


def parse_common_size(value: Any, default: CommonSize = CommonSize.NONE) -> CommonSize:
    if value in (None, ""):
        return default
    if isinstance(value, CommonSize):
        return value
    try:
        return CommonSize(str(value).lower())
    except ValueError:
        raise ValueError(f"Unknown common-area size {value!r}") from None


@dataclass(frozen=True)
class BunkCapacities:
    small: int = 4
    medium: int = 8
    large: int = 12

    def __getitem__(self, size: BunkSize) -> int:
        return getattr(self, size.value)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "BunkCapacities":
        data = data or {}
        defaults = cls()
        return cls(
            small=_int(data.get("small"), "bunkCapacities.small", defaults.small),
            medium=_int(data.get("medium"), "bunkCapacities.medium", defaults.medium),
            large=_int(data.get("large"), "bunkCapacities.large", defaults.large),
        )


@dataclass(frozen=True)
class BedroomMix:
    """Counts of single and double bedrooms plus at most one bunk room"""
    single: int = 0
    double: int = 0
    bunk: Optional[BunkSize] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "BedroomMix":
        data = data or {}
        # Older documents call single bedrooms "king"
        single = data.get("single", data.get("king"))
        return cls(
            single=_int(single, "bedrooms.single"),
            double=_int(data.get("double"), "bedrooms.double"),
            bunk=parse_bunk_size(data.get("bunk")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "single": self.single,
            "double": self.double,
            "bunk": self.bunk.value if self.bunk else None,
        }


@dataclass(frozen=True)
class BedroomMixRule:
    """
    One authored bedroom-mix rule.

    Attributes:
        id: Rule identifier from the document
        min_sqft / max_sqft: Inclusive square-footage range
        min_guests / max_guests: Inclusive guest-count range
        bedrooms: Bedroom mix recommended for the range
    """
    id: str
    min_sqft: float
    max_sqft: float
    min_guests: int
    max_guests: int
    bedrooms: BedroomMix

    @property
    def sqft_center(self) -> float:
        return (self.min_sqft + self.max_sqft) / 2

    def covers_sqft(self, sqft: float) -> bool:
        return self.min_sqft <= sqft <= self.max_sqft

    def covers_guests(self, guests: int) -> bool:
        return self.min_guests <= guests <= self.max_guests

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int = 0) -> "BedroomMixRule":
        rule_id = str(data.get("id") or f"rule-{index + 1}")
        return cls(
            id=rule_id,
            min_sqft=float(_optional_number(data.get("min_sqft"), f"{rule_id}.min_sqft") or 0.0),
            max_sqft=float(_optional_number(data.get("max_sqft"), f"{rule_id}.max_sqft") or 0.0),
            min_guests=_int(data.get("min_guests"), f"{rule_id}.min_guests"),
            max_guests=_int(data.get("max_guests"), f"{rule_id}.max_guests"),
            bedrooms=BedroomMix.from_dict(data.get("bedrooms")),
        )


@dataclass(frozen=True)
class SizeThreshold:
    size: CommonSize
    min_sqft: Optional[float] = None
    max_sqft: Optional[float] = None

    def contains(self, sqft: float) -> bool:
        min_ok = self.min_sqft is None or sqft >= self.min_sqft
        max_ok = self.max_sqft is None or sqft <= self.max_sqft
        return min_ok and max_ok


@dataclass(frozen=True)
class CommonAreaRule:
    present_if_sqft_gte: Optional[float] = None
    thresholds: Tuple[SizeThreshold, ...] = ()
    default: CommonSize = CommonSize.NONE

    @classmethod
    def from_dict(cls, name: str, data: Optional[Mapping[str, Any]]) -> "CommonAreaRule":
        data = data or {}
        presence = data.get("presence") or {}
        size = data.get("size") or {}
        return cls(
            present_if_sqft_gte=_optional_number(
                presence.get("present_if_sqft_gte"), f"{name}.presence.present_if_sqft_gte"
            ),
            thresholds=tuple(
                SizeThreshold(
                    size=parse_common_size(t.get("size")),
                    min_sqft=_optional_number(t.get("min_sqft"), f"{name}.thresholds.min_sqft"),
                    max_sqft=_optional_number(t.get("max_sqft"), f"{name}.thresholds.max_sqft"),
                )
                for t in size.get("thresholds") or []
            ),
            default=parse_common_size(size.get("default")),
        )


@dataclass(frozen=True)
class GlobalValidation:
    min_sqft: float = 0
    max_sqft: float = 0
    min_guests: int = 0
    max_guests: int = 0

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "GlobalValidation":
        data = data or {}
        return cls(
            min_sqft=_optional_number(data.get("min_sqft"), "validation.global.min_sqft") or 0,
            max_sqft=_optional_number(data.get("max_sqft"), "validation.global.max_sqft") or 0,
            min_guests=_int(data.get("min_guests"), "validation.global.min_guests"),
            max_guests=_int(data.get("max_guests"), "validation.global.max_guests"),
        )


@dataclass(frozen=True)
class AutoConfigRules:
    """
    Immutable, versioned ruleset for one computation.

    Example:
        rules = load_autoconfig_rules()
        rules.bunk_capacities[BunkSize.SMALL]  # 4
        rules.common_area("kitchen").thresholds
    """
    bunk_capacities: BunkCapacities = field(default_factory=BunkCapacities)
    bedroom_mix_rules: Tuple[BedroomMixRule, ...] = ()
    common_areas: Tuple[Tuple[str, CommonAreaRule], ...] = ()
    validation: GlobalValidation = field(default_factory=GlobalValidation)
    version: int = 0
    published_at: Optional[str] = None
    description: Optional[str] = None

    def common_area(self, name: str) -> CommonAreaRule:
        return next((rule for area, rule in self.common_areas if area == name), CommonAreaRule())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AutoConfigRules":
        areas = data.get("commonAreas") or data.get("commonAreaRules") or {}
        validation = (data.get("validation") or {}).get("global")
        return cls(
            bunk_capacities=BunkCapacities.from_dict(data.get("bunkCapacities")),
            bedroom_mix_rules=tuple(
                BedroomMixRule.from_dict(rule, index)
                for index, rule in enumerate(data.get("bedroomMixRules") or [])
            ),
            common_areas=tuple((name, CommonAreaRule.from_dict(name, areas.get(name))) for name in COMMON_AREA_KEYS),
            validation=GlobalValidation.from_dict(validation),
            version=_int(data.get("version"), "version"),
            published_at=data.get("publishedAt"),
            description=data.get("description"),
        )

    def __repr__(self) -> str:
        return f"AutoConfigRules(v{self.version}, {len(self.bedroom_mix_rules)} bedroom rules)"


def load_autoconfig_rules(path: Optional[Path] = None) -> AutoConfigRules:
    base = path or DEFAULT_RULES_PATH
    with open(base, "r", encoding="utf-8") as fp:
        return AutoConfigRules.from_dict(json.load(fp))
