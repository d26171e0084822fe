"""
Furnishing catalog: priced items, room templates and room selections.

All money is integer cents. Every item is priced at four quality tiers which
the catalog is expected to keep ascending; nothing here repairs a catalog
that breaks that ordering.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "catalog.json"

ROOM_SIZES = ("small", "medium", "large")


class QualityTier(Enum):
    """Price/quality levels, cheapest first"""
    LOW = "low"
    MID = "mid"
    MID_HIGH = "midHigh"
    HIGH = "high"

    @property
    def display_name(self) -> str:
        return _TIER_INFO[self][0]

    @property
    def description(self) -> str:
        return _TIER_INFO[self][1]


_TIER_INFO = {
    QualityTier.LOW: ("Low Quality", "Good value materials and furnishings"),
    QualityTier.MID: ("Mid-Range Quality", "Balanced quality and investment"),
    QualityTier.MID_HIGH: ("Mid/High Quality", "Premium materials and designer pieces"),
    QualityTier.HIGH: ("High-End Quality", "Luxury, high-end designer furnishings"),
}


class RoomCategory(Enum):
    COMMON_SPACES = "common_spaces"
    SLEEPING_SPACES = "sleeping_spaces"


@dataclass(frozen=True)
class TierAmounts:
    low: int = 0
    mid: int = 0
    mid_high: int = 0
    high: int = 0

    def __getitem__(self, tier: QualityTier) -> int:
        return getattr(self, _TIER_ATTRS[tier])

    def scaled(self, factor: int) -> "TierAmounts":
        return TierAmounts(*(amount * factor for amount in self.as_tuple()))

    def __add__(self, other: "TierAmounts") -> "TierAmounts":
        return TierAmounts(*(a + b for a, b in zip(self.as_tuple(), other.as_tuple())))

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.low, self.mid, self.mid_high, self.high)

    def is_ascending(self) -> bool:
        return self.low <= self.mid <= self.mid_high <= self.high

    def to_dict(self) -> Dict[str, int]:
        return {tier.value: self[tier] for tier in QualityTier}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "TierAmounts":
        data = data or {}
        return cls(
            low=int(data.get("low", data.get("budget", 0)) or 0),
            mid=int(data.get("mid", 0) or 0),
            mid_high=int(data.get("midHigh", 0) or 0),
            high=int(data.get("high", 0) or 0),
        )


_TIER_ATTRS = {
    QualityTier.LOW: "low",
    QualityTier.MID: "mid",
    QualityTier.MID_HIGH: "mid_high",
    QualityTier.HIGH: "high",
}


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    prices: TierAmounts
    category: str = ""
    subcategory: Optional[str] = None
    unit: str = "each"
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Item":
        return cls(
            id=str(data["id"]),
            name=data.get("name", data["id"]),
            prices=TierAmounts(
                low=int(data.get("lowPrice", 0) or 0),
                mid=int(data.get("midPrice", 0) or 0),
                mid_high=int(data.get("midHighPrice", 0) or 0),
                high=int(data.get("highPrice", 0) or 0),
            ),
            category=data.get("category", ""),
            subcategory=data.get("subcategory"),
            unit=data.get("unit", "each"),
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class RoomItem:
    item_id: str
    quantity: int = 1
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoomItem":
        return cls(
            item_id=str(data["itemId"]),
            quantity=int(data.get("quantity", 1)),
            name=data.get("name"),
        )


@dataclass(frozen=True)
class RoomSize:
    display_name: str
    items: Tuple[RoomItem, ...] = ()
    totals: TierAmounts = field(default_factory=TierAmounts)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoomSize":
        return cls(
            display_name=data.get("displayName", ""),
            items=tuple(RoomItem.from_dict(i) for i in data.get("items") or []),
            totals=TierAmounts.from_dict(data.get("totals")),
        )


@dataclass(frozen=True)
class RoomTemplate:
    id: str
    display_name: str
    category: RoomCategory
    sizes: Mapping[str, RoomSize]
    name: str = ""
    description: str = ""
    sort_order: int = 0

    def size(self, room_size: str) -> Optional[RoomSize]:
        return self.sizes.get(room_size)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoomTemplate":
        sizes = data.get("sizes") or {}
        return cls(
            id=str(data["id"]),
            display_name=data.get("displayName", data.get("name", data["id"])),
            category=RoomCategory(data.get("category", RoomCategory.COMMON_SPACES.value)),
            sizes={name: RoomSize.from_dict(sizes[name]) for name in ROOM_SIZES if name in sizes},
            name=data.get("name", ""),
            description=data.get("description", ""),
            sort_order=int(data.get("sortOrder", 0)),
        )


@dataclass(frozen=True)
class SelectedRoom:
    """
    A room the user picked.

    `items` empty means the room uses its template size's item list; a
    non-empty tuple is a customized list that replaces it.
    """
    room_type: str
    room_size: str
    quantity: int = 1
    display_name: str = ""
    items: Tuple[RoomItem, ...] = ()
    instance_id: Optional[str] = None

    def with_items(self, items: Iterable[RoomItem]) -> "SelectedRoom":
        return replace(self, items=tuple(items))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SelectedRoom":
        quantity = data.get("quantity")
        return cls(
            room_type=str(data["roomType"]),
            room_size=str(data.get("roomSize", "medium")),
            quantity=int(1 if quantity is None else quantity),
            display_name=data.get("displayName", ""),
            items=tuple(RoomItem.from_dict(i) for i in data.get("items") or []),
            instance_id=data.get("instanceId"),
        )


@dataclass(frozen=True)
class PropertySpecs:
    square_footage: float
    guest_capacity: int
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PropertySpecs":
        return cls(
            square_footage=float(data["squareFootage"]),
            guest_capacity=int(data["guestCapacity"]),
            notes=data.get("notes"),
        )


def room_size_totals(size: RoomSize, items: Mapping[str, Item]) -> TierAmounts:
    """Per-tier cost of one room of this size; unknown item ids count as zero."""
    totals = TierAmounts()
    for room_item in size.items:
        item = items.get(room_item.item_id)
        if item is not None:
            totals = totals + item.prices.scaled(room_item.quantity)
    return totals


def _with_totals(template: RoomTemplate, raw: Mapping[str, Any], items: Mapping[str, Item]) -> RoomTemplate:
    raw_sizes = raw.get("sizes") or {}
    sizes = {
        name: size if raw_sizes[name].get("totals") else replace(size, totals=room_size_totals(size, items))
        for name, size in template.sizes.items()
    }
    return replace(template, sizes=sizes)


@dataclass(frozen=True)
class Catalog:
    templates: Mapping[str, RoomTemplate]
    items: Mapping[str, Item]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Catalog":
        """
        Build the catalog from its JSON document.

        Room sizes published without precomputed `totals` get them computed
        from the item prices.
        """
        items = {i.id: i for i in (Item.from_dict(raw) for raw in data.get("items") or [])}
        templates = [
            _with_totals(RoomTemplate.from_dict(raw), raw, items) for raw in data.get("roomTemplates") or []
        ]
        return cls(
            templates={t.id: t for t in sorted(templates, key=lambda t: t.sort_order)},
            items=items,
        )

    def __repr__(self) -> str:
        return f"Catalog({len(self.templates)} room templates, {len(self.items)} items)"


def load_catalog(path: Optional[Path] = None) -> Catalog:
    base = path or DEFAULT_CATALOG_PATH
    with open(base, "r", encoding="utf-8") as fp:
        return Catalog.from_dict(json.load(fp))
