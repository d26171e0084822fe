"""
Tiered budget engine.

Rolls per-item four-tier prices up into room totals, tier subtotals,
contingency-adjusted totals and a headline display range. With property specs
and budget defaults the budget is extended to a project budget carrying fixed
and per-square-foot add-ons.

Stale catalog references never abort an estimate: the missing contribution is
treated as zero, logged, and recorded in `diagnostics`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from math import floor
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .catalog import Item, PropertySpecs, QualityTier, RoomItem, RoomTemplate, SelectedRoom, TierAmounts


logger = logging.getLogger(__name__)

DEFAULT_BUDGET_DEFAULTS_PATH = Path(__file__).resolve().parent / "data" / "budget_defaults.json"
DEFAULT_CONTINGENCY_RATE = 0.10


def round_half_up(value: float) -> int:
    return int(floor(value + 0.5))


@dataclass(frozen=True)
class BudgetDefaults:
    """Project add-on amounts (cents) and rates supplied by the back office"""
    installation_cents: int = 500000
    fuel_cents: int = 200000
    storage_and_receiving_cents: int = 400000
    kitchen_cents: int = 500000
    property_management_cents: int = 400000
    design_fee_rate_per_sqft_cents: int = 1000
    contingency_rate: float = DEFAULT_CONTINGENCY_RATE

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "BudgetDefaults":
        data = data or {}
        defaults = cls()
        design_fee = data.get("designFee") or {}
        rate = data.get("designFeeRatePerSqftCents", design_fee.get("ratePerSqftCents"))
        return cls(
            installation_cents=int(data.get("installationCents", defaults.installation_cents)),
            fuel_cents=int(data.get("fuelCents", defaults.fuel_cents)),
            storage_and_receiving_cents=int(
                data.get("storageAndReceivingCents", defaults.storage_and_receiving_cents)
            ),
            kitchen_cents=int(data.get("kitchenCents", defaults.kitchen_cents)),
            property_management_cents=int(
                data.get("propertyManagementCents", defaults.property_management_cents)
            ),
            design_fee_rate_per_sqft_cents=int(rate if rate is not None else defaults.design_fee_rate_per_sqft_cents),
            contingency_rate=float(data.get("contingencyRate", defaults.contingency_rate)),
        )


def load_budget_defaults(path: Optional[Path] = None) -> BudgetDefaults:
    base = path or DEFAULT_BUDGET_DEFAULTS_PATH
    with open(base, "r", encoding="utf-8") as fp:
        return BudgetDefaults.from_dict(json.load(fp))


@dataclass(frozen=True)
class TierTotal:
    subtotal: int = 0
    contingency: int = 0
    total: int = 0


@dataclass(frozen=True)
class RoomBreakdown:
    room_type: str
    room_size: str
    quantity: int
    amounts: TierAmounts
    display_name: str = ""


@dataclass(frozen=True)
class ProjectAddOns:
    installation: int = 0
    fuel: int = 0
    storage_and_receiving: int = 0
    kitchen: int = 0
    property_management: int = 0
    design_fee: int = 0

    @property
    def total(self) -> int:
        return (
            self.installation
            + self.fuel
            + self.storage_and_receiving
            + self.kitchen
            + self.property_management
            + self.design_fee
        )


@dataclass
class Budget:
    room_breakdown: List[RoomBreakdown]
    low: TierTotal
    mid: TierTotal
    mid_high: TierTotal
    high: TierTotal
    range_low: int
    range_high: int
    diagnostics: Dict[str, Any] = field(default_factory=lambda: {"warnings": [], "errors": []})

    def tier(self, tier: QualityTier) -> TierTotal:
        return {
            QualityTier.LOW: self.low,
            QualityTier.MID: self.mid,
            QualityTier.MID_HIGH: self.mid_high,
            QualityTier.HIGH: self.high,
        }[tier]

    @property
    def totals(self) -> TierAmounts:
        return TierAmounts(self.low.total, self.mid.total, self.mid_high.total, self.high.total)

    @property
    def subtotals(self) -> TierAmounts:
        return TierAmounts(self.low.subtotal, self.mid.subtotal, self.mid_high.subtotal, self.high.subtotal)


@dataclass
class ProjectBudget(Budget):
    contingency_disabled: bool = False
    project_add_ons: ProjectAddOns = field(default_factory=ProjectAddOns)
    project_range: TierAmounts = field(default_factory=TierAmounts)


@dataclass(frozen=True)
class EstimateOptions:
    property_specs: Optional[PropertySpecs] = None
    budget_defaults: Optional[BudgetDefaults] = None
    disable_contingency: bool = False


class BudgetEngine:
    def __init__(
        self,
        templates: Mapping[str, RoomTemplate],
        items: Mapping[str, Item],
        budget_defaults: Optional[BudgetDefaults] = None,
    ):
        self.templates = templates
        self.items = items
        self.budget_defaults = budget_defaults
        self.contingency_rate = (
            budget_defaults.contingency_rate if budget_defaults else DEFAULT_CONTINGENCY_RATE
        )
        self.diagnostics: Dict[str, Any] = {"warnings": [], "errors": []}
        self._reported_tier_order: set = set()

    # ------------------------------------------------------------------ public
    def calculate(
        self,
        selected_rooms: Iterable[SelectedRoom],
        property_specs: Optional[PropertySpecs] = None,
        disable_contingency: bool = False,
    ) -> Union[Budget, ProjectBudget]:
        # Each run reports only its own problems; self.diagnostics is the latest run's
        self.diagnostics = {"warnings": [], "errors": []}
        self._reported_tier_order = set()

        breakdown: List[RoomBreakdown] = []
        subtotals = TierAmounts()

        for room in selected_rooms:
            amounts = self._room_amounts(room)
            if amounts is None:
                continue
            breakdown.append(
                RoomBreakdown(
                    room_type=room.room_type,
                    room_size=room.room_size,
                    quantity=room.quantity,
                    amounts=amounts,
                    display_name=room.display_name,
                )
            )
            subtotals = subtotals + amounts

        rate = 0.0 if disable_contingency else self.contingency_rate
        low, mid, mid_high, high = (self._tier_total(subtotal, rate) for subtotal in subtotals.as_tuple())

        fields = dict(
            room_breakdown=breakdown,
            low=low,
            mid=mid,
            mid_high=mid_high,
            high=high,
            # Low and mid bound the headline range; low/high reads unrealistically wide
            range_low=low.total,
            range_high=mid.total,
            diagnostics=self.diagnostics,
        )

        if property_specs is None or self.budget_defaults is None:
            return Budget(**fields)

        add_ons = self._project_add_ons(property_specs)
        return ProjectBudget(
            **fields,
            contingency_disabled=disable_contingency,
            project_add_ons=add_ons,
            project_range=TierAmounts(
                low=low.total + add_ons.total,
                mid=mid.total + add_ons.total,
                mid_high=mid_high.total + add_ons.total,
                high=high.total + add_ons.total,
            ),
        )

    # ---------------------------------------------------------------- utilities
    def _warn(self, message: str, detail: Optional[Dict[str, Any]] = None) -> None:
        logger.warning("%s %s", message, detail or "")
        self.diagnostics["warnings"].append({"message": message, "detail": detail or {}})

    def _tier_total(self, subtotal: int, rate: float) -> TierTotal:
        contingency = round_half_up(subtotal * rate)
        return TierTotal(subtotal=subtotal, contingency=contingency, total=subtotal + contingency)

    def _resolve_items(self, room: SelectedRoom) -> Optional[List[RoomItem]]:
        template = self.templates.get(room.room_type)
        if template is None:
            self._warn("Room template not found; room skipped.", {"room_type": room.room_type})
            return None

        size = template.size(room.room_size)
        if size is None:
            self._warn(
                "Room size not defined for template; room skipped.",
                {"room_type": room.room_type, "room_size": room.room_size},
            )
            return None

        return list(room.items) if room.items else list(size.items)

    def _room_amounts(self, room: SelectedRoom) -> Optional[TierAmounts]:
        room_items = self._resolve_items(room)
        if room_items is None:
            return None

        amounts = TierAmounts()
        for room_item in room_items:
            item = self.items.get(room_item.item_id)
            if item is None:
                self._warn(
                    "Item not found in catalog; contribution treated as zero.",
                    {"item_id": room_item.item_id, "room_type": room.room_type},
                )
                continue
            self._check_tier_order(item)
            amounts = amounts + item.prices.scaled(room_item.quantity * room.quantity)
        return amounts

    def _check_tier_order(self, item: Item) -> None:
        if item.prices.is_ascending() or item.id in self._reported_tier_order:
            return
        self._reported_tier_order.add(item.id)
        self._warn("Item tier prices are not ascending.", {"item_id": item.id, "prices": item.prices.to_dict()})

    def _project_add_ons(self, specs: PropertySpecs) -> ProjectAddOns:
        defaults = self.budget_defaults
        return ProjectAddOns(
            installation=defaults.installation_cents,
            fuel=defaults.fuel_cents,
            storage_and_receiving=defaults.storage_and_receiving_cents,
            kitchen=defaults.kitchen_cents,
            property_management=defaults.property_management_cents,
            design_fee=round_half_up(defaults.design_fee_rate_per_sqft_cents * specs.square_footage),
        )


def calculate_estimate(
    selected_rooms: Iterable[SelectedRoom],
    templates: Mapping[str, RoomTemplate],
    items: Mapping[str, Item],
    options: Optional[EstimateOptions] = None,
) -> Union[Budget, ProjectBudget]:
    """
    Price the selected rooms at every quality tier.

    Returns a ProjectBudget when `options` carries both property specs and
    budget defaults, otherwise a plain Budget.
    """
    options = options or EstimateOptions()
    engine = BudgetEngine(templates, items, options.budget_defaults)
    return engine.calculate(
        selected_rooms,
        property_specs=options.property_specs,
        disable_contingency=options.disable_contingency,
    )
