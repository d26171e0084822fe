"""
End-to-end estimate pipeline:

1. Clamp the guest count into the published bounds.
2. Compute the advisory room configuration.
3. Use the caller's room selection, or the suggested rooms when none is given.
4. Price the rooms (project budget when budget defaults are supplied).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .auto_config import ComputedConfiguration, compute_auto_configuration, suggest_room_configuration
from .budget_engine import Budget, BudgetDefaults, BudgetEngine, ProjectBudget
from .capacity import selected_room_capacity
from .catalog import Item, PropertySpecs, RoomTemplate, SelectedRoom
from .guest_range import clamp_guests_for_sqft
from .rules import AutoConfigRules


logger = logging.getLogger(__name__)


@dataclass
class EstimateResult:
    property_specs: PropertySpecs
    configuration: ComputedConfiguration
    rooms: List[SelectedRoom]
    budget: Union[Budget, ProjectBudget]
    diagnostics: Dict[str, Any]

    @property
    def sleeps(self) -> int:
        return self.diagnostics["capacity"]["selected"]


def run_estimate(
    *,
    specs: PropertySpecs,
    rules: AutoConfigRules,
    templates: Mapping[str, RoomTemplate],
    items: Mapping[str, Item],
    selected_rooms: Optional[Sequence[SelectedRoom]] = None,
    budget_defaults: Optional[BudgetDefaults] = None,
    disable_contingency: bool = False,
) -> EstimateResult:
    guests = clamp_guests_for_sqft(specs.guest_capacity, rules, specs.square_footage)
    configuration = compute_auto_configuration(specs.square_footage, guests, rules)

    rooms = list(selected_rooms) if selected_rooms is not None else suggest_room_configuration(configuration)

    engine = BudgetEngine(templates, items, budget_defaults)
    budget = engine.calculate(
        rooms,
        property_specs=specs if budget_defaults is not None else None,
        disable_contingency=disable_contingency,
    )

    diagnostics = {
        "guests": {"requested": specs.guest_capacity, "used": guests},
        "configuration": {"source": configuration.source, "rule_id": configuration.rule_id},
        "capacity": {"selected": selected_room_capacity(rooms, rules), "required": guests},
        "cost": engine.diagnostics,
    }
    if diagnostics["capacity"]["selected"] < guests:
        logger.warning("Selected rooms sleep %s of %s guests", diagnostics["capacity"]["selected"], guests)
        engine.diagnostics["warnings"].append(
            {
                "message": "Selected rooms sleep fewer guests than requested.",
                "detail": dict(diagnostics["capacity"]),
            }
        )

    return EstimateResult(
        property_specs=specs,
        configuration=configuration,
        rooms=rooms,
        budget=budget,
        diagnostics=diagnostics,
    )
