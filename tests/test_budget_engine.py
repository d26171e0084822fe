"""
Budget engine: tier roll-up, contingency, project add-ons and diagnostics.
"""

from pathlib import Path

from furnish_estimator.budget_engine import (
    Budget,
    BudgetDefaults,
    BudgetEngine,
    EstimateOptions,
    ProjectBudget,
    TierTotal,
    calculate_estimate,
    load_budget_defaults,
    round_half_up,
)
from furnish_estimator.catalog import (
    Catalog,
    Item,
    PropertySpecs,
    QualityTier,
    RoomItem,
    SelectedRoom,
    TierAmounts,
    load_catalog,
)


def _rooms():
    return [
        SelectedRoom("living_room", "medium", 1, "Living Room"),
        SelectedRoom("single_bedroom", "medium", 2, "Single Bedroom"),
    ]


def test_tier_subtotals_roll_up_item_prices(catalog):
    budget = calculate_estimate(_rooms(), catalog.templates, catalog.items)

    assert isinstance(budget, Budget) and not isinstance(budget, ProjectBudget)
    assert budget.subtotals == TierAmounts(240000, 460000, 720000, 1200000)

    living, bedrooms = budget.room_breakdown
    assert living.amounts == TierAmounts(110000, 220000, 330000, 550000)
    assert bedrooms.quantity == 2
    assert bedrooms.amounts == TierAmounts(130000, 240000, 390000, 650000)


def test_contingency_and_range(catalog):
    budget = calculate_estimate(_rooms(), catalog.templates, catalog.items)

    assert budget.low == TierTotal(subtotal=240000, contingency=24000, total=264000)
    assert budget.mid == TierTotal(subtotal=460000, contingency=46000, total=506000)
    assert budget.high.total == 1320000
    # Range is low..mid, not low..high
    assert budget.range_low == budget.low.total
    assert budget.range_high == budget.mid.total


def test_custom_room_items_replace_template_items(catalog):
    room = SelectedRoom("living_room", "medium", 1).with_items([RoomItem("lamp", 3)])
    budget = calculate_estimate([room], catalog.templates, catalog.items)
    assert budget.subtotals == TierAmounts(15000, 30000, 45000, 75000)


def test_missing_item_counts_as_zero_and_is_reported(catalog, caplog):
    room = SelectedRoom("living_room", "small", 1).with_items([RoomItem("sofa", 1), RoomItem("retired_chair", 4)])
    budget = calculate_estimate([room], catalog.templates, catalog.items)

    assert budget.subtotals == TierAmounts(100000, 200000, 300000, 500000)
    warnings = budget.diagnostics["warnings"]
    assert len(warnings) == 1
    assert warnings[0]["detail"]["item_id"] == "retired_chair"
    assert "retired_chair" in caplog.text


def test_missing_template_and_size_are_skipped(catalog):
    rooms = [
        SelectedRoom("wine_cellar", "large", 1),
        SelectedRoom("single_bedroom", "small", 1),
        SelectedRoom("bunk_room", "small", 1),
    ]
    budget = calculate_estimate(rooms, catalog.templates, catalog.items)

    assert [r.room_type for r in budget.room_breakdown] == ["bunk_room"]
    assert budget.subtotals == TierAmounts(100000, 180000, 280000, 440000)
    assert len(budget.diagnostics["warnings"]) == 2
    assert budget.diagnostics["errors"] == []


def test_reused_engine_keeps_runs_apart(catalog_document):
    catalog_document["items"].append(
        {"id": "odd", "name": "Odd", "lowPrice": 9000, "midPrice": 5000, "midHighPrice": 7000, "highPrice": 1000}
    )
    catalog_document["roomTemplates"][0]["sizes"]["small"]["items"] = [{"itemId": "odd", "quantity": 1}]
    catalog = Catalog.from_dict(catalog_document)
    engine = BudgetEngine(catalog.templates, catalog.items)

    first = engine.calculate([SelectedRoom("wine_cellar", "large", 1), SelectedRoom("living_room", "small", 1)])
    second = engine.calculate([SelectedRoom("single_bedroom", "medium", 1)])
    third = engine.calculate([SelectedRoom("living_room", "small", 1)])

    assert len(first.diagnostics["warnings"]) == 2
    assert second.diagnostics["warnings"] == []
    assert first.diagnostics is not second.diagnostics
    assert engine.diagnostics is third.diagnostics
    # Tier-order warning is raised again on a later run
    assert [w["detail"]["item_id"] for w in third.diagnostics["warnings"]] == ["odd"]


def test_empty_selection_is_zero(catalog):
    budget = calculate_estimate([], catalog.templates, catalog.items)
    assert budget.room_breakdown == []
    assert budget.totals == TierAmounts()
    assert (budget.range_low, budget.range_high) == (0, 0)


def test_tier_order_is_surfaced_not_repaired(catalog_document):
    catalog_document["items"].append(
        {"id": "odd", "name": "Odd", "lowPrice": 9000, "midPrice": 5000, "midHighPrice": 7000, "highPrice": 1000}
    )
    catalog_document["roomTemplates"][0]["sizes"]["small"]["items"] = [{"itemId": "odd", "quantity": 2}]
    catalog = Catalog.from_dict(catalog_document)

    budget = calculate_estimate([SelectedRoom("living_room", "small", 1)], catalog.templates, catalog.items)

    assert budget.subtotals == TierAmounts(18000, 10000, 14000, 2000)
    assert budget.range_low > budget.range_high
    assert any(w["detail"].get("item_id") == "odd" for w in budget.diagnostics["warnings"])


def test_contingency_rounds_half_up(catalog):
    items = {"cup": Item("cup", "Cup", TierAmounts(5, 15, 25, 35))}
    engine = BudgetEngine(catalog.templates, items)
    room = SelectedRoom("living_room", "small", 1).with_items([RoomItem("cup", 1)])

    budget = engine.calculate([room])
    assert [budget.tier(t).contingency for t in QualityTier] == [1, 2, 3, 4]
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4) == 2


def test_project_budget_adds_fixed_and_design_fee(catalog, budget_defaults):
    options = EstimateOptions(
        property_specs=PropertySpecs(square_footage=2200, guest_capacity=10),
        budget_defaults=budget_defaults,
    )
    budget = calculate_estimate(_rooms(), catalog.templates, catalog.items, options)

    assert isinstance(budget, ProjectBudget)
    assert budget.project_add_ons.design_fee == 2200000
    assert budget.project_add_ons.total == 4200000
    assert budget.project_range.low == 264000 + 4200000
    assert budget.project_range.mid == 506000 + 4200000
    assert budget.project_range[QualityTier.HIGH] == 1320000 + 4200000
    assert budget.contingency_disabled is False


def test_project_budget_without_contingency(catalog, budget_defaults):
    options = EstimateOptions(
        property_specs=PropertySpecs(square_footage=1000, guest_capacity=6),
        budget_defaults=budget_defaults,
        disable_contingency=True,
    )
    budget = calculate_estimate(_rooms(), catalog.templates, catalog.items, options)

    assert budget.contingency_disabled is True
    assert budget.low == TierTotal(240000, 0, 240000)
    assert budget.project_range.low == 240000 + 2000000 + 1000000


def test_specs_without_defaults_stay_plain_budget(catalog):
    options = EstimateOptions(property_specs=PropertySpecs(2200, 10))
    assert not isinstance(calculate_estimate(_rooms(), catalog.templates, catalog.items, options), ProjectBudget)


def test_custom_contingency_rate(catalog):
    defaults = BudgetDefaults(contingency_rate=0.15)
    budget = BudgetEngine(catalog.templates, catalog.items, defaults).calculate(_rooms())
    assert budget.low.contingency == 36000


def test_budget_defaults_from_document():
    defaults = BudgetDefaults.from_dict({"installationCents": 100, "designFee": {"ratePerSqftCents": 250}})
    assert defaults.installation_cents == 100
    assert defaults.design_fee_rate_per_sqft_cents == 250
    assert defaults.fuel_cents == 200000
    assert load_budget_defaults() == BudgetDefaults()


def test_packaged_catalog_prices_every_template_item():
    catalog = load_catalog()
    rooms = [
        SelectedRoom(template.id, size, 1)
        for template in catalog.templates.values()
        for size in template.sizes
    ]
    budget = calculate_estimate(rooms, catalog.templates, catalog.items)

    assert budget.diagnostics["warnings"] == []
    for room, breakdown in zip(rooms, budget.room_breakdown):
        assert breakdown.amounts == catalog.templates[room.room_type].sizes[room.room_size].totals
        assert breakdown.amounts.is_ascending()


def test_catalog_loads_from_path(tmp_path: Path):
    path = tmp_path / "catalog.json"
    path.write_text('{"items": [], "roomTemplates": []}', encoding="utf-8")
    assert load_catalog(path).templates == {}
