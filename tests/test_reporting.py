import pandas as pd
import pytest

from furnish_estimator.budget_engine import EstimateOptions, calculate_estimate
from furnish_estimator.catalog import PropertySpecs, SelectedRoom
from furnish_estimator.reporting import (
    ADD_ON_LABELS,
    build_estimates_export,
    build_room_breakdown_table,
    build_tier_summary_table,
    cents_to_dollars,
    dollars_to_cents,
    format_currency,
    format_currency_abbreviated,
)


@pytest.mark.parametrize(
    "cents,expected",
    [(0, "$0"), (123456, "$1,235"), (-250000, "-$2,500"), (-40, "$0"), (150, "$2")],
)
def test_format_currency(cents, expected):
    assert format_currency(cents) == expected


def test_format_currency_abbreviated():
    assert format_currency_abbreviated(8500000) == "$85.00k"
    assert format_currency_abbreviated(150000000) == "$1.50M"
    assert format_currency_abbreviated(45000) == "$450"


def test_dollar_cent_conversion():
    assert dollars_to_cents(19.99) == 1999
    assert dollars_to_cents(0.005) == 1
    assert cents_to_dollars(1999) == pytest.approx(19.99)


@pytest.fixture
def rooms():
    return [
        SelectedRoom("living_room", "medium", 1, "Living Room"),
        SelectedRoom("single_bedroom", "medium", 2, "Single Bedroom"),
    ]


def test_room_breakdown_table(catalog, rooms):
    table = build_room_breakdown_table(calculate_estimate(rooms, catalog.templates, catalog.items))

    assert list(table["room_type"]) == ["living_room", "single_bedroom"]
    assert list(table.columns[-4:]) == ["low", "mid", "midHigh", "high"]
    assert table["low"].sum() == 240000


def test_tier_summary_table(catalog, rooms, budget_defaults):
    plain = build_tier_summary_table(calculate_estimate(rooms, catalog.templates, catalog.items))
    assert list(plain.index) == ["low", "mid", "midHigh", "high"]
    assert "project_total" not in plain.columns
    assert plain.loc["mid", "total"] == 506000

    options = EstimateOptions(PropertySpecs(2200, 10), budget_defaults)
    project = build_tier_summary_table(calculate_estimate(rooms, catalog.templates, catalog.items, options))
    assert project.loc["low", "project_total"] == 264000 + 4200000
    assert project.loc["high", "tier_name"] == "High-End Quality"


def test_estimates_export(catalog, rooms, budget_defaults):
    specs = PropertySpecs(2200, 10)
    estimates = [
        {
            "estimate_id": "est-1",
            "client_name": "Lake House",
            "property_specs": specs,
            "budget": calculate_estimate(rooms, catalog.templates, catalog.items, EstimateOptions(specs, budget_defaults)),
        },
        {
            "estimate_id": "est-2",
            "property_specs": specs,
            "budget": calculate_estimate(rooms, catalog.templates, catalog.items),
        },
    ]
    export = build_estimates_export(estimates)

    assert list(export["estimate_id"]) == ["est-1", "est-2"]
    assert list(export["rooms"]) == [3, 3]
    assert export.loc[0, "range_low"] == 264000 + 4200000
    assert export.loc[1, "range_high"] == 506000
    assert export.loc[0, "Design Fee"] == 2200000
    assert pd.isna(export.loc[1, "Design Fee"])
    assert set(label for _, label in ADD_ON_LABELS) <= set(export.columns)
