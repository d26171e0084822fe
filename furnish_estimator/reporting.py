"""
Reporting utilities for presenting budgets as tables.

Every amount in the tables stays in integer cents; formatting to dollars is
left to `format_currency` so the tables remain usable for further math.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

import pandas as pd

from .budget_engine import Budget, ProjectBudget, round_half_up
from .catalog import QualityTier


TIER_COLUMNS = [tier.value for tier in QualityTier]

ADD_ON_LABELS = [
    ("installation", "Installation"),
    ("fuel", "Fuel"),
    ("storage_and_receiving", "Storage & Receiving"),
    ("kitchen", "Kitchen"),
    ("property_management", "Property Management"),
    ("design_fee", "Design Fee"),
]


def format_currency(cents: int) -> str:
    dollars = round_half_up(abs(cents) / 100)
    sign = "-" if cents < 0 and dollars else ""
    return f"{sign}${dollars:,}"


def format_currency_abbreviated(cents: int) -> str:
    """$85.00k style for headline ranges."""
    dollars = cents / 100
    if dollars >= 1_000_000:
        return f"${dollars / 1_000_000:.2f}M"
    if dollars >= 1000:
        return f"${dollars / 1000:.2f}k"
    return format_currency(cents)


def dollars_to_cents(dollars: float) -> int:
    return round_half_up(dollars * 100)


def cents_to_dollars(cents: int) -> float:
    return cents / 100


def build_room_breakdown_table(budget: Budget) -> pd.DataFrame:
    columns = ["room_type", "room_size", "quantity", "display_name"] + TIER_COLUMNS
    records = []
    for room in budget.room_breakdown:
        record = {
            "room_type": room.room_type,
            "room_size": room.room_size,
            "quantity": room.quantity,
            "display_name": room.display_name,
        }
        record.update(room.amounts.to_dict())
        records.append(record)
    return pd.DataFrame(records, columns=columns)


def build_tier_summary_table(budget: Budget) -> pd.DataFrame:
    """
    One row per quality tier: subtotal, contingency, total and, for project
    budgets, the project total including add-ons.
    """
    rows: List[Dict[str, Any]] = []
    for tier in QualityTier:
        tier_total = budget.tier(tier)
        row = {
            "tier": tier.value,
            "tier_name": tier.display_name,
            "subtotal": tier_total.subtotal,
            "contingency": tier_total.contingency,
            "total": tier_total.total,
        }
        if isinstance(budget, ProjectBudget):
            row["project_total"] = budget.project_range[tier]
        rows.append(row)
    return pd.DataFrame(rows).set_index("tier")


def build_estimates_export(estimates: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """
    Spreadsheet-style export of many estimates.

    Each estimate mapping carries `estimate_id`, `property_specs` and
    `budget`; optional `client_name` and `client_email` are passed through.
    Plain budgets leave the add-on columns empty and report their own range.
    """
    records = []
    for estimate in estimates:
        budget = estimate["budget"]
        specs = estimate["property_specs"]
        record: Dict[str, Any] = {
            "estimate_id": estimate["estimate_id"],
            "client_name": estimate.get("client_name", ""),
            "client_email": estimate.get("client_email", ""),
            "square_footage": specs.square_footage,
            "guest_capacity": specs.guest_capacity,
            "rooms": sum(room.quantity for room in budget.room_breakdown),
        }
        if isinstance(budget, ProjectBudget):
            record["range_low"] = budget.project_range.low
            record["range_high"] = budget.project_range.mid
            for key, label in ADD_ON_LABELS:
                record[label] = getattr(budget.project_add_ons, key)
        else:
            record["range_low"] = budget.range_low
            record["range_high"] = budget.range_high
            for _, label in ADD_ON_LABELS:
                record[label] = None
        records.append(record)

    columns = [
        "estimate_id",
        "client_name",
        "client_email",
        "square_footage",
        "guest_capacity",
        "rooms",
        "range_low",
        "range_high",
    ] + [label for _, label in ADD_ON_LABELS]
    return pd.DataFrame(records, columns=columns)
