"""
Before/after ROI projection for a furnishing refresh.

Fixed costs and rates are annual dollars; occupancy and management fee are
fractions (0..1).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class RoiFixedCosts:
    mortgage: float = 0.0
    property_taxes: float = 0.0
    insurance: float = 0.0
    utilities: float = 0.0
    maintenance: float = 0.0
    supplies: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoiFixedCosts":
        return cls(
            mortgage=float(data.get("mortgage", 0.0)),
            property_taxes=float(data.get("propertyTaxes", 0.0)),
            insurance=float(data.get("insurance", 0.0)),
            utilities=float(data.get("utilities", 0.0)),
            maintenance=float(data.get("maintenance", 0.0)),
            supplies=float(data.get("supplies", 0.0)),
        )


@dataclass(frozen=True)
class RoiInputs:
    occupancy_before: float
    occupancy_after: float
    adr_before: float
    adr_after: float
    fixed: RoiFixedCosts = field(default_factory=RoiFixedCosts)
    property_management_pct: float = 0.0
    sde_multiple: float = 3.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoiInputs":
        return cls(
            occupancy_before=float(data["occupancyBefore"]),
            occupancy_after=float(data["occupancyAfter"]),
            adr_before=float(data["adrBefore"]),
            adr_after=float(data["adrAfter"]),
            fixed=RoiFixedCosts.from_dict(data.get("fixed") or {}),
            property_management_pct=float(data.get("propertyManagementPct", 0.0)),
            sde_multiple=float(data.get("sdeMultiple", 3.0)),
        )


@dataclass(frozen=True)
class RoiComputed:
    gross_before: float
    gross_after: float
    pm_before: float
    pm_after: float
    other_fixed: float
    sde_before: float
    sde_after: float
    ev_before: float
    ev_after: float
    net_cash_flow_before: float
    net_cash_flow_after: float
    annual_cash_flow_gain: float
    enterprise_value_gain: float
    total_year_one_gain: float


def gross(adr: float, occupancy: float) -> float:
    return adr * occupancy * DAYS_PER_YEAR


def property_management_fee(gross_annual: float, pm_pct: float) -> float:
    return gross_annual * pm_pct


def other_fixed_excluding_mortgage(fixed: RoiFixedCosts) -> float:
    return fixed.property_taxes + fixed.insurance + fixed.utilities + fixed.maintenance + fixed.supplies


def net_cash_flow(gross_annual: float, pm_fee: float, fixed: RoiFixedCosts) -> float:
    return gross_annual - pm_fee - fixed.mortgage - other_fixed_excluding_mortgage(fixed)


def seller_discretionary_earnings(gross_annual: float, other_fixed: float) -> float:
    # Net cash flow with mortgage and management fee added back
    return gross_annual - other_fixed


def enterprise_value(sde: float, multiple: float) -> float:
    return sde * multiple


def compute_projection(inputs: RoiInputs) -> RoiComputed:
    other_fixed = other_fixed_excluding_mortgage(inputs.fixed)

    g_before = gross(inputs.adr_before, inputs.occupancy_before)
    g_after = gross(inputs.adr_after, inputs.occupancy_after)

    pm_before = property_management_fee(g_before, inputs.property_management_pct)
    pm_after = property_management_fee(g_after, inputs.property_management_pct)

    net_before = net_cash_flow(g_before, pm_before, inputs.fixed)
    net_after = net_cash_flow(g_after, pm_after, inputs.fixed)

    sde_before = seller_discretionary_earnings(g_before, other_fixed)
    sde_after = seller_discretionary_earnings(g_after, other_fixed)

    ev_before = enterprise_value(sde_before, inputs.sde_multiple)
    ev_after = enterprise_value(sde_after, inputs.sde_multiple)

    return RoiComputed(
        gross_before=g_before,
        gross_after=g_after,
        pm_before=pm_before,
        pm_after=pm_after,
        other_fixed=other_fixed,
        sde_before=sde_before,
        sde_after=sde_after,
        ev_before=ev_before,
        ev_after=ev_after,
        net_cash_flow_before=net_before,
        net_cash_flow_after=net_after,
        annual_cash_flow_gain=net_after - net_before,
        enterprise_value_gain=ev_after - ev_before,
        total_year_one_gain=(net_after - net_before) + (ev_after - ev_before),
    )
