"""
Furnishing estimator for short-term-rental properties

Recommends a bedroom mix and common-area sizes from square footage and guest
count, then prices the selected rooms at four quality tiers.

Main entry points:
    - compute_auto_configuration: advisory room configuration
    - clamp_guests_for_sqft / get_allowed_guest_range / is_valid_sqft_guest_combination
    - calculate_estimate: Budget or ProjectBudget for selected rooms
    - compute_projection: before/after ROI projection
    - run_estimate: the whole flow in one call

Everything is a pure function over explicit inputs; rules, catalog and budget
defaults are passed in, never held globally.
"""

from .auto_config import ComputedConfiguration, compute_auto_configuration, suggest_room_configuration
from .bedroom_matcher import Matched, NoMatch, match_rule
from .budget_engine import (
    Budget,
    BudgetDefaults,
    BudgetEngine,
    EstimateOptions,
    ProjectBudget,
    calculate_estimate,
    load_budget_defaults,
)
from .capacity import bedroom_capacity, selected_room_capacity
from .catalog import Catalog, Item, PropertySpecs, QualityTier, RoomItem, RoomTemplate, SelectedRoom, load_catalog
from .common_areas import CommonAreas, derive_common_areas
from .fallback import FallbackPolicy, generate_bedroom_fallback
from .guest_range import clamp_guests_for_sqft, get_allowed_guest_range, is_valid_sqft_guest_combination
from .pipeline import EstimateResult, run_estimate
from .roi import RoiComputed, RoiInputs, compute_projection
from .rules import AutoConfigRules, BedroomMix, BunkSize, CommonSize, load_autoconfig_rules

__all__ = [
    # Rules
    'AutoConfigRules',
    'BedroomMix',
    'BunkSize',
    'CommonSize',
    'load_autoconfig_rules',

    # Auto-configuration
    'bedroom_capacity',
    'selected_room_capacity',
    'match_rule',
    'Matched',
    'NoMatch',
    'FallbackPolicy',
    'generate_bedroom_fallback',
    'CommonAreas',
    'derive_common_areas',
    'clamp_guests_for_sqft',
    'get_allowed_guest_range',
    'is_valid_sqft_guest_combination',
    'ComputedConfiguration',
    'compute_auto_configuration',
    'suggest_room_configuration',

    # Budget
    'Catalog',
    'Item',
    'RoomItem',
    'RoomTemplate',
    'SelectedRoom',
    'PropertySpecs',
    'QualityTier',
    'load_catalog',
    'Budget',
    'ProjectBudget',
    'BudgetDefaults',
    'BudgetEngine',
    'EstimateOptions',
    'calculate_estimate',
    'load_budget_defaults',

    # ROI
    'RoiInputs',
    'RoiComputed',
    'compute_projection',

    # Pipeline
    'EstimateResult',
    'run_estimate',
]
