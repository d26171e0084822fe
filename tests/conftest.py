"""Shared rule and catalog fixtures."""

import pytest

from furnish_estimator.budget_engine import BudgetDefaults
from furnish_estimator.catalog import Catalog
from furnish_estimator.rules import AutoConfigRules


def _rules_document():
    return {
        "version": 1,
        "publishedAt": "2024-01-01T00:00:00Z",
        "bunkCapacities": {"small": 4, "medium": 8, "large": 12},
        "bedroomMixRules": [
            {
                "id": "test-rule-1",
                "min_sqft": 2000,
                "max_sqft": 2500,
                "min_guests": 8,
                "max_guests": 12,
                "bedrooms": {"single": 2, "double": 1, "bunk": "small"},
            },
            {
                "id": "test-rule-2",
                "min_sqft": 2500,
                "max_sqft": 3500,
                "min_guests": 12,
                "max_guests": 16,
                "bedrooms": {"single": 3, "double": 2, "bunk": "medium"},
            },
        ],
        "commonAreas": {
            "kitchen": {
                "presence": {"present_if_sqft_gte": 1500},
                "size": {
                    "thresholds": [
                        {"min_sqft": 1500, "max_sqft": 2500, "size": "small"},
                        {"min_sqft": 2500, "size": "medium"},
                    ],
                    "default": "none",
                },
            },
            "dining": {
                "presence": {"present_if_sqft_gte": 1800},
                "size": {
                    "thresholds": [
                        {"min_sqft": 1800, "max_sqft": 3000, "size": "small"},
                        {"min_sqft": 3000, "size": "medium"},
                    ],
                    "default": "none",
                },
            },
            "living": {
                "presence": {"present_if_sqft_gte": 2000},
                "size": {
                    "thresholds": [
                        {"min_sqft": 2000, "max_sqft": 3500, "size": "small"},
                        {"min_sqft": 3500, "size": "medium"},
                    ],
                    "default": "none",
                },
            },
            "recRoom": {
                "presence": {"present_if_sqft_gte": 4000},
                "size": {"thresholds": [{"min_sqft": 4000, "size": "medium"}], "default": "none"},
            },
        },
        "validation": {
            "global": {"min_sqft": 1000, "max_sqft": 10000, "min_guests": 4, "max_guests": 50}
        },
    }


def _catalog_document():
    return {
        "items": [
            {"id": "sofa", "name": "Sofa", "lowPrice": 100000, "midPrice": 200000, "midHighPrice": 300000, "highPrice": 500000},
            {"id": "lamp", "name": "Lamp", "lowPrice": 5000, "midPrice": 10000, "midHighPrice": 15000, "highPrice": 25000},
            {"id": "queen_bed", "name": "Queen Bed", "lowPrice": 60000, "midPrice": 110000, "midHighPrice": 180000, "highPrice": 300000},
            {"id": "bunk_bed", "name": "Bunk Bed", "lowPrice": 50000, "midPrice": 90000, "midHighPrice": 140000, "highPrice": 220000},
        ],
        "roomTemplates": [
            {
                "id": "living_room",
                "displayName": "Living Room",
                "category": "common_spaces",
                "sortOrder": 1,
                "sizes": {
                    "small": {"displayName": "Small", "items": [{"itemId": "sofa", "quantity": 1}]},
                    "medium": {
                        "displayName": "Medium",
                        "items": [{"itemId": "sofa", "quantity": 1}, {"itemId": "lamp", "quantity": 2}],
                    },
                },
            },
            {
                "id": "single_bedroom",
                "displayName": "Single Bedroom",
                "category": "sleeping_spaces",
                "sortOrder": 2,
                "sizes": {
                    "medium": {
                        "displayName": "Medium",
                        "items": [{"itemId": "queen_bed", "quantity": 1}, {"itemId": "lamp", "quantity": 1}],
                    },
                },
            },
            {
                "id": "bunk_room",
                "displayName": "Bunk Room",
                "category": "sleeping_spaces",
                "sortOrder": 3,
                "sizes": {
                    "small": {"displayName": "Sleeps 4", "items": [{"itemId": "bunk_bed", "quantity": 2}]},
                },
            },
        ],
    }


@pytest.fixture
def rules_document():
    """Fresh rules document; tests may edit it before parsing."""
    return _rules_document()


@pytest.fixture
def catalog_document():
    return _catalog_document()


@pytest.fixture
def rules():
    return AutoConfigRules.from_dict(_rules_document())


@pytest.fixture
def catalog():
    return Catalog.from_dict(_catalog_document())


@pytest.fixture
def budget_defaults():
    return BudgetDefaults()
