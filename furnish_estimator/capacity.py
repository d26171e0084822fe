"""
Sleeping-capacity calculations for bedroom mixes and selected rooms.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .rules import AutoConfigRules, BedroomMix, BedroomMixRule, BunkSize, parse_bunk_size


SINGLE_BEDROOM_CAPACITY = 2
DOUBLE_BEDROOM_CAPACITY = 4

SINGLE_BEDROOM_TYPE = "single_bedroom"
DOUBLE_BEDROOM_TYPE = "double_bedroom"
BUNK_ROOM_TYPE = "bunk_room"


def bunk_capacity(bunk: Optional[BunkSize], rules: AutoConfigRules) -> int:
    if bunk is None:
        return 0
    return rules.bunk_capacities[bunk]


def bedroom_capacity(bedrooms: BedroomMix, rules: AutoConfigRules) -> int:
    """Maximum number of guests a bedroom mix sleeps."""
    return (
        bedrooms.single * SINGLE_BEDROOM_CAPACITY
        + bedrooms.double * DOUBLE_BEDROOM_CAPACITY
        + bunk_capacity(bedrooms.bunk, rules)
    )


def has_sufficient_capacity(rule: BedroomMixRule, guest_count: int, rules: AutoConfigRules) -> bool:
    return bedroom_capacity(rule.bedrooms, rules) >= guest_count


def _bunk_room_size(room_size: str) -> BunkSize:
    # Sizes outside small/medium/large sleep like a small bunk
    try:
        return parse_bunk_size(room_size) or BunkSize.SMALL
    except ValueError:
        return BunkSize.SMALL


def selected_room_capacity(selected_rooms: Iterable, rules: AutoConfigRules) -> int:
    """
    Capacity of the rooms a user actually picked.

    Bunk rooms sleep according to their room size (small/medium/large map to
    the bunk size of the same name). Rooms that are not bedrooms sleep nobody.
    """
    capacity = 0
    for room in selected_rooms:
        if room.room_type == SINGLE_BEDROOM_TYPE:
            capacity += room.quantity * SINGLE_BEDROOM_CAPACITY
        elif room.room_type == DOUBLE_BEDROOM_TYPE:
            capacity += room.quantity * DOUBLE_BEDROOM_CAPACITY
        elif room.room_type == BUNK_ROOM_TYPE:
            capacity += room.quantity * bunk_capacity(_bunk_room_size(room.room_size), rules)
    return capacity
