"""
Conversion between quantity-based room selections and per-room instances.

A selection of "3 x single bedroom" becomes three instances that can be
edited one by one; summarizing groups instances back by type and size.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Dict, Iterable, List, Tuple

from .catalog import SelectedRoom


_TRAILING_NUMBER = re.compile(r"\s+\d+$")


def _instance_id(room_type: str, index: int) -> str:
    return f"{room_type}_{index}"


def _instance_display_name(display_name: str, index: int, total: int) -> str:
    if total == 1:
        return display_name
    base = _TRAILING_NUMBER.sub("", display_name)
    return f"{base} {index + 1}"


def is_legacy_room(room: SelectedRoom) -> bool:
    # An instance id marks an instance whatever its quantity
    return not room.instance_id


def expand_room_quantities(room: SelectedRoom) -> List[SelectedRoom]:
    quantity = room.quantity or 1
    instances = []
    for i in range(quantity):
        instance_id = room.instance_id if room.instance_id and quantity == 1 else _instance_id(room.room_type, i + 1)
        instances.append(
            replace(
                room,
                quantity=1,
                instance_id=instance_id,
                display_name=_instance_display_name(room.display_name, i, quantity),
            )
        )
    return instances


def normalize_to_room_instances(rooms: Iterable[SelectedRoom]) -> List[SelectedRoom]:
    instances: List[SelectedRoom] = []
    for room in rooms:
        if is_legacy_room(room):
            instances.extend(expand_room_quantities(room))
        else:
            instances.append(replace(room, quantity=1))
    return instances


def summarize_room_instances(instances: Iterable[SelectedRoom]) -> List[SelectedRoom]:
    """
    Group instances by (room type, room size) into quantity-based selections.

    Items and instance id come from the first instance of each group, so
    per-instance item edits are lost.
    """
    grouped: Dict[Tuple[str, str], List[SelectedRoom]] = {}
    for instance in instances:
        grouped.setdefault((instance.room_type, instance.room_size), []).append(instance)

    return [replace(group[0], quantity=len(group)) for group in grouped.values()]


def has_legacy_rooms(rooms: Iterable[SelectedRoom]) -> bool:
    return any(is_legacy_room(room) for room in rooms)
