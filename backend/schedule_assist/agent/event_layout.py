"""
Event Layout - Overlap Groups for Day Rendering

Partitions a day's events into clusters connected by pairwise time overlap,
so a renderer can share horizontal space only among events that actually
collide and give every other event the full column width.
"""

import logging
from typing import Dict, List, Optional, Set, Tuple, Sequence
from datetime import datetime
from dataclasses import dataclass

from ..utils.helpers import overlaps

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class LayoutEvent:
    """Calendar event as seen by the layout engine"""
    id: str
    start: datetime
    end: datetime
    title: Optional[str] = None
    is_all_day: bool = False

def events_overlap(first: LayoutEvent, second: LayoutEvent) -> bool:
    """Strict overlap; events that only touch are not in conflict"""
    return overlaps(first.start, first.end, second.start, second.end)

def _by_start(event: LayoutEvent) -> datetime:
    return event.start

def build_overlap_graph(events: Sequence[LayoutEvent]) -> Dict[str, Set[str]]:
    """Adjacency map with an edge between every pair of overlapping events"""
    graph: Dict[str, Set[str]] = {event.id: set() for event in events}
    for i, first in enumerate(events):
        for second in events[i + 1:]:
            if events_overlap(first, second):
                graph[first.id].add(second.id)
                graph[second.id].add(first.id)
    return graph

def group_overlapping_events(events: Sequence[LayoutEvent]) -> List[List[LayoutEvent]]:
    """
    Split events into connected components of the overlap graph

    Args:
        events: Events of a single day, in any order

    Returns:
        Groups in order of their earliest event; each group sorted by start
        time, ties kept in input order

    Raises:
        ValueError: If two events share an id
    """
    seen_ids: Set[str] = set()
    for event in events:
        if event.id in seen_ids:
            raise ValueError(f"Duplicate event id {event.id!r}")
        seen_ids.add(event.id)

    sorted_events = sorted(events, key=_by_start)
    graph = build_overlap_graph(sorted_events)
    by_id = {event.id: event for event in sorted_events}
    position = {event.id: index for index, event in enumerate(sorted_events)}

    visited: Set[str] = set()
    groups: List[List[LayoutEvent]] = []

    for event in sorted_events:
        if event.id in visited:
            continue

        group: List[LayoutEvent] = []
        stack = [event]
        visited.add(event.id)

        while stack:
            current = stack.pop()
            group.append(current)
            for neighbor_id in graph[current.id]:
                if neighbor_id not in visited:
                    visited.add(neighbor_id)
                    stack.append(by_id[neighbor_id])

        # sorted_events is already in stable start order
        group.sort(key=lambda e: position[e.id])
        groups.append(group)

    logger.debug(f"Grouped {len(sorted_events)} events into {len(groups)} overlap groups")
    return groups

def split_all_day_events(events: Sequence[LayoutEvent]) -> Tuple[List[LayoutEvent], List[LayoutEvent]]:
    """Separate all-day events from timed ones, keeping order"""
    all_day = [event for event in events if event.is_all_day]
    timed = [event for event in events if not event.is_all_day]
    return all_day, timed

def group_day_events(events: Sequence[LayoutEvent]) -> Tuple[List[LayoutEvent], List[List[LayoutEvent]]]:
    """All-day events as-is, timed events in overlap groups"""
    all_day, timed = split_all_day_events(events)
    return all_day, group_overlapping_events(timed)

def find_event_position(groups: Sequence[Sequence[LayoutEvent]], event_id: str) -> Tuple[int, int]:
    """
    Size of the event's overlap group and the event's index inside it

    Events not found in any group are laid out alone: (1, 0).
    """
    for group in groups:
        for index, event in enumerate(group):
            if event.id == event_id:
                return len(group), index
    return 1, 0

__all__ = [
    'LayoutEvent',
    'events_overlap',
    'build_overlap_graph',
    'group_overlapping_events',
    'split_all_day_events',
    'group_day_events',
    'find_event_position'
]
