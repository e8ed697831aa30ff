from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from salon_calendar.application.utils.local_calendar import LocalCalendar
from salon_calendar.domain.entities.appointment import Appointment
from salon_calendar.domain.entities.layout_event import DisplayWindow, LayoutEvent

MIN_VISIBLE_MINUTES = 15


@dataclass(frozen=True)
class _Positioned:
    appointment: Appointment
    start_minute: int
    end_minute: int


def layout_day(
    appointments: Iterable[Appointment],
    window: DisplayWindow,
    calendar: LocalCalendar,
) -> list[LayoutEvent]:
    """
    Lay out one day's appointments into side-by-side lanes.

    Algorithm:
        1. Convert to window minutes, clamp into [0, total]; degenerate spans
           become a 15 minute marker.
        2. Sort by start ascending, then end descending.
        3. Cluster while start < running max end of the cluster.
        4. Per cluster, first-fit lanes: reuse lane i when lane_end[i] <= start.
        5. Every event of a cluster gets lane_count = lanes used by the cluster.

    Returns LayoutEvents in sorted order.
    """
    positioned = sorted(
        (_position(a, window, calendar) for a in appointments),
        key=lambda ev: (ev.start_minute, -ev.end_minute),
    )

    laid_out: list[LayoutEvent] = []
    for cluster in cluster_events(positioned):
        lane_ends: list[int] = []
        placed: list[LayoutEvent] = []
        for ev in cluster:
            lane = next((i for i, end in enumerate(lane_ends) if end <= ev.start_minute), -1)
            if lane == -1:
                lane = len(lane_ends)
                lane_ends.append(ev.end_minute)
            else:
                lane_ends[lane] = ev.end_minute
            placed.append(
                LayoutEvent(
                    appointment=ev.appointment,
                    start_minute=ev.start_minute,
                    end_minute=ev.end_minute,
                    lane=lane,
                    lane_count=1,
                )
            )
        lane_count = len(lane_ends) or 1
        laid_out.extend(replace(ev, lane_count=lane_count) for ev in placed)

    return laid_out


def cluster_events(events: Sequence) -> list[list]:
    """
    Split start-sorted events into maximal runs of transitively overlapping events.

    Works on anything with start_minute/end_minute attributes.
    """
    clusters: list[list] = []
    current: list = []
    current_end = -1
    for ev in events:
        if not current:
            current = [ev]
            current_end = ev.end_minute
            continue
        if ev.start_minute >= current_end:
            clusters.append(current)
            current = [ev]
            current_end = ev.end_minute
            continue
        current.append(ev)
        current_end = max(current_end, ev.end_minute)
    if current:
        clusters.append(current)
    return clusters


def max_overlap(events: Sequence) -> int:
    """Largest number of half-open [start, end) intervals covering one point."""
    points: list[tuple[int, int]] = []
    for ev in events:
        points.append((ev.start_minute, 1))
        points.append((ev.end_minute, -1))
    # Ends sort before starts at the same minute: touching intervals do not overlap
    points.sort(key=lambda p: (p[0], p[1]))
    best = current = 0
    for _, delta in points:
        current += delta
        best = max(best, current)
    return best


def _position(appointment: Appointment, window: DisplayWindow, calendar: LocalCalendar) -> _Positioned:
    total = window.total_minutes
    offset = window.start_hour * 60

    start_hour, start_min = calendar.to_local_clock(appointment.starts_at)
    end_hour, end_min = calendar.to_local_clock(appointment.ends_at)

    start = _clamp(start_hour * 60 + start_min - offset, 0, total)
    end = _clamp(end_hour * 60 + end_min - offset, 0, total)
    if end <= start:
        end = min(total, start + MIN_VISIBLE_MINUTES)

    return _Positioned(appointment=appointment, start_minute=start, end_minute=end)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
