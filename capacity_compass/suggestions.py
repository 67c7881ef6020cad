"""
Greedy rebalancing suggestions for overloaded days.

Each high or critical day gets at most one suggestion: move its largest
low-priority chunk to the first earlier day with room, or flag the overload
when nothing fits. Suggestions are advisory and never re-run allocation.
"""

import logging
from collections.abc import Mapping, Sequence

from .capacity import DayCapacity
from .models import (
    DayForecast,
    FlagOverflowAction,
    MoveTaskAction,
    RiskLevel,
    TaskPriority,
)

logger = logging.getLogger(__name__)

OVERLOADED_LEVELS = (RiskLevel.HIGH, RiskLevel.CRITICAL)
RECEIVING_LEVELS = (RiskLevel.LOW, RiskLevel.MEDIUM)


def find_earlier_day_with_capacity(
    days: Sequence[DayForecast], before: str, hours_needed: float
) -> DayForecast | None:
    """First day strictly before ``before`` that is low/medium risk with enough spare hours."""
    for day in days:
        if day.date >= before:
            continue
        if day.risk_level not in RECEIVING_LEVELS:
            continue
        if day.capacity_hours - day.total_hours >= hours_needed:
            return day
    return None


def suggest_for_day(
    day: DayForecast, capacity: DayCapacity, days: Sequence[DayForecast]
) -> MoveTaskAction | FlagOverflowAction:
    candidates = sorted(
        (a for a in capacity.allocations if a.priority == TaskPriority.LOW),
        key=lambda a: a.hours,
        reverse=True,
    )
    for allocation in candidates:
        target = find_earlier_day_with_capacity(days, day.date, allocation.hours)
        if target is not None:
            return MoveTaskAction(
                task_id=allocation.task_id,
                from_date=day.date,
                to_date=target.date,
                hours_to_move=allocation.hours,
                reason=f'Move "{allocation.title}" to {target.date} to reduce overload',
            )

    threshold = "110%" if day.risk_level == RiskLevel.CRITICAL else "90%"
    return FlagOverflowAction(
        reason=f"Day exceeds {threshold} utilization with no earlier capacity available"
    )


def generate_suggestions(
    days: Sequence[DayForecast], capacities: Mapping[str, DayCapacity]
) -> list[DayForecast]:
    """
    Attach suggested actions to overloaded days.

    Args:
        days: Day forecasts without suggestions
        capacities: Day accumulators keyed by day key, for allocation lookup

    Returns:
        New chronologically sorted list of day forecasts
    """
    ordered = sorted(days, key=lambda d: d.date)
    result = []
    for day in ordered:
        capacity = capacities.get(day.date)
        if day.risk_level not in OVERLOADED_LEVELS or capacity is None:
            result.append(day)
            continue

        action = suggest_for_day(day, capacity, ordered)
        logger.debug(f"Suggestion for {day.date}: {action.type}")
        result.append(
            day.model_copy(
                update={"suggested_actions": [*day.suggested_actions, action]}
            )
        )
    return result
