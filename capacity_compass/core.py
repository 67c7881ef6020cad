"""
Core forecasting engine: backward greedy allocation of task hours into daily
capacity left over by meetings.
"""

import logging
from collections.abc import Sequence
from datetime import date

from .capacity import CapacityWindow
from .dates import current_day, day_key_for, format_day, resolve_timezone, subtract_days
from .models import (
    CalendarEvent,
    CapacityConfig,
    DayForecast,
    ForecastResult,
    ForecastSummary,
    OverflowTask,
    RiskLevel,
    Task,
)
from .risk import classify_risk, overall_risk
from .suggestions import generate_suggestions

logger = logging.getLogger(__name__)


def sort_tasks_for_allocation(tasks: Sequence[Task]) -> list[Task]:
    """Order tasks by priority (high first), then due date; ties keep input order."""
    return sorted(tasks, key=lambda t: (-t.priority.rank, t.due_date))


def fold_meetings(
    window: CapacityWindow, events: Sequence[CalendarEvent], config: CapacityConfig
) -> None:
    tz = resolve_timezone(config.timezone)
    skipped = 0
    for event in events:
        if not window.add_meeting_load(day_key_for(event.start, tz), event.duration_hours):
            skipped += 1
    if skipped:
        logger.debug(f"Ignored {skipped} event(s) outside the forecast window")


def place_task(window: CapacityWindow, task: Task) -> float:
    """
    Walk backward from the task's due date, filling free hours on each day.

    The starting day is the due date clamped into the window; the walk stops
    once it steps before the window start.

    Returns:
        Hours that could not be placed
    """
    remaining = task.estimated_hours
    cursor = min(max(task.due_date, window.start), window.end)

    while remaining > 0 and cursor >= window.start:
        allocation = window.add_task_load(format_day(cursor), task, remaining)
        if allocation is not None:
            remaining -= allocation.hours
        cursor = subtract_days(cursor, 1)

    return remaining


def allocate(
    events: Sequence[CalendarEvent],
    tasks: Sequence[Task],
    config: CapacityConfig,
    today: date,
) -> tuple[CapacityWindow, list[OverflowTask]]:
    """
    Build the capacity window and place meetings and task hours into it.

    Args:
        events: Calendar events; those starting outside the window are ignored
        tasks: Tasks to allocate
        config: Capacity configuration
        today: First day of the window

    Returns:
        Populated capacity window and the unplaceable task remainders
    """
    window = CapacityWindow(today, config)
    fold_meetings(window, events, config)

    overflow_tasks = []
    for task in sort_tasks_for_allocation(tasks):
        remaining = place_task(window, task)
        if remaining > 0:
            overflow_tasks.append(
                OverflowTask(task_id=task.id, unallocated_hours=remaining)
            )

    logger.debug(
        f"Allocated {window.placed_hours():.2f}h across {len(window)} day(s), "
        f"{len(overflow_tasks)} overflow task(s)"
    )
    return window, overflow_tasks


def project_days(window: CapacityWindow) -> list[DayForecast]:
    """Freeze the window's accumulators into day forecasts, oldest first."""
    days = []
    for day in window.sorted_days():
        utilization = day.total_hours / day.capacity_hours
        days.append(
            DayForecast(
                date=day.date,
                capacity_hours=day.capacity_hours,
                meeting_hours=day.meeting_hours,
                task_hours=day.task_hours,
                total_hours=day.total_hours,
                utilization=utilization,
                risk_level=classify_risk(utilization),
            )
        )
    return days


def build_summary(days: Sequence[DayForecast], window: CapacityWindow) -> ForecastSummary:
    return ForecastSummary(
        overall_risk=overall_risk(days),
        critical_days=[d.date for d in days if d.risk_level == RiskLevel.CRITICAL],
        window_start=window.start_key,
        window_end=window.end_key,
    )


def generate_forecast(
    events: Sequence[CalendarEvent],
    tasks: Sequence[Task],
    config: CapacityConfig | None = None,
    *,
    today: date | None = None,
) -> ForecastResult:
    """
    Forecast workload risk over a rolling window.

    Args:
        events: Fixed calendar commitments
        tasks: Flexible, due-dated work items
        config: Capacity configuration (defaults: 8h/day, 7 days, UTC)
        today: Window anchor; defaults to the current day in the config timezone

    Returns:
        ForecastResult with one DayForecast per window day
    """
    if config is None:
        config = CapacityConfig()
    if today is None:
        today = current_day(resolve_timezone(config.timezone))

    window, overflow_tasks = allocate(events, tasks, config, today)
    days = generate_suggestions(project_days(window), window.days)

    return ForecastResult(
        summary=build_summary(days, window),
        days=days,
        overflow_tasks=overflow_tasks,
    )
