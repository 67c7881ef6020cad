"""
Executive-style insights and per-day explanations built from a forecast.
"""

import math
from collections.abc import Sequence

from .dates import day_key_for, format_day, resolve_timezone, weekday_name
from .models import (
    CalendarEvent,
    CapacityInsight,
    Contributor,
    DayExplanation,
    DayForecast,
    ForecastResult,
    HoursBreakdown,
    RiskLevel,
    Task,
)

MAX_INSIGHTS = 4
MAX_CONTRIBUTORS = 5
DOMINANT_SHARE = 60
HEAVY_SHARE = 70
LONG_MEETING_HOURS = 2.0
DEADLINE_CLUSTER_SIZE = 3


def _percent(part: float, whole: float) -> int:
    if whole <= 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"


def generate_insights(forecast: ForecastResult) -> list[CapacityInsight]:
    """Summarize the most informative patterns of a forecast (at most four)."""
    insights: list[CapacityInsight] = []
    days = forecast.days

    critical_days = [d for d in days if d.risk_level == RiskLevel.CRITICAL]
    high_days = [d for d in days if d.risk_level == RiskLevel.HIGH]
    if critical_days:
        names = ", ".join(weekday_name(d.date) for d in critical_days)
        insights.append(
            CapacityInsight(
                type="risk",
                text=f"{_plural(len(critical_days), 'critical day')} detected: {names}",
                severity="critical",
            )
        )
    elif high_days:
        names = ", ".join(weekday_name(d.date) for d in high_days)
        insights.append(
            CapacityInsight(
                type="risk",
                text=f"{_plural(len(high_days), 'high-risk day')}: {names}",
                severity="warning",
            )
        )
    else:
        insights.append(
            CapacityInsight(
                type="risk",
                text="No critical days — your capacity looks healthy",
                severity="info",
            )
        )

    meeting_hours = sum(d.meeting_hours for d in days)
    task_hours = sum(d.task_hours for d in days)
    total_hours = meeting_hours + task_hours
    if total_hours > 0:
        meeting_percent = _percent(meeting_hours, total_hours)
        task_percent = _percent(task_hours, total_hours)
        if meeting_percent > DOMINANT_SHARE:
            insights.append(
                CapacityInsight(
                    type="meetings",
                    text=f"Meetings dominate your schedule at {meeting_percent}% of total time",
                    severity="warning",
                )
            )
        elif task_percent > DOMINANT_SHARE:
            insights.append(
                CapacityInsight(
                    type="tasks",
                    text=f"Tasks drive most of your workload at {task_percent}% of total time",
                    severity="info",
                )
            )
        else:
            insights.append(
                CapacityInsight(
                    type="time",
                    text=f"Balanced split: {meeting_percent}% meetings, {task_percent}% tasks",
                    severity="info",
                )
            )

    busy_days = [d for d in days if d.total_hours > 0]
    if busy_days:
        lightest = min(busy_days, key=lambda d: d.utilization)
        heaviest = max(busy_days, key=lambda d: d.utilization)
        if lightest.utilization < 0.5:
            insights.append(
                CapacityInsight(
                    type="time",
                    text=(
                        f"{weekday_name(lightest.date)} is your lightest day at "
                        f"{_percent(lightest.utilization, 1)}% utilization"
                    ),
                    severity="info",
                )
            )
        if heaviest.utilization > 0.9:
            insights.append(
                CapacityInsight(
                    type="time",
                    text=(
                        f"{weekday_name(heaviest.date)} is your heaviest day at "
                        f"{_percent(heaviest.utilization, 1)}% capacity"
                    ),
                    severity="critical" if heaviest.utilization > 1.1 else "warning",
                )
            )

    if forecast.overflow_tasks:
        overflow_hours = sum(t.unallocated_hours for t in forecast.overflow_tasks)
        insights.append(
            CapacityInsight(
                type="tasks",
                text=(
                    f"{_plural(len(forecast.overflow_tasks), 'task')} won't fit "
                    f"({overflow_hours:.1f}h overflow)"
                ),
                severity="critical",
            )
        )

    return insights[:MAX_INSIGHTS]


def _summary_for(day: DayForecast) -> str:
    u = day.utilization
    meetings = f"{day.meeting_hours:.1f}h"
    tasks = f"{day.task_hours:.1f}h"
    if u > 1.1:
        overage = day.total_hours - day.capacity_hours
        return (
            f"This day is critically overloaded at {_percent(u, 1)}% of capacity. "
            f"You have {meetings} of meetings and {tasks} of tasks, "
            f"exceeding your {day.capacity_hours:g}h capacity by {overage:.1f}h."
        )
    if u > 0.9:
        return (
            f"This day is near capacity at {_percent(u, 1)}% utilization. "
            f"With {meetings} of meetings and {tasks} of tasks, "
            "you have minimal buffer for unexpected work."
        )
    if u > 0.7:
        return (
            f"This day is moderately busy at {_percent(u, 1)}% capacity. "
            f"You have {meetings} of meetings and {tasks} of tasks scheduled."
        )
    if u > 0:
        return (
            f"This day is comfortably within capacity at {_percent(u, 1)}% utilization. "
            f"You have {meetings} of meetings and {tasks} of tasks."
        )
    return "This day has no scheduled work. Consider using this time for planning or deep focus work."


def explain_day(
    day: DayForecast,
    events: Sequence[CalendarEvent],
    tasks: Sequence[Task],
    timezone: str = "UTC",
) -> DayExplanation:
    """
    Explain the drivers of a day's load.

    Args:
        day: Day forecast to explain
        events: All events of the forecast; only those on this day are used
        tasks: All tasks of the forecast; only those due this day are used
        timezone: Timezone used to bucket events into days

    Returns:
        DayExplanation with summary, breakdown, contributors and patterns
    """
    tz = resolve_timezone(timezone)
    meeting_percent = _percent(day.meeting_hours, day.total_hours)
    task_percent = _percent(day.task_hours, day.total_hours)

    main_driver = "balanced"
    if meeting_percent > DOMINANT_SHARE:
        main_driver = "meetings"
    elif task_percent > DOMINANT_SHARE:
        main_driver = "tasks"

    day_events = [e for e in events if day_key_for(e.start, tz) == day.date]
    day_tasks = [t for t in tasks if format_day(t.due_date) == day.date]

    contributors = [
        Contributor(type="meeting", title=e.title, hours=e.duration_hours)
        for e in day_events
    ]
    contributors.extend(
        Contributor(type="task", title=t.title, hours=t.estimated_hours)
        for t in day_tasks
    )
    contributors.sort(key=lambda c: c.hours, reverse=True)

    patterns = []
    if main_driver == "meetings" and meeting_percent > HEAVY_SHARE:
        patterns.append(
            f"Meetings occupy {meeting_percent}% of your time, leaving little room for focus work"
        )
    if main_driver == "tasks" and task_percent > HEAVY_SHARE:
        patterns.append(f"Task work dominates this day at {task_percent}% of total time")
    if len(day_tasks) > DEADLINE_CLUSTER_SIZE:
        patterns.append(
            f"Multiple tasks ({len(day_tasks)}) are due on this day, creating a deadline cluster"
        )
    long_meetings = [e for e in day_events if e.duration_hours >= LONG_MEETING_HOURS]
    if long_meetings:
        patterns.append(f"{_plural(len(long_meetings), 'meeting')} longer than 2 hours")
    if day.utilization > 1 and not day.suggested_actions:
        patterns.append("No earlier days have capacity to absorb overflow work")

    return DayExplanation(
        summary=_summary_for(day),
        breakdown=HoursBreakdown(
            meeting_hours=day.meeting_hours,
            task_hours=day.task_hours,
            meeting_percent=meeting_percent,
            task_percent=task_percent,
        ),
        main_driver=main_driver,
        top_contributors=contributors[:MAX_CONTRIBUTORS],
        patterns=patterns,
    )
