"""
Per-day capacity accumulators for a forecast window.

A ``CapacityWindow`` is built once per forecast, mutated by the meeting and
task passes, and then projected into immutable ``DayForecast`` values.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date

from .dates import add_days, format_day
from .models import CapacityConfig, Task, TaskAllocation


@dataclass
class DayCapacity:
    date: str
    capacity_hours: float
    meeting_hours: float = 0.0
    task_hours: float = 0.0
    free_hours: float | None = None
    allocations: list[TaskAllocation] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.free_hours is None:
            self.free_hours = self.capacity_hours

    @property
    def total_hours(self) -> float:
        return self.meeting_hours + self.task_hours

    def add_meeting_load(self, hours: float) -> None:
        # Overbooked meeting days keep their full meeting load; free time bottoms out at 0
        self.meeting_hours += hours
        self.free_hours = max(0.0, self.free_hours - hours)

    def add_task_load(self, task: Task, hours: float) -> TaskAllocation:
        """Place ``hours`` of ``task`` on this day, bounded by the free hours."""
        hours = min(hours, self.free_hours)
        self.free_hours -= hours
        self.task_hours += hours
        allocation = TaskAllocation(
            task_id=task.id,
            date=self.date,
            hours=hours,
            priority=task.priority,
            title=task.title,
        )
        self.allocations.append(allocation)
        return allocation


class CapacityWindow:
    """Mapping of day key to ``DayCapacity`` for ``[start, start + window_days - 1]``."""

    def __init__(self, start: date, config: CapacityConfig):
        self.start = start
        self.end = add_days(start, config.window_days - 1)
        self.days: dict[str, DayCapacity] = {}
        for offset in range(config.window_days):
            key = format_day(add_days(start, offset))
            self.days[key] = DayCapacity(date=key, capacity_hours=config.hours_per_day)

    @property
    def start_key(self) -> str:
        return format_day(self.start)

    @property
    def end_key(self) -> str:
        return format_day(self.end)

    def __contains__(self, day_key: object) -> bool:
        return day_key in self.days

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[DayCapacity]:
        return iter(self.sorted_days())

    def get(self, day_key: str) -> DayCapacity | None:
        return self.days.get(day_key)

    def add_meeting_load(self, day_key: str, hours: float) -> bool:
        """Fold meeting hours into a day; returns False if the day is outside the window."""
        day = self.days.get(day_key)
        if day is None:
            return False
        day.add_meeting_load(hours)
        return True

    def add_task_load(self, day_key: str, task: Task, hours: float) -> TaskAllocation | None:
        day = self.days.get(day_key)
        if day is None or day.free_hours <= 0:
            return None
        return day.add_task_load(task, hours)

    def sorted_days(self) -> list[DayCapacity]:
        """Days in chronological order."""
        return [self.days[key] for key in sorted(self.days)]

    def placed_hours(self) -> float:
        return sum(day.task_hours for day in self.days.values())
