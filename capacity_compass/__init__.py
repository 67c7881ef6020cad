"""
Capacity Compass

Short-term workload risk forecasting from calendar events and due-dated tasks.
"""

from .core import allocate, generate_forecast
from .heuristics import estimate_task_hours, estimation_explanation
from .insights import explain_day, generate_insights
from .models import (
    CalendarEvent,
    CapacityConfig,
    DayForecast,
    ForecastResult,
    OverflowTask,
    RiskLevel,
    Task,
    TaskPriority,
)
from .risk import classify_risk

__version__ = "0.1.0"
__all__ = [
    "allocate",
    "generate_forecast",
    "classify_risk",
    "estimate_task_hours",
    "estimation_explanation",
    "explain_day",
    "generate_insights",
    "CalendarEvent",
    "CapacityConfig",
    "DayForecast",
    "ForecastResult",
    "OverflowTask",
    "RiskLevel",
    "Task",
    "TaskPriority",
]
