"""
Data models for capacity forecasting using Pydantic.

Public models serialize with camelCase aliases so the JSON contract matches
what the web client sends and reads.
"""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .dates import duration_hours as hours_between, resolve_timezone


class CamelModel(BaseModel):
    """Immutable base model with camelCase JSON aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class EventType(str, Enum):
    MEETING = "meeting"
    FOCUS = "focus"
    PERSONAL = "personal"


class TaskPriority(str, Enum):
    """Priority tier of a task; higher rank claims capacity first."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return {"low": 1, "medium": 2, "high": 3}[self.value]


class RiskLevel(str, Enum):
    """Risk tier derived from a day's utilization."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def severity(self) -> int:
        return {"low": 0, "medium": 1, "high": 2, "critical": 3}[self.value]


class CalendarEvent(CamelModel):
    """Fixed calendar commitment."""

    id: str = Field(..., description="Unique event identifier")
    title: str = Field(..., description="Event title")
    start: datetime = Field(..., description="Start instant")
    end: datetime = Field(..., description="End instant")
    type: EventType | None = Field(None, description="Optional category tag")

    @model_validator(mode="after")
    def consistent_timezones(self) -> "CalendarEvent":
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise ValueError("start and end must both be timezone-aware or both naive")
        return self

    @property
    def duration_hours(self) -> float:
        """Event length in hours; inverted ranges count as zero."""
        return hours_between(self.start, self.end)


class Task(CamelModel):
    """Flexible, due-dated work item."""

    id: str = Field(..., description="Unique task identifier")
    title: str = Field(..., description="Task title")
    due_date: date = Field(..., description="Due date (YYYY-MM-DD)")
    estimated_hours: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Estimated hours to complete"
    )
    priority: TaskPriority = Field(..., description="Priority tier")


class CapacityConfig(CamelModel):
    """Capacity settings for a forecast; omitted fields take defaults."""

    hours_per_day: float = Field(
        8.0, gt=0, allow_inf_nan=False, description="Working hours per day"
    )
    window_days: int = Field(7, ge=1, description="Number of days to forecast")
    timezone: str = Field("UTC", description="IANA timezone for day boundaries")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        resolve_timezone(v)
        return v


class TaskAllocation(CamelModel):
    """Hours of one task placed on one day."""

    task_id: str
    date: str
    hours: float
    priority: TaskPriority
    title: str


class MoveTaskAction(CamelModel):
    type: Literal["moveTask"] = "moveTask"
    task_id: str
    from_date: str
    to_date: str
    hours_to_move: float
    reason: str


class FlagOverflowAction(CamelModel):
    type: Literal["flagOverflow"] = "flagOverflow"
    reason: str


SuggestedAction = Annotated[
    MoveTaskAction | FlagOverflowAction, Field(discriminator="type")
]


class DayForecast(CamelModel):
    """Forecast for a single calendar day."""

    date: str = Field(..., description="Day key (YYYY-MM-DD)")
    capacity_hours: float
    meeting_hours: float
    task_hours: float
    total_hours: float
    utilization: float
    risk_level: RiskLevel
    suggested_actions: list[SuggestedAction] = Field(default_factory=list)


class OverflowTask(CamelModel):
    """Portion of a task that could not be placed in the window."""

    task_id: str
    unallocated_hours: float


class ForecastSummary(CamelModel):
    overall_risk: RiskLevel
    critical_days: list[str] = Field(default_factory=list)
    window_start: str
    window_end: str


class ForecastResult(CamelModel):
    """Complete forecast handed to API consumers."""

    summary: ForecastSummary
    days: list[DayForecast] = Field(default_factory=list)
    overflow_tasks: list[OverflowTask] = Field(default_factory=list)


class ForecastRequest(CamelModel):
    """Request model for the forecast API."""

    events: list[CalendarEvent] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    config: CapacityConfig = Field(default_factory=CapacityConfig)
    today: date | None = Field(
        None, description="Window anchor; defaults to the current day"
    )

    @model_validator(mode="after")
    def window_fits_calendar(self) -> "ForecastRequest":
        if self.today is not None:
            days_left = (date.max - self.today).days + 1
            if self.config.window_days > days_left:
                raise ValueError("Forecast window extends past the last supported date")
        return self


class TaskEstimateRequest(CamelModel):
    title: str = Field(..., description="Free-text task title")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Priority tier")


class TaskEstimate(CamelModel):
    hours: float
    explanation: str


class CapacityInsight(CamelModel):
    type: Literal["risk", "meetings", "tasks", "time"]
    text: str
    severity: Literal["info", "warning", "critical"] = "info"


class InsightsResponse(CamelModel):
    forecast: ForecastResult
    insights: list[CapacityInsight] = Field(default_factory=list)


class HoursBreakdown(CamelModel):
    meeting_hours: float
    task_hours: float
    meeting_percent: int
    task_percent: int


class Contributor(CamelModel):
    type: Literal["meeting", "task"]
    title: str
    hours: float


class DayExplanation(CamelModel):
    """Why a day carries the load it does."""

    summary: str
    breakdown: HoursBreakdown
    main_driver: Literal["meetings", "tasks", "balanced"]
    top_contributors: list[Contributor] = Field(default_factory=list)
    patterns: list[str] = Field(default_factory=list)
