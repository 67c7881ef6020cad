"""
Keyword-based task duration estimates.

Deterministic and explainable: the title is matched against keyword
categories, scaled by priority, clamped to the category range and rounded to
the nearest half hour.
"""

import math
from dataclasses import dataclass

from .models import TaskEstimate, TaskPriority

DEFAULT_HOURS = 2.0


@dataclass(frozen=True)
class KeywordCategory:
    name: str
    keywords: tuple[str, ...]
    base_hours: float
    min_hours: float
    max_hours: float


KEYWORD_CATEGORIES = (
    KeywordCategory(
        name="quick",
        keywords=("review", "sync", "reply", "email", "call", "follow-up", "check", "update", "fix bug"),
        base_hours=0.75,
        min_hours=0.5,
        max_hours=1.0,
    ),
    KeywordCategory(
        name="medium",
        keywords=("spec", "plan", "proposal", "design", "outline", "strategy", "document", "write", "prepare", "analyze"),
        base_hours=2.0,
        min_hours=1.5,
        max_hours=3.0,
    ),
    KeywordCategory(
        name="large",
        keywords=("implement", "build", "integration", "refactor", "migrate", "feature", "develop", "create", "setup"),
        base_hours=4.0,
        min_hours=3.0,
        max_hours=6.0,
    ),
    KeywordCategory(
        name="very_large",
        keywords=("architecture", "infrastructure", "system", "platform", "framework", "overhaul", "redesign"),
        base_hours=6.0,
        min_hours=6.0,
        max_hours=8.0,
    ),
)

PRIORITY_MULTIPLIERS = {
    TaskPriority.LOW: 0.85,
    TaskPriority.MEDIUM: 1.0,
    TaskPriority.HIGH: 1.15,
}


def _matched_keywords(category: KeywordCategory, title: str) -> list[str]:
    return [keyword for keyword in category.keywords if keyword in title]


def _round_half_hour(hours: float) -> float:
    return math.floor(hours * 2 + 0.5) / 2


def match_category(title: str) -> KeywordCategory:
    """Category with the most keyword hits; earlier categories win ties."""
    lower_title = title.lower()
    best = KEYWORD_CATEGORIES[1]
    best_count = 0
    for category in KEYWORD_CATEGORIES:
        count = len(_matched_keywords(category, lower_title))
        if count > best_count:
            best, best_count = category, count
    return best


def estimate_task_hours(title: str, priority: TaskPriority) -> float:
    """
    Suggest a duration for a task.

    Args:
        title: Free-text task title
        priority: Task priority level

    Returns:
        Suggested hours, rounded to the nearest 0.5
    """
    if not title or not title.strip():
        return DEFAULT_HOURS

    category = match_category(title)
    hours = category.base_hours * PRIORITY_MULTIPLIERS[TaskPriority(priority)]
    hours = max(category.min_hours, min(category.max_hours, hours))
    return _round_half_hour(hours)


def estimation_explanation(title: str, priority: TaskPriority) -> str:
    """Human-readable reason for the estimate."""
    lower_title = (title or "").lower()
    matched = []
    for category in KEYWORD_CATEGORIES:
        matched.extend(_matched_keywords(category, lower_title))

    if not matched:
        return "Based on typical task duration"

    keyword_text = ", ".join(f'"{keyword}"' for keyword in matched[:2])
    priority = TaskPriority(priority)
    priority_text = f" and {priority.value} priority" if priority != TaskPriority.MEDIUM else ""
    return f"Based on {keyword_text}{priority_text}"


def estimate_task(title: str, priority: TaskPriority = TaskPriority.MEDIUM) -> TaskEstimate:
    return TaskEstimate(
        hours=estimate_task_hours(title, priority),
        explanation=estimation_explanation(title, priority),
    )
