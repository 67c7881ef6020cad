"""
API wrapper functions for capacity forecasting.

These functions sit between the HTTP layer and the engine: they check the
payload shape, parse it into models and serialize results back to plain
dictionaries. The engine itself never validates its input.
"""

import logging
from typing import Any

from .config import settings
from .core import generate_forecast
from .exceptions import ForecastError, RequestShapeError
from .models import ForecastRequest, ForecastResult

logger = logging.getLogger(__name__)


def validate_forecast_request(request_data: Any) -> str | None:
    """
    Validate the shape of a forecast request.

    Args:
        request_data: Decoded JSON body

    Returns:
        Error message if validation fails, None if valid
    """
    if not isinstance(request_data, dict):
        return "Request body must be an object"

    for field in ("events", "tasks"):
        value = request_data.get(field)
        if value is not None and not isinstance(value, list):
            return f"{field} must be an array"

    config = request_data.get("config")
    if config is not None and not isinstance(config, dict):
        return "config must be an object"

    events = request_data.get("events") or []
    if len(events) > settings.max_events:
        return f"Too many events (maximum {settings.max_events})"

    tasks = request_data.get("tasks") or []
    if len(tasks) > settings.max_tasks:
        return f"Too many tasks (maximum {settings.max_tasks})"

    return None


def parse_forecast_request(request_data: Any) -> ForecastRequest:
    """
    Parse a forecast request, applying defaults for missing keys.

    Raises:
        RequestShapeError: If the payload shape is invalid
        pydantic.ValidationError: If an event, task or config value is malformed
    """
    error = validate_forecast_request(request_data)
    if error:
        raise RequestShapeError(error)

    request = ForecastRequest.model_validate(
        {
            "events": request_data.get("events") or [],
            "tasks": request_data.get("tasks") or [],
            "config": request_data.get("config") or {},
            "today": request_data.get("today"),
        }
    )

    if request.config.window_days > settings.max_window_days:
        raise RequestShapeError(
            f"windowDays must be at most {settings.max_window_days}", field="config.windowDays"
        )
    return request


def run_forecast(request: ForecastRequest) -> ForecastResult:
    """
    Run the engine for a parsed request.

    Raises:
        ForecastError: If the engine fails unexpectedly
    """
    logger.info(
        f"Generating forecast: {len(request.events)} events, {len(request.tasks)} tasks, "
        f"{request.config.window_days} days at {request.config.hours_per_day}h/day"
    )
    try:
        result = generate_forecast(
            request.events, request.tasks, request.config, today=request.today
        )
    except Exception as e:
        logger.error(f"Forecast error: {e}")
        raise ForecastError(str(e)) from e

    if result.overflow_tasks:
        logger.warning(
            f"{len(result.overflow_tasks)} task(s) overflow the "
            f"{result.summary.window_start}..{result.summary.window_end} window"
        )
    return result


def forecast_api(request_data: Any) -> dict[str, Any]:
    """
    API wrapper for forecast generation.

    Args:
        request_data: Dictionary containing events, tasks, config and today

    Returns:
        Serialized ForecastResult with camelCase keys
    """
    result = run_forecast(parse_forecast_request(request_data))
    return format_forecast_result(result)


def format_forecast_result(result: ForecastResult) -> dict[str, Any]:
    return result.model_dump(mode="json", by_alias=True)

