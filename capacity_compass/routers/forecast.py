"""
Capacity forecast endpoints.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body

from capacity_compass.api import forecast_api, parse_forecast_request, run_forecast
from capacity_compass.exceptions import ResourceNotFoundError
from capacity_compass.insights import explain_day, generate_insights
from capacity_compass.models import DayExplanation, ForecastResult, InsightsResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/capacity-forecast", tags=["forecast"])

ERROR_RESPONSES = {
    400: {"description": "Malformed request shape"},
    422: {"description": "Invalid event, task or config values"},
    500: {"description": "Forecast generation failed"},
}


@router.post("", response_model=ForecastResult, responses=ERROR_RESPONSES)
async def create_capacity_forecast(payload: Any = Body(default=None)):
    """
    Forecast workload risk for the given events and tasks.

    Missing ``events``/``tasks`` default to empty lists and a missing
    ``config`` takes the default capacity settings.
    """
    return forecast_api({} if payload is None else payload)


@router.post("/insights", response_model=InsightsResponse, responses=ERROR_RESPONSES)
async def create_capacity_insights(payload: Any = Body(default=None)):
    """Forecast plus a short list of headline insights."""
    result = run_forecast(parse_forecast_request({} if payload is None else payload))
    return InsightsResponse(forecast=result, insights=generate_insights(result))


@router.post(
    "/days/{day}/explanation",
    response_model=DayExplanation,
    responses={**ERROR_RESPONSES, 404: {"description": "Day outside the forecast window"}},
)
async def explain_forecast_day(day: str, payload: Any = Body(default=None)):
    """Explain what drives the load on one day of the forecast."""
    request = parse_forecast_request({} if payload is None else payload)
    result = run_forecast(request)

    day_forecast = next((d for d in result.days if d.date == day), None)
    if day_forecast is None:
        logger.info(f"Explanation requested for {day}, outside the forecast window")
        raise ResourceNotFoundError("Day", day)

    return explain_day(day_forecast, request.events, request.tasks, request.config.timezone)
