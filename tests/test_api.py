"""
Tests for the framework-free API wrapper functions.
"""

import pytest
from pydantic import ValidationError

from capacity_compass.api import (
    forecast_api,
    parse_forecast_request,
    run_forecast,
    validate_forecast_request,
)
from capacity_compass.exceptions import ForecastError, RequestShapeError
from capacity_compass.models import ForecastRequest


def _payload(**overrides):
    payload = {
        "events": [
            {
                "id": "e1",
                "title": "Team Standup",
                "start": "2025-11-25T10:00:00Z",
                "end": "2025-11-25T10:30:00Z",
                "type": "meeting",
            }
        ],
        "tasks": [
            {
                "id": "t1",
                "title": "Review PR",
                "dueDate": "2025-11-25",
                "estimatedHours": 2,
                "priority": "medium",
            }
        ],
        "config": {"hoursPerDay": 8, "windowDays": 7},
        "today": "2025-11-25",
    }
    payload.update(overrides)
    return payload


class TestValidateForecastRequest:
    def test_valid_request(self):
        assert validate_forecast_request(_payload()) is None

    def test_missing_keys_are_valid(self):
        assert validate_forecast_request({}) is None

    @pytest.mark.parametrize(
        ("field", "value", "message"),
        [
            ("events", "not-a-list", "events must be an array"),
            ("tasks", {"id": "t1"}, "tasks must be an array"),
            ("config", [8, 7], "config must be an object"),
        ],
    )
    def test_shape_errors(self, field, value, message):
        assert validate_forecast_request(_payload(**{field: value})) == message

    def test_body_must_be_object(self):
        assert validate_forecast_request([]) == "Request body must be an object"

    def test_too_many_tasks(self, monkeypatch):
        from capacity_compass.api import settings

        monkeypatch.setattr(settings, "max_tasks", 1)
        tasks = _payload()["tasks"] * 2
        assert validate_forecast_request({"tasks": tasks}) == "Too many tasks (maximum 1)"


class TestParseForecastRequest:
    def test_defaults_applied(self):
        request = parse_forecast_request({"events": None})

        assert request.events == []
        assert request.tasks == []
        assert request.config.hours_per_day == 8
        assert request.config.window_days == 7
        assert request.config.timezone == "UTC"
        assert request.today is None

    def test_partial_config(self):
        request = parse_forecast_request({"config": {"windowDays": 3}})
        assert request.config.window_days == 3
        assert request.config.hours_per_day == 8

    def test_camel_case_fields(self):
        request = parse_forecast_request(_payload())
        assert request.tasks[0].estimated_hours == 2
        assert str(request.tasks[0].due_date) == "2025-11-25"

    def test_shape_error_raised(self):
        with pytest.raises(RequestShapeError) as exc_info:
            parse_forecast_request({"events": "nope"})
        assert exc_info.value.error_code == "INVALID_REQUEST"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"config": {"hoursPerDay": 0}},
            {"config": {"windowDays": 0}},
            {"config": {"hoursPerDay": "inf"}},
            {"today": "9999-12-30"},
            {"config": {"timezone": "Nowhere/Special"}},
            {"tasks": [{"id": "t1", "title": "x", "dueDate": "2025-11-25", "estimatedHours": -1, "priority": "low"}]},
            {"tasks": [{"id": "t1", "title": "x", "dueDate": "2025-11-25", "estimatedHours": float("nan"), "priority": "low"}]},
            {"tasks": [{"id": "t1", "title": "x", "dueDate": "someday", "estimatedHours": 1, "priority": "low"}]},
            {"tasks": [{"id": "t1", "title": "x", "dueDate": "2025-11-25", "estimatedHours": 1, "priority": "urgent"}]},
            {"events": [{"id": "e1", "title": "x", "start": "2025-11-25T10:00:00Z", "end": "2025-11-25T11:00:00"}]},
        ],
    )
    def test_malformed_values_rejected(self, overrides):
        with pytest.raises(ValidationError):
            parse_forecast_request(_payload(**overrides))

    def test_window_guard(self):
        with pytest.raises(RequestShapeError, match="windowDays must be at most"):
            parse_forecast_request({"config": {"windowDays": 10_000}})


class TestRunForecast:
    def test_unexpected_failure_wrapped(self, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("capacity_compass.api.generate_forecast", explode)

        with pytest.raises(ForecastError, match="boom"):
            run_forecast(ForecastRequest())


class TestForecastApi:
    def test_serialized_result_uses_camel_case(self):
        response = forecast_api(_payload())

        assert set(response) == {"summary", "days", "overflowTasks"}
        assert response["summary"] == {
            "overallRisk": "low",
            "criticalDays": [],
            "windowStart": "2025-11-25",
            "windowEnd": "2025-12-01",
        }
        first_day = response["days"][0]
        assert first_day["date"] == "2025-11-25"
        assert first_day["meetingHours"] == pytest.approx(0.5)
        assert first_day["taskHours"] == pytest.approx(2)
        assert first_day["riskLevel"] == "low"
        assert first_day["suggestedActions"] == []

    def test_move_suggestion_serialized(self):
        response = forecast_api(
            _payload(
                events=[
                    {"id": "e1", "title": "Workshop", "start": "2025-11-26T09:00:00Z", "end": "2025-11-26T15:00:00Z"}
                ],
                tasks=[
                    {"id": "t1", "title": "Cleanup", "dueDate": "2025-11-26", "estimatedHours": 5, "priority": "low"}
                ],
            )
        )

        day = next(d for d in response["days"] if d["date"] == "2025-11-26")
        assert day["suggestedActions"] == [
            {
                "type": "moveTask",
                "taskId": "t1",
                "fromDate": "2025-11-26",
                "toDate": "2025-11-25",
                "hoursToMove": 2.0,
                "reason": 'Move "Cleanup" to 2025-11-25 to reduce overload',
            }
        ]
