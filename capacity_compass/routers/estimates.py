"""
Task duration estimate endpoint.
"""

from fastapi import APIRouter

from capacity_compass.heuristics import estimate_task
from capacity_compass.models import TaskEstimate, TaskEstimateRequest

router = APIRouter(prefix="/api", tags=["estimates"])


@router.post("/task-estimate", response_model=TaskEstimate)
async def create_task_estimate(request: TaskEstimateRequest):
    """Suggest a duration for a task from its title and priority."""
    return estimate_task(request.title, request.priority)
