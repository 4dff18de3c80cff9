"""Task API endpoints."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Path, Query, Response, status

from src.api.dependencies import get_current_user, get_task_service
from src.models.enums import TaskStatus
from src.models.user import User
from src.schemas.task import (
    TaskCreate,
    TaskEnvelope,
    TaskListResponse,
    TaskReplace,
    TaskResponse,
    TaskUpdate,
)
from src.services.task_service import TaskService

# Ids are 32-bit integer columns
TaskId = Annotated[int, Path(gt=0, le=2**31 - 1)]

# Authentication runs before any path or body handling reaches the service
router = APIRouter(
    prefix="/api/v1/tasks",
    tags=["tasks"],
    dependencies=[Depends(get_current_user)],
)


def _envelope(task) -> TaskEnvelope:
    return TaskEnvelope(task=TaskResponse.model_validate(task))


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
    scope: Annotated[Literal["own", "all"], Query()] = "own",
    task_status: Annotated[TaskStatus | None, Query(alias="status")] = None,
):
    """List the current user's tasks; admins may pass ``scope=all``."""
    tasks = service.list_tasks(current_user, include_all=scope == "all", status=task_status)
    return TaskListResponse(tasks=[TaskResponse.model_validate(t) for t in tasks])


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a task owned by the current user."""
    return _envelope(service.create_task(current_user, task_data))


@router.get("/{task_id}", response_model=TaskEnvelope)
async def get_task(
    task_id: TaskId,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get a specific task."""
    return _envelope(service.get_task(task_id, current_user))


@router.patch("/{task_id}", response_model=TaskEnvelope)
async def update_task(
    task_id: TaskId,
    task_data: TaskUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Partially update a task."""
    return _envelope(service.update_task(task_id, current_user, task_data))


@router.put("/{task_id}", response_model=TaskEnvelope)
async def replace_task(
    task_id: TaskId,
    task_data: TaskReplace,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Update a task; the title must be supplied."""
    return _envelope(service.update_task(task_id, current_user, task_data))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: TaskId,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Delete a task."""
    service.delete_task(task_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
