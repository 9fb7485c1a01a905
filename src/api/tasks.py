"""Task API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import AuthContext, get_auth_context, get_task_service
from src.models.enums import TaskStatus
from src.schemas.task import (
    TaskCreate,
    TaskListMetadata,
    TaskListResponse,
    TaskResponse,
    TaskUpdate,
)
from src.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse)
def get_tasks(
    ctx: Annotated[AuthContext, Depends(get_auth_context)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
    task_status: TaskStatus | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=255),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
):
    """Get the current user's tasks with filtering, search and pagination."""
    result = tasks.list_tasks(
        ctx.user_id, status=task_status, search=search, page=page, limit=limit
    )
    return TaskListResponse(
        tasks=[TaskResponse.model_validate(task) for task in result.items],
        metadata=TaskListMetadata(
            total_tasks=result.total,
            total_pages=result.total_pages,
            current_page=result.page,
            limit=result.limit,
        ),
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    ctx: Annotated[AuthContext, Depends(get_auth_context)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a new task."""
    return tasks.create_task(ctx.user_id, task_data.title, task_data.description)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    ctx: Annotated[AuthContext, Depends(get_auth_context)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Get a specific task."""
    return tasks.get_task(ctx.user_id, task_id)


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    ctx: Annotated[AuthContext, Depends(get_auth_context)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Update a task."""
    return tasks.update_task(
        ctx.user_id,
        task_id,
        title=task_data.title,
        description=task_data.description,
        status=task_data.status,
    )


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    ctx: Annotated[AuthContext, Depends(get_auth_context)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Delete a task."""
    tasks.delete_task(ctx.user_id, task_id)


@router.patch("/{task_id}/toggle", response_model=TaskResponse)
def toggle_task_status(
    task_id: int,
    ctx: Annotated[AuthContext, Depends(get_auth_context)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Toggle a task between pending and completed."""
    return tasks.toggle_status(ctx.user_id, task_id)
