"""
Task endpoints.

Every query is scoped to the authenticated owner: a task id that belongs to
someone else is reported exactly like one that does not exist.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskgate.auth.dependencies import CurrentUser, get_current_user
from taskgate.core.database import get_db
from taskgate.core.errors import NotFoundError, ValidationError, handler_boundary
from taskgate.models.task import Task
from taskgate.schemas.common import MessageResponse
from taskgate.schemas.task import TaskResponse, TaskWrite

router = APIRouter()

# Largest id a 64-bit INTEGER column can hold
MAX_TASK_ID = 2**63 - 1


def _require_title(task_data: TaskWrite) -> str:
    if not task_data.title or not task_data.title.strip():
        raise ValidationError("Task title is required")
    return task_data.title


def _check_task_id(task_id: int) -> None:
    if not 0 < task_id <= MAX_TASK_ID:
        raise NotFoundError("Task can't be found")


async def _get_owned_task(db: AsyncSession, task_id: int, owner_id: int) -> Task:
    _check_task_id(task_id)
    result = await db.execute(
        select(Task).where(Task.id == task_id, Task.user_id == owner_id)
    )
    task = result.scalar_one_or_none()
    if task is None:
        raise NotFoundError("Task can't be found")
    return task


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskWrite,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a task owned by the current user."""
    title = _require_title(task_data)

    with handler_boundary("create task"):
        task = Task(
            title=title,
            description=task_data.description or "",
            user_id=current_user.id,
        )
        db.add(task)
        await db.commit()

    return TaskResponse.model_validate(task)


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the current user's tasks in creation order."""
    with handler_boundary("list tasks"):
        result = await db.execute(
            select(Task)
            .where(Task.user_id == current_user.id)
            .order_by(Task.id.asc())
        )
        tasks = result.scalars().all()

    return [TaskResponse.model_validate(task) for task in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get one of the current user's tasks."""
    with handler_boundary("get task"):
        task = await _get_owned_task(db, task_id, current_user.id)

    return TaskResponse.model_validate(task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    task_data: TaskWrite,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Replace a task's title and description.

    A missing description is stored as an empty string.
    """
    with handler_boundary("update task"):
        await _get_owned_task(db, task_id, current_user.id)
        title = _require_title(task_data)

        result = await db.execute(
            update(Task)
            .where(Task.id == task_id, Task.user_id == current_user.id)
            .values(title=title, description=task_data.description or "")
            .returning(Task.id, Task.title, Task.description, Task.user_id)
            .execution_options(synchronize_session=False)
        )
        row = result.first()
        await db.commit()

    # Deleted between the lookup and the update
    if row is None:
        raise NotFoundError("Task can't be found")

    return TaskResponse(id=row.id, title=row.title, description=row.description, user_id=row.user_id)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete one of the current user's tasks."""
    _check_task_id(task_id)

    with handler_boundary("delete task"):
        result = await db.execute(
            delete(Task)
            .where(Task.id == task_id, Task.user_id == current_user.id)
            .execution_options(synchronize_session=False)
        )
        await db.commit()

    if result.rowcount == 0:
        raise NotFoundError("Task can't be found")

    return MessageResponse(message="Task deleted")
