"""Task service with owner-scoped queries."""

import logging
import math
from dataclasses import dataclass

from sqlalchemy.orm import Session

from src.models.enums import TaskStatus
from src.models.task import Task
from src.services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found."


@dataclass
class TaskPage:
    """One page of a task listing."""

    items: list[Task]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)


class TaskService:
    """Service for task operations.

    Every method takes the owner's user id and never touches a task owned
    by anyone else.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_tasks(
        self,
        user_id: int,
        status: TaskStatus | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> TaskPage:
        """List a user's tasks, newest first."""
        query = self.db.query(Task).filter(Task.user_id == user_id)

        if status is not None:
            query = query.filter(Task.status == TaskStatus(status).value)

        if search and search.strip():
            query = query.filter(Task.title.icontains(search, autoescape=True))

        total = query.count()
        items = (
            query.order_by(Task.created_at.desc(), Task.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return TaskPage(items=items, total=total, page=page, limit=limit)

    def create_task(self, user_id: int, title: str, description: str | None = None) -> Task:
        """Create a pending task for a user."""
        task = Task(
            user_id=user_id,
            title=title,
            description=description,
            status=TaskStatus.PENDING.value,
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def get_task(self, user_id: int, task_id: int) -> Task:
        """Get a task owned by the user.

        A missing task and another user's task are reported identically.
        """
        task = self.db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()
        if not task:
            raise NotFoundError(TASK_NOT_FOUND)
        return task

    def update_task(
        self,
        user_id: int,
        task_id: int,
        title: str | None = None,
        description: str | None = None,
        status: TaskStatus | None = None,
    ) -> Task:
        """Update the given fields, leaving the rest unchanged."""
        task = self.get_task(user_id, task_id)

        if title is not None:
            task.title = title
        if description is not None:
            task.description = description
        if status is not None:
            task.status = TaskStatus(status).value

        self.db.commit()
        self.db.refresh(task)
        return task

    def delete_task(self, user_id: int, task_id: int) -> None:
        """Delete a task."""
        task = self.get_task(user_id, task_id)
        self.db.delete(task)
        self.db.commit()
        logger.info(f"User {user_id} deleted task {task_id}")

    def toggle_status(self, user_id: int, task_id: int) -> Task:
        """Flip a task between pending and completed."""
        task = self.get_task(user_id, task_id)
        task.status = TaskStatus(task.status).toggled().value
        self.db.commit()
        self.db.refresh(task)
        return task
