"""Task service: loads tasks, applies the ownership rules, then acts."""

import logging

from sqlalchemy.orm import Session

from src.exceptions import NotFound
from src.models.enums import TaskStatus
from src.models.task import Task
from src.models.user import User
from src.schemas.task import TaskCreate, TaskUpdate
from src.services.authorization import ensure_allowed, list_scope

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task operations on behalf of an authenticated user.

    Every single-task operation looks the task up first (``NotFound``), then
    checks ownership (``Forbidden``), and only then touches the database.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_authorized_task(self, task_id: int, principal: User) -> Task:
        task = self.db.query(Task).filter(Task.id == task_id).first()
        if task is None:
            raise NotFound("Task not found")
        ensure_allowed(principal, task.owner_id)
        return task

    def list_tasks(
        self,
        principal: User,
        include_all: bool = False,
        status: TaskStatus | None = None,
    ) -> list[Task]:
        """List tasks visible to the principal, newest first."""
        query = self.db.query(Task)

        owner_id = list_scope(principal, include_all)
        if owner_id is not None:
            query = query.filter(Task.owner_id == owner_id)
        if status is not None:
            query = query.filter(Task.status == status)

        return query.order_by(Task.created_at.desc(), Task.id.desc()).all()

    def create_task(self, principal: User, data: TaskCreate) -> Task:
        """Create a task owned by the principal."""
        task = Task(
            title=data.title,
            description=data.description,
            status=data.status,
            due_date=data.due_date,
            owner_id=principal.id,
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def get_task(self, task_id: int, principal: User) -> Task:
        """Get a task the principal may read."""
        return self._get_authorized_task(task_id, principal)

    def update_task(self, task_id: int, principal: User, data: TaskUpdate) -> Task:
        """Apply the client-set mutable fields to a task."""
        task = self._get_authorized_task(task_id, principal)

        for field, value in data.changes().items():
            setattr(task, field, value)

        self.db.commit()
        self.db.refresh(task)
        return task

    def delete_task(self, task_id: int, principal: User) -> None:
        """Delete a task."""
        task = self._get_authorized_task(task_id, principal)
        owner_id = task.owner_id

        self.db.delete(task)
        self.db.commit()
        logger.info(f"User {principal.id} deleted task {task_id} owned by {owner_id}")
