"""Task model."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship, validates

from src.database import Base
from src.models.enums import TaskStatus
from src.models.mixins import TimestampMixin


class Task(Base, TimestampMixin):
    """A unit of work owned by exactly one user."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(
            TaskStatus,
            name="task_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=TaskStatus.TODO,
        server_default=TaskStatus.TODO.value,
    )
    due_date = Column(DateTime(timezone=True), nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", backref="tasks")

    @validates("owner_id")
    def validate_owner_id(self, key, value):
        """Owner is assigned once and never changes."""
        if self.owner_id is not None and value != self.owner_id:
            raise ValueError("Task owner cannot be reassigned")
        return value
