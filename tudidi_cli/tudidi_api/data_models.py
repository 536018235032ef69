"""
Data models representing Tudidi objects (tasks, projects, request payloads).
"""

from enum import IntEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(IntEnum):
    NEW = 0
    ACTIVE = 1
    DONE = 2

    @classmethod
    def text(cls, value: int) -> str:
        """Human label for a numeric status code."""
        try:
            return {cls.NEW: "New", cls.ACTIVE: "Active", cls.DONE: "Done"}[cls(value)]
        except ValueError:
            return "Unknown"


class Task(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int = 0
    uuid: Optional[str] = None
    name: str = ""
    note: Optional[str] = None
    due_date: Optional[str] = None
    today: Optional[bool] = False
    priority: Optional[int] = 0
    status: int = 0
    project_id: Optional[int] = None
    user_id: Optional[int] = None
    parent_task_id: Optional[int] = None
    completed_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    tags: Optional[List[Any]] = Field(default_factory=list)

    @property
    def status_text(self) -> str:
        return TaskStatus.text(self.status)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Project(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int = 0
    name: str = ""
    description: Optional[str] = None
    active: Optional[bool] = False
    pin_to_sidebar: Optional[bool] = False
    # "low" / "medium" / "high"
    priority: Optional[str] = None
    due_date_at: Optional[str] = None
    user_id: Optional[int] = None
    area_id: Optional[int] = None
    task_show_completed: Optional[bool] = False
    task_sort_order: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class TaskList(BaseModel):
    """Envelope returned by GET /api/tasks."""

    tasks: List[Task] = Field(default_factory=list)


class ProjectList(BaseModel):
    """Envelope returned by GET /api/projects."""

    projects: List[Project] = Field(default_factory=list)


class CreateTaskRequest(BaseModel):
    name: str
    note: Optional[str] = None
    project_id: Optional[int] = None
    status: str = "not_started"


class UpdateTaskRequest(BaseModel):
    """Partial update. Empty strings and None mean "leave unchanged"."""

    name: str = ""
    note: str = ""
    completed: Optional[bool] = None

    def is_empty(self) -> bool:
        return not self.name and not self.note and self.completed is None

    def merge_into(self, current: Task) -> Task:
        """Return a copy of current with only the non-empty fields overlaid."""
        changes: Dict[str, Any] = {}
        if self.name:
            changes["name"] = self.name
        if self.note:
            changes["note"] = self.note
        if self.completed is not None:
            changes["status"] = int(TaskStatus.DONE if self.completed else TaskStatus.NEW)
        return current.model_copy(update=changes)
