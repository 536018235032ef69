"""Task and project operations against the Tudidi REST API."""
from typing import Any, List

from ..utils.logger import get_logger
from .data_models import (
    CreateTaskRequest,
    Project,
    ProjectList,
    Task,
    TaskList,
    UpdateTaskRequest,
)
from .dispatcher import RequestDispatcher
from .errors import ReadonlyViolation, ValidationError
from .session_client import SessionClient

log = get_logger(__name__)

TASKS_PATH = "/api/tasks"
TASK_PATH = "/api/task"
PROJECTS_PATH = "/api/projects"


def parse_id(value: Any, label: str = "task") -> int:
    """Accept a positive int or a numeric string, reject everything else."""
    if isinstance(value, bool):
        raise ValidationError(f"invalid {label} ID: {value}")
    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdecimal()):
            raise ValidationError(f"invalid {label} ID: {value!r}")
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise ValidationError(f"invalid {label} ID: {value!r}")
    return value


class TudidiAPI:
    """
    Typed operations over a logged-in SessionClient.

    The readonly flag is fixed for the lifetime of an instance; use
    with_readonly() to get an accessor with the other setting.
    """

    def __init__(self, client: SessionClient, readonly: bool = False):
        self.client = client
        self._dispatcher = RequestDispatcher(client, readonly=readonly)

    @property
    def readonly(self) -> bool:
        return self._dispatcher.readonly

    def with_readonly(self, readonly: bool) -> "TudidiAPI":
        return TudidiAPI(self.client, readonly=readonly)

    def _require_writable(self, method: str, path: str) -> None:
        if self.readonly:
            raise ReadonlyViolation(method, path)

    # --- tasks ---

    def get_tasks(self) -> List[Task]:
        envelope = self._dispatcher.request("GET", TASKS_PATH, result=TaskList)
        return envelope.tasks

    def get_task(self, task_id: Any) -> Task:
        task_id = parse_id(task_id)
        return self._dispatcher.request("GET", f"{TASK_PATH}/{task_id}", result=Task)

    def create_task(self, req: CreateTaskRequest) -> Task:
        self._require_writable("POST", TASK_PATH)
        if not req.name or not req.name.strip():
            raise ValidationError("task name cannot be empty")
        task = self._dispatcher.request("POST", TASK_PATH, payload=req, result=Task, accepted=(201,))
        log.info("Created task %d: %s", task.id, task.name)
        return task

    def update_task(self, task_id: Any, req: UpdateTaskRequest) -> Task:
        """
        Merge-before-write update.

        The current task is fetched first and only the non-empty fields of
        req are laid over it; the full representation is then PATCHed back.
        Blank fields therefore never wipe stored values.
        """
        task_id = parse_id(task_id)
        path = f"{TASK_PATH}/{task_id}"
        self._require_writable("PATCH", path)
        if req.is_empty():
            raise ValidationError("no fields to update")

        current = self.get_task(task_id)
        merged = req.merge_into(current)
        task = self._dispatcher.request("PATCH", path, payload=merged, result=Task)
        log.info("Updated task %d", task_id)
        return task

    def delete_task(self, task_id: Any) -> None:
        task_id = parse_id(task_id)
        self._dispatcher.request("DELETE", f"{TASK_PATH}/{task_id}", accepted=(200, 204))
        log.info("Deleted task %d", task_id)

    # --- projects ---

    def get_projects(self) -> List[Project]:
        envelope = self._dispatcher.request("GET", PROJECTS_PATH, result=ProjectList)
        return envelope.projects

    def search_projects_by_name(self, name: str) -> List[Project]:
        """Case-insensitive substring match on project names."""
        if not name or not name.strip():
            raise ValidationError("project name cannot be empty")
        needle = name.strip().lower()
        return [p for p in self.get_projects() if needle in p.name.lower()]
