"""Plain-text rendering of tasks and projects for tool responses."""

from typing import Iterable, List

from ..tudidi_api.data_models import Project, Task


def format_projects_text(projects: Iterable[Project], prefix: str = "Projects") -> str:
    parts: List[str] = [f"{prefix}:\n\n"]
    for project in projects:
        parts.append(format_single_project(project))
        parts.append("---\n\n")
    return "".join(parts)


def format_tasks_text(tasks: List[Task]) -> str:
    parts: List[str] = [f"Found {len(tasks)} tasks:\n\n"]
    for task in tasks:
        parts.append(format_single_task(task))
        parts.append("---\n\n")
    return "".join(parts)


def format_single_project(project: Project) -> str:
    lines = [f"ID: {project.id}", f"Name: {project.name}"]
    if project.description:
        lines.append(f"Description: {project.description}")
    if project.priority:
        lines.append(f"Priority: {project.priority}")
    lines.append(f"Active: {str(bool(project.active)).lower()}")
    if project.due_date_at:
        lines.append(f"Due Date: {project.due_date_at}")
    return "\n".join(lines) + "\n"


def format_single_task(task: Task) -> str:
    lines = [f"ID: {task.id}", f"Name: {task.name}"]
    if task.note:
        lines.append(f"Note: {task.note}")
    lines.append(f"Status: {task.status}")
    lines.append(f"Priority: {task.priority or 0}")
    if task.due_date:
        lines.append(f"Due Date: {task.due_date}")
    if task.project_id:
        lines.append(f"Project ID: {task.project_id}")
    lines.append(f"Today: {str(bool(task.today)).lower()}")
    if task.completed_at:
        lines.append(f"Completed: {task.completed_at}")
    return "\n".join(lines) + "\n"
