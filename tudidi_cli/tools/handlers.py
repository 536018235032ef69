"""
Tool handlers exposing the Tudidi operations over MCP.

ToolHandlers translates tool arguments into TudidiAPI calls and results into
a ToolResult (short summary + structured data), which reaches clients as text
blocks plus structuredContent. register_tools() binds each
handler to a FastMCP server with a typed input schema.
"""

import json
from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent
from pydantic import Field

from ..tudidi_api import CreateTaskRequest, TudidiAPI, UpdateTaskRequest
from ..utils.logger import get_logger
from .formatters import format_projects_text, format_single_task, format_tasks_text

log = get_logger(__name__)


@dataclass
class ToolResult:
    summary: str
    data: Dict[str, Any]
    detail: str = ""

    def to_content(self) -> List[TextContent]:
        blocks = [TextContent(type="text", text=self.summary)]
        if self.detail:
            blocks.append(TextContent(type="text", text=self.detail))
        blocks.append(TextContent(type="text", text=json.dumps(self.data, indent=2)))
        return blocks

    def to_result(self) -> CallToolResult:
        return CallToolResult(content=self.to_content(), structuredContent=self.data)


@dataclass
class ToolHandlers:
    api: TudidiAPI

    def _track(self, name: str) -> None:
        log.debug("tool call: %s", name)

    def list_tasks(self) -> ToolResult:
        self._track("list_tasks")
        tasks = self.api.get_tasks()
        return ToolResult(
            summary=f"Found {len(tasks)} tasks",
            data={"tasks": [t.to_dict() for t in tasks], "count": len(tasks)},
            detail=format_tasks_text(tasks),
        )

    def get_task(self, id: int) -> ToolResult:
        self._track("get_task")
        task = self.api.get_task(id)
        return ToolResult(f"Task: {task.name}", task.to_dict(), format_single_task(task))

    def create_task(self, title: str, description: str = "", list_id: Optional[int] = None) -> ToolResult:
        self._track("create_task")
        req = CreateTaskRequest(name=title, note=description or None, project_id=list_id)
        task = self.api.create_task(req)
        return ToolResult(f"Created task: {task.name}", task.to_dict(), format_single_task(task))

    def update_task(
        self,
        id: int,
        title: str = "",
        description: str = "",
        completed: Optional[bool] = None,
    ) -> ToolResult:
        self._track("update_task")
        req = UpdateTaskRequest(name=title, note=description, completed=completed)
        task = self.api.update_task(id, req)
        return ToolResult(f"Updated task: {task.name}", task.to_dict(), format_single_task(task))

    def delete_task(self, id: int) -> ToolResult:
        self._track("delete_task")
        self.api.delete_task(id)
        return ToolResult(
            summary=f"Deleted task {id}",
            data={"success": True, "message": f"Task {id} deleted successfully"},
        )

    def list_task_lists(self) -> ToolResult:
        self._track("list_task_lists")
        projects = self.api.get_projects()
        return ToolResult(
            summary=f"Found {len(projects)} task lists",
            data={"lists": [p.to_dict() for p in projects], "count": len(projects)},
            detail=format_projects_text(projects, prefix="Task lists"),
        )


TaskId = Annotated[int, Field(description="Task ID", gt=0)]


def register_tools(server: FastMCP, handlers: ToolHandlers) -> None:
    """Register every Tudidi operation as a named tool on server."""

    @server.tool(name="list_tasks", description="List all tasks")
    def list_tasks():
        return handlers.list_tasks().to_result()

    @server.tool(name="get_task", description="Get a specific task by ID")
    def get_task(id: TaskId):
        return handlers.get_task(id).to_result()

    @server.tool(name="create_task", description="Create a new task")
    def create_task(
        title: Annotated[str, Field(description="Task title", min_length=1)],
        description: Annotated[str, Field(description="Task description")] = "",
        list_id: Annotated[Optional[int], Field(description="List ID to assign task to")] = None,
    ):
        return handlers.create_task(title, description, list_id).to_result()

    @server.tool(name="update_task", description="Update an existing task")
    def update_task(
        id: TaskId,
        title: Annotated[str, Field(description="New task title")] = "",
        description: Annotated[str, Field(description="New task description")] = "",
        completed: Annotated[Optional[bool], Field(description="Task completion status")] = None,
    ):
        return handlers.update_task(id, title, description, completed).to_result()

    @server.tool(name="delete_task", description="Delete a task")
    def delete_task(id: TaskId):
        return handlers.delete_task(id).to_result()

    @server.tool(name="list_task_lists", description="List all task lists")
    def list_task_lists():
        return handlers.list_task_lists().to_result()


def build_server(api: TudidiAPI, host: str = "0.0.0.0", port: int = 8080) -> FastMCP:
    server = FastMCP(
        "tudidi",
        instructions="Tudidi MCP Server for task management",
        host=host,
        port=port,
    )
    register_tools(server, ToolHandlers(api))
    return server
