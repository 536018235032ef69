"""
Interactive console for exercising the Tudidi API by hand.

Reads one command per line, matches it against COMMANDS (name or alias) and
runs the handler, which may prompt for more lines. Stops on 'quit' or end of
input.
"""
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator, List, Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..tudidi_api import (
    CreateTaskRequest,
    Project,
    SessionClient,
    TudidiAPI,
    TudidiError,
    UpdateTaskRequest,
    ValidationError,
    parse_id,
)
from ..utils.config import Config
from ..utils.format_utils import format_date, status_text, truncate
from ..utils.logger import get_logger

log = get_logger(__name__)

BANNER = "🔧 Tudidi API Testing Playground"


class _EndOfInput(Exception):
    pass


@dataclass
class Command:
    name: str
    alias: str
    description: str
    handler: Callable[["Playground"], None]
    requires_api: bool


class Playground:
    def __init__(
        self,
        config: Config,
        client: Optional[SessionClient],
        api: Optional[TudidiAPI],
        console: Optional[Console] = None,
        stdin: Optional[TextIO] = None,
    ):
        self.config = config
        self.client = client
        self.api = api
        self.console = console or Console()
        self._lines: Iterator[str] = iter(stdin if stdin is not None else sys.stdin)
        self.running = True

    # --- input ---

    def prompt(self, text: str) -> str:
        """Print text and return the next stripped input line."""
        self.console.print(text, end="")
        try:
            line = next(self._lines)
        except StopIteration:
            raise _EndOfInput() from None
        return line.strip()

    def error(self, message: str) -> None:
        self.console.print(f"❌ {message}", style="red", markup=False)

    # --- loop ---

    def run(self) -> None:
        while self.running:
            self.show_menu()
            try:
                command = self.prompt("Enter command: ")
            except _EndOfInput:
                break
            if not command:
                continue
            self.handle_command(command)
            self.console.print()

    def handle_command(self, text: str) -> None:
        for cmd in COMMANDS:
            if text == cmd.name or text == cmd.alias:
                if cmd.requires_api and self.api is None:
                    self.error("API not available")
                    return
                try:
                    cmd.handler(self)
                except _EndOfInput:
                    self.running = False
                except TudidiError as e:
                    log.debug("%s failed: %s", cmd.name, e)
                    self.error(f"Error: {e}")
                return

        self.error(f"Unknown command: {text}")
        self.console.print("Type 'help' for available commands")

    def show_menu(self) -> None:
        self.console.print("📋 Available Commands:")
        for cmd in COMMANDS:
            self.console.print(f"  {cmd.name:<20} ({cmd.alias}) - {cmd.description}", markup=False)


# Command Handlers

def cmd_show_help(pg: Playground) -> None:
    pg.console.print("🆘 Detailed Command Help:", style="bold")
    pg.console.print(
        "\n📋 READ OPERATIONS (safe in readonly mode):\n"
        "  list-tasks, lt        Lists all tasks from the server\n"
        "  get-task, gt          Retrieves a specific task by ID (prompts for the ID)\n"
        "  list-projects, lp     Lists all project lists/containers\n"
        "  search-projects, sp   Search projects by name (case-insensitive)\n"
        "\n✍️  WRITE OPERATIONS (disabled in readonly mode):\n"
        "  create-task, ct       Prompts for name, description and project ID\n"
        "  update-task, ut       Prompts for task ID and new values; blank keeps the old value\n"
        "  delete-task, dt       Deletes a task by ID after confirmation\n"
        "\n⚙️  UTILITY COMMANDS:\n"
        "  toggle-readonly, tr   Switches between readonly and writable modes\n"
        "  status, s             Shows current connection and mode status\n"
        "  clear, c              Clears the screen\n"
        "  quit, q               Exit playground",
        markup=False,
    )


def cmd_quit(pg: Playground) -> None:
    pg.console.print("👋 Goodbye!")
    pg.running = False


def cmd_show_status(pg: Playground) -> None:
    cfg = pg.config
    transport = cfg.transport + (f" (port {cfg.port})" if cfg.transport == "sse" else "")
    mode = "READONLY (create/update/delete disabled)" if cfg.readonly else "WRITABLE (create/update/delete enabled)"
    pg.console.print("📊 Current Status:")
    pg.console.print(f"  Server URL:  {cfg.url}", markup=False)
    pg.console.print(f"  Email:       {cfg.email}", markup=False)
    pg.console.print(f"  Transport:   {transport}", markup=False)
    pg.console.print(f"  Mode:        {mode}")
    pg.console.print(f"  Time:        {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")


def cmd_clear_screen(pg: Playground) -> None:
    pg.console.clear()
    pg.console.print(BANNER)
    pg.console.print("=" * 34)


def cmd_toggle_readonly(pg: Playground) -> None:
    pg.config.readonly = not pg.config.readonly
    if pg.api is not None:
        pg.api = pg.api.with_readonly(pg.config.readonly)
    status = "READONLY" if pg.config.readonly else "WRITABLE"
    pg.console.print(f"🔄 Switched to {status} mode")


def cmd_list_tasks(pg: Playground) -> None:
    pg.console.print("📋 Fetching tasks...")
    tasks = pg.api.get_tasks()
    if not tasks:
        pg.console.print("📝 No tasks found")
        return

    table = Table(show_header=True, header_style="bold", title=f"✅ Found {len(tasks)} tasks")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Status", style="magenta")
    table.add_column("Project ID")
    table.add_column("Created", style="yellow")
    for task in tasks:
        table.add_row(
            str(task.id),
            escape(truncate(task.name, 24)),
            status_text(task.status),
            str(task.project_id or ""),
            format_date(task.created_at),
        )
    pg.console.print(table)


def _read_id(pg: Playground, text: str) -> int:
    raw = pg.prompt(text)
    try:
        return parse_id(raw)
    except ValidationError:
        raise ValidationError(f"Invalid task ID: {raw}") from None


def cmd_get_task(pg: Playground) -> None:
    task_id = _read_id(pg, "Enter task ID: ")
    pg.console.print(f"🔍 Fetching task {task_id}...")
    task = pg.api.get_task(task_id)

    pg.console.print("✅ Task details:")
    fields = [
        ("ID", task.id),
        ("UUID", task.uuid or ""),
        ("Name", task.name),
        ("Note", task.note or ""),
        ("Due Date", task.due_date or ""),
        ("Today", bool(task.today)),
        ("Priority", task.priority or 0),
        ("Status", f"{status_text(task.status)} ({task.status})"),
        ("Project ID", task.project_id or ""),
        ("User ID", task.user_id or ""),
        ("Completed", task.completed_at or ""),
        ("Created", task.created_at or ""),
        ("Updated", task.updated_at or ""),
        ("Parent Task", task.parent_task_id or ""),
    ]
    for label, value in fields:
        pg.console.print(f"  {label + ':':<12} {value}", markup=False)


def _default_project(pg: Playground) -> Optional[Project]:
    projects = pg.api.get_projects()
    return projects[0] if projects else None


def cmd_create_task(pg: Playground) -> None:
    name = pg.prompt("Enter task name: ")
    if not name:
        pg.error("Task name cannot be empty")
        return
    note = pg.prompt("Enter task description (optional): ")
    project_raw = pg.prompt("Enter project ID (or press Enter for default): ")

    if project_raw:
        try:
            project_id = parse_id(project_raw, "project")
        except ValidationError:
            pg.error(f"Invalid project ID: {project_raw}")
            return
    else:
        project = _default_project(pg)
        if project is None:
            pg.error("No projects available and no project ID specified")
            return
        project_id = project.id
        pg.console.print(f"ℹ️  Using project ID {project_id} ({project.name})", markup=False)

    pg.console.print("🔨 Creating task...")
    task = pg.api.create_task(CreateTaskRequest(name=name, note=note or None, project_id=project_id))
    pg.console.print("✅ Task created successfully!")
    pg.console.print(f"  ID:   {task.id}\n  Name: {task.name}\n  Note: {task.note or ''}", markup=False)


def cmd_update_task(pg: Playground) -> None:
    task_id = _read_id(pg, "Enter task ID to update: ")
    name = pg.prompt("Enter new title (or press Enter to skip): ")
    note = pg.prompt("Enter new description (or press Enter to skip): ")

    req = UpdateTaskRequest(name=name, note=note)
    if req.is_empty():
        pg.error("No updates specified")
        return

    pg.console.print(f"🔄 Updating task {task_id}...")
    task = pg.api.update_task(task_id, req)
    pg.console.print("✅ Task updated successfully!")
    pg.console.print(f"  ID:   {task.id}\n  Name: {task.name}\n  Note: {task.note or ''}", markup=False)


def cmd_delete_task(pg: Playground) -> None:
    task_id = _read_id(pg, "Enter task ID to delete: ")
    task = pg.api.get_task(task_id)

    pg.console.print("⚠️  About to delete task:")
    pg.console.print(f"  ID:   {task.id}\n  Name: {task.name}", markup=False)
    confirm = pg.prompt("Are you sure? (y/N): ").lower()
    if confirm not in ("y", "yes"):
        pg.error("Deletion cancelled")
        return

    pg.console.print(f"🗑️  Deleting task {task_id}...")
    pg.api.delete_task(task_id)
    pg.console.print("✅ Task deleted successfully!")


def cmd_list_projects(pg: Playground) -> None:
    pg.console.print("📁 Fetching project lists...")
    display_projects(pg, pg.api.get_projects())


def cmd_search_projects(pg: Playground) -> None:
    name = pg.prompt("Enter project name to search for: ")
    if not name:
        pg.error("Project name cannot be empty")
        return
    pg.console.print(f"🔍 Searching projects by name: {name}...", markup=False)
    display_projects(pg, pg.api.search_projects_by_name(name))


def display_projects(pg: Playground, projects: List[Project]) -> None:
    if not projects:
        pg.console.print("📝 No projects found")
        return

    table = Table(show_header=True, header_style="bold", title=f"✅ Found {len(projects)} project(s)")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Active")
    table.add_column("Description")
    for project in projects:
        table.add_row(
            str(project.id),
            escape(truncate(project.name, 24)),
            "Yes" if project.active else "No",
            escape(truncate(project.description, 20)),
        )
    pg.console.print(table)


COMMANDS: List[Command] = [
    Command("help", "h", "Show detailed help", cmd_show_help, False),
    Command("quit", "q", "Exit playground", cmd_quit, False),
    Command("status", "s", "Show current status", cmd_show_status, False),
    Command("clear", "c", "Clear screen", cmd_clear_screen, False),
    Command("toggle-readonly", "tr", "Toggle readonly mode", cmd_toggle_readonly, False),
    Command("list-tasks", "lt", "List all tasks", cmd_list_tasks, True),
    Command("get-task", "gt", "Get specific task by ID", cmd_get_task, True),
    Command("create-task", "ct", "Create a new task", cmd_create_task, True),
    Command("update-task", "ut", "Update existing task", cmd_update_task, True),
    Command("delete-task", "dt", "Delete a task", cmd_delete_task, True),
    Command("list-projects", "lp", "List all projects", cmd_list_projects, True),
    Command("search-projects", "sp", "Search projects by name", cmd_search_projects, True),
]


def handle_playground(config: Config, client: SessionClient, console: Optional[Console] = None,
                      stdin: Optional[TextIO] = None) -> None:
    """Run the interactive loop against an authenticated client."""
    console = console or Console()
    api = TudidiAPI(client, readonly=config.readonly)
    suffix = " (READONLY MODE - destructive operations disabled)" if config.readonly else ""
    console.print(f"🚀 API ready{suffix}\n")
    Playground(config, client, api, console=console, stdin=stdin).run()
