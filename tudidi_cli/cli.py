#!/usr/bin/env python3
import logging
import sys
from typing import Optional

import typer
from rich.console import Console

from . import __version__
from .tudidi_api import AuthenticationError, ConfigError, SessionClient, TransportError
from .utils.config import (
    DEFAULT_PORT,
    DEFAULT_TRANSPORT,
    DEFAULT_URL,
    Config,
    load_env_vars,
    resolve_config,
    usage_text,
)
from .utils.logger import configure_logging, get_logger

log = get_logger("tudidi_cli")

# Load environment variables
load_env_vars()

app = typer.Typer(
    name="tudidi-cli",
    help="Tudidi CLI - MCP tool server and interactive playground for a Tudidi task server.",
    no_args_is_help=True,
)


def _version_callback(value: bool):
    if value:
        print(f"tudidi-cli {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
):
    """Tudidi CLI - MCP tool server and interactive playground for a Tudidi task server."""
    configure_logging(logging.DEBUG if verbose else logging.INFO)


def _load_config(**flags) -> Config:
    try:
        return resolve_config(**flags)
    except ConfigError as e:
        print(usage_text(), file=sys.stderr)
        print(f"\nConfiguration error: {e}", file=sys.stderr)
        raise typer.Exit(code=1)


def _connect(config: Config) -> SessionClient:
    """Log in or exit; authentication failure is fatal."""
    client = SessionClient(config.url)
    try:
        client.login(config.email, config.password)
    except (AuthenticationError, TransportError) as e:
        print(f"Authentication failed: {e}", file=sys.stderr)
        raise typer.Exit(code=1)
    return client


URL_OPTION = typer.Option(DEFAULT_URL, "--url", help="Tudidi server URL.")
EMAIL_OPTION = typer.Option(None, "--email", help="Email for authentication.")
PASSWORD_OPTION = typer.Option(None, "--password", help="Password for authentication.")
READONLY_OPTION = typer.Option(
    True, "--readonly/--no-readonly", help="Run in readonly mode (prevents destructive operations)."
)
TRANSPORT_OPTION = typer.Option(DEFAULT_TRANSPORT, "--transport", "-t", help="Transport type: 'stdio' or 'sse'.")
PORT_OPTION = typer.Option(DEFAULT_PORT, "--port", "-p", help="Port for SSE transport (ignored for stdio).")


@app.command("mcp")
def mcp_command(
    url: str = URL_OPTION,
    email: Optional[str] = EMAIL_OPTION,
    password: Optional[str] = PASSWORD_OPTION,
    readonly: bool = READONLY_OPTION,
    transport: str = TRANSPORT_OPTION,
    port: int = PORT_OPTION,
):
    """Serve the Tudidi task operations as MCP tools over stdio or SSE."""
    from .tools import build_server
    from .tudidi_api import TudidiAPI

    config = _load_config(url=url, email=email, password=password, readonly=readonly,
                          transport=transport, port=port)
    client = _connect(config)
    server = build_server(TudidiAPI(client, readonly=config.readonly), port=config.port)

    readonly_status = " (readonly mode)" if config.readonly else ""
    log.info("Tudidi MCP server connected to %s%s using %s transport", config.url, readonly_status, config.transport)
    if config.transport == "sse":
        log.info("Starting SSE server on :%d", config.port)
    server.run(transport=config.transport)


@app.command("playground")
def playground_command(
    url: str = URL_OPTION,
    email: Optional[str] = EMAIL_OPTION,
    password: Optional[str] = PASSWORD_OPTION,
    readonly: bool = READONLY_OPTION,
    transport: str = TRANSPORT_OPTION,
    port: int = PORT_OPTION,
):
    """Interactive console for trying the Tudidi API by hand."""
    from .commands.playground import BANNER, handle_playground

    console = Console()
    console.print(BANNER)
    console.print("=" * 34)

    config = _load_config(url=url, email=email, password=password, readonly=readonly,
                          transport=transport, port=port)
    console.print(f"🔐 Authenticating with {config.url}...", markup=False)
    client = _connect(config)
    console.print("✅ Authentication successful!")
    handle_playground(config, client, console=console)


if __name__ == "__main__":
    app()
