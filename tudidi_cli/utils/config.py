"""
Configuration utilities for the tudidi-cli tool.

Values come from command-line flags; TUDIDI_* environment variables (which
may be loaded from a .tudidi.env file) override them.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from ..tudidi_api.errors import ConfigError

ENV_FILE = ".tudidi.env"

DEFAULT_URL = "http://localhost:3002"
DEFAULT_TRANSPORT = "stdio"
DEFAULT_PORT = 8080
TRANSPORTS = ("stdio", "sse")


def load_env_vars() -> None:
    """
    Load environment variables from .env files in the following order:
    1. .tudidi.env in the current directory
    2. .tudidi.env in the user's home directory
    Variables already set in the process environment win.
    """
    if os.path.exists(ENV_FILE):
        load_dotenv(ENV_FILE)

    home_env = Path.home() / ENV_FILE
    if home_env.exists():
        load_dotenv(home_env)


@dataclass
class Config:
    url: str = DEFAULT_URL
    email: str = ""
    password: str = ""
    readonly: bool = True
    transport: str = DEFAULT_TRANSPORT
    port: int = DEFAULT_PORT

    def validate(self) -> "Config":
        if not self.url:
            raise ConfigError("URL is required (use --url flag or TUDIDI_URL environment variable)")
        if not self.email:
            raise ConfigError("email is required (use --email flag or TUDIDI_USER_EMAIL environment variable)")
        if not self.password:
            raise ConfigError("password is required (use --password flag or TUDIDI_USER_PASSWORD environment variable)")
        if self.transport not in TRANSPORTS:
            raise ConfigError(f"transport must be 'stdio' or 'sse', got: {self.transport}")
        if not 0 < self.port <= 65535:
            raise ConfigError(f"port must be between 1 and 65535, got: {self.port}")
        return self


def resolve_config(
    url: Optional[str] = DEFAULT_URL,
    email: Optional[str] = None,
    password: Optional[str] = None,
    readonly: bool = True,
    transport: Optional[str] = DEFAULT_TRANSPORT,
    port: int = DEFAULT_PORT,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """Build a validated Config from flag values plus environment overrides."""
    env = os.environ if environ is None else environ
    config = Config(
        url=url or "",
        email=email or "",
        password=password or "",
        readonly=readonly,
        transport=transport or "",
        port=port,
    )

    if env.get("TUDIDI_URL"):
        config.url = env["TUDIDI_URL"]
    if env.get("TUDIDI_USER_EMAIL"):
        config.email = env["TUDIDI_USER_EMAIL"]
    if env.get("TUDIDI_USER_PASSWORD"):
        config.password = env["TUDIDI_USER_PASSWORD"]
    if env.get("TUDIDI_READONLY"):
        config.readonly = env["TUDIDI_READONLY"] == "true"
    if env.get("TUDIDI_TRANSPORT"):
        config.transport = env["TUDIDI_TRANSPORT"]
    if env.get("TUDIDI_PORT"):
        try:
            config.port = int(env["TUDIDI_PORT"])
        except ValueError:
            pass  # keep the flag value

    return config.validate()


def usage_text(prog: str = "tudidi-cli") -> str:
    return "\n".join([
        f"Usage: {prog} [mcp|playground] --url <tudidi-url> --email <user> --password <pass> "
        "[--readonly/--no-readonly] [--transport <stdio|sse>] [--port <port>]",
        "",
        "Environment Variables:",
        "  TUDIDI_URL           Tudidi server URL",
        "  TUDIDI_USER_EMAIL    Email for authentication",
        "  TUDIDI_USER_PASSWORD Password for authentication",
        "  TUDIDI_READONLY      Set to 'true' or 'false' for readonly mode (default: true)",
        "  TUDIDI_TRANSPORT     Transport type: 'stdio' or 'sse' (default: stdio)",
        "  TUDIDI_PORT          Port for SSE transport (default: 8080)",
        f"Variables may also be placed in ./{ENV_FILE} or ~/{ENV_FILE}.",
    ])
