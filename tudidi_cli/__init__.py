"""
Tudidi CLI: MCP tool server and interactive playground for the Tudidi task manager.

Authenticates against a Tudidi server and exposes task and project operations,
optionally in readonly mode where create/update/delete are refused before any
request is sent.
"""

__version__ = "1.0.0"
__author__ = "Tudidi CLI Team"

__all__ = ["__version__"]
