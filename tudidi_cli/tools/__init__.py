"""
MCP tool adapter: exposes the Tudidi task operations as remote-callable tools.
"""

from .handlers import ToolHandlers, ToolResult, build_server, register_tools

__all__ = ['ToolHandlers', 'ToolResult', 'build_server', 'register_tools']
