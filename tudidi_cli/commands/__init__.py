"""
This __init__.py file makes the 'commands' directory a Python package.

Each module defines the handlers for one front-end command.
"""
