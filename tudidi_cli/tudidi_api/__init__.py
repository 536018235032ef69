"""
Tudidi API layer package.
Implements the HTTP session, request dispatcher and typed task/project operations.
"""

from .data_models import (
    CreateTaskRequest,
    Project,
    Task,
    TaskStatus,
    UpdateTaskRequest,
)
from .dispatcher import Outcome, RequestDispatcher, classify_status
from .errors import (
    AuthenticationError,
    ConfigError,
    DecodeError,
    NotFound,
    ReadonlyViolation,
    SerializationError,
    TransportError,
    TudidiError,
    UnexpectedStatus,
    ValidationError,
)
from .session_client import SessionClient
from .task_operations import TudidiAPI, parse_id

__all__ = [
    'AuthenticationError',
    'ConfigError',
    'CreateTaskRequest',
    'DecodeError',
    'NotFound',
    'Outcome',
    'Project',
    'ReadonlyViolation',
    'RequestDispatcher',
    'SerializationError',
    'SessionClient',
    'Task',
    'TaskStatus',
    'TransportError',
    'TudidiAPI',
    'TudidiError',
    'UnexpectedStatus',
    'UpdateTaskRequest',
    'ValidationError',
    'classify_status',
    'parse_id',
]
