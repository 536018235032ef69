"""
Single-request helper shared by every domain operation.

One call to RequestDispatcher.request() performs exactly one HTTP round trip:
readonly gate, JSON encoding, transport, status classification, decoding.
"""

import json
from enum import Enum
from typing import Any, Iterable, Optional, Type, TypeVar

import requests
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..utils.logger import get_logger
from .errors import (
    DecodeError,
    NotFound,
    ReadonlyViolation,
    SerializationError,
    TransportError,
    UnexpectedStatus,
)
from .session_client import SessionClient

log = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

SUPPORTED_METHODS = ("GET", "POST", "PATCH", "PUT", "DELETE")
MUTATING_METHODS = frozenset({"POST", "PATCH", "PUT", "DELETE"})


class Outcome(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    UNEXPECTED = "unexpected"


def classify_status(status_code: int, accepted: Iterable[int]) -> Outcome:
    """Map a response status onto an Outcome. 404 is never a success."""
    if status_code == 404:
        return Outcome.NOT_FOUND
    if status_code in set(accepted):
        return Outcome.SUCCESS
    return Outcome.UNEXPECTED


def encode_payload(payload: Any) -> bytes:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", exclude_none=True)
    try:
        return json.dumps(payload).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to marshal request: {e}") from e


class RequestDispatcher:
    def __init__(self, client: SessionClient, readonly: bool = False):
        self.client = client
        self.readonly = readonly

    def request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        result: Optional[Type[M]] = None,
        accepted: Iterable[int] = (200,),
    ) -> Optional[M]:
        """
        Perform one request and return the decoded result (or None when no
        result model was requested).

        Raises ReadonlyViolation, SerializationError, TransportError, NotFound,
        UnexpectedStatus or DecodeError.
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"unsupported method: {method}")

        if method in MUTATING_METHODS and self.readonly:
            log.debug("Blocked %s %s (readonly)", method, path)
            raise ReadonlyViolation(method, path)

        body = encode_payload(payload) if payload is not None else None

        try:
            resp = self.client.request(method, path, body)
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, path, e)
            raise TransportError(f"{method} {path} failed: {e}", cause=e) from e

        outcome = classify_status(resp.status_code, accepted)
        if outcome is Outcome.NOT_FOUND:
            raise NotFound(path)
        if outcome is Outcome.UNEXPECTED:
            log.warning("%s %s returned status %d", method, path, resp.status_code)
            raise UnexpectedStatus(resp.status_code, path)

        if result is None:
            return None
        try:
            return result.model_validate_json(resp.content)
        except (PydanticValidationError, ValueError) as e:
            raise DecodeError(f"failed to parse response: {e}") from e
