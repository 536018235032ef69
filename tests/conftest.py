"""
Shared fixtures: a fake requests.Session that records every call, and an
in-memory Tudidi server built on top of it.
"""

import json
import re
from typing import Any, Dict, List, Optional

import pytest
import requests

from tudidi_cli.tudidi_api import SessionClient, TudidiAPI

BASE_URL = "http://tudidi.test"


def make_response(status: int, body: Any = b"") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    if not isinstance(body, (bytes, str)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    resp._content = body
    return resp


class FakeSession:
    """Replays queued responses in order and records each request."""

    def __init__(self, responses: Optional[List[requests.Response]] = None,
                 error: Optional[Exception] = None):
        self.responses = list(responses or [])
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def _record(self, method, url, data, headers):
        self.calls.append({
            "method": method,
            "path": url[len(BASE_URL):] if url.startswith(BASE_URL) else url,
            "body": json.loads(data) if data else None,
            "headers": headers,
        })

    def request(self, method, url, data=None, headers=None, timeout=None):
        self._record(method, url, data, headers)
        if self.error is not None:
            raise self.error
        if not self.responses:
            return make_response(500)
        return self.responses.pop(0)


TASK_RE = re.compile(r"^/api/task/(\d+)$")


class FakeTudidiServer(FakeSession):
    """
    Minimal stand-in for the Tudidi REST API.

    PATCH replaces the stored task with the submitted body, so a client that
    sends blank fields really does wipe them.
    """

    def __init__(self, email="admin@test.com", password="secret"):
        super().__init__()
        self.email = email
        self.password = password
        self.next_id = 1
        self.tasks: Dict[int, Dict[str, Any]] = {}
        self.projects = [
            {"id": 1, "name": "Work Stuff", "active": True, "description": "Day job"},
            {"id": 2, "name": "home", "active": False},
            {"id": 3, "name": "workshop", "active": True, "priority": "high"},
        ]

    def add_task(self, **fields) -> Dict[str, Any]:
        task = {"id": self.next_id, "uuid": f"uuid-{self.next_id}", "status": 0,
                "priority": 0, "today": False, "project_id": 1, "user_id": 7,
                "created_at": "2025-01-02T03:04:05Z", "tags": []}
        task.update(fields)
        self.tasks[self.next_id] = task
        self.next_id += 1
        return task

    def request(self, method, url, data=None, headers=None, timeout=None):
        self._record(method, url, data, headers)
        path = url[len(BASE_URL):]
        body = json.loads(data) if data else None

        if method == "POST" and path == "/api/login":
            if body == {"email": self.email, "password": self.password}:
                return make_response(200, {"user": {"email": self.email}})
            return make_response(401, {"error": "Invalid credentials"})
        if method == "GET" and path == "/api/tasks":
            return make_response(200, {"tasks": list(self.tasks.values())})
        if method == "GET" and path == "/api/projects":
            return make_response(200, {"projects": self.projects})
        if method == "POST" and path == "/api/task":
            fields = {k: v for k, v in body.items() if k != "status"}
            return make_response(201, self.add_task(**fields))

        match = TASK_RE.match(path)
        if match:
            task_id = int(match.group(1))
            if task_id not in self.tasks:
                return make_response(404, {"error": "Task not found."})
            if method == "GET":
                return make_response(200, self.tasks[task_id])
            if method == "PATCH":
                body["id"] = task_id
                self.tasks[task_id] = body
                return make_response(200, body)
            if method == "DELETE":
                del self.tasks[task_id]
                return make_response(200, {"message": "Task successfully deleted"})

        return make_response(404)

    def calls_for(self, method: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["method"] == method]


@pytest.fixture
def server():
    return FakeTudidiServer()


@pytest.fixture
def client(server):
    return SessionClient(BASE_URL, session=server)


@pytest.fixture
def api(client):
    return TudidiAPI(client, readonly=False)


@pytest.fixture
def readonly_api(client):
    return TudidiAPI(client, readonly=True)
