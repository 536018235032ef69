import pytest

from tudidi_cli.tudidi_api import Task
from tudidi_cli.utils.format_utils import format_date, status_text, truncate


@pytest.mark.parametrize("status, text", [(0, "New"), (1, "Active"), (2, "Done"), (7, "Unknown"), (None, "Unknown")])
def test_status_text(status, text):
    assert status_text(status) == text


def test_task_status_text_property():
    assert Task(id=1, name="A", status=2).status_text == "Done"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2025-03-15T10:20:30Z", "2025-03-15"),
        ("2025-03-15T10:20:30.123+02:00", "2025-03-15"),
        ("15/03/2025 10:20", "15/03/2025"),
        ("", "N/A"),
        (None, "N/A"),
    ],
)
def test_format_date(value, expected):
    assert format_date(value) == expected


def test_truncate():
    assert truncate("short", 24) == "short"
    assert truncate("a" * 30, 24) == "a" * 21 + "..."
    assert truncate(None, 10) == ""
