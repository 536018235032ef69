from datetime import datetime
from typing import Optional

from ..tudidi_api.data_models import TaskStatus


def status_text(status: Optional[int]) -> str:
    if status is None:
        return "Unknown"
    return TaskStatus.text(status)


def format_date(date_str: Optional[str]) -> str:
    """
    Shorten a service timestamp to YYYY-MM-DD for table output.
    Returns 'N/A' for empty values and the first 10 characters when the
    string is not ISO-8601.
    """
    if not date_str:
        return "N/A"
    try:
        return datetime.fromisoformat(date_str.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        return date_str[:10]


def truncate(s: Optional[str], max_len: int) -> str:
    s = s or ""
    if len(s) <= max_len:
        return s
    return s[: max_len - 3] + "..."
