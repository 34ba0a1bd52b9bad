"""Path helpers shared by the tool categories."""

from typing import Any, Optional
from urllib.parse import quote, urlencode


def with_query(path: str, **params: Any) -> str:
    """Append the truthy params to path as a query string, keeping their order."""
    query = urlencode([(key, value) for key, value in params.items() if value])
    return f"{path}?{query}" if query else path


def with_report_interval(path: str, report_interval: Optional[str]) -> str:
    if report_interval:
        return f"{path}?reportInterval={quote(report_interval, safe='')}"
    return path
