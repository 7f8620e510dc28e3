"""Response metadata and error envelope utilities."""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from stock_playbook import SCHEMA_VERSION, SERVER_VERSION


def build_meta(tool: str, duration_ms: float | None = None) -> dict[str, Any]:
    """
    Build standard metadata block for responses.

    Args:
        tool: Name of the tool producing this response
        duration_ms: Execution time in milliseconds (optional)

    Returns:
        Metadata dict with version info
    """
    meta: dict[str, Any] = {
        "server_version": SERVER_VERSION,
        "schema_version": SCHEMA_VERSION,
        "tool": tool,
    }
    if duration_ms is not None:
        meta["duration_ms"] = round(duration_ms, 1)
    return meta


def build_provenance(
    source: str,
    bar_count: int,
    last_bar_date: str | None = None,
    as_of: datetime | None = None,
    warnings: Sequence[str] = (),
) -> dict[str, Any]:
    """
    Build data provenance block for the bar series an analysis ran on.

    Args:
        source: Data source name (e.g., "payload", "in_memory")
        bar_count: Number of bars supplied
        last_bar_date: Date of the latest bar, None for an empty series
        as_of: When the response was built; defaults to now in UTC
        warnings: Degraded-input notes carried with the data

    Returns:
        Provenance dict
    """
    as_of = as_of or datetime.now(timezone.utc)
    return {
        "source": source,
        "as_of": as_of.isoformat(),
        "bar_count": bar_count,
        "last_bar_date": last_bar_date,
        "warnings": list(warnings),
    }


def build_error_response(
    error_type: str,
    message: str,
    symbol: str | None = None,
) -> dict[str, Any]:
    """
    Build standardized error response.

    Args:
        error_type: Type of error (e.g. invalid_input)
        message: Human-readable error message
        symbol: Symbol that caused the error (if applicable)

    Returns:
        Error response dict
    """
    response: dict[str, Any] = {
        "error": True,
        "error_type": error_type,
        "message": message,
        "meta": build_meta("error"),
    }

    if symbol is not None:
        response["symbol"] = symbol

    return response
