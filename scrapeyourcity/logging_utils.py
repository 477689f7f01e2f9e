"""
Logging utilities for structured run summaries.

Provides a consistent summary format for crawl operations so a run's result
can be read from a single log line.
"""

from typing import Any


def log_summary(
    operation: str,
    *,
    success: bool = True,
    duration_ms: float | None = None,
    item_count: int | None = None,
    error: str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Create a structured log summary for an operation.

    Args:
        operation: Name of the operation (e.g., "crawl", "record_project")
        success: Whether the operation succeeded
        duration_ms: Optional duration in milliseconds
        item_count: Optional count of items processed
        error: Optional error message (will be truncated)
        **kwargs: Additional fields to include

    Returns:
        Dictionary suitable for structured logging

    Example:
        ```python
        logger.info(log_summary(
            "crawl",
            success=True,
            duration_ms=15230.4,
            item_count=42,
            skipped=1,
        ))
        ```
    """
    summary: dict[str, Any] = {
        "operation": operation,
        "success": success,
    }

    if duration_ms is not None:
        summary["duration_ms"] = round(duration_ms, 2)

    if item_count is not None:
        summary["item_count"] = item_count

    if error:
        # Truncate error messages to prevent log bloat
        summary["error"] = error[:500] if len(error) > 500 else error

    for key, value in kwargs.items():
        # Only include primitive types directly
        if isinstance(value, (str, int, float, bool)):
            summary[key] = value
        elif isinstance(value, (list, tuple)):
            summary[key] = len(value)  # Just log the count

    return summary
