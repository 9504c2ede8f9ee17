"""Common utilities for HostelHQ services."""

__all__ = [
    "logging",
    "metrics",
    "settings",
    "telemetry",
]
