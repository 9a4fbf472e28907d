"""Disk space checks used before writing CSV exports.

Keeps the exporter from filling the volume that also holds logs.
"""

import logging
import shutil

logger = logging.getLogger(__name__)

CRITICAL_THRESHOLD_PERCENT = 95


class DiskFullError(Exception):
    """Raised when disk is too full to safely write data."""

    pass


def get_disk_usage(path: str = "/") -> tuple[int, int, float]:
    """Get disk usage for the filesystem holding ``path``.

    Returns:
        Tuple of (used_bytes, total_bytes, percent_used)
    """
    usage = shutil.disk_usage(path)
    percent = (usage.used / usage.total) * 100
    return usage.used, usage.total, percent


def require_disk_space(
    path: str = "/", threshold: float = CRITICAL_THRESHOLD_PERCENT
) -> None:
    """Guard a write operation.

    Args:
        path: Filesystem path to check.
        threshold: Percentage threshold above which writes are refused.

    Raises:
        DiskFullError: If disk usage exceeds threshold.
    """
    used, total, percent = get_disk_usage(path)
    if percent >= threshold:
        used_gb = used / (1024**3)
        total_gb = total / (1024**3)
        raise DiskFullError(
            f"Disk usage critical at {path}: {percent:.1f}% "
            f"({used_gb:.1f}/{total_gb:.1f} GB). CSV export skipped."
        )
