"""
Health-check helpers for liveness and readiness probes.

Liveness: the process is alive (no I/O).
Readiness: the graph storage directory is writable.

BigQuery is not probed.
"""

import logging

from graphboard.core.storage import get_graph_storage

logger = logging.getLogger(__name__)


def check_storage() -> bool:
    """Check the graphs directory can be created and written."""
    try:
        return get_graph_storage().is_writable()
    except Exception:
        logger.warning("Storage check failed", exc_info=True)
        return False


def liveness_check() -> tuple[bool, list[str]]:
    """
    Confirms the Python process is responsive.
    No I/O.  Return format matches readiness_check for consistency.
    """
    return (True, [])


def readiness_check() -> tuple[bool, list[str]]:
    """Returns (ok, list of failure messages)."""
    failures: list[str] = []

    if not check_storage():
        failures.append("storage")

    return (len(failures) == 0, failures)
