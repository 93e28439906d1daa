"""
Shared BigQuery client.

All warehouse queries go through this module so there is exactly one client
per process. The client is created lazily on first use; credentials come from
the environment (Application Default Credentials).
"""

import logging
import threading

from google.cloud import bigquery

from graphboard.core.config import settings

_LOG = logging.getLogger(__name__)

_lock = threading.Lock()
_client: bigquery.Client | None = None


def get_bigquery_client() -> bigquery.Client:
    """Return the shared BigQuery client, creating it on first call."""
    global _client
    if _client is not None:
        return _client
    with _lock:
        if _client is None:
            _client = bigquery.Client(
                project=settings.BIGQUERY_PROJECT,
                location=settings.BIGQUERY_DEFAULT_LOCATION,
            )
            _LOG.info("BigQuery client created (project=%s)", _client.project)
        return _client


def reset_bigquery_client() -> None:
    """Drop the shared client; the next call to get_bigquery_client() recreates it."""
    global _client
    with _lock:
        if _client is not None:
            try:
                _client.close()
            except Exception:
                _LOG.debug("Error closing BigQuery client", exc_info=True)
        _client = None
