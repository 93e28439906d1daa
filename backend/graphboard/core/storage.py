"""
File-based graph storage.

One ``<id>.json`` file per graph under ``GRAPHS_DIR``. Writes go to a temp
file in the same directory and are renamed into place, so readers never see a
partial record; concurrent saves of one id are last-writer-wins.
"""

import json
import logging
import os
import re
import secrets
import string
import tempfile
import threading
import time
from pathlib import Path

from pydantic import ValidationError

from graphboard.core.config import settings
from graphboard.models import GraphConfig

_log = logging.getLogger(__name__)

# Ids become file names; anything else would escape GRAPHS_DIR.
_GRAPH_ID_RE = re.compile(r"[A-Za-z0-9_-]+")
_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_graph_id() -> str:
    """``graph_<epoch ms>_<9 random base36 chars>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"graph_{int(time.time() * 1000)}_{suffix}"


class GraphStorage:
    """CRUD for GraphConfig records stored as JSON files in *base_dir*."""

    def __init__(self, base_dir: Path | str) -> None:
        self._dir = Path(base_dir)
        self._lock = threading.Lock()

    @property
    def base_dir(self) -> Path:
        return self._dir

    def ensure_dir(self) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, graph_id: str) -> Path | None:
        if not _GRAPH_ID_RE.fullmatch(graph_id):
            return None
        return self._dir / f"{graph_id}.json"

    @staticmethod
    def _read(path: Path) -> GraphConfig:
        return GraphConfig.model_validate_json(path.read_text(encoding="utf-8"))

    def list_graphs(self) -> list[GraphConfig]:
        """All readable graphs, ordered by file name. Unreadable files are logged and skipped."""
        self.ensure_dir()
        graphs: list[GraphConfig] = []
        for path in sorted(self._dir.glob("*.json")):
            try:
                graphs.append(self._read(path))
            except (OSError, ValidationError) as e:
                _log.error("Error reading graph file %s: %s", path.name, e)
        return graphs

    def get_graph(self, graph_id: str) -> GraphConfig | None:
        self.ensure_dir()
        path = self._path(graph_id)
        if path is None or not path.exists():
            return None
        try:
            return self._read(path)
        except (OSError, ValidationError) as e:
            _log.error("Error reading graph %s: %s", graph_id, e)
            return None

    def save_graph(self, graph: GraphConfig) -> None:
        """Write *graph*, replacing any stored record with the same id."""
        self.ensure_dir()
        path = self._path(graph.id)
        if path is None:
            raise ValueError(f"Invalid graph id: {graph.id!r}")
        content = json.dumps(
            graph.model_dump(mode="json", by_alias=True, exclude_none=True),
            indent=2,
        )
        with self._lock:
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self._dir), prefix=f".{graph.id}_", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        _log.debug("Saved graph %s", graph.id)

    def delete_graph(self, graph_id: str) -> bool:
        """Delete a graph; False if it does not exist or could not be removed."""
        self.ensure_dir()
        path = self._path(graph_id)
        if path is None or not path.exists():
            return False
        try:
            with self._lock:
                path.unlink()
        except OSError as e:
            _log.error("Error deleting graph %s: %s", graph_id, e)
            return False
        return True

    def is_writable(self) -> bool:
        """True if the storage directory exists (or can be created) and is writable."""
        try:
            self.ensure_dir()
        except OSError:
            return False
        return os.access(self._dir, os.W_OK)


_storage: GraphStorage | None = None
_storage_lock = threading.Lock()


def get_graph_storage() -> GraphStorage:
    """Process-wide GraphStorage rooted at ``settings.GRAPHS_DIR``."""
    global _storage
    if _storage is None:
        with _storage_lock:
            if _storage is None:
                _storage = GraphStorage(settings.GRAPHS_DIR)
    return _storage
