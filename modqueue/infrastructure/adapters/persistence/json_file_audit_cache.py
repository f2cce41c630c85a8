"""Local audit cache stored as JSON documents on disk.

One file per key: ``<directory>/<key>.json``. Reads never raise; a missing
or unreadable file reads as absent.
"""

from __future__ import annotations

from pathlib import Path

from structlog import get_logger

from modqueue.domain.errors import AuditCacheError

logger = get_logger(__name__)


class JsonFileAuditCache:
    """LocalAuditCacheProtocol implementation over the filesystem."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("audit_cache_read_failed", path=str(path), error=str(e))
            return None

    def write(self, key: str, value: str) -> None:
        """Replace the stored document.

        The document is written to a sibling temp file and renamed into
        place so a crash never leaves a half-written log.

        Raises:
            AuditCacheError: If the document cannot be written.
        """
        path = self.path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise AuditCacheError(key, str(e)) from e


__all__ = ["JsonFileAuditCache"]
