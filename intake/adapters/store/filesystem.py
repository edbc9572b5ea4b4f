"""Filesystem intake store adapter.

Implements IntakeStorePort by writing each record to
``<storage_dir>/<id>.json`` as pretty-printed UTF-8 JSON.

Writes go to a temporary file in the same directory which is then renamed
over the final name, so a reader sees either no file or the whole record.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from intake.core.errors import PersistenceError
from intake.core.models import IntakeRecord
from intake.core.ports import IntakeStorePort

logger = logging.getLogger(__name__)


class FileIntakeStore(IntakeStorePort):
    """Stores intake records as individual JSON files."""

    def __init__(self, storage_dir: str | Path):
        """Initialize the store.

        Args:
            storage_dir: Directory that holds the record files. Created by
                prepare(); relative paths resolve against the working
                directory of the process.
        """
        self.storage_dir = Path(storage_dir).resolve()

    def path_for(self, record_id: int) -> Path:
        """Return the file path a record with ``record_id`` is stored at."""
        return self.storage_dir / f"{record_id}.json"

    async def prepare(self) -> None:
        """Create the storage directory (and parents) if missing."""
        try:
            await asyncio.to_thread(self.storage_dir.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(
                f"Failed to create storage directory {self.storage_dir}: {e}"
            ) from e
        logger.info(f"Intake storage directory ready: {self.storage_dir}")

    async def save(self, record: IntakeRecord) -> Path:
        """Write a record file, replacing any existing file with the same id."""
        path = self.path_for(record.id)
        content = json.dumps(record.to_dict(), indent=2, ensure_ascii=False)

        try:
            await asyncio.to_thread(self._write_atomic, path, content)
        except OSError as e:
            logger.error(
                f"Failed to write intake record: {e}",
                extra={"path": str(path), "intake_id": record.id},
                exc_info=True,
            )
            raise PersistenceError(f"Failed to write intake record {path}: {e}") from e

        logger.debug(f"Wrote intake record to {path}", extra={"intake_id": record.id})
        return path

    def _write_atomic(self, path: Path, content: str) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self.storage_dir, prefix=f".{path.stem}-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
