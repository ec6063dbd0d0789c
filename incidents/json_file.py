"""
JSON-file incident store.

The whole collection lives in one human-inspectable JSON array. Every
append is read-modify-write: load the array, add the record, rewrite the
file in full.

Atomicity comes from writing a temporary file in the same directory and
renaming it over the target with os.replace(), so readers observe either
the old file or the new one.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from incidents.base import IncidentStore, StorageReadError, StorageWriteError
from incidents.types import IncidentCollection, IncidentRecord

logger = logging.getLogger(__name__)


class JsonFileIncidentStore(IncidentStore):
    """Incident store backed by a single JSON file (default: ./incidents.json)."""

    def __init__(self, path: Union[str, Path] = "./incidents.json"):
        self.path = Path(path)

    def load(self) -> IncidentCollection:
        if not self.path.exists():
            return []

        try:
            raw = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Incident file {self.path} is not valid UTF-8: {e}")
            raise StorageReadError(f"Invalid encoding in {self.path}: {e}") from e
        except OSError as e:
            logger.error(f"Failed to read incident file {self.path}: {e}")
            raise StorageReadError(f"Cannot read {self.path}: {e}") from e

        try:
            documents = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupted incident file {self.path}: {e}")
            raise StorageReadError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(documents, list):
            raise StorageReadError(
                f"Expected a JSON array in {self.path}, got {type(documents).__name__}"
            )

        try:
            return [IncidentRecord.from_document(doc) for doc in documents]
        except (ValidationError, TypeError) as e:
            logger.error(f"Malformed incident entry in {self.path}: {e}")
            raise StorageReadError(f"Malformed incident entry in {self.path}: {e}") from e

    def append(self, record: IncidentRecord) -> None:
        incidents = self.load()
        incidents.append(record)
        self._save(incidents)
        logger.debug(f"Incident appended to {self.path} ({len(incidents)} total)")

    def _save(self, incidents: IncidentCollection) -> None:
        """Rewrite the full collection atomically."""
        payload = json.dumps(
            [incident.to_document() for incident in incidents],
            indent=2,
            ensure_ascii=False,
        )

        tmp_path = None
        try:
            directory = self.path.parent
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(directory),
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            logger.error(f"Failed to write incident file {self.path}: {e}")
            raise StorageWriteError(f"Cannot write {self.path}: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
