"""Check record stores: in-memory and JSON-on-disk."""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from skillcheck.exceptions import RecordNotFoundError
from skillcheck.models.record import CheckRecord

logger = logging.getLogger(__name__.split(".")[-1])


class RecordStore(ABC):
    """Create/update/read access to persisted check records."""

    @abstractmethod
    def get(self, record_id: str) -> Optional[CheckRecord]:
        """Return a copy of the record, or None if unknown."""

    @abstractmethod
    def _save(self, record: CheckRecord) -> None:
        """Persist ``record``, replacing any previous version."""

    def create(self, record: CheckRecord) -> str:
        """
        Persist a new record.

        Args:
            record: Fully built record

        Returns:
            The record id, used as the handle for later updates
        """
        self._save(record.model_copy(deep=True))
        logger.debug(f"Created record {record.record_id}")
        return record.record_id

    def update(
        self, record_id: str, content: str, flags: dict[str, dict[str, Any]]
    ) -> CheckRecord:
        """
        Replace a record's content and merge its flags. The roll is untouched.

        Raises:
            RecordNotFoundError: If no record has ``record_id``
        """
        current = self.get(record_id)
        if current is None:
            raise RecordNotFoundError(record_id)

        merged_flags = {scope: dict(values) for scope, values in current.flags.items()}
        for scope, values in flags.items():
            merged_flags.setdefault(scope, {}).update(values)

        updated = current.model_copy(
            update={"content": content, "flags": merged_flags, "updated_at": datetime.now()}
        )
        self._save(updated)
        logger.debug(f"Updated record {record_id}")
        return updated.model_copy(deep=True)

    def get_flag(self, record_id: str, scope: str, key: str) -> Optional[Any]:
        """Return flag ``scope.key`` of a record, or None."""
        record = self.get(record_id)
        if record is None:
            return None
        return record.get_flag(scope, key)


class InMemoryRecordStore(RecordStore):
    """Keeps records in a dict for the lifetime of the process."""

    def __init__(self) -> None:
        self._records: dict[str, CheckRecord] = {}

    def get(self, record_id: str) -> Optional[CheckRecord]:
        record = self._records.get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    def _save(self, record: CheckRecord) -> None:
        self._records[record.record_id] = record

    def list_ids(self) -> list[str]:
        """List stored record ids in creation order."""
        return list(self._records)


class JsonRecordStore(RecordStore):
    """Stores each record as ``{record_id}.json`` in a directory."""

    def __init__(self, directory: str) -> None:
        """
        Initialize JSON record store.

        Args:
            directory: Directory where records will be saved
        """
        self.directory = Path(directory)
        self._ensure_directory_exists()

    def _ensure_directory_exists(self) -> None:
        """Ensure record directory exists, create if it doesn't."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Record directory ready: {self.directory}")
        except OSError as e:
            logger.error(f"Error creating directory {self.directory}: {e}")
            raise

    def _record_path(self, record_id: str) -> Path:
        return self.directory / f"{record_id}.json"

    def get(self, record_id: str) -> Optional[CheckRecord]:
        file_path = self._record_path(record_id)
        if not file_path.exists():
            return None
        with open(file_path, "r", encoding="utf-8") as f:
            return CheckRecord.model_validate(json.load(f))

    def _save(self, record: CheckRecord) -> None:
        file_path = self._record_path(record.record_id)
        try:
            temp_path = file_path.with_suffix(".tmp")
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(record.model_dump_json(indent=2))

            # Atomic rename
            temp_path.replace(file_path)
        except Exception as e:
            logger.error(f"Error saving record {record.record_id} to {file_path}: {e}", exc_info=True)
            raise

    def list_ids(self) -> list[str]:
        """List stored record ids."""
        return sorted(path.stem for path in self.directory.glob("*.json"))
