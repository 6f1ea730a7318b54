"""
History Manager
===============

Keeps the most recent validation results.
Follows SRP: Only handles history persistence.

Storage is injected: anything with get/set/remove over string values works,
so the validator itself never depends on where history lives.
"""

import json
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.settings import HISTORY_DIR, HISTORY_KEY, MAX_HISTORY_ITEMS
from validators.models import ValidationError, ValidationResult, ValidationSummary


class HistoryStorage:
    """Key/value storage port for serialized history."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(HistoryStorage):
    """In-process storage (web sessions, tests)."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JSONFileStorage(HistoryStorage):
    """One JSON file per key inside a directory."""

    def __init__(self, directory: str = None):
        """
        Initialize file storage.

        Args:
            directory: Storage directory (default: HISTORY_DIR from settings)
        """
        self.directory = Path(directory) if directory is not None else HISTORY_DIR

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        os.makedirs(self.directory, exist_ok=True)
        with open(self._path(key), "w", encoding="utf-8") as f:
            f.write(value)

    def remove(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            os.remove(path)


class HistoryEntry:
    """One stored validation run."""

    def __init__(
        self,
        entry_id: str,
        file_name: str,
        timestamp: datetime,
        is_valid: bool,
        error_count: int,
        summary: ValidationSummary,
        errors: List[ValidationError],
        warnings: List[ValidationError],
        present_phts: List[int],
        file_path: Optional[str] = None,
    ):
        self.id = entry_id
        self.file_name = file_name
        self.file_path = file_path
        self.timestamp = timestamp
        self.is_valid = is_valid
        self.error_count = error_count
        self.summary = summary
        self.errors = errors
        self.warnings = warnings
        self.present_phts = present_phts

    @classmethod
    def from_result(
        cls, file_name: str, result: ValidationResult, file_path: Optional[str] = None
    ) -> "HistoryEntry":
        return cls(
            entry_id=str(int(time.time() * 1000)),
            file_name=file_name,
            file_path=file_path,
            timestamp=datetime.now(),
            is_valid=result.is_valid,
            error_count=len(result.errors),
            summary=result.summary,
            errors=list(result.errors),
            warnings=list(result.warnings),
            present_phts=list(result.present_phts),
        )

    def to_result(self) -> ValidationResult:
        return ValidationResult(
            errors=self.errors,
            warnings=self.warnings,
            present_phts=self.present_phts,
            summary=self.summary,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "fileName": self.file_name,
            "filePath": self.file_path,
            "timestamp": self.timestamp.isoformat(),
            "isValid": self.is_valid,
            "errorCount": self.error_count,
            "summary": self.summary.to_dict(),
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "presentPHTs": list(self.present_phts),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            entry_id=str(data["id"]),
            file_name=data.get("fileName", ""),
            file_path=data.get("filePath"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            is_valid=bool(data.get("isValid", False)),
            error_count=int(data.get("errorCount", 0)),
            summary=ValidationSummary.from_dict(data.get("summary", {})),
            errors=[ValidationError.from_dict(e) for e in data.get("errors", [])],
            warnings=[ValidationError.from_dict(w) for w in data.get("warnings", [])],
            present_phts=list(data.get("presentPHTs", [])),
        )


class HistoryManager:
    """
    Manager responsible for validation history.

    Newest entries come first; only the last MAX_HISTORY_ITEMS are kept.
    """

    def __init__(
        self,
        storage: HistoryStorage = None,
        key: str = HISTORY_KEY,
        max_items: int = MAX_HISTORY_ITEMS,
    ):
        """
        Initialize history manager.

        Args:
            storage: Storage backend (default: JSONFileStorage in HISTORY_DIR)
            key: Storage key for the serialized history list
            max_items: Number of entries to keep
        """
        self.storage = storage if storage is not None else JSONFileStorage()
        self.key = key
        self.max_items = max_items

    def save_validation_history(
        self,
        file_name: str,
        result: ValidationResult,
        file_path: Optional[str] = None,
    ) -> HistoryEntry:
        """
        Store a validation result as the newest history entry.

        Args:
            file_name: Name of the validated file
            result: Validation result
            file_path: Optional source path (e.g. supplied by the host application)

        Returns:
            The stored entry
        """
        entry = HistoryEntry.from_result(file_name, result, file_path)
        history = [entry] + self.get_validation_history()
        history = history[: self.max_items]
        self.storage.set(self.key, json.dumps([h.to_dict() for h in history], ensure_ascii=False))
        return entry

    def get_validation_history(self) -> List[HistoryEntry]:
        """
        Load stored history, newest first.

        Returns:
            List of entries (empty if nothing stored or the data is unreadable)
        """
        raw = self.storage.get(self.key)
        if not raw:
            return []

        try:
            records = json.loads(raw)
            return [HistoryEntry.from_dict(record) for record in records]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            print(f"Warning: Could not load validation history: {e}")
            return []

    def get_entry(self, entry_id: str) -> Optional[HistoryEntry]:
        for entry in self.get_validation_history():
            if entry.id == entry_id:
                return entry
        return None

    def clear_validation_history(self) -> None:
        self.storage.remove(self.key)
