"""Timestamped file backups with age-based cleanup."""

from __future__ import annotations

import os
import re
import shutil
import sys
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from grokcode.errors import InvalidInputError, IoError, MissingFileError

DEFAULT_RETENTION_DAYS = 7
RETENTION_ENV = "GROK_BACKUP_RETENTION_DAYS"

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class BackupInfo:
    """A backup file found on disk."""

    path: Path
    created: datetime
    size: int


def _retention_from_env() -> Optional[int]:
    value = os.environ.get(RETENTION_ENV)
    if value is not None and re.fullmatch(r"\+?\d+", value):
        return int(value)
    return None


class BackupManager:
    """Creates backups next to the original file and prunes old ones."""

    def __init__(self, retention_days: Optional[int] = None) -> None:
        if retention_days is None:
            retention_days = _retention_from_env()
        self.retention_days = DEFAULT_RETENTION_DAYS if retention_days is None else retention_days

    def create_backup(self, file_path: PathLike) -> Path:
        """Copy the file to a timestamped backup and return its path."""
        file_path = Path(file_path)
        if not file_path.exists():
            raise MissingFileError(f"Cannot backup non-existent file: {file_path}")
        backup_path = self.backup_path_for(file_path)
        try:
            shutil.copy(file_path, backup_path)
        except OSError as exc:
            raise IoError(exc) from exc
        if self.retention_days > 0:
            self.cleanup_old_backups(file_path)
        return backup_path

    def backup_path_for(self, file_path: PathLike) -> Path:
        """The path a backup taken now would be written to."""
        file_path = Path(file_path)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        name = file_path.name or "unknown"
        backup_name = f"{name}.{timestamp}.bak"
        if file_path.name:
            return file_path.with_name(backup_name)
        return file_path / backup_name

    @staticmethod
    def _backup_entries(original_file: Path) -> List[os.DirEntry]:
        if original_file.parent == original_file:
            raise InvalidInputError("File has no parent directory")
        file_name = original_file.name
        if not file_name:
            raise InvalidInputError("Invalid file name")
        prefix = f"{file_name}."
        try:
            with os.scandir(original_file.parent) as entries:
                return [
                    entry
                    for entry in entries
                    if entry.name.startswith(prefix) and entry.name.endswith(".bak")
                ]
        except OSError as exc:
            raise IoError(exc) from exc

    def cleanup_old_backups(self, original_file: PathLike) -> List[Path]:
        """Delete backups older than the retention period; return what was removed."""
        if self.retention_days == 0:
            return []
        original_file = Path(original_file)
        retention_seconds = self.retention_days * 24 * 60 * 60
        now = time.time()
        removed: List[Path] = []
        for entry in self._backup_entries(original_file):
            try:
                modified = entry.stat().st_mtime
            except OSError:
                continue
            age = now - modified
            if age < 0 or age <= retention_seconds:
                continue
            path = Path(entry.path)
            try:
                path.unlink()
            except OSError as exc:
                print(f"Warning: Failed to remove old backup {path}: {exc}", file=sys.stderr)
            else:
                removed.append(path)
        if removed and "DEBUG_API" in os.environ:
            print(f"BACKUP: Cleaned up {len(removed)} old backup(s)", file=sys.stderr)
        return removed

    def list_backups(self, original_file: PathLike) -> List[BackupInfo]:
        """All backups of the file, newest first."""
        original_file = Path(original_file)
        backups = []
        for entry in self._backup_entries(original_file):
            try:
                info = entry.stat()
            except OSError:
                continue
            created = datetime.fromtimestamp(max(int(info.st_mtime), 0)).astimezone()
            backups.append(BackupInfo(Path(entry.path), created, info.st_size))
        backups.sort(key=lambda b: b.created, reverse=True)
        return backups