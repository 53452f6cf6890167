"""Shared file handling for the JSON-backed repositories.

Each store is one JSON array on disk. Writes go to a temporary file in
the same directory which then replaces the store, so a reader only ever
sees the previous or the new content, never a partial write.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from orderbot.domain.exceptions import DomainException, PersistenceError

# What a hand-edited or truncated record can raise while being decoded.
_RECORD_ERRORS = (KeyError, TypeError, ValueError, ArithmeticError, DomainException)


class JsonFileStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc
        if not isinstance(records, list):
            raise PersistenceError(f"{self._file_path} does not hold a JSON array")
        return records

    @contextmanager
    def _decoding(self) -> Iterator[None]:
        """Report a malformed record as a PersistenceError."""
        try:
            yield
        except PersistenceError:
            raise
        except _RECORD_ERRORS as exc:
            raise PersistenceError(
                f"Malformed record in {self._file_path}: {exc!r}"
            ) from exc

    def _persist_raw(self, records: list[dict]) -> None:
        payload = json.dumps(records, indent=2, ensure_ascii=False) + "\n"
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot create {self._file_path}: {exc}") from exc
