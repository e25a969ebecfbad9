"""File handling shared by the JSON stores.

A store file may be used by several ``storefront`` processes at once.
Every read and every load-change-write runs under a lock file kept next
to the store, and writes replace the file in one step, so a reader never
sees a half-written store.
"""

from __future__ import annotations

import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout

from storefront.domain.exceptions import PersistenceError

LOCK_TIMEOUT = 10.0


class JsonFile:

    def __init__(self, path: Path, kind: str) -> None:
        self.path = path
        self._kind = kind
        path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = FileLock(str(path.with_name(path.name + ".lock")))
        with self.locked():
            if not path.exists():
                self.write([])

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the store's lock. Re-entrant within one thread."""
        try:
            self._lock.acquire(timeout=LOCK_TIMEOUT)
        except Timeout as exc:
            raise PersistenceError(
                f"Timed out waiting for the {self._kind} store lock {self._lock.lock_file}"
            ) from exc
        try:
            yield
        finally:
            self._lock.release()

    def read(self) -> list[dict]:
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read {self._kind} from {self.path}: {exc}") from exc

    def write(self, records: list[dict]) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    json.dump(records, tmp, indent=2)
                    tmp.write("\n")
                os.replace(tmp_name, self.path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._kind} to {self.path}: {exc}") from exc
