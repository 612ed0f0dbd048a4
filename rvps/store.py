"""Stores that keep verified reference values, keyed by artifact name."""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any

from rvps.message import RvpsError
from rvps.reference_value import ReferenceValue

logger = logging.getLogger(__name__)

LOCAL_FS_FILE_PATH = "/opt/confidential-containers/attestation-service/reference_values"
LOCAL_JSON_FILE_PATH = (
    "/opt/confidential-containers/attestation-service/reference_values.json"
)

_DB_FILE_NAME = "reference_values.db"


def _file_path(config: Any, default: str) -> str:
    if not isinstance(config, dict):
        raise RvpsError("store config must be a map")
    file_path = config.get("file_path", default)
    if not isinstance(file_path, str):
        raise RvpsError(f"invalid type for field `file_path`: {file_path!r}")
    return file_path


class Store(ABC):
    """Keeps reference values under a name."""

    @abstractmethod
    def set(self, name: str, rv: ReferenceValue) -> ReferenceValue | None:
        """Store `rv` under `name`; return the value it replaced, if any."""

    @abstractmethod
    def get(self, name: str) -> ReferenceValue | None:
        """Return the value stored under `name`, or None."""


class StoreType(Enum):
    """The kinds of store the service can be configured with."""

    LOCAL_FS = "LocalFs"
    LOCAL_JSON = "LocalJson"

    def to_store(self, config: Any) -> Store:
        if self is StoreType.LOCAL_FS:
            return LocalFs(config)
        return LocalJson(config)


class LocalFs(Store):
    """A store backed by a small database kept in a local directory."""

    def __init__(self, config: Any) -> None:
        directory = Path(_file_path(config, LOCAL_FS_FILE_PATH))
        try:
            directory.mkdir(parents=True, exist_ok=True)
            self._db = sqlite3.connect(
                directory / _DB_FILE_NAME, check_same_thread=False
            )
            self._db.execute(
                "CREATE TABLE IF NOT EXISTS reference_values "
                "(name TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )
            self._db.commit()
        except (OSError, sqlite3.Error) as exc:
            raise RvpsError(f"open local store at {directory}: {exc}") from exc
        self._lock = threading.Lock()

    def set(self, name: str, rv: ReferenceValue) -> ReferenceValue | None:
        with self._lock:
            try:
                row = self._db.execute(
                    "SELECT value FROM reference_values WHERE name = ?", (name,)
                ).fetchone()
                self._db.execute(
                    "INSERT OR REPLACE INTO reference_values (name, value) VALUES (?, ?)",
                    (name, rv.to_json()),
                )
                self._db.commit()
            except sqlite3.Error as exc:
                raise RvpsError(f"insert into local store: {exc}") from exc
        return ReferenceValue.from_json(row[0]) if row else None

    def get(self, name: str) -> ReferenceValue | None:
        with self._lock:
            try:
                row = self._db.execute(
                    "SELECT value FROM reference_values WHERE name = ?", (name,)
                ).fetchone()
            except sqlite3.Error as exc:
                raise RvpsError(f"read from local store: {exc}") from exc
        return ReferenceValue.from_json(row[0]) if row else None

    def close(self) -> None:
        """Release the underlying database."""
        with self._lock:
            self._db.close()

    def __enter__(self) -> LocalFs:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class LocalJson(Store):
    """A store that keeps all reference values as a JSON list in one file.

    The file itself must already exist; only its parent directory is created.
    """

    def __init__(self, config: Any) -> None:
        file_path = _file_path(config, LOCAL_JSON_FILE_PATH)
        path = Path(file_path)
        if not file_path or path.parent == path:
            raise RvpsError(
                "Illegal `file_path` for LocalJson's config without a parent dir."
            )
        logger.debug("create path for LocalJson: %s", path.parent)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RvpsError(f"create {path.parent}: {exc}") from exc
        self._path = path
        self._lock = threading.RLock()

    def _load(self) -> list[ReferenceValue]:
        try:
            raw = self._path.read_bytes()
        except OSError as exc:
            raise RvpsError(f"read {self._path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise RvpsError(f"parse {self._path}: {exc}") from exc
        if not isinstance(data, list):
            raise RvpsError(f"parse {self._path}: expected a list of reference values")
        return [ReferenceValue.from_dict(item) for item in data]

    def set(self, name: str, rv: ReferenceValue) -> ReferenceValue | None:
        with self._lock:
            values = self._load()
            previous = None
            for position, item in enumerate(values):
                if item.name == name:
                    previous = item
                    values[position] = rv
                    break
            else:
                values.append(rv)
            contents = json.dumps([item.to_dict() for item in values])
            try:
                self._path.write_text(contents, encoding="utf-8")
            except OSError as exc:
                raise RvpsError(f"write {self._path}: {exc}") from exc
        return previous

    def get(self, name: str) -> ReferenceValue | None:
        with self._lock:
            values = self._load()
        return next((item for item in values if item.name == name), None)