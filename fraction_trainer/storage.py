"""Key-value storage collaborators for persisted progress.

The engine only needs ``load(key) -> str | None`` and ``save(key, value) ->
bool``.  Backends raise :class:`StorageUnavailable` (or return ``False``)
when a write cannot be made; :class:`LatchedStorage` turns either signal into
a one-way "disabled" state so the rest of the process keeps running in
memory.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from .config import DEFAULT_STORE_FILENAME, PROGRESS_STORE_ENV

logger = logging.getLogger(__name__)


class StorageUnavailable(OSError):
    """A storage backend could not read or write."""


class KeyValueStorage(Protocol):
    def load(self, key: str) -> str | None:
        ...

    def save(self, key: str, value: str) -> bool:
        ...


class MemoryStorage:
    """Dict-backed storage, for tests and for running without a disk."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self._data.get(key)

    def save(self, key: str, value: str) -> bool:
        self._data[key] = str(value)
        return True

    def items(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileStorage:
    """All keys in one JSON object on disk, replaced atomically on save."""

    _version = 1

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @classmethod
    def default_path(cls) -> Path:
        explicit = os.environ.get(PROGRESS_STORE_ENV)
        if explicit:
            return Path(explicit).expanduser()
        return Path.home() / DEFAULT_STORE_FILENAME

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        if not isinstance(payload, dict):
            return {}
        entries = payload.get("entries")
        if not isinstance(entries, dict):
            return {}
        return {str(k): str(v) for k, v in entries.items()}

    def load(self, key: str) -> str | None:
        return self._read_all().get(key)

    def save(self, key: str, value: str) -> bool:
        entries = self._read_all()
        entries[key] = str(value)
        payload = {"version": self._version, "entries": entries}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(f"{self._path.suffix}.tmp")
            tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            raise StorageUnavailable(f"cannot write {self._path}: {exc}") from exc
        return True


class LatchedStorage:
    """Wraps a backend; the first failure disables it for the rest of the process."""

    def __init__(self, backend: KeyValueStorage | None) -> None:
        self._backend = backend
        self._enabled = backend is not None

    @property
    def enabled(self) -> bool:
        return self._enabled

    def load(self, key: str) -> str | None:
        if not self._enabled:
            return None
        assert self._backend is not None
        try:
            return self._backend.load(key)
        except Exception as exc:
            self._disable(exc)
            return None

    def save(self, key: str, value: str) -> bool:
        if not self._enabled:
            return False
        assert self._backend is not None
        try:
            ok = bool(self._backend.save(key, value))
        except Exception as exc:
            self._disable(exc)
            return False
        if not ok:
            self._disable(None)
        return ok

    def _disable(self, exc: BaseException | None) -> None:
        self._enabled = False
        logger.warning("progress storage disabled, continuing in memory: %s", exc or "save returned False")
