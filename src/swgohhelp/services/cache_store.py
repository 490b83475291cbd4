"""Disk-backed key-value cache with per-entry expiration.

Each CacheStore instance keeps its entries in memory and mirrors them to a
single orjson document on disk, rewritten atomically on every change. Two
instances with different TTLs back the client: one for game data catalogs
and one for player profiles.

Failures never reach the caller: an unreadable or corrupted file yields an
empty store, a failed write keeps the in-memory value, and a store without
a path is ephemeral.
"""

from __future__ import annotations

import contextlib
import copy
import logging
import os
import sys
import tempfile
import threading
import time
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable

import orjson
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from swgohhelp.shared.constants import CacheConfig
from swgohhelp.shared.errors import CacheError, ErrorCode, ErrorContext
from swgohhelp.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


class CacheEntry(BaseModel):
    """A cached payload with its creation and expiration times (epoch seconds)."""

    data: Any = Field(..., description="JSON-compatible cached payload")
    created_at: float = Field(..., description="Epoch seconds when the entry was written")
    expires_at: float = Field(..., description="Epoch seconds after which the entry is absent")

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class CacheDocument(BaseModel):
    """On-disk layout of a cache file."""

    version: int
    name: str = ""
    entries: dict[str, CacheEntry] = Field(default_factory=dict)


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter[Any]:
    return TypeAdapter(tp)


def _encode_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (set, frozenset)):
        return list(value)
    msg = f"Type is not cacheable: {type(value).__name__}"
    raise TypeError(msg)


def resolve_cache_directory(configured: Path | str | None = None) -> Path:
    """Return the directory cache files live in.

    An explicitly configured directory wins. Otherwise the platform cache
    directory is used: %LOCALAPPDATA% on Windows, ~/Library/Caches on macOS,
    $XDG_CACHE_HOME or ~/.cache elsewhere.

    Raises:
        CacheError: If no directory can be determined
    """
    if configured:
        return Path(configured).expanduser()

    try:
        if sys.platform == "win32":
            local_app_data = os.environ.get("LOCALAPPDATA")
            if not local_app_data:
                msg = "%LOCALAPPDATA% is not defined"
                raise RuntimeError(msg)
            return Path(local_app_data)
        if sys.platform == "darwin":
            return Path.home() / "Library" / "Caches"
        xdg_cache_home = os.environ.get("XDG_CACHE_HOME")
        if xdg_cache_home and Path(xdg_cache_home).is_absolute():
            return Path(xdg_cache_home)
        return Path.home() / ".cache"
    except (RuntimeError, KeyError) as e:
        # Path.home() raises RuntimeError/KeyError when no home can be found
        raise CacheError(
            ErrorCode.CACHE_DIRECTORY_UNAVAILABLE,
            f"Unable to determine cache directory: {e}",
            ErrorContext(operation="resolve_cache_directory"),
            original_error=e,
        ) from e


class CacheStore:
    """Key-value cache persisted to a single file, with a fixed TTL per instance.

    Args:
        path: Cache file location. ``None`` creates an ephemeral store that
            is never written to disk.
        ttl: Time-to-live applied on every ``put``.
        name: Name used in logs and stored in the file.
        clock: Returns the current time in epoch seconds.
    """

    def __init__(
        self,
        path: Path | str | None,
        ttl: timedelta | float,
        name: str = "cache",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.ttl = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
        if self.ttl <= 0:
            msg = f"Cache TTL must be positive, got {self.ttl}"
            raise ValueError(msg)
        self.name = name
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

        if self.path is not None:
            self._load()

    @classmethod
    def ephemeral(
        cls,
        ttl: timedelta | float,
        name: str = "cache",
        clock: Callable[[], float] = time.time,
    ) -> CacheStore:
        """Create an in-memory store that is never persisted."""
        return cls(None, ttl, name=name, clock=clock)

    @property
    def is_persistent(self) -> bool:
        return self.path is not None

    def _load(self) -> None:
        assert self.path is not None
        context = ErrorContext(
            operation="cache_load",
            additional_data={"cache": self.name, "file_path": self.path},
        )

        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.debug("No cache file for '%s' at %s, starting empty", self.name, self.path)
            return
        except OSError as e:
            error = CacheError(
                ErrorCode.CACHE_READ_FAILED,
                f"Failed to read cache file {self.path}: {e}",
                context,
                original_error=e,
            )
            log_operation_error(logger, error, level=logging.WARNING)
            return

        try:
            document = CacheDocument.model_validate(orjson.loads(raw))
            if document.version != CacheConfig.FORMAT_VERSION:
                msg = f"unsupported cache format version {document.version}"
                raise ValueError(msg)
        except (orjson.JSONDecodeError, ValidationError, ValueError) as e:
            error = CacheError(
                ErrorCode.CACHE_CORRUPTED,
                f"Ignoring corrupted cache file {self.path}: {e}",
                context,
                original_error=e,
            )
            log_operation_error(logger, error, level=logging.WARNING)
            return

        now = self._clock()
        self._entries = {
            key: entry for key, entry in document.entries.items() if not entry.is_expired(now)
        }
        logger.debug(
            "Loaded %d entries into cache '%s' (%d expired)",
            len(self._entries),
            self.name,
            len(document.entries) - len(self._entries),
        )

    def _persist(self) -> bool:
        """Write all entries to disk atomically. Caller holds the lock."""
        if self.path is None:
            return True

        document = CacheDocument(
            version=CacheConfig.FORMAT_VERSION,
            name=self.name,
            entries=self._entries,
        )
        payload = orjson.dumps(document.model_dump())

        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f"{self.path.name}.",
                suffix=CacheConfig.TEMP_SUFFIX,
            )
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            error = CacheError(
                ErrorCode.CACHE_WRITE_FAILED,
                f"Failed to write cache file {self.path}: {e}",
                ErrorContext(
                    operation="cache_persist",
                    additional_data={"cache": self.name, "file_path": self.path},
                ),
                original_error=e,
            )
            log_operation_error(logger, error)
            return False

        return True

    def lookup(self, key: str) -> tuple[Any, bool]:
        """Return ``(value, found)`` for a key.

        Expired entries are reported as not found and evicted from memory;
        the file catches up on the next write.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None, False
            if entry.is_expired(self._clock()):
                logger.debug("Cache entry expired for key '%s' (%s)", key, self.name)
                del self._entries[key]
                return None, False
            return copy.deepcopy(entry.data), True

    def get(self, key: str, model: Any = None) -> Any:
        """Return the cached value for ``key`` or ``None``.

        Args:
            key: Cache key
            model: Optional type (a pydantic model, or any type pydantic can
                validate such as ``dict[str, SomeModel]``). A stored value
                that does not validate is discarded and treated as a miss.
        """
        value, found = self.lookup(key)
        if not found:
            return None
        if model is None:
            return value

        try:
            return _adapter(model).validate_python(value)
        except ValidationError as e:
            error = CacheError(
                ErrorCode.CACHE_CORRUPTED,
                f"Discarding invalid cache entry '{key}' in '{self.name}'",
                ErrorContext(operation="cache_get", additional_data={"key": key}),
                original_error=e,
            )
            log_operation_error(logger, error, level=logging.WARNING)
            self.delete(key)
            return None

    def put(self, key: str, value: Any) -> bool:
        """Store ``value`` under ``key`` with a fresh expiration of now + TTL.

        Pydantic models are stored in their JSON form, by alias.

        Returns:
            False if the value could not be serialized or written to disk.
            A value that fails to reach disk is still served from memory.
        """
        try:
            data = orjson.loads(orjson.dumps(value, default=_encode_default))
        except (TypeError, orjson.JSONEncodeError) as e:
            error = CacheError(
                ErrorCode.CACHE_SERIALIZATION_ERROR,
                f"Failed to serialize cache value for key '{key}': {e}",
                ErrorContext(
                    operation="cache_put",
                    additional_data={"cache": self.name, "key": key},
                ),
                original_error=e,
            )
            log_operation_error(logger, error)
            return False

        with self._lock:
            now = self._clock()
            self._entries[key] = CacheEntry(
                data=data,
                created_at=now,
                expires_at=now + self.ttl,
            )
            return self._persist()

    def delete(self, key: str) -> bool:
        """Remove a key. Returns whether it was present."""
        with self._lock:
            if self._entries.pop(key, None) is None:
                return False
            self._persist()
            return True

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()
            self._persist()
        logger.info("Cleared cache '%s'", self.name)

    def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
            if expired:
                self._persist()
        return len(expired)

    def flush(self) -> bool:
        """Write the current entries to disk."""
        with self._lock:
            return self._persist()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.lookup(key)[1]

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for entry in self._entries.values() if not entry.is_expired(now))

    def __repr__(self) -> str:
        return f"CacheStore(name={self.name!r}, path={self.path!r}, ttl={self.ttl})"
