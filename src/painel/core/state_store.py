"""Persisted UI state: the notification list and the dismissed-id list.

Values are JSON lists stored under fixed key names. The store is loaded once
at startup and every mutation rewrites the affected keys. Redis is used when
available; otherwise a single JSON file on local disk holds all keys.
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Any, Protocol

from redis.asyncio import Redis

from src.painel.core.logging import get_logger

logger = get_logger(__name__)

NOTIFICATIONS_KEY = "notifications"
DISMISSED_NOTIFICATIONS_KEY = "dismissedNotifications"

STATE_KEYS = (NOTIFICATIONS_KEY, DISMISSED_NOTIFICATIONS_KEY)


class StateBackend(Protocol):
    async def read(self, key: str) -> str | None: ...

    async def write(self, values: dict[str, str]) -> None: ...


class RedisStateBackend:
    """Stores each key as a Redis string under a common prefix."""

    def __init__(self, redis: Redis, prefix: str) -> None:
        self._redis = redis
        self._prefix = prefix

    async def read(self, key: str) -> str | None:
        value = await self._redis.get(f"{self._prefix}{key}")
        return value  # type: ignore[no-any-return]

    async def write(self, values: dict[str, str]) -> None:
        async with self._redis.pipeline(transaction=True) as pipe:
            for key, value in values.items():
                pipe.set(f"{self._prefix}{key}", value)
            await pipe.execute()


class FileStateBackend:
    """Stores all keys in one JSON object, replaced atomically on write."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}

    def _write_all(self, values: dict[str, str]) -> None:
        current = self._read_all()
        current.update(values)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(current, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self._path)

    async def read(self, key: str) -> str | None:
        values = await asyncio.to_thread(self._read_all)
        return values.get(key)

    async def write(self, values: dict[str, str]) -> None:
        await asyncio.to_thread(self._write_all, values)


class StateStore:
    """In-memory snapshot of persisted lists with flush-on-mutation."""

    def __init__(self, backend: StateBackend) -> None:
        self._backend = backend
        self._values: dict[str, list[Any]] = {key: [] for key in STATE_KEYS}
        self.loaded = False

    async def load(self) -> None:
        """Read every key once. Unreadable values start out empty."""
        for key in STATE_KEYS:
            raw = await self._backend.read(key)
            if raw is None:
                self._values[key] = []
                continue
            try:
                parsed = json.loads(raw)
            except json.JSONDecodeError as e:
                logger.warning("Discarding unreadable persisted state", key=key, error=str(e))
                parsed = []
            self._values[key] = parsed if isinstance(parsed, list) else []
        self.loaded = True
        logger.info(
            "State store loaded",
            notifications=len(self._values[NOTIFICATIONS_KEY]),
            dismissed=len(self._values[DISMISSED_NOTIFICATIONS_KEY]),
        )

    def get(self, key: str) -> list[Any]:
        return list(self._values[key])

    async def save(self, values: dict[str, list[Any]]) -> None:
        """Replace the given keys in memory and write them through to the backend."""
        unknown = set(values) - set(STATE_KEYS)
        if unknown:
            raise KeyError(f"Unknown state keys: {sorted(unknown)}")
        for key, items in values.items():
            self._values[key] = list(items)
        await self._backend.write(
            {key: json.dumps(items, ensure_ascii=False) for key, items in values.items()}
        )


def create_state_store(redis: Redis | None, file_path: str, key_prefix: str) -> StateStore:
    """Pick the Redis backend when a client is available, else the JSON file."""
    if redis is not None:
        logger.info("State store using Redis backend")
        return StateStore(RedisStateBackend(redis, key_prefix))
    logger.info("State store using file backend", path=file_path)
    return StateStore(FileStateBackend(file_path))
