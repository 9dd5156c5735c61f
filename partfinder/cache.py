"""Storage backends for pending part requests.

Records only live as long as the service that wrote them. The in-memory
backend dies with the process, and the Redis backend remembers which keys it
wrote so :meth:`RedisRequestBackend.clear` can drop them at shutdown. The TTL
bounds anything left behind by a crashed process.
"""
from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Dict, Optional, Protocol

import redis

from .config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "part-request:"


class RequestBackend(Protocol):
    def load(self, request_id: str) -> Optional[Dict[str, Any]]: ...

    def save(self, request_id: str, record: Dict[str, Any], ttl: int) -> None: ...

    def clear(self) -> int: ...


class RedisRequestBackend:
    def __init__(self, client: redis.Redis, prefix: str = KEY_PREFIX) -> None:
        self.client = client
        self.prefix = prefix
        self._owned: set[str] = set()
        self._lock = threading.Lock()

    def _key(self, request_id: str) -> str:
        return self.prefix + request_id

    def load(self, request_id: str) -> Optional[Dict[str, Any]]:
        try:
            raw = self.client.get(self._key(request_id))
        except redis.RedisError as exc:
            logger.warning("Redis read of request %s failed: %s", request_id, exc)
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable record for request %s", request_id)
            return None

    def save(self, request_id: str, record: Dict[str, Any], ttl: int) -> None:
        key = self._key(request_id)
        try:
            self.client.set(key, json.dumps(record, ensure_ascii=False), ex=ttl)
        except redis.RedisError as exc:
            logger.warning("Redis write of request %s failed: %s", request_id, exc)
            return
        with self._lock:
            self._owned.add(key)

    def clear(self) -> int:
        with self._lock:
            keys = list(self._owned)
            self._owned.clear()
        if not keys:
            return 0
        try:
            return int(self.client.delete(*keys))
        except redis.RedisError as exc:
            logger.warning("Redis cleanup of %s requests failed: %s", len(keys), exc)
            return 0


class MemoryRequestBackend:
    def __init__(self) -> None:
        self._records: Dict[str, tuple[float, Dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def _purge_expired(self, now: float) -> None:
        expired = [rid for rid, (expires_at, _) in self._records.items() if expires_at < now]
        for rid in expired:
            del self._records[rid]

    def load(self, request_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            entry = self._records.get(request_id)
            if entry is None:
                return None
            expires_at, record = entry
            if expires_at < time.time():
                del self._records[request_id]
                return None
            return dict(record)

    def save(self, request_id: str, record: Dict[str, Any], ttl: int) -> None:
        now = time.time()
        with self._lock:
            self._purge_expired(now)
            self._records[request_id] = (now + ttl, dict(record))

    def clear(self) -> int:
        with self._lock:
            count = len(self._records)
            self._records.clear()
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def create_backend() -> RequestBackend:
    if not settings.use_redis:
        logger.info("Redis disabled, keeping part requests in memory")
        return MemoryRequestBackend()
    try:
        client = redis.Redis(host=settings.redis_host, port=settings.redis_port, decode_responses=False)
        client.ping()
    except redis.RedisError:
        logger.warning("Redis not available at %s:%s, keeping part requests in memory", settings.redis_host, settings.redis_port)
        return MemoryRequestBackend()
    logger.info("Storing part requests in Redis at %s:%s", settings.redis_host, settings.redis_port)
    return RedisRequestBackend(client)
