import json
import logging
from typing import Any, Optional

import redis

from ...application.ports.kv_store import KeyValueStore

logger = logging.getLogger(__name__)


class RedisKeyValueStore(KeyValueStore):
    def __init__(self, url: Optional[str] = None, prefix: str = "", client: Optional["redis.Redis"] = None) -> None:
        if client is None:
            if not url:
                raise RuntimeError("REDIS_URL is not configured")
            client = redis.Redis.from_url(url)
        self.client = client
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[Any]:
        raw = self.client.get(self._key(key))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            return json.loads(raw)
        except ValueError:
            # plain strings written by other tools
            return raw

    def set(self, key: str, value: Any) -> None:
        self.client.set(self._key(key), json.dumps(value))

    def set_with_expiry(self, key: str, seconds: int, value: Any) -> None:
        self.client.setex(self._key(key), int(seconds), json.dumps(value))

    def delete(self, key: str) -> None:
        self.client.delete(self._key(key))

    def purge_expired(self) -> int:
        # Redis evicts expired keys itself
        return 0

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False
