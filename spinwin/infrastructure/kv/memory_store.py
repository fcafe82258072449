import copy
import time
from typing import Any, Callable, Dict, Optional, Tuple

from ...application.ports.kv_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store for development and tests; lost on restart."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._store: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._clock = clock

    def get(self, key: str) -> Optional[Any]:
        rec = self._store.get(key)
        if rec is None:
            return None
        value, expires = rec
        if expires is not None and self._clock() >= expires:
            del self._store[key]
            return None
        return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        self._store[key] = (copy.deepcopy(value), None)

    def set_with_expiry(self, key: str, seconds: int, value: Any) -> None:
        self._store[key] = (copy.deepcopy(value), self._clock() + seconds)

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def purge_expired(self) -> int:
        now = self._clock()
        # prune
        expired = [k for k, (_, exp) in self._store.items() if exp is not None and now >= exp]
        for k in expired:
            del self._store[k]
        return len(expired)

    def __len__(self) -> int:
        return len(self._store)
