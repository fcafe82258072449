from typing import Any, Optional, Protocol


class KeyValueStore(Protocol):
    """Opaque get/set/expire primitive. Values must be JSON-serialisable."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def set_with_expiry(self, key: str, seconds: int, value: Any) -> None:
        ...

    def delete(self, key: str) -> None:
        ...

    def purge_expired(self) -> int:
        ...
