import json

from spinwin.infrastructure.kv.memory_store import InMemoryKeyValueStore
from spinwin.infrastructure.kv.redis_store import RedisKeyValueStore


class Tick:
    def __init__(self):
        self.t = 1000.0

    def __call__(self):
        return self.t


def test_memory_store_get_set_delete():
    kv = InMemoryKeyValueStore()
    assert kv.get("k") is None
    kv.set("k", [{"a": 1}])
    assert kv.get("k") == [{"a": 1}]
    kv.delete("k")
    assert kv.get("k") is None
    kv.delete("missing")


def test_memory_store_returns_copies():
    kv = InMemoryKeyValueStore()
    kv.set("k", [{"a": 1}])
    got = kv.get("k")
    got.append({"b": 2})
    assert kv.get("k") == [{"a": 1}]


def test_memory_store_expiry_and_purge():
    tick = Tick()
    kv = InMemoryKeyValueStore(clock=tick)
    kv.set_with_expiry("otp", 600, "123456")
    kv.set_with_expiry("other", 60, "x")
    kv.set("forever", "y")
    tick.t += 60
    assert kv.get("other") is None
    assert kv.get("otp") == "123456"
    tick.t += 600
    assert kv.purge_expired() == 1
    assert len(kv) == 1
    assert kv.get("forever") == "y"


class FakeRedis:
    def __init__(self):
        self.store = {}
        self.ttls = {}

    def get(self, k):
        return self.store.get(k)

    def set(self, k, v):
        self.store[k] = v.encode()
        self.ttls.pop(k, None)

    def setex(self, k, s, v):
        self.store[k] = v.encode()
        self.ttls[k] = s

    def delete(self, k):
        self.store.pop(k, None)

    def ping(self):
        return True


def test_redis_store_with_fake_client():
    fake = FakeRedis()
    kv = RedisKeyValueStore(prefix="spin:", client=fake)

    kv.set_with_expiry("otp:a@b.com", 600, "123456")
    assert fake.ttls["spin:otp:a@b.com"] == 600
    assert kv.get("otp:a@b.com") == "123456"

    kv.set("history:a@b.com", [{"id": 1}])
    assert json.loads(fake.store["spin:history:a@b.com"]) == [{"id": 1}]
    assert kv.get("history:a@b.com") == [{"id": 1}]

    kv.delete("otp:a@b.com")
    assert kv.get("otp:a@b.com") is None
    assert kv.purge_expired() == 0
    assert kv.ping() is True


def test_redis_store_reads_plain_strings():
    fake = FakeRedis()
    fake.store["cooldown:a@b.com"] = b"1772370300000"
    kv = RedisKeyValueStore(client=fake)
    assert kv.get("cooldown:a@b.com") == 1772370300000
    fake.store["note"] = b"hello"
    assert kv.get("note") == "hello"


def test_redis_store_from_url(monkeypatch):
    from spinwin.infrastructure.kv import redis_store as mod

    class FromUrl(FakeRedis):
        @classmethod
        def from_url(cls, url):
            inst = cls()
            inst.url = url
            return inst

    monkeypatch.setattr(mod.redis, "Redis", FromUrl)
    kv = mod.RedisKeyValueStore(url="redis://fake:6379/0")
    assert kv.client.url == "redis://fake:6379/0"
