from autowire.instance_cache import InstanceCache


def test_store_and_lookup():
    cache = InstanceCache()
    instance = object()

    assert cache.store("Thing", instance) is instance
    assert "Thing" in cache
    assert cache["Thing"] is instance
    assert cache.get("Other") is None
    assert len(cache) == 1


def test_snapshot_is_detached():
    cache = InstanceCache()
    cache.store("Thing", object())

    snapshot = cache.snapshot()
    snapshot.clear()

    assert len(cache) == 1
