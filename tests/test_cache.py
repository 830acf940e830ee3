from pwned.cache import PrefixCache


def test_get_miss_then_hit():
    cache = PrefixCache()
    assert cache.get("ABCDE") is None
    cache.put("ABCDE", ["X:1"])
    assert cache.get("ABCDE") == ["X:1"]
    assert "ABCDE" in cache
    assert len(cache) == 1


def test_put_copies_bucket():
    cache = PrefixCache()
    bucket = ["X:1"]
    cache.put("ABCDE", bucket)
    bucket.append("Y:2")
    assert cache.get("ABCDE") == ["X:1"]


def test_empty_bucket_is_a_hit():
    cache = PrefixCache()
    cache.put("ABCDE", [])
    assert cache.get("ABCDE") == []


def test_clear():
    cache = PrefixCache()
    cache.put("ABCDE", [])
    cache.clear()
    assert len(cache) == 0
