import pytest

from smartcache.keys import KeyHasher, STORAGE_KEY_LENGTH


def test_hash_is_fixed_length_and_deterministic():
    h = KeyHasher(str)
    a = h.hash("artist:radiohead")
    assert len(a) == STORAGE_KEY_LENGTH == 16
    assert a == KeyHasher(str).hash("artist:radiohead")
    assert a != h.hash("artist:portishead")

def test_hash_uses_injected_serializer():
    by_id = KeyHasher(lambda k: str(k["id"]))
    assert by_id.hash({"id": 1, "noise": "x"}) == by_id.hash({"id": 1, "noise": "y"})

def test_serializer_errors_propagate():
    def boom(_):
        raise KeyError("no id")
    with pytest.raises(KeyError):
        KeyHasher(boom).hash("x")

def test_missing_serializer_fails_fast():
    with pytest.raises(TypeError):
        KeyHasher(None)
