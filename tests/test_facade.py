import pickle
from unittest.mock import MagicMock, patch

import pytest
import redis

import kvfacade
import kvfacade.data.redis as KV
from kvfacade.settings import SETTINGS_KEY, Settings


@pytest.fixture(autouse=True)
def reset_settings():
    saved = dict(Settings.settings)
    yield
    Settings.settings.clear()
    Settings.settings.update(saved)


@pytest.fixture
def value_client():
    return MagicMock()


@pytest.fixture
def kv(value_client):
    string_client = redis.Redis(decode_responses=True)
    return kvfacade.KVFacade(client=KV.wrap(value_client, string_client))


def test_configure_defaults(monkeypatch):
    monkeypatch.setenv("REDIS_HOST", "cache.internal")
    monkeypatch.setenv("REDIS_PORT", "6380")
    monkeypatch.delenv("REDIS_DB", raising=False)
    kvfacade.KVFacade().configure()
    assert Settings.settings[SETTINGS_KEY]
    assert Settings.settings["redis_host"] == "cache.internal"
    assert Settings.settings["redis_port"] == 6380
    assert Settings.settings["redis_db"] == 0
    assert Settings.settings["serializer"] == "pickle"
    assert Settings.settings["keep_ttl"] is True


def test_redis_options():
    kv = kvfacade.KVFacade()
    kv.configure(redis_host="h", redis_port="1", serializer="json", key_prefix="app:")
    assert kv.redis_options() == {
        "host": "h",
        "port": 1,
        "db": Settings.settings["redis_db"],
        "password": Settings.settings["redis_password"],
        "encoding": "utf-8",
        "serializer": "json",
        "key_prefix": "app:",
        "keep_ttl": True,
    }


def test_lazy_connect_uses_settings():
    Settings.settings[SETTINGS_KEY] = False
    with patch.object(KV, "connect") as connect:
        kv = kvfacade.KVFacade()
        assert kv.client is connect.return_value
        assert kv.client is connect.return_value
    connect.assert_called_once()
    assert Settings.settings[SETTINGS_KEY]
    _, kwargs = connect.call_args
    assert kwargs["host"] == Settings.settings["redis_host"]


def test_injected_client_is_used(kv, value_client):
    value_client.get.return_value = pickle.dumps("v")
    assert kv.get("k") == "v"
    value_client.get.assert_called_once_with("k")


def test_passthrough(kv, value_client):
    value_client.exists.return_value = 1
    value_client.hsetnx.return_value = 1
    value_client.hexists.return_value = 0
    value_client.hgetall.return_value = {b"f": pickle.dumps(1)}
    value_client.ttl.return_value = 9

    assert kv.exists("k")
    kv.set("k", "v", expire=9)
    assert kv.ttl("k") == 9
    kv.hset("k", "f", 1)
    kv.hset_all("k", {"f": 1})
    assert kv.hset_absent("k", "g", 2)
    assert kv.hget_all("k") == {"f": 1}
    assert not kv.has_field("k", "x")
    assert kv.has_key("k")
    kv.hdel("k", "f")
    kv.delete_key("k")
    kv.remove_all(["a", "b"])
    assert kv.decode_text(b"text") == "text"

    value_client.hdel.assert_called_once_with("k", "f")
    value_client.delete.assert_any_call("a", "b")


def test_invalid_argument_is_value_error(kv):
    with pytest.raises(ValueError):
        kv.set(None, "v")
    with pytest.raises(kvfacade.InvalidArgument):
        kv.remove(None)


def test_close(kv, value_client):
    kv.close()
    value_client.close.assert_called_once_with()
    kv.close()
    value_client.close.assert_called_once_with()
