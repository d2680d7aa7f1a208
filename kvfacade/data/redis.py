"""
Provide the Redis kv connector.

A connected client carries two redis-py handles as its `raw_client`:

- a value client (`decode_responses=False`) that stores serialized values,
- a string client (`decode_responses=True`) whose encoder decodes raw bytes
  to text with the configured encoding.

Every function validates its arguments before contacting Redis and raises
`InvalidArgument` otherwise. Errors from redis-py propagate unchanged.
"""
import sys
from typing import Any, Dict, Iterable, Optional, Union

import redis
import structlog as logging

import kvfacade.common.kv as KV
from kvfacade.common.serializers import get_serializer
from kvfacade.errors import InvalidArgument, check_expire, check_field, check_key, check_keys, check_value
from kvfacade.utils import listify


_LOGGER = logging.getLogger(__name__)

Key = Union[str, bytes, int, float]


# client interface


def connect(*args, **kwargs) -> KV.Client:
    """Connect to Redis server.

    Parameters
    ----------
    host : str
        The host string of a server (e.g. redis.service.consul)
    port : Union[int, str], optional
        The Redis port. Defaults to 6379.
    db : Union[int, str], optional
        The redis db. Defaults to 0.
    password : str, optional
        The password for AUTH, if the server requires one.
    encoding : str, optional
        The text codec used by `decode_text` and the json/string serializers.
        Defaults to "utf-8".
    serializer : Union[str, Serializer], optional
        How values are stored: "pickle" (default), "json" or "string".
    key_prefix : str, optional
        A namespace prepended to every key (e.g. "app:").
    keep_ttl : bool, optional
        When set, writing a value without an expiry preserves the key's
        existing expiry. Enabled by default.
    """
    host = kwargs["host"]
    port = int(kwargs.get("port", 6379))
    db = int(kwargs.get("db", 0))
    password = kwargs.get("password")
    encoding = kwargs.get("encoding", "utf-8")

    _LOGGER.debug("connecting to redis server", host=host, port=port, db=db)
    conn_args = {"host": host, "port": port, "db": db, "password": password}
    value_client = redis.Redis(**conn_args, decode_responses=False)
    string_client = redis.Redis(**conn_args, encoding=encoding, decode_responses=True)
    return wrap(value_client, string_client, **kwargs)


def wrap(value_client: redis.Redis, string_client: Optional[redis.Redis] = None, **kwargs) -> KV.Client:
    """Build a kv client around existing redis-py clients.

    Parameters
    ----------
    value_client : redis.Redis
        A client created with `decode_responses=False`; serialized values are
        stored and read through it.
    string_client : Optional[redis.Redis], optional
        A client created with `decode_responses=True`. If omitted, one is
        derived from the connection settings of `value_client`.

    All other keyword arguments match `connect`.
    """
    if value_client.connection_pool.connection_kwargs.get("decode_responses") is True:
        raise ValueError("the value client must be created with `decode_responses=False`")

    encoding = kwargs.get("encoding", "utf-8")
    if string_client is None:
        string_client = _derive_string_client(value_client, encoding)

    client = KV.Client(
        (value_client, string_client),
        name="redis",
        encoding=encoding,
        serializer=get_serializer(kwargs.get("serializer", "pickle"), encoding=encoding),
        key_prefix=kwargs.get("key_prefix") or "",
        keep_ttl=bool(kwargs.get("keep_ttl", True)),
    )
    _LOGGER.debug(
        "wrapped redis clients",
        serializer=client.meta["serializer"].name,
        key_prefix=client.meta["key_prefix"],
    )

    # Make convenience bindings for the client.
    return client.bind(sys.modules[__name__], KV.Symbols + ["disconnect"])


def disconnect(client: KV.Client, *args, **kwargs) -> None:
    _LOGGER.debug("disconnecting from redis server")
    for conn in client.raw_client:
        conn.close()


def _derive_string_client(value_client: redis.Redis, encoding: str) -> redis.Redis:
    pool = value_client.connection_pool
    conn_kwargs = dict(pool.connection_kwargs)
    conn_kwargs.update(encoding=encoding, decode_responses=True)
    return redis.Redis(connection_pool=redis.ConnectionPool(connection_class=pool.connection_class, **conn_kwargs))


# helpers


def _key(client: KV.Client, key: Key) -> Key:
    check_key(key)
    prefix = client.meta["key_prefix"]
    if not prefix:
        return key
    if isinstance(key, bytes):
        return prefix.encode(client.meta["encoding"]) + key
    return f"{prefix}{key}"


def _dumps(client: KV.Client, value: Any) -> bytes:
    return client.meta["serializer"].dumps(value)


def _loads(client: KV.Client, payload: Optional[bytes]) -> Optional[Any]:
    if payload is None:
        return None
    return client.meta["serializer"].loads(payload)


def _expire(client: KV.Client, name: Key, seconds: int) -> None:
    # An expiry of 0 leaves the key's current expiry untouched.
    if seconds:
        value_client, _ = client.raw_client
        value_client.expire(name, seconds)


# kv interface


def kv_get(client: KV.Client, name: Key, **kwargs) -> Optional[bytes]:
    value_client, _ = client.raw_client
    return value_client.get(_key(client, name))


def kv_set(client: KV.Client, name: Key, value: Union[str, bytes], **kwargs) -> KV.Client:
    """
    Mirror the functionality of the raw clients' set method and return the
    client itself.
    """
    check_value(name, value)
    value_client, _ = client.raw_client
    value_client.set(_key(client, name), value, **kwargs)
    return client


def kv_pop(client: KV.Client, name: Key, *args, **kwargs) -> int:
    value_client, _ = client.raw_client
    return value_client.delete(_key(client, name))


# string and key operations


def decode_text(client: KV.Client, payload: Optional[bytes]) -> Optional[str]:
    """Decode a raw byte payload to text with the string client's codec."""
    _, string_client = client.raw_client
    return string_client.connection_pool.get_encoder().decode(payload, force=True)


def exists(client: KV.Client, key: Key) -> bool:
    value_client, _ = client.raw_client
    return bool(value_client.exists(_key(client, key)))


def get(client: KV.Client, key: Key) -> Optional[Any]:
    value_client, _ = client.raw_client
    return _loads(client, value_client.get(_key(client, key)))


def set(client: KV.Client, key: Key, value: Any, expire: int = 0) -> bool:
    """Store a value under a key.

    Parameters
    ----------
    key : Key
        The key to write.
    value : Any
        Any value the configured serializer accepts. None is rejected.
    expire : int, optional
        The time-to-live of the key in whole seconds. With 0 (the default)
        the key's existing expiry is left alone when `keep_ttl` is enabled.
    """
    check_value(key, value)
    check_expire(expire)
    name = _key(client, key)
    payload = _dumps(client, value)

    value_client, _ = client.raw_client
    if expire:
        return bool(value_client.set(name, payload, ex=expire))
    return bool(value_client.set(name, payload, keepttl=client.meta["keep_ttl"]))


def remove(client: KV.Client, key: Key) -> int:
    """Delete a key if it exists and return the number of keys removed."""
    name = _key(client, key)
    value_client, _ = client.raw_client
    if value_client.exists(name):
        return value_client.delete(name)
    return 0


def remove_all(client: KV.Client, keys: Iterable[Key]) -> int:
    """Delete every given key in a single call."""
    if keys is None:
        raise InvalidArgument("redis key must not be None.")
    keys = listify(keys)
    check_keys(keys)
    names = [_key(client, key) for key in keys]
    if not names:
        return 0
    value_client, _ = client.raw_client
    return value_client.delete(*names)


def ttl(client: KV.Client, key: Key) -> Optional[int]:
    """Return the remaining time-to-live in seconds, or None if there is none."""
    value_client, _ = client.raw_client
    remaining = value_client.ttl(_key(client, key))
    # Redis answers -1 for keys without an expiry and -2 for missing keys.
    if remaining is None or remaining < 0:
        return None
    return remaining


def expire(client: KV.Client, key: Key, seconds: int) -> bool:
    check_expire(seconds)
    name = _key(client, key)
    if not seconds:
        return False
    value_client, _ = client.raw_client
    return bool(value_client.expire(name, seconds))


# hash operations


def hset(client: KV.Client, key: Key, field: str, value: Any, expire: int = 0) -> int:
    """Set one hash field under a key, then apply the key expiry if given."""
    check_field(field)
    check_value(key, value)
    check_expire(expire)
    name = _key(client, key)

    value_client, _ = client.raw_client
    added = value_client.hset(name, field, _dumps(client, value))
    _expire(client, name, expire)
    return added


def hset_all(client: KV.Client, key: Key, mapping: Dict[str, Any], expire: int = 0) -> int:
    """Set every field of `mapping` under a key, then apply the key expiry if given."""
    if mapping is None:
        raise InvalidArgument("redis hash mapping must not be None.")
    for field, value in mapping.items():
        check_field(field)
        check_value(key, value)
    check_expire(expire)
    name = _key(client, key)

    value_client, _ = client.raw_client
    added = 0
    if mapping:
        added = value_client.hset(name, mapping={field: _dumps(client, value) for field, value in mapping.items()})
    _expire(client, name, expire)
    return added


def hset_absent(client: KV.Client, key: Key, field: str, value: Any) -> bool:
    """Set a hash field only if it is not already present. Returns True if it was written."""
    check_field(field)
    check_value(key, value)
    value_client, _ = client.raw_client
    return bool(value_client.hsetnx(_key(client, key), field, _dumps(client, value)))


def hdel(client: KV.Client, key: Key, *fields: str) -> int:
    name = _key(client, key)
    for field in fields:
        check_field(field)
    if not fields:
        return 0
    value_client, _ = client.raw_client
    return value_client.hdel(name, *fields)


def hget(client: KV.Client, key: Key, field: str) -> Optional[Any]:
    check_field(field)
    value_client, _ = client.raw_client
    return _loads(client, value_client.hget(_key(client, key), field))


def hget_all(client: KV.Client, key: Key) -> Dict[str, Any]:
    value_client, _ = client.raw_client
    entries = value_client.hgetall(_key(client, key))
    return {decode_text(client, field): _loads(client, payload) for field, payload in entries.items()}


def delete_key(client: KV.Client, key: Key) -> int:
    """Delete a key together with all of its hash fields."""
    value_client, _ = client.raw_client
    return value_client.delete(_key(client, key))


def has_field(client: KV.Client, key: Key, field: str) -> bool:
    check_field(field)
    value_client, _ = client.raw_client
    return bool(value_client.hexists(_key(client, key), field))


def has_key(client: KV.Client, key: Key) -> bool:
    value_client, _ = client.raw_client
    return bool(value_client.exists(_key(client, key)))
