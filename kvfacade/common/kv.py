"""
kvfacade has connectors for systems that can be treated as key value stores
with an optional hash (field -> value) structure under each key.

# Backends

The currently supported kv backends include:

- Redis

# Conventions

- Keys must not be None; every connector raises `InvalidArgument` otherwise.
- `expire` is always whole seconds and 0 means "leave the expiry alone".
- None is the absent-marker returned for missing keys and fields.
"""
from typing import Any, Dict, Iterable, Optional

from kvfacade.common import AbstractClient


Client = AbstractClient
Symbols = [
    "kv_get",
    "kv_set",
    "kv_pop",
    "decode_text",
    "exists",
    "get",
    "set",
    "remove",
    "remove_all",
    "ttl",
    "expire",
    "hset",
    "hset_all",
    "hset_absent",
    "hdel",
    "hget",
    "hget_all",
    "delete_key",
    "has_field",
    "has_key",
]


# Any kv wrapper must provide the following methods.


def connect(*args, **kwargs) -> Client:  # pragma: nocover
    raise NotImplementedError


def disconnect(client: Client, *args, **kwargs) -> Optional[Any]:  # pragma: nocover
    raise NotImplementedError


def kv_get(client: Client, *args, **kwargs) -> Optional[Any]:  # pragma: nocover
    raise NotImplementedError


def kv_set(client: Client, *args, **kwargs) -> Optional[Any]:  # pragma: nocover
    raise NotImplementedError


def kv_pop(client: Client, *args, **kwargs) -> Optional[Any]:  # pragma: nocover
    raise NotImplementedError


# String and key operations.


def decode_text(client: Client, payload: bytes) -> str:  # pragma: nocover
    raise NotImplementedError


def exists(client: Client, key) -> bool:  # pragma: nocover
    raise NotImplementedError


def get(client: Client, key) -> Optional[Any]:  # pragma: nocover
    raise NotImplementedError


def set(client: Client, key, value: Any, expire: int = 0) -> Any:  # pragma: nocover
    raise NotImplementedError


def remove(client: Client, key) -> Any:  # pragma: nocover
    raise NotImplementedError


def remove_all(client: Client, keys: Iterable) -> int:  # pragma: nocover
    raise NotImplementedError


def ttl(client: Client, key) -> Optional[int]:  # pragma: nocover
    raise NotImplementedError


def expire(client: Client, key, seconds: int) -> bool:  # pragma: nocover
    raise NotImplementedError


# Hash operations.


def hset(client: Client, key, field: str, value: Any, expire: int = 0) -> Any:  # pragma: nocover
    raise NotImplementedError


def hset_all(client: Client, key, mapping: Dict[str, Any], expire: int = 0) -> Any:  # pragma: nocover
    raise NotImplementedError


def hset_absent(client: Client, key, field: str, value: Any) -> bool:  # pragma: nocover
    raise NotImplementedError


def hdel(client: Client, key, *fields: str) -> int:  # pragma: nocover
    raise NotImplementedError


def hget(client: Client, key, field: str) -> Optional[Any]:  # pragma: nocover
    raise NotImplementedError


def hget_all(client: Client, key) -> Dict[str, Any]:  # pragma: nocover
    raise NotImplementedError


def delete_key(client: Client, key) -> int:  # pragma: nocover
    raise NotImplementedError


def has_field(client: Client, key, field: str) -> bool:  # pragma: nocover
    raise NotImplementedError


def has_key(client: Client, key) -> bool:  # pragma: nocover
    raise NotImplementedError
