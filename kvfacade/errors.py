"""
Argument guards shared by every kv operation.

Every guard raises `InvalidArgument` synchronously, before the store is
contacted. Errors coming back from the store itself are never translated.
"""
from typing import Any, Iterable, Optional


__all__ = ["InvalidArgument", "check_key", "check_keys", "check_value", "check_field", "check_expire"]

KEY_TYPES = (str, bytes, int, float)


class InvalidArgument(ValueError):
    """A required key, value, field or expiry argument was missing or malformed."""


def check_key(key: Any) -> None:
    if key is None:
        raise InvalidArgument("redis key must not be None.")
    # bool is an int subclass but redis-py refuses to encode it.
    if isinstance(key, bool) or not isinstance(key, KEY_TYPES):
        raise InvalidArgument(f"redis key must be str, bytes, int or float, instead got {type(key)}.")


def check_keys(keys: Optional[Iterable[Any]]) -> None:
    if keys is None:
        raise InvalidArgument("redis key must not be None.")
    for key in keys:
        check_key(key)


def check_value(key: Any, value: Any) -> None:
    if key is None or value is None:
        raise InvalidArgument("redis key or value must not be None.")
    check_key(key)


def check_field(field: Any) -> None:
    if field is None:
        raise InvalidArgument("redis hash field must not be None.")
    if not isinstance(field, (str, bytes)):
        raise InvalidArgument(f"redis hash field must be str or bytes, instead got {type(field)}.")


def check_expire(expire: Any) -> None:
    if isinstance(expire, bool) or not isinstance(expire, int):
        raise InvalidArgument(f"expire must be a whole number of seconds, instead got {type(expire)}.")
    if expire < 0:
        raise InvalidArgument(f"expire must not be negative: {expire}")
