"""
Value serializers turn Python values into the bytes stored under a key or
hash field, and back again.

- pickle (default): any picklable Python object round-trips unchanged.
- json: JSON-compatible values only; readable by non-Python consumers.
- string: str values only, encoded with the configured text encoding.

Only load values written by a trusted party with the pickle serializer.
"""
import json
import pickle
from typing import Any, Dict, Type


__all__ = ["Serializer", "PickleSerializer", "JsonSerializer", "StringSerializer", "get_serializer"]


class Serializer:
    name = ""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def dumps(self, value: Any) -> bytes:  # pragma: nocover
        raise NotImplementedError

    def loads(self, payload: bytes) -> Any:  # pragma: nocover
        raise NotImplementedError


class PickleSerializer(Serializer):
    name = "pickle"

    def dumps(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)

    def loads(self, payload: bytes) -> Any:
        return pickle.loads(payload)


class JsonSerializer(Serializer):
    name = "json"

    def dumps(self, value: Any) -> bytes:
        return json.dumps(value, separators=(",", ":")).encode(self.encoding)

    def loads(self, payload: bytes) -> Any:
        return json.loads(payload.decode(self.encoding))


class StringSerializer(Serializer):
    name = "string"

    def dumps(self, value: Any) -> bytes:
        if not isinstance(value, str):
            raise TypeError(f"the string serializer only stores str values, instead got {type(value)}")
        return value.encode(self.encoding)

    def loads(self, payload: bytes) -> str:
        return payload.decode(self.encoding)


SERIALIZERS: Dict[str, Type[Serializer]] = {
    cls.name: cls for cls in (PickleSerializer, JsonSerializer, StringSerializer)
}


def get_serializer(serializer="pickle", encoding: str = "utf-8") -> Serializer:
    """Resolve a serializer by name, or pass a Serializer instance through."""
    if isinstance(serializer, Serializer):
        return serializer
    try:
        return SERIALIZERS[serializer](encoding=encoding)
    except KeyError:
        raise ValueError(f"kvfacade has no such serializer: {serializer}") from None
