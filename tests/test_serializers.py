import datetime

import pytest

from kvfacade.common.serializers import JsonSerializer, PickleSerializer, StringSerializer, get_serializer


def test_get_serializer_by_name():
    assert isinstance(get_serializer(), PickleSerializer)
    assert isinstance(get_serializer("json"), JsonSerializer)
    assert isinstance(get_serializer("string"), StringSerializer)


def test_get_serializer_passes_instances_through():
    serializer = JsonSerializer(encoding="utf-16")
    assert get_serializer(serializer) is serializer


def test_get_serializer_unknown():
    with pytest.raises(ValueError):
        get_serializer("yaml")


def test_pickle_keeps_python_types():
    serializer = PickleSerializer()
    value = {"when": datetime.date(2019, 1, 3), "ids": (1, 2)}
    assert serializer.loads(serializer.dumps(value)) == value


def test_json_is_compact_text():
    assert JsonSerializer().dumps({"a": [1, "b"]}) == b'{"a":[1,"b"]}'


def test_json_rejects_unsupported_types():
    with pytest.raises(TypeError):
        JsonSerializer().dumps({1, 2})


def test_string_uses_encoding():
    serializer = StringSerializer(encoding="latin-1")
    assert serializer.dumps("é") == b"\xe9"
    assert serializer.loads(b"\xe9") == "é"


def test_string_rejects_non_str():
    with pytest.raises(TypeError):
        StringSerializer().dumps(b"raw")
