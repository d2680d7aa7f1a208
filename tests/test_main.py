from unittest.mock import MagicMock, patch

import pytest

from kvfacade import InvalidArgument
from kvfacade import __main__ as cli
from kvfacade.settings import Settings


@pytest.fixture(autouse=True)
def reset_settings():
    saved = dict(Settings.settings)
    yield
    Settings.settings.clear()
    Settings.settings.update(saved)


def test_parser_set():
    args = cli.get_parser().parse_args(["set", "k", "v", "--expire", "30"])
    assert (args.command, args.key, args.value, args.expire) == ("set", "k", "v", 30)


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        cli.get_parser().parse_args([])


@pytest.mark.parametrize(
    "argv,method,expected",
    [
        (["exists", "k"], "exists", (("k",), {})),
        (["get", "k"], "get", (("k",), {})),
        (["set", "k", "v"], "set", (("k", "v"), {"expire": 0})),
        (["remove", "k"], "remove", (("k",), {})),
        (["ttl", "k"], "ttl", (("k",), {})),
        (["hget", "k", "f"], "hget", (("k", "f"), {})),
        (["hset", "k", "f", "v", "--expire", "5"], "hset", (("k", "f", "v"), {"expire": 5})),
        (["hgetall", "k"], "hget_all", (("k",), {})),
    ],
)
def test_run_dispatch(argv, method, expected):
    kv = MagicMock()
    result = cli.run(kv, cli.get_parser().parse_args(argv))
    assert result is getattr(kv, method).return_value
    assert getattr(kv, method).call_args == expected


def test_main(capsys):
    with patch.object(cli, "KVFacade") as facade:
        facade.return_value.get.return_value = "world"
        assert cli.main(["--host", "cache", "--port", "6380", "get", "hello"]) == 0

    kv = facade.return_value
    kv.configure.assert_called_once_with(serializer="string", key_prefix="", redis_host="cache", redis_port=6380)
    kv.close.assert_called_once_with()
    assert capsys.readouterr().out.strip() == "world"


def test_main_invalid_argument():
    with patch.object(cli, "KVFacade") as facade:
        facade.return_value.set.side_effect = InvalidArgument("expire must not be negative: -1")
        assert cli.main(["set", "k", "v", "--expire", "-1"]) == 2
    facade.return_value.close.assert_called_once_with()
