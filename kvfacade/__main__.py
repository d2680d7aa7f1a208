"""
kvfacade

Inspect and modify keys of a Redis server from the command line.
"""
import argparse
import logging as stdlib_logging
import sys
from typing import Optional, Sequence

import structlog as logging

from kvfacade import KVFacade


_LOGGER = logging.getLogger("kvfacade")


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kvfacade", description=__doc__)
    parser.add_argument("--host", help="redis host (default: $REDIS_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="redis port (default: $REDIS_PORT or 6379)")
    parser.add_argument("--db", type=int, help="redis db (default: $REDIS_DB or 0)")
    parser.add_argument("--serializer", default="string", choices=["pickle", "json", "string"])
    parser.add_argument("--key-prefix", default="")
    parser.add_argument("--log-level", default="WARNING")

    commands = parser.add_subparsers(dest="command", required=True)
    for name in ("exists", "get", "remove", "ttl", "hgetall"):
        commands.add_parser(name).add_argument("key")

    set_parser = commands.add_parser("set")
    set_parser.add_argument("key")
    set_parser.add_argument("value")
    set_parser.add_argument("--expire", type=int, default=0, help="time-to-live in seconds (0 = none)")

    hget_parser = commands.add_parser("hget")
    hget_parser.add_argument("key")
    hget_parser.add_argument("field")

    hset_parser = commands.add_parser("hset")
    hset_parser.add_argument("key")
    hset_parser.add_argument("field")
    hset_parser.add_argument("value")
    hset_parser.add_argument("--expire", type=int, default=0, help="time-to-live in seconds (0 = none)")
    return parser


def configure_logging(level: str) -> None:
    level_no = getattr(stdlib_logging, level.upper(), stdlib_logging.WARNING)
    stdlib_logging.basicConfig(level=level_no, format="%(message)s", stream=sys.stderr)
    logging.configure(
        processors=[
            logging.processors.TimeStamper(fmt="iso"),
            logging.processors.add_log_level,
            logging.processors.format_exc_info,
            logging.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=logging.PrintLoggerFactory(file=sys.stderr),
        wrapper_class=logging.make_filtering_bound_logger(level_no),
    )


def run(kv: KVFacade, cli_args: argparse.Namespace):
    command = cli_args.command
    if command == "exists":
        return kv.exists(cli_args.key)
    elif command == "get":
        return kv.get(cli_args.key)
    elif command == "set":
        return kv.set(cli_args.key, cli_args.value, expire=cli_args.expire)
    elif command == "remove":
        return kv.remove(cli_args.key)
    elif command == "ttl":
        return kv.ttl(cli_args.key)
    elif command == "hget":
        return kv.hget(cli_args.key, cli_args.field)
    elif command == "hset":
        return kv.hset(cli_args.key, cli_args.field, cli_args.value, expire=cli_args.expire)
    elif command == "hgetall":
        return kv.hget_all(cli_args.key)
    raise ValueError(f"kvfacade does not support command '{command}'.")


def main(argv: Optional[Sequence[str]] = None) -> int:
    cli_args = get_parser().parse_args(argv)
    configure_logging(cli_args.log_level)

    kv = KVFacade()
    options = {"serializer": cli_args.serializer, "key_prefix": cli_args.key_prefix}
    for name in ("host", "port", "db"):
        value = getattr(cli_args, name)
        if value is not None:
            options[f"redis_{name}"] = value
    kv.configure(**options)

    _LOGGER.info("running command", command=cli_args.command, key=cli_args.key)
    try:
        print(run(kv, cli_args))
    except ValueError as e:
        # InvalidArgument and bad serializer input are user errors.
        _LOGGER.error("invalid arguments", error=str(e))
        return 2
    finally:
        kv.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
