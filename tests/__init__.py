import os

import redis


_BACKENDS = []


def _get_backends():
    global _BACKENDS
    _BACKENDS.extend([backend.lower() for backend in os.getenv("TEST_BACKENDS", "").split(" ") if backend])
    if not _BACKENDS:
        _BACKENDS = ["all"]


def should_skip(backend):
    """Determine whether a test should be skipped or not.

    If the environment variable `TEST_BACKENDS` is unset or set to "all", all
    tests should be run.

    Otherwise, if a module's shortname is not in the space separated list,
    it should not be run.

    e.g.

    TEST_BACKENDS="all"

    TEST_BACKENDS="redis"

    TEST_BACKENDS="unit"
    """
    if not _BACKENDS:
        _get_backends()
    if "all" in _BACKENDS:
        return False
    return backend.lower() not in _BACKENDS


def redis_available(host, port) -> bool:
    """Check whether a Redis server answers at host:port."""
    conn = redis.Redis(host=host, port=int(port), socket_connect_timeout=1)
    try:
        return bool(conn.ping())
    except redis.exceptions.RedisError:
        return False
    finally:
        conn.close()
