from functools import wraps
import os
from typing import Any, Dict

import structlog as logging


_LOGGER = logging.getLogger(__name__)

SETTINGS_KEY = "configured"


def configure(f):
    """
    Force the API to set defaults if no user settings have been provided.
    """

    @wraps(f)
    def wrapper(self, *args, **kwargs):
        if not self.settings.get(SETTINGS_KEY, False):
            self.configure()

        return f(self, *args, **kwargs)

    return wrapper


class Settings:
    """
    Control the management and lifecycle of any kvfacade API settings.
    """

    settings = {SETTINGS_KEY: False}

    def configure(self, **kwargs):
        """
        Configure the kvfacade API for settings like the Redis server address.

        By doing so, the kvfacade API allows users to instantiate clients on
        demand without requiring the user to pass around settings.

        Parameters
        ----------
        redis_host : str, optional
            Defaults to the environment variable "REDIS_HOST" or 127.0.0.1.
        redis_port : Union[int, str], optional
            Defaults to the environment variable "REDIS_PORT" or 6379.
        redis_db : Union[int, str], optional
            Defaults to the environment variable "REDIS_DB" or 0.
        redis_password : str, optional
            Defaults to the environment variable "REDIS_PASSWORD".
        encoding : str, optional
            Defaults to "utf-8".
        serializer : str, optional
            One of "pickle" (default), "json" or "string".
        key_prefix : str, optional
            A namespace for every key. Defaults to no prefix.
        keep_ttl : bool, optional
            Preserve existing expiries on writes without one. Defaults to True.
        """
        # Redis Settings.
        redis = {
            "redis_host": kwargs.pop("redis_host", os.getenv("REDIS_HOST", "127.0.0.1")),
            "redis_port": int(kwargs.pop("redis_port", os.getenv("REDIS_PORT", "6379"))),
            "redis_db": int(kwargs.pop("redis_db", os.getenv("REDIS_DB", "0"))),
            "redis_password": kwargs.pop("redis_password", os.getenv("REDIS_PASSWORD")),
        }

        # Facade Settings.
        facade = {
            "encoding": kwargs.pop("encoding", "utf-8"),
            "serializer": kwargs.pop("serializer", "pickle"),
            "key_prefix": kwargs.pop("key_prefix", ""),
            "keep_ttl": bool(kwargs.pop("keep_ttl", True)),
        }

        # Generic Settings.
        Settings.settings.update(redis)
        Settings.settings.update(facade)
        Settings.settings.update(kwargs)
        Settings.settings[SETTINGS_KEY] = True
        _LOGGER.debug("configured kvfacade", host=redis["redis_host"], port=redis["redis_port"], db=redis["redis_db"])

    def redis_options(self) -> Dict[str, Any]:
        """Translate the settings into keyword arguments for `kvfacade.data.redis.connect`."""
        return {
            "host": self.settings["redis_host"],
            "port": self.settings["redis_port"],
            "db": self.settings["redis_db"],
            "password": self.settings["redis_password"],
            "encoding": self.settings["encoding"],
            "serializer": self.settings["serializer"],
            "key_prefix": self.settings["key_prefix"],
            "keep_ttl": self.settings["keep_ttl"],
        }
