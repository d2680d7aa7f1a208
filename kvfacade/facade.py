from typing import Any, Dict, Iterable, Optional

import kvfacade.common.kv as KV
import kvfacade.data.redis as R
from kvfacade.data.redis import Key
from kvfacade.settings import configure


class KeyValue:
    """
    Define the key value API.

    Each method is a passthrough to the Redis connector. The connection is
    made on first use from the configured settings unless a client was
    injected with `kvfacade.data.redis.wrap` or `kvfacade.data.redis.connect`.
    """

    def __init__(self, client: Optional[KV.Client] = None):
        self._client = client

    @property
    def client(self) -> KV.Client:
        return self.connect()

    @configure
    def connect(self) -> KV.Client:
        if self._client is None:
            self._client = R.connect(**self.redis_options())
        return self._client

    def close(self) -> None:
        if self._client is not None:
            R.disconnect(self._client)
            self._client = None

    def decode_text(self, payload: bytes) -> str:
        """Decode a raw byte payload with the configured text codec."""
        return R.decode_text(self.client, payload)

    def exists(self, key: Key) -> bool:
        return R.exists(self.client, key)

    def get(self, key: Key) -> Optional[Any]:
        """Return the value stored under `key`, or None."""
        return R.get(self.client, key)

    def set(self, key: Key, value: Any, expire: int = 0) -> bool:
        """Store `value` under `key`, expiring after `expire` seconds if non-zero.

        Examples
        --------
        .. code-block:: python

            >>> import kvfacade
            >>> kv = kvfacade.KVFacade()
            >>> kv.set("session:42", {"user": "ada"}, expire=3600)
            True
            >>> kv.get("session:42")
            {'user': 'ada'}
        """
        return R.set(self.client, key, value, expire=expire)

    def remove(self, key: Key) -> int:
        return R.remove(self.client, key)

    def remove_all(self, keys: Iterable[Key]) -> int:
        return R.remove_all(self.client, keys)

    def ttl(self, key: Key) -> Optional[int]:
        return R.ttl(self.client, key)

    def expire(self, key: Key, seconds: int) -> bool:
        return R.expire(self.client, key, seconds)

    def hset(self, key: Key, field: str, value: Any, expire: int = 0) -> int:
        return R.hset(self.client, key, field, value, expire=expire)

    def hset_all(self, key: Key, mapping: Dict[str, Any], expire: int = 0) -> int:
        return R.hset_all(self.client, key, mapping, expire=expire)

    def hset_absent(self, key: Key, field: str, value: Any) -> bool:
        """Set `field` under `key` unless it already holds a value."""
        return R.hset_absent(self.client, key, field, value)

    def hdel(self, key: Key, *fields: str) -> int:
        return R.hdel(self.client, key, *fields)

    def hget(self, key: Key, field: str) -> Optional[Any]:
        return R.hget(self.client, key, field)

    def hget_all(self, key: Key) -> Dict[str, Any]:
        return R.hget_all(self.client, key)

    def delete_key(self, key: Key) -> int:
        return R.delete_key(self.client, key)

    def has_field(self, key: Key, field: str) -> bool:
        return R.has_field(self.client, key, field)

    def has_key(self, key: Key) -> bool:
        return R.has_key(self.client, key)
