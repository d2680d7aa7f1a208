from kvfacade.errors import InvalidArgument
from kvfacade.facade import KeyValue
from kvfacade.settings import Settings


__all__ = ["KVFacade", "InvalidArgument"]
__version__ = "0.1.0"


class KVFacade(KeyValue, Settings):
    """**The kvfacade API.**

    kvfacade provides a small, typed interface to a Redis key value store.

    - *Strings* (get/set with an optional expiry, existence checks, deletes)
    - *Hashes* (field get/set/delete, bulk set, set-if-absent)

    The underlying redis-py clients stay reachable as `client.raw_client`.
    """

    pass
