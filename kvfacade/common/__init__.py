from types import ModuleType
from typing import Iterable


class AbstractClient:
    """
    The AbstractClient is a general wrapper structure for data clients with
    pre-existing client libraries.

    The raw client is preserved for the user to manipulate internals as necessary
    while otherwise providing convenience functions on top. A connector module
    `bind`s its functions onto the client so both `module.func(client, ...)`
    and `client.func(...)` work.
    """

    def __init__(self, raw_client, **kwargs):
        self.raw_client = raw_client
        self.meta = kwargs

    def bind(self, module: ModuleType, symbols: Iterable[str]) -> "AbstractClient":
        for sym in symbols:
            setattr(self, sym, getattr(module, sym).__get__(self))
        return self

    def __repr__(self):
        return f"<{type(self).__name__} name={self.meta.get('name')!r}>"
