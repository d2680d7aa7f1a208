import os

import kvfacade
import kvfacade.data.redis as KV

client = KV.connect(host=os.getenv("REDIS_HOST", "localhost"))  # Normal port is 6379.

# The standard KV interface supports "get", "set", and "pop" on raw bytes.

client.kv_pop("hello")

KV.kv_get(client, "hello")

KV.kv_set(client, "hello", "world")

client.kv_get("hello")

# Values of any picklable type, with an optional expiry in seconds.

client.set("session:42", {"user": "ada", "roles": ["admin"]}, expire=60)

client.get("session:42")

client.ttl("session:42")

# Hash fields under a single key.

client.hset_all("user:42", {"name": "ada", "visits": 1})

client.hset_absent("user:42", "name", "grace")  # no-op, the field is set

client.hget_all("user:42")

client.remove_all(["session:42", "user:42"])

# The class API reads its connection settings from the environment
# (REDIS_HOST, REDIS_PORT, REDIS_DB) unless configured explicitly.

kv = kvfacade.KVFacade()
kv.configure(serializer="json", key_prefix="example:")
kv.set("greeting", {"text": "hello"})
kv.get("greeting")
kv.close()

# All data clients from kvfacade expose the underlying library for
# manual interaction.

value_client, string_client = client.raw_client
for key in value_client.scan_iter():
    print(key, client.decode_text(key))
KV.disconnect(client)
