# restkit

Small building blocks for REST clients in Python. They use only the standard library.

## Modules

- `restkit.errors` holds the exception hierarchy. `RestcError` is the base class. `ParseException` (also a `ValueError`), `DecompressException`, `ConstraintException`, `UnknownPropertyException` (with a `name` attribute), `CannotIncrementEndException` and `NoDataException` derive from it.
- `restkit.url_encode` provides `url_encode(src)`. It percent-encodes every byte except ASCII letters, digits and `-_.!~*'()/`, and uses upper-case hex. Text is encoded as UTF-8 first.
- `restkit.data_reader` defines `DataReader`, an abstract pull-based reader with `is_eof()`, `read_some()` and `finish()`. It also has `BytesReader(data, chunk_size)`, which hands out an in-memory byte string in fixed-size chunks. The default chunk size is 8192.
- `restkit.io_timer` provides `IoTimer`, a one-shot timer that calls a close callback if it expires before `cancel()` is called. It reports `is_expired()` and `is_active()`. `TimerGuard` is a context manager that cancels its timer when the block exits. `create_guard(name, timeout_ms, close)` returns an empty guard when `close` is `None` or the timeout is not positive.
- `restkit.json_properties` holds `JsonFieldMapping`, which maps attribute names to JSON names and back; names with no entry map to themselves. It also holds `SerializeProperties`, a dataclass with these settings:
  - `ignore_empty_fields`, default `True`
  - `ignore_unknown_properties`, default `True`
  - `max_memory_consumption`, default 1 MiB. It must lie within 0..0xffffffff, or `ConstraintException` is raised.
  - `excluded_names`
  - `name_mapping`
- `restkit.json_serializer` writes dataclass instances, lists, tuples, deques, string-keyed dicts, enums and scalars as compact JSON.
  - `to_json_value()` returns plain Python values.
  - `to_json()` returns a string.
  - `serialize_to_json()` writes to a text stream.
  - `is_empty_field()` decides which fields are skipped. Zero, `False`, empty strings and empty sequences count as empty.
  - `JsonInserter` writes one object, or a JSON list of objects, through a write callable. It is closed by `done()` or by leaving the `with` block.
- `restkit.rest_client` provides `RestClient` and `ClientProperties` (`headers` and `threads`).
  - `RestClient` runs work functions on worker threads. Each function receives a `Context`, which has `client` and `sleep(seconds)`.
  - `process(fn)` runs a function and logs its errors.
  - `process_with_promise(fn)` returns a `concurrent.futures.Future`.
  - `close_when_ready(wait)` stops the client once the work is done.
  - `RestClient.create_use_own_thread()` starts no threads. Queued work runs when you call `run()`.
  - A `Content-Type: application/json; charset=utf-8` header is added to the default properties unless one is already given.

## Examples

URL encoding:

```python
from restkit.url_encode import url_encode

print(url_encode("a b&c"))   # a%20b%26c
```

Writing dataclasses as JSON:

```python
from dataclasses import dataclass
from restkit.json_properties import JsonFieldMapping, SerializeProperties
from restkit.json_serializer import JsonInserter, to_json

@dataclass
class Post:
    id: int = 0
    username: str = ""
    motto: str = ""

print(to_json(Post(id=1, username="catch22", motto="Carpe Diem!"), None))
# {"id":1,"username":"catch22","motto":"Carpe Diem!"}

props = SerializeProperties(name_mapping=JsonFieldMapping([("username", "user_name")]))
print(to_json(Post(id=2, username="neo"), props))
# {"id":2,"user_name":"neo"}

parts = []
with JsonInserter(parts.append, True, None) as inserter:
    inserter.add(Post(id=1))
    inserter.add(Post(id=2))
print("".join(parts))   # [{"id":1},{"id":2}]
```

Reading in chunks:

```python
from restkit.data_reader import BytesReader

reader = BytesReader(b"hello world", 4)
data = b""
while not reader.is_eof():
    data += reader.read_some()
```

Guarding an operation with a timeout:

```python
from restkit.io_timer import create_guard

with create_guard("read", 500, lambda: print("timed out")):
    ...  # the callback runs only if this block is still going after 500 ms
```

Running work on the client:

```python
from restkit.rest_client import RestClient

with RestClient.create(None) as client:
    future = client.process_with_promise(lambda ctx: 42)
    print(future.result())   # 42

client = RestClient.create_use_own_thread(None)
future = client.process_with_promise(lambda ctx: "done")
client.run()                 # runs the queued work on this thread
print(future.result())       # done
```

## What the package does not do

- It sends no HTTP requests and opens no network connections. `RestClient` only schedules the work functions you give it.
- It does not parse URLs, and it does not decompress data streams.
- It cannot read JSON back into dataclasses: it only writes JSON.

## Running the tests

```
pip install -e .[test]
pytest
```