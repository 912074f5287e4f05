# rpcxkit

Small building blocks for RPC services:

- `rpcxkit.context`: a `Context` that carries its own tag values on top of a
  parent (which may be `None`, a mapping, or any object with a `value(key)`
  method). `new_context`, `with_value`, `with_local_value` and
  `is_share_context` create and inspect contexts; `Context` also offers
  `value`, `set_value`, `delete_key`, `lock`/`unlock`, and works as a
  context manager that holds its lock.
- `rpcxkit.share`: shared constants (`DEFAULT_RPC_PATH`, `AUTH_KEY`,
  `SERVER_ADDRESS`, `SERVER_TIMEOUT`, `SEND_FILE_SERVICE_NAME`,
  `STREAM_SERVICE_NAME`, `CONTEXT_TAGS_LOCK`, `REQ_META_DATA_KEY`,
  `RES_META_DATA_KEY`), the codec registry `CODECS` with `register_codec`,
  `ContextKey`, and the records `FileTransferArgs`, `FileTransferReply`,
  `DownloadFileArgs`, `StreamServiceArgs` and `StreamServiceReply`.
- `rpcxkit.buffer_pool`: `LimitedPool`, which keeps `bytearray` buffers in
  `LevelPool`s whose sizes double from a minimum size up to a maximum size.
- `rpcxkit.compress`: `zip_bytes` and `unzip_bytes` for gzip payloads;
  `unzip_bytes` raises `ValueError` on data that is not valid gzip.
- `rpcxkit.converter`: `slice_byte_to_string`, `string_to_slice_byte`
  (lossless UTF-8 conversions) and `copy_meta`.
- `rpcxkit.netutil`: `get_free_port`, `parse_rpcx_address`,
  `convert_meta_to_map`, `convert_map_to_string`, `external_ipv4` and
  `external_ipv6`.
- `rpcxkit.xgen` and `rpcxkit.xgen_parser`: a command that reads Go source
  files and writes a server stub that registers their services.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Examples

```python
from rpcxkit.context import new_context, is_share_context

ctx = new_context(None)
ctx.set_value("trace-id", "abc")
assert ctx.value("trace-id") == "abc"
assert is_share_context(ctx)

# value/set_value take the lock themselves; inside a `with` block,
# which already holds it, work on the tags directly.
with ctx:
    ctx.tags[42] = "answer"
```

```python
from rpcxkit.buffer_pool import LimitedPool

pool = LimitedPool(512, 4096)
buf = pool.get(1000)      # a 1000-byte memoryview over a 1024-byte buffer
pool.put(buf)             # the buffer goes back to the 1024-byte pool
```

```python
from rpcxkit.compress import zip_bytes, unzip_bytes

payload = b"hello" * 100
assert unzip_bytes(zip_bytes(payload)) == payload
```

```python
from rpcxkit.netutil import parse_rpcx_address, convert_map_to_string

network, ip, port = parse_rpcx_address("tcp@127.0.0.1:8972")
convert_map_to_string({"b": "2", "a": "x y"})   # "a=x+y&b=2"
```

`parse_rpcx_address` raises `ValueError` on a malformed address;
`external_ipv4` and `external_ipv6` raise `OSError` when no up,
non-loopback interface has a suitable address.

## Generating a server stub

`rpcx-xgen` reads Go source files or directories and writes a `main`
package that registers each exported type followed by a top-level function
of the form `Name(ctx context.Context, args, reply) error`:

```
rpcx-xgen -o server_stub.go -r etcd path/to/service.go
```

Options:

- `-o FILE`: write to a file instead of standard output.
- `-tags TAGS`: add a build-tags line to the generated file.
- `-r REGISTRY`: add a registry plugin: `etcd`, `consul`, `zookeeper` or `mdns`.
- `-pkg`: treat the arguments as package paths under `$GOPATH/src`
  (`~/go/src` when `GOPATH` is not set).

The import path written for each input is its path relative to
`$GOPATH/src`. The Go sources are scanned with a lightweight reader, not a
full Go parser, and the stub is written again after each input is read.
The same generation is available from Python as
`rpcxkit.xgen.generate(parsers, out, build_tags, registry)` with
`rpcxkit.xgen_parser.Parser` objects.

## What this package does not do

It has no RPC client or server, no wire protocol and no codecs: `CODECS`
starts empty and only holds what is passed to `register_codec`. The
generated stub is Go code to be built with the Go toolchain; this package
does not build or run it.

## Running the tests

```
pytest
```