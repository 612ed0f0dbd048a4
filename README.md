# rvps

A Reference Value Provider Service library. It takes provenance messages,
verifies them with the extractor that matches their type, stores the
reference values they carry, and answers queries for the trusted digests
of a named artifact.

## Concepts

- **Message** (`rvps.message.Message`): the packet the service receives.
  It has a `version` (currently `0.1.0`, the default when absent), a
  `type` naming the provenance format and a `payload` holding the
  provenance itself.
- **Extractors** (`rvps.extractors.Extractors`): one extractor per
  provenance type, built the first time that type is seen. The only
  type available is `sample`: `SampleExtractor` reads a base64-encoded
  JSON object that maps artifact names to lists of digests. Each
  extracted `ReferenceValue` uses the `sha384` algorithm and expires
  twelve months after extraction.
- **PreProcessor** (`rvps.pre_processor.PreProcessor`): an ordered chain
  of `Ware` objects that can inspect or change a message before it
  reaches the extractors. A ware continues the chain by calling
  `next_wares.run(message, context)`.
- **Store** (`rvps.store`): where reference values live.
  `StoreType.LOCAL_FS` (`"LocalFs"`) keeps them in an SQLite database
  inside a directory, created if needed. `StoreType.LOCAL_JSON`
  (`"LocalJson"`) keeps them as a JSON list in one file; that file must
  already exist, only its parent directory is created. Both take a
  `file_path` setting. Storing a value under an existing name replaces
  it and returns the previous one.
- **Core** (`rvps.core.Core`): ties the above together. With no config
  it uses a `LocalFs` store at its default location under
  `/opt/confidential-containers/attestation-service/`.

All failures are raised as `rvps.message.RvpsError`.

## Usage

```python
import base64
import json
from pathlib import Path

from rvps.core import Core
from rvps.message import Config

store_file = Path("/tmp/rvps/reference_values.json")
store_file.parent.mkdir(parents=True, exist_ok=True)
store_file.write_text("[]")

config = Config.from_dict({
    "store_type": "LocalJson",
    "store_config": {"file_path": str(store_file)},
})
core = Core(config)

provenance = {"kernel": ["5b7aa657", "a1b2c3d4"]}
message = json.dumps({
    "version": "0.1.0",
    "type": "sample",
    "payload": base64.b64encode(json.dumps(provenance).encode()).decode(),
})
core.verify_and_extract(message)

digest = core.get_digests("kernel")
print(digest.to_dict())
# {'name': 'kernel', 'hash_values': ['5b7aa657', 'a1b2c3d4']}
```

`get_digests` returns `None` when the name is unknown or when the stored
reference value has expired. A message whose version does not match, or
whose type has no extractor, raises `RvpsError`.

`Core.with_ware` adds a `Ware` instance to the pre-processor. It also
accepts a ware name, but no named wares are shipped, so a name is
ignored with a warning.

### Reference values

```python
from rvps.reference_value import ReferenceValue

rv = ReferenceValue.from_json("""{
    "version": "1.0.0",
    "name": "artifact",
    "expired": "1970-01-01T00:00:00Z",
    "hash-value": [{"alg": "sha512", "value": "123"}]
}""")
print(rv.to_dict())
```

Expiry times are written as `YYYY-MM-DDTHH:MM:SSZ` in UTC, with
sub-second precision dropped. `version` defaults to `0.1.0`.
`add_hash_value(alg, value)` appends a digest and returns the value, so
calls can be chained.

### Server configuration

`rvps.server_config.ServerConfig.from_file(path)` reads a JSON or TOML
file holding `address`, `store_type` and `store_config`, all three
required. The extension may be left off the path, in which case
`path.json` and then `path.toml` are tried. A `ServerConfig()` built
without a file has address `127.0.0.1:50003` and a `LocalFs` store.
`to_core_config()` gives the `Config` that `Core` takes.

### Flattening evidence claims

```python
from rvps.claims import Tee, flatten_claims

flatten_claims(Tee.TDX, {"quote": {"header": {"version": "0400"}}, "report_data": "ab"})
# {'tdx.quote.header.version': '0400', 'report_data': 'ab', 'init_data': ''}
```

Nested keys are joined with `.` and prefixed with the TEE name; list
items use their index. `report_data` and `init_data` are kept at the top
level without a prefix and default to the empty string. The TEE may be
given as a `Tee` member or its name, such as `"tdx"`.

### Client interface

`rvps.client.initialize_rvps_client(RvpsConfig.from_dict({...}))`
returns an `RvpsApi` backed by `BuiltinRvps`, a `Core` in the same
process. `get_digests` on it returns a list of digests, empty when
nothing valid is stored.

## What this package does not do

- It runs no network server and has no command-line tool; `Core` is
  used directly from Python. `ServerConfig.address` is read but nothing
  listens on it.
- It cannot reach a remote reference value provider. When
  `RvpsConfig.remote_addr` is set, `initialize_rvps_client` logs a
  warning and still returns a built-in provider.
- It verifies only the `sample` provenance type; no other provenance
  formats (such as signed supply-chain layouts) are supported.