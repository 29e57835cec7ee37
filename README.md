# jessy

Building blocks for tamper-evident data:

- **Labeled hashes** (`jessy.lhash`): a digest stored together with the
  identifier of the algorithm that made it, so it can be checked later without
  knowing the algorithm in advance. Labeled hashes can be written as raw bytes,
  hex, unpadded URL-safe Base64 or Base58.
- **Hash tools** (`jessy.hashtools`): a registry of the SHA2, SHA3, BLAKE2 and
  BLAKE3 hash functions, each with its digest size, block size and approximate
  security level.
- **Security requirements** (`jessy.requirements`): the properties
  confidentiality, integrity, recipient authentication and sender
  authentication, with the compact "no spec" notation (`"RS"` means "no
  recipient and no sender authentication").
- **Letters** (`jessy.letter`): the container for encrypted or signed data,
  with a compact wire format, a file format with a readable JSON header, plain
  JSON, and self-describing CBOR/JSON serialization (`jessy.dsd`).
- **Checksums and signature files** (`jessy.filesig`): embed checksums in
  text, YAML and JSON files, and read or write armored signature files.
- Helpers: `jessy.container` (varints and length-prefixed blocks),
  `jessy.base58` (Bitcoin alphabet), `jessy.blake3` (a pure Python BLAKE3
  hasher) and `jessy.rng` (the random source).

## Installation

```
pip install jessy
```

The only runtime dependency is `cbor2`.

## Labeled hashes

```python
from jessy import hashtools
from jessy.lhash import from_base58

alg = hashtools.get("BLAKE2b-256").labeled_hasher()
h = alg.digest(b"The quick brown fox jumps over the lazy dog.")

text = h.base58()
again = from_base58(text)

assert again.equal(h)
assert again.matches(b"The quick brown fox jumps over the lazy dog.")
assert not again.matches(b"no match")
```

Files and streams are hashed with `alg.digest_file(path)` and
`alg.digest_from_reader(reader)`, and checked with `h.matches_file(path)` and
`h.matches_reader(reader)`. `h.to_bytes()`, `h.hex()` and `h.base64()` give
the other encodings; `load`, `from_hex` and `from_base64` read them back.
Loading malformed or unsupported data raises `LabeledHashError`.

## Hash tools

```python
from jessy import hashtools

for tool in hashtools.as_list():
    print(tool.name, tool.digest_size, tool.security_level)

hasher = hashtools.new("SHA3-256")
hasher.update(b"data")
print(hasher.hexdigest())
```

`as_list()` is sorted by name, `as_map()` is a read-only mapping by name.
Asking for an unknown name raises `HashToolNotFoundError`. New tools can be
added with `register(HashTool(...))`, and `HashTool.derive(**changes)` makes a
copy with some fields replaced.

## Requirements

```python
from jessy.requirements import new_requirements, parse_requirements_from_no_spec

full = new_requirements()
print(full.short_string())                   # CIRS

signing_only = parse_requirements_from_no_spec("CR")
print(signing_only.serialize_to_no_spec())   # CR
print(signing_only)                          # Integrity, SenderAuthentication

signing_only.check_compliance_to(full)       # raises MissingRequirementsError
```

An unknown letter in a no spec raises `ValueError`.

## Letters

```python
from jessy.letter import Letter, Seal, letter_from_file_format, letter_from_wire

letter = Letter(
    version=1,
    suite_id="example-suite",
    nonce=b"\x01\x02\x03",
    keys=[Seal(id="a")],
    data=b"\x04\x05\x06",
    mac=b"\x07\x08\x09",
)

assert letter_from_wire(letter.to_wire()) == letter
assert letter_from_file_format(letter.to_file_format()) == letter
```

The wire format carries version, suite, the IDs and values of the keys, nonce,
data, MAC and the apply-keys flag; seal schemes and signatures are not part of
it. `to_json` / `letter_from_json` and `to_dsd` / `letter_from_dsd` cover the
JSON and CBOR encodings, and `to_dict` / `Letter.from_dict` the plain mapping
form. `compile_associated_data()` and `compile_associated_signing_data()`
return the bytes that a MAC or signature would cover. Data written with an
unknown format version raises `IncompatibleWireFormatVersionError` or
`IncompatibleFileFormatVersionError`.

## Checksums in text and JSON files

```python
from jessy.filesig.text import TextPlacement, add_text_file_checksum, verify_text_file_checksum

script = b"#!/bin/bash\n# Initial\n# Comment\n\ndo_something()"
signed = add_text_file_checksum(script, "#", TextPlacement.AFTER_COMMENT)
verify_text_file_checksum(signed, "#")
```

The checksum line (`# jess-checksum: ...`) is placed at the `TOP`, the
`BOTTOM`, or `AFTER_COMMENT` (after the leading comment block, the default).
The line ending of the first line (LF or CRLF) is kept. A file without a
checksum raises `ChecksumMissingError`; a wrong one raises
`ChecksumFailedError`. `add_yaml_checksum` and `verify_yaml_checksum` do the
same with `#` as comment sign.

For JSON, the checksum is stored under the `_jess-checksum` key and computed
over a canonical, key-sorted rendering of the document, so reformatting the
file does not break it:

```python
from jessy.filesig.jsonsig import add_json_checksum, verify_json_checksum

signed = add_json_checksum(b'{"a": "b", "c": 1}')
verify_json_checksum(signed)
```

## Signature files

`jessy.filesig.armor` reads and writes signature files holding one or more
blocks between `-----BEGIN JESS SIGNATURE-----` and
`-----END JESS SIGNATURE-----`:

- `parse_sig_file(file_data)` finds and decodes every block and returns
  `(letters, warning)`, where `warning` is the last error met while decoding
  a block, or `None`;
- `make_sig_file_section(signature)` renders one letter as an armored block
  of 64-character Base64 lines;
- `add_to_sig_file(signature, sig_file_data, remove_existing)` appends a new
  block, optionally removing existing ones first.

## Randomness

`jessy.rng.random_bytes(n)` returns `n` bytes from the operating system's
secure random source. `set_custom_rng(reader)` replaces that source with any
object that has a `read(n)` method; only the first call takes effect. A
source that returns too few bytes raises `InsufficientRandomError`.

## What this package does not do

It has no encryption, key exchange or signing of its own, no keys, signets,
envelopes or trust stores, and no command-line tool. Letters here are only
built, serialized and parsed: nothing opens, verifies or seals them. The
signature-file functions format and parse signature blocks but do not check
the signatures in them, and the JSON module handles checksums only; an
existing `_jess-signature` entry is carried along unchanged.

## Running the tests

```
pip install -e ".[test]"
pytest
```