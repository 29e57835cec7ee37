"""Checksums embedded in JSON documents."""

from __future__ import annotations

import json

from .. import lhash
from .text import ChecksumFailedError, ChecksumMissingError

JSON_KEY_PREFIX = "_jess-"
JSON_CHECKSUM_KEY = JSON_KEY_PREFIX + "checksum"
JSON_SIGNATURE_KEY = JSON_KEY_PREFIX + "signature"

_WIDTH = 200
_INDENT = " "


class _Obj(list):
    """A JSON object as an ordered list of (key, value) pairs."""


class _Raw(str):
    """A JSON number kept in its original text form."""


def _parse(data: bytes):
    try:
        return json.loads(
            bytes(data).decode("utf-8"),
            object_pairs_hook=_Obj,
            parse_int=_Raw,
            parse_float=_Raw,
        )
    except (ValueError, UnicodeDecodeError) as exc:
        raise ValueError("invalid json") from exc


def _scalar(value) -> str:
    if isinstance(value, _Raw):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


def _sorted(pairs: _Obj, sort: bool) -> list:
    return sorted(pairs, key=lambda pair: pair[0]) if sort else list(pairs)


def _compact(value, sort: bool) -> str:
    if isinstance(value, _Obj):
        return "{" + ", ".join(
            f"{_scalar(k)}: {_compact(v, sort)}" for k, v in _sorted(value, sort)
        ) + "}"
    if isinstance(value, list):
        return "[" + ", ".join(_compact(v, sort) for v in value) + "]"
    return _scalar(value)


def _pretty(value, depth: int, sort: bool, column: int) -> str:
    inner = _INDENT * (depth + 1)
    if isinstance(value, _Obj):
        if not value:
            return "{}"
        items = []
        for key, val in _sorted(value, sort):
            head = inner + _scalar(key) + ": "
            items.append(head + _pretty(val, depth + 1, sort, len(head)))
        return "{\n" + ",\n".join(items) + "\n" + _INDENT * depth + "}"
    if isinstance(value, list):
        if not value:
            return "[]"
        single = _compact(value, sort)
        if column + len(single) <= _WIDTH:
            return single
        items = [inner + _pretty(v, depth + 1, sort, len(inner)) for v in value]
        return "[\n" + ",\n".join(items) + "\n" + _INDENT * depth + "]"
    return _scalar(value)


def _render(root, sort: bool) -> bytes:
    return (_pretty(root, 0, sort, 0) + "\n").encode("utf-8")


def _pop_strings(root, key: str) -> list:
    if not isinstance(root, _Obj):
        return []
    for index, (name, value) in enumerate(root):
        if name == key:
            del root[index]
            if isinstance(value, str) and not isinstance(value, _Raw):
                return [value]
            if isinstance(value, list) and not isinstance(value, _Obj):
                return [v for v in value if isinstance(v, str) and not isinstance(v, _Raw)]
            return []
    return []


def _split(data: bytes) -> tuple:
    root = _parse(data)
    checksums = _pop_strings(root, JSON_CHECKSUM_KEY)
    signatures = _pop_strings(root, JSON_SIGNATURE_KEY)
    return root, checksums, signatures


def _set(root, key: str, values: list) -> None:
    if not values:
        return
    if not isinstance(root, _Obj):
        raise ValueError("cannot add metadata to a json document that is not an object")
    value = values[0] if len(values) == 1 else list(values)
    for index, (name, _) in enumerate(root):
        if name == key:
            root[index] = (key, value)
            return
    root.insert(0, (key, value))


def add_json_checksum(data: bytes) -> bytes:
    """Add a checksum of the canonical form of the document."""
    root, checksums, signatures = _split(data)
    content = _render(root, sort=True)
    checksums.append(lhash.Algorithm.BLAKE2b_256.digest(content).base58())

    meta_root = _parse(content)
    _set(meta_root, JSON_CHECKSUM_KEY, sorted(set(checksums)))
    _set(meta_root, JSON_SIGNATURE_KEY, sorted(set(signatures)))
    return _render(meta_root, sort=False)


def verify_json_checksum(data: bytes) -> None:
    """Verify all checksums of the document; raise if any fails or none exist."""
    root, checksums, _ = _split(data)
    content = _render(root, sort=True)
    for checksum in checksums:
        try:
            labeled = lhash.from_base58(checksum)
        except lhash.LabeledHashError as exc:
            raise ChecksumFailedError(
                f"checksum does not match: failed to parse labeled hash: {exc}"
            ) from exc
        if not labeled.matches(content):
            raise ChecksumFailedError()
    if not checksums:
        raise ChecksumMissingError()