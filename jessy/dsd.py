"""Self-describing serialization: a format identifier followed by the payload."""

from __future__ import annotations

import base64
import json
from enum import IntEnum
from typing import Any, Optional

import cbor2

from .container import Container, ContainerError


class DSDError(ValueError):
    """Raised when data cannot be serialized or deserialized."""


class Format(IntEnum):
    """Identifier of a serialization format, stored as leading varint."""

    CBOR = 67
    JSON = 74
    STRING = 83
    BYTES = 88


_HTML_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def _encode_json(obj: Any, indent: Optional[str]) -> bytes:
    try:
        if indent:
            text = json.dumps(
                obj,
                default=_json_default,
                ensure_ascii=False,
                indent=indent,
                separators=(",", ": "),
            )
        else:
            text = json.dumps(
                obj,
                default=_json_default,
                ensure_ascii=False,
                separators=(",", ":"),
            )
    except (TypeError, ValueError) as exc:
        raise DSDError(f"failed to encode json: {exc}") from exc
    return text.translate(_HTML_ESCAPES).encode("utf-8")


def _encode_payload(obj: Any, fmt: Format, indent: Optional[str]) -> bytes:
    if fmt is Format.JSON:
        return _encode_json(obj, indent)
    if fmt is Format.CBOR:
        try:
            return cbor2.dumps(obj)
        except (cbor2.CBORError, TypeError, ValueError) as exc:
            raise DSDError(f"failed to encode cbor: {exc}") from exc
    if fmt is Format.STRING:
        if not isinstance(obj, str):
            raise DSDError("string format requires a str")
        return obj.encode("utf-8")
    if not isinstance(obj, (bytes, bytearray, memoryview)):
        raise DSDError("bytes format requires bytes")
    return bytes(obj)


def dump(obj: Any, fmt: Format = Format.JSON, indent: Optional[str] = None) -> bytes:
    """Serialize obj in the given format, prefixed with the format identifier."""
    try:
        fmt = Format(fmt)
    except ValueError:
        raise DSDError(f"unsupported format {fmt}") from None
    payload = _encode_payload(obj, fmt, indent)
    c = Container()
    c.append_number(int(fmt))
    return c.compile_data() + payload


def load(data: bytes) -> Any:
    """Deserialize data whose format is named by its leading identifier."""
    c = Container(data)
    try:
        fmt_id = c.get_next_number()
    except ContainerError as exc:
        raise DSDError(f"failed to read format identifier: {exc}") from exc
    try:
        fmt = Format(fmt_id)
    except ValueError:
        raise DSDError(f"unsupported format {fmt_id}") from None
    payload = c.compile_data()

    if fmt is Format.JSON:
        try:
            return json.loads(payload.decode("utf-8"))
        except ValueError as exc:
            raise DSDError(f"failed to decode json: {exc}") from exc
    if fmt is Format.CBOR:
        try:
            return cbor2.loads(payload)
        except (cbor2.CBORError, ValueError, TypeError) as exc:
            raise DSDError(f"failed to decode cbor: {exc}") from exc
    if fmt is Format.STRING:
        try:
            return payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DSDError(f"failed to decode string: {exc}") from exc
    return payload