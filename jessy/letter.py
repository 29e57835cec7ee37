"""Letters: the data format for encrypted or signed data at rest or in transit."""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Union

from . import dsd
from .container import Container, ContainerError

# Field IDs for associated data. These IDs must never change.
_FIELD_LETTER_VERSION = 1
_FIELD_LETTER_SUITE_ID = 2
_FIELD_LETTER_NONCE = 3
_FIELD_LETTER_KEYS = 4
_FIELD_LETTER_MAC = 5
_FIELD_SEAL_SCHEME = 16
_FIELD_SEAL_ID = 17
_FIELD_SEAL_VALUE = 18

_WIRE_FORMAT_VERSION = 1
_FILE_FORMAT_VERSION = 1

_FLAG_SETUP = 1
_FLAG_KEYS = 2
_FLAG_APPLY_KEYS = 4


class IncompatibleWireFormatVersionError(ValueError):
    """Raised when an incompatible wire format is encountered."""

    def __init__(self, message: str = "incompatible wire format version") -> None:
        super().__init__(message)


class IncompatibleFileFormatVersionError(ValueError):
    """Raised when an incompatible file format is encountered."""

    def __init__(self, message: str = "incompatible file format version") -> None:
        super().__init__(message)


def _as_bytes(value: Any, name: str) -> bytes:
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"field {name}: invalid base64: {exc}") from exc
    raise ValueError(f"field {name}: expected bytes, got {type(value).__name__}")


def _as_str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {name}: expected a string, got {type(value).__name__}")
    return value


def _lowered(data: Mapping) -> dict:
    return {str(key).lower(): value for key, value in data.items()}


def _next_uint8(c: Container) -> int:
    number = c.get_next_number()
    if number > 0xFF:
        raise ContainerError(f"number {number} exceeds 8 bits")
    return number


def _as_container(data: Union[bytes, Container]) -> Container:
    return data if isinstance(data, Container) else Container(data)


@dataclass
class Seal:
    """A key, key exchange or signature within a letter."""

    scheme: str = ""
    id: str = ""
    value: bytes = b""

    def _to_dict(self) -> dict:
        out: dict = {}
        if self.scheme:
            out["Scheme"] = self.scheme
        if self.id:
            out["ID"] = self.id
        if self.value:
            out["Value"] = self.value
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> Seal:
        if not isinstance(data, Mapping):
            raise ValueError("seal must be a mapping")
        fields = _lowered(data)
        return cls(
            scheme=_as_str(fields.get("scheme"), "Scheme"),
            id=_as_str(fields.get("id"), "ID"),
            value=_as_bytes(fields.get("value"), "Value"),
        )

    def _compile_associated_data(self, c: Container) -> None:
        if self.scheme:
            c.append_number(_FIELD_SEAL_SCHEME)
            c.append_as_block(self.scheme.encode("utf-8"))
        if self.id:
            c.append_number(_FIELD_SEAL_ID)
            c.append_as_block(self.id.encode("utf-8"))
        if self.value:
            c.append_number(_FIELD_SEAL_VALUE)
            c.append_as_block(self.value)


def _seals_from(value: Any, name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"field {name}: expected a list")
    return [Seal._from_dict(item) for item in value]


@dataclass
class Letter:
    """Encrypted or signed data with the information needed to open it."""

    version: int = 0
    suite_id: str = ""
    nonce: bytes = b""
    keys: list = field(default_factory=list)
    data: bytes = b""
    mac: bytes = b""
    signatures: list = field(default_factory=list)
    apply_keys: bool = False

    def to_dict(self) -> dict:
        """Return the letter as a mapping with the serialized field names."""
        out: dict = {
            "Version": self.version,
            "SuiteID": self.suite_id,
            "Nonce": self.nonce or None,
        }
        if self.keys:
            out["Keys"] = [seal._to_dict() for seal in self.keys]
        if self.data:
            out["Data"] = self.data
        if self.mac:
            out["Mac"] = self.mac
        if self.signatures:
            out["Signatures"] = [seal._to_dict() for seal in self.signatures]
        if self.apply_keys:
            out["ApplyKeys"] = True
        return out

    @classmethod
    def from_dict(cls, data: Mapping) -> Letter:
        """Build a letter from a mapping with the serialized field names."""
        if not isinstance(data, Mapping):
            raise ValueError("letter must be a mapping")
        fields = _lowered(data)
        version = fields.get("version") or 0
        if isinstance(version, bool) or not isinstance(version, int) or not 0 <= version <= 0xFF:
            raise ValueError(f"field Version: invalid value {version!r}")
        apply_keys = fields.get("applykeys") or False
        if not isinstance(apply_keys, bool):
            raise ValueError("field ApplyKeys: expected a boolean")
        return cls(
            version=version,
            suite_id=_as_str(fields.get("suiteid"), "SuiteID"),
            nonce=_as_bytes(fields.get("nonce"), "Nonce"),
            keys=_seals_from(fields.get("keys"), "Keys"),
            data=_as_bytes(fields.get("data"), "Data"),
            mac=_as_bytes(fields.get("mac"), "Mac"),
            signatures=_seals_from(fields.get("signatures"), "Signatures"),
            apply_keys=apply_keys,
        )

    def to_wire(self) -> bytes:
        """Serialize the letter for sending it over a network connection."""
        c = Container()
        c.append_number(_WIRE_FORMAT_VERSION)

        flags = 0
        if self.version > 0:
            flags |= _FLAG_SETUP
        if self.keys:
            flags |= _FLAG_KEYS
        if self.apply_keys:
            flags |= _FLAG_APPLY_KEYS
        c.append_number(flags)

        if self.version > 0:
            c.append_number(self.version)
            c.append_as_block(self.suite_id.encode("utf-8"))

        if self.keys:
            c.append_number(len(self.keys))
            for seal in self.keys:
                c.append_as_block(seal.id.encode("utf-8"))
                c.append_as_block(seal.value)

        c.append_as_block(self.nonce)
        c.append_as_block(self.data)
        c.append_as_block(self.mac)
        return c.compile_data()

    def to_file_format(self) -> bytes:
        """Serialize the letter for storing it as a file."""
        c = Container()
        c.append_number(_FILE_FORMAT_VERSION)
        header = dsd.dump(replace(self, data=b"").to_dict(), dsd.Format.JSON, "\t")
        c.append_as_block(header + b"\n")
        c.append_as_block(self.data)
        return c.compile_data()

    def to_json(self) -> bytes:
        """Serialize the letter to compact JSON."""
        return dsd.dump(self.to_dict(), dsd.Format.JSON)[1:]

    def to_dsd(self, fmt: dsd.Format) -> bytes:
        """Serialize the letter in the given self-describing format."""
        return dsd.dump(self.to_dict(), fmt)

    def compile_associated_data(self) -> bytes:
        """Return the data that is authenticated alongside the payload."""
        c = Container()
        if self.version > 0:
            c.append_number(_FIELD_LETTER_VERSION)
            c.append_number(self.version)
        if self.suite_id:
            c.append_number(_FIELD_LETTER_SUITE_ID)
            c.append_as_block(self.suite_id.encode("utf-8"))
        if self.nonce:
            c.append_number(_FIELD_LETTER_NONCE)
            c.append_as_block(self.nonce)
        if self.keys:
            c.append_number(_FIELD_LETTER_KEYS)
            c.append_number(len(self.keys))
            for index, seal in enumerate(self.keys):
                c.append_number(index)
                seal._compile_associated_data(c)
        return c.compile_data()

    def compile_associated_signing_data(self, associated_data: Optional[bytes] = None) -> bytes:
        """Return the associated data extended by the MAC, if there is one."""
        if not associated_data:
            associated_data = self.compile_associated_data()
        if not self.mac:
            return bytes(associated_data)
        c = Container(associated_data)
        c.append_number(_FIELD_LETTER_MAC)
        c.append_as_block(self.mac)
        return c.compile_data()


def letter_from_wire(data: Union[bytes, Container]) -> Letter:
    """Parse a letter sent over a network connection."""
    c = _as_container(data)
    if _next_uint8(c) != _WIRE_FORMAT_VERSION:
        raise IncompatibleWireFormatVersionError()

    flags = c.get_next_number()
    letter = Letter(apply_keys=bool(flags & _FLAG_APPLY_KEYS))

    if flags & _FLAG_SETUP:
        letter.version = _next_uint8(c)
        letter.suite_id = c.get_next_block().decode("utf-8")

    if flags & _FLAG_KEYS:
        for _ in range(_next_uint8(c)):
            signet_id = c.get_next_block().decode("utf-8")
            value = c.get_next_block()
            letter.keys.append(Seal(id=signet_id, value=value))

    letter.nonce = c.get_next_block()
    letter.data = c.get_next_block()
    letter.mac = c.get_next_block()
    return letter


def letter_from_file_format(data: Union[bytes, Container]) -> Letter:
    """Parse a letter stored as a file."""
    c = _as_container(data)
    if _next_uint8(c) != _FILE_FORMAT_VERSION:
        raise IncompatibleFileFormatVersionError()
    header = dsd.load(c.get_next_block())
    if not isinstance(header, Mapping):
        raise dsd.DSDError("letter header is not a mapping")
    letter = Letter.from_dict(header)
    letter.data = c.get_next_block()
    return letter


def letter_from_json(data: Union[bytes, str]) -> Letter:
    """Load a JSON-serialized letter."""
    return Letter.from_dict(json.loads(data))


def letter_from_dsd(data: bytes) -> Letter:
    """Load a letter serialized in a self-describing format."""
    obj = dsd.load(data)
    if not isinstance(obj, Mapping):
        raise dsd.DSDError("serialized letter is not a mapping")
    return Letter.from_dict(obj)