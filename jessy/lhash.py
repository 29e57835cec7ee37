"""Labeled hashes: digests that carry the identifier of their algorithm."""

from __future__ import annotations

import base64 as _base64
import binascii
import hashlib
import hmac
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO, Callable

from .base58 import b58decode, b58encode
from .blake3 import Blake3
from .container import Container, ContainerError

_READ_SIZE = 64 * 1024
_BASE64_URL_RAW = re.compile(r"[A-Za-z0-9_-]*")


class LabeledHashError(ValueError):
    """Raised when a labeled hash cannot be parsed."""


class Algorithm(IntEnum):
    """Identifier of a hash function."""

    SHA2_224 = 8
    SHA2_256 = 9
    SHA2_384 = 10
    SHA2_512 = 11
    SHA2_512_224 = 12
    SHA2_512_256 = 13

    SHA3_224 = 16
    SHA3_256 = 17
    SHA3_384 = 18
    SHA3_512 = 19

    BLAKE2s_256 = 24
    BLAKE2b_256 = 25
    BLAKE2b_384 = 26
    BLAKE2b_512 = 27

    BLAKE3 = 32

    def __str__(self) -> str:
        return self.name

    def new_hasher(self):
        """Return a new raw hasher of the algorithm."""
        return _HASHERS[self]()

    def digest(self, data: bytes) -> LabeledHash:
        """Create a labeled hash of the given data."""
        return digest(self, data)

    def digest_file(self, path) -> LabeledHash:
        """Create a labeled hash of the given file."""
        return digest_file(self, path)

    def digest_from_reader(self, reader: BinaryIO) -> LabeledHash:
        """Create a labeled hash of everything read from the reader."""
        return digest_from_reader(self, reader)


_HASHERS: dict[Algorithm, Callable] = {
    Algorithm.SHA2_224: hashlib.sha224,
    Algorithm.SHA2_256: hashlib.sha256,
    Algorithm.SHA2_384: hashlib.sha384,
    Algorithm.SHA2_512: hashlib.sha512,
    Algorithm.SHA2_512_224: lambda: hashlib.new("sha512_224"),
    Algorithm.SHA2_512_256: lambda: hashlib.new("sha512_256"),
    Algorithm.SHA3_224: hashlib.sha3_224,
    Algorithm.SHA3_256: hashlib.sha3_256,
    Algorithm.SHA3_384: hashlib.sha3_384,
    Algorithm.SHA3_512: hashlib.sha3_512,
    Algorithm.BLAKE2s_256: lambda: hashlib.blake2s(digest_size=32),
    Algorithm.BLAKE2b_256: lambda: hashlib.blake2b(digest_size=32),
    Algorithm.BLAKE2b_384: lambda: hashlib.blake2b(digest_size=48),
    Algorithm.BLAKE2b_512: lambda: hashlib.blake2b(digest_size=64),
    Algorithm.BLAKE3: Blake3,
}


@dataclass(frozen=True)
class LabeledHash:
    """A hash digest together with its algorithm."""

    algorithm: Algorithm
    digest: bytes

    def to_bytes(self) -> bytes:
        """Return the serialized form: varint algorithm ID and digest block."""
        c = Container()
        c.append_number(int(self.algorithm))
        c.append_as_block(self.digest)
        return c.compile_data()

    def hex(self) -> str:
        """Return the serialized form as hex."""
        return self.to_bytes().hex()

    def base64(self) -> str:
        """Return the serialized form as unpadded URL-safe Base64."""
        return _base64.urlsafe_b64encode(self.to_bytes()).rstrip(b"=").decode("ascii")

    def base58(self) -> str:
        """Return the serialized form as Base58 (Bitcoin alphabet)."""
        return b58encode(self.to_bytes())

    def equal(self, other: LabeledHash) -> bool:
        """Compare algorithm and digest (digest in constant time)."""
        return self.algorithm == other.algorithm and hmac.compare_digest(
            self.digest, other.digest
        )

    def equal_raw(self, other_digest: bytes) -> bool:
        """Compare only the digest, in constant time."""
        return hmac.compare_digest(self.digest, bytes(other_digest))

    def matches(self, data: bytes) -> bool:
        """Return whether the digest of data matches."""
        return self.equal(digest(self.algorithm, data))

    def matches_string(self, text: str) -> bool:
        """Return whether the digest of the UTF-8 text matches."""
        return self.matches(text.encode("utf-8"))

    def matches_file(self, path) -> bool:
        """Return whether the digest of the file matches."""
        return self.equal(digest_file(self.algorithm, path))

    def matches_reader(self, reader: BinaryIO) -> bool:
        """Return whether the digest of the reader's content matches."""
        return self.equal(digest_from_reader(self.algorithm, reader))


def digest(alg: Algorithm, data: bytes) -> LabeledHash:
    """Create a labeled hash of the given data."""
    alg = Algorithm(alg)
    hasher = alg.new_hasher()
    hasher.update(data)
    return LabeledHash(alg, hasher.digest())


def digest_file(alg: Algorithm, path) -> LabeledHash:
    """Create a labeled hash of the given file."""
    with open(path, "rb") as file:
        return digest_from_reader(alg, file)


def digest_from_reader(alg: Algorithm, reader: BinaryIO) -> LabeledHash:
    """Create a labeled hash of everything read from the reader."""
    alg = Algorithm(alg)
    hasher = alg.new_hasher()
    for chunk in iter(lambda: reader.read(_READ_SIZE), b""):
        hasher.update(chunk)
    return LabeledHash(alg, hasher.digest())


def load(labeled_hash: bytes) -> LabeledHash:
    """Parse a labeled hash from its serialized form."""
    c = Container(labeled_hash)
    try:
        alg_id = c.get_next_number()
    except ContainerError as exc:
        raise LabeledHashError(f"failed to parse algorithm ID: {exc}") from exc
    try:
        raw_digest = c.get_next_block()
    except ContainerError as exc:
        raise LabeledHashError(f"failed to parse digest: {exc}") from exc
    if len(c) > 0:
        raise LabeledHashError("integrity error: data left over after parsing")
    try:
        alg = Algorithm(alg_id)
    except ValueError:
        raise LabeledHashError("compatibility error: invalid or unsupported algorithm") from None
    if alg.new_hasher().digest_size != len(raw_digest):
        raise LabeledHashError("integrity error: invalid digest length")
    return LabeledHash(alg, raw_digest)


def from_hex(hex_encoded: str) -> LabeledHash:
    """Parse a labeled hash from a hex string."""
    try:
        raw = binascii.unhexlify(hex_encoded)
    except (binascii.Error, ValueError) as exc:
        raise LabeledHashError(f"failed to decode hex: {exc}") from exc
    return load(raw)


def from_base64(base64_encoded: str) -> LabeledHash:
    """Parse a labeled hash from unpadded URL-safe Base64."""
    if not _BASE64_URL_RAW.fullmatch(base64_encoded):
        raise LabeledHashError("failed to decode base64: illegal character")
    padded = base64_encoded + "=" * (-len(base64_encoded) % 4)
    try:
        raw = _base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as exc:
        raise LabeledHashError(f"failed to decode base64: {exc}") from exc
    return load(raw)


def from_base58(base58_encoded: str) -> LabeledHash:
    """Parse a labeled hash from Base58 (Bitcoin alphabet)."""
    try:
        raw = b58decode(base58_encoded)
    except ValueError as exc:
        raise LabeledHashError(f"failed to decode base58: {exc}") from exc
    return load(raw)