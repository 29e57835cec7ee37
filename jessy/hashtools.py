"""Registry of named hash tools with their properties."""

from __future__ import annotations

import dataclasses
import hashlib
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from .blake3 import Blake3
from .lhash import Algorithm


class HashToolNotFoundError(LookupError):
    """Raised when no hash tool is registered under a name."""


@dataclass(frozen=True)
class HashTool:
    """Generic information about a hash tool."""

    name: str = ""
    new_hash: Optional[Callable] = None
    digest_size: int = 0  # in bytes
    block_size: int = 0  # in bytes
    security_level: int = 0  # approx. attack complexity as 2^n
    comment: str = ""
    author: str = ""
    labeled_alg: Optional[Algorithm] = None

    def new(self):
        """Return a new hasher instance of the hash tool."""
        if self.new_hash is None:
            raise ValueError(f"hash tool {self.name!r} has no hash constructor")
        return self.new_hash()

    def derive(self, **kwargs) -> HashTool:
        """Return a new hash tool using this one as template for unset fields."""
        return dataclasses.replace(self, **kwargs)

    def labeled_hasher(self) -> Optional[Algorithm]:
        """Return the corresponding labeled hashing algorithm."""
        return self.labeled_alg


_hash_tools: dict[str, HashTool] = {}
_hash_tool_list: list[HashTool] = []


def register(hash_tool: HashTool) -> None:
    """Register a hash tool under its name."""
    _hash_tools[hash_tool.name] = hash_tool
    _hash_tool_list.append(hash_tool)
    _hash_tool_list.sort(key=lambda tool: tool.name)


def get(name: str) -> HashTool:
    """Return the hash tool with the given name."""
    try:
        return _hash_tools[name]
    except KeyError:
        raise HashToolNotFoundError(f"tool {name} does not exist") from None


def new(name: str):
    """Return a new hasher of the hash tool with the given name."""
    return get(name).new()


def as_map() -> Mapping[str, HashTool]:
    """Return a read-only view of all hash tools by name."""
    return MappingProxyType(_hash_tools)


def as_list() -> list[HashTool]:
    """Return all hash tools sorted by name."""
    return list(_hash_tool_list)


def _tool(template: HashTool, name: str, factory: Callable, security_level: int,
          labeled_alg: Algorithm, **extra) -> HashTool:
    sample = factory()
    return template.derive(
        name=name,
        new_hash=factory,
        digest_size=sample.digest_size,
        block_size=sample.block_size,
        security_level=security_level,
        labeled_alg=labeled_alg,
        **extra,
    )


def _register_defaults() -> None:
    sha2 = HashTool(comment="FIPS 180-4", author="NSA, 2001")
    register(_tool(sha2, "SHA2-224", hashlib.sha224, 112, Algorithm.SHA2_224,
                   author="NSA, 2004"))
    register(_tool(sha2, "SHA2-256", hashlib.sha256, 128, Algorithm.SHA2_256))
    register(_tool(sha2, "SHA2-384", hashlib.sha384, 192, Algorithm.SHA2_384))
    register(_tool(sha2, "SHA2-512", hashlib.sha512, 256, Algorithm.SHA2_512))
    register(_tool(sha2, "SHA2-512-224", lambda: hashlib.new("sha512_224"), 112,
                   Algorithm.SHA2_512_224))
    register(_tool(sha2, "SHA2-512-256", lambda: hashlib.new("sha512_256"), 128,
                   Algorithm.SHA2_512_256))

    sha3 = HashTool(
        comment="aka Keccak, FIPS-202, optimized for hardware",
        author="Guido Bertoni et al., 2015",
    )
    register(_tool(sha3, "SHA3-224", hashlib.sha3_224, 112, Algorithm.SHA3_224))
    register(_tool(sha3, "SHA3-256", hashlib.sha3_256, 128, Algorithm.SHA3_256))
    register(_tool(sha3, "SHA3-384", hashlib.sha3_384, 192, Algorithm.SHA3_384))
    register(_tool(sha3, "SHA3-512", hashlib.sha3_512, 256, Algorithm.SHA3_512))

    blake2 = HashTool(
        comment="RFC 7693, successor of SHA3 finalist, optimized for 64 bit software",
        author="Jean-Philippe Aumasson et al., 2013",
    )
    register(_tool(
        blake2, "BLAKE2s-256", lambda: hashlib.blake2s(digest_size=32), 128,
        Algorithm.BLAKE2s_256,
        comment="RFC 7693, successor of SHA3 finalist, optimized for 8-32 bit software",
    ))
    register(_tool(blake2, "BLAKE2b-256", lambda: hashlib.blake2b(digest_size=32), 128,
                   Algorithm.BLAKE2b_256))
    register(_tool(blake2, "BLAKE2b-384", lambda: hashlib.blake2b(digest_size=48), 192,
                   Algorithm.BLAKE2b_384))
    register(_tool(blake2, "BLAKE2b-512", lambda: hashlib.blake2b(digest_size=64), 256,
                   Algorithm.BLAKE2b_512))

    register(_tool(
        HashTool(), "BLAKE3", Blake3, 128, Algorithm.BLAKE3,
        comment="cryptographic hash function based on Bao and BLAKE2",
        author="Jean-Philippe Aumasson et al., 2020",
    ))


_register_defaults()