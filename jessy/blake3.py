"""Pure Python BLAKE3 hash (default 32 byte output)."""

from __future__ import annotations

import struct
from dataclasses import dataclass

_MASK = 0xFFFFFFFF
_IV = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)
_PERMUTATION = (2, 6, 3, 10, 7, 0, 4, 13, 1, 11, 12, 5, 9, 14, 15, 8)

_CHUNK_START = 1
_CHUNK_END = 2
_PARENT = 4
_ROOT = 8

_BLOCK_LEN = 64
_CHUNK_LEN = 1024
_OUT_LEN = 32


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK


def _g(s: list, a: int, b: int, c: int, d: int, x: int, y: int) -> None:
    s[a] = (s[a] + s[b] + x) & _MASK
    s[d] = _rotr(s[d] ^ s[a], 16)
    s[c] = (s[c] + s[d]) & _MASK
    s[b] = _rotr(s[b] ^ s[c], 12)
    s[a] = (s[a] + s[b] + y) & _MASK
    s[d] = _rotr(s[d] ^ s[a], 8)
    s[c] = (s[c] + s[d]) & _MASK
    s[b] = _rotr(s[b] ^ s[c], 7)


def _round(s: list, m: list) -> None:
    _g(s, 0, 4, 8, 12, m[0], m[1])
    _g(s, 1, 5, 9, 13, m[2], m[3])
    _g(s, 2, 6, 10, 14, m[4], m[5])
    _g(s, 3, 7, 11, 15, m[6], m[7])
    _g(s, 0, 5, 10, 15, m[8], m[9])
    _g(s, 1, 6, 11, 12, m[10], m[11])
    _g(s, 2, 7, 8, 13, m[12], m[13])
    _g(s, 3, 4, 9, 14, m[14], m[15])


def _compress(cv: tuple, block_words: tuple, counter: int, block_len: int, flags: int) -> list:
    state = [
        *cv,
        *_IV[:4],
        counter & _MASK,
        (counter >> 32) & _MASK,
        block_len,
        flags,
    ]
    message = list(block_words)
    for rnd in range(7):
        _round(state, message)
        if rnd < 6:
            message = [message[i] for i in _PERMUTATION]
    low, high = state[:8], state[8:]
    return [a ^ b for a, b in zip(low, high)] + [b ^ c for b, c in zip(high, cv)]


def _words(block: bytes) -> tuple:
    return struct.unpack("<16I", block.ljust(_BLOCK_LEN, b"\x00"))


@dataclass(frozen=True)
class _Output:
    cv: tuple
    block_words: tuple
    counter: int
    block_len: int
    flags: int

    def chaining_value(self) -> tuple:
        return tuple(
            _compress(self.cv, self.block_words, self.counter, self.block_len, self.flags)[:8]
        )

    def root_bytes(self, length: int) -> bytes:
        out = bytearray()
        counter = 0
        while len(out) < length:
            words = _compress(
                self.cv, self.block_words, counter, self.block_len, self.flags | _ROOT
            )
            out += struct.pack("<16I", *words)
            counter += 1
        return bytes(out[:length])


class _ChunkState:
    def __init__(self, key: tuple, chunk_counter: int, flags: int) -> None:
        self.cv = key
        self.chunk_counter = chunk_counter
        self.block = bytearray()
        self.blocks_compressed = 0
        self.flags = flags

    def __len__(self) -> int:
        return _BLOCK_LEN * self.blocks_compressed + len(self.block)

    def _start_flag(self) -> int:
        return _CHUNK_START if self.blocks_compressed == 0 else 0

    def update(self, data: memoryview) -> None:
        while data:
            if len(self.block) == _BLOCK_LEN:
                self.cv = tuple(
                    _compress(
                        self.cv,
                        _words(bytes(self.block)),
                        self.chunk_counter,
                        _BLOCK_LEN,
                        self.flags | self._start_flag(),
                    )[:8]
                )
                self.blocks_compressed += 1
                self.block = bytearray()
            take = _BLOCK_LEN - len(self.block)
            self.block += data[:take]
            data = data[take:]

    def output(self) -> _Output:
        return _Output(
            self.cv,
            _words(bytes(self.block)),
            self.chunk_counter,
            len(self.block),
            self.flags | self._start_flag() | _CHUNK_END,
        )

    def copy(self) -> _ChunkState:
        other = _ChunkState(self.cv, self.chunk_counter, self.flags)
        other.block = bytearray(self.block)
        other.blocks_compressed = self.blocks_compressed
        return other


class Blake3:
    """Incremental BLAKE3 hasher with a hashlib-like interface."""

    name = "blake3"
    digest_size = _OUT_LEN
    block_size = _BLOCK_LEN

    def __init__(self, data: bytes = b"") -> None:
        self._key = _IV
        self._flags = 0
        self._chunk = _ChunkState(self._key, 0, self._flags)
        self._cv_stack: list = []
        if data:
            self.update(data)

    def _parent_output(self, left: tuple, right: tuple) -> _Output:
        return _Output(self._key, (*left, *right), 0, _BLOCK_LEN, _PARENT | self._flags)

    def _add_chunk_chaining_value(self, cv: tuple, total_chunks: int) -> None:
        while total_chunks & 1 == 0:
            cv = self._parent_output(self._cv_stack.pop(), cv).chaining_value()
            total_chunks >>= 1
        self._cv_stack.append(cv)

    def update(self, data: bytes) -> None:
        """Feed more data into the hasher."""
        view = memoryview(data).cast("B")
        while view:
            if len(self._chunk) == _CHUNK_LEN:
                cv = self._chunk.output().chaining_value()
                total_chunks = self._chunk.chunk_counter + 1
                self._add_chunk_chaining_value(cv, total_chunks)
                self._chunk = _ChunkState(self._key, total_chunks, self._flags)
            take = _CHUNK_LEN - len(self._chunk)
            self._chunk.update(view[:take])
            view = view[take:]

    def digest(self) -> bytes:
        """Return the 32 byte digest of the data fed so far."""
        output = self._chunk.output()
        for cv in reversed(self._cv_stack):
            output = self._parent_output(cv, output.chaining_value())
        return output.root_bytes(_OUT_LEN)

    def hexdigest(self) -> str:
        """Return the digest as a hex string."""
        return self.digest().hex()

    def copy(self) -> Blake3:
        """Return an independent copy of the hasher state."""
        other = Blake3()
        other._chunk = self._chunk.copy()
        other._cv_stack = list(self._cv_stack)
        return other


def blake3(data: bytes = b"") -> Blake3:
    """Return a new BLAKE3 hasher, optionally fed with data."""
    return Blake3(data)