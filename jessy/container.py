"""Byte container with varint numbers and length-prefixed blocks."""

from __future__ import annotations

_MAX_UINT64 = (1 << 64) - 1


class ContainerError(ValueError):
    """Raised when data in a container cannot be parsed."""


class Container:
    """Growable byte buffer that is read from the front.

    Numbers are stored as unsigned LEB128 varints and blocks are stored
    as a varint length followed by the raw bytes.
    """

    def __init__(self, data: bytes = b"") -> None:
        self._buf = bytearray(data)
        self._offset = 0

    def __len__(self) -> int:
        """Return the number of bytes not yet read."""
        return len(self._buf) - self._offset

    def __repr__(self) -> str:
        return f"Container({self.compile_data()!r})"

    def append_number(self, number: int) -> None:
        """Append an unsigned 64 bit number as varint."""
        if number < 0 or number > _MAX_UINT64:
            raise ValueError(f"number {number} does not fit into an unsigned 64 bit varint")
        while number >= 0x80:
            self._buf.append((number & 0x7F) | 0x80)
            number >>= 7
        self._buf.append(number)

    def append_as_block(self, data: bytes) -> None:
        """Append data prefixed with its length."""
        data = bytes(data or b"")
        self.append_number(len(data))
        self._buf += data

    def get_next_number(self) -> int:
        """Read and consume the next varint."""
        result = 0
        shift = 0
        for consumed, byte in enumerate(self._buf[self._offset :], start=1):
            if shift == 63 and byte > 1:
                raise ContainerError("varint overflows 64 bits")
            result |= (byte & 0x7F) << shift
            if byte < 0x80:
                self._offset += consumed
                return result
            shift += 7
            if shift > 63:
                raise ContainerError("varint overflows 64 bits")
        raise ContainerError("not enough data to decode varint")

    def get_next_block(self) -> bytes:
        """Read and consume the next length-prefixed block."""
        start = self._offset
        length = self.get_next_number()
        if length > len(self):
            self._offset = start
            raise ContainerError(
                f"block of {length} bytes exceeds the {len(self)} bytes available"
            )
        block = bytes(self._buf[self._offset : self._offset + length])
        self._offset += length
        return block

    def compile_data(self) -> bytes:
        """Return all unread data as bytes."""
        return bytes(self._buf[self._offset :])