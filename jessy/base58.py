"""Base58 encoding with the Bitcoin alphabet."""

from __future__ import annotations

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: value for value, char in enumerate(ALPHABET)}


def b58encode(data: bytes) -> str:
    """Encode bytes to a Base58 string."""
    data = bytes(data)
    stripped = data.lstrip(b"\x00")
    zeros = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    chars = []
    while number:
        number, rem = divmod(number, 58)
        chars.append(ALPHABET[rem])
    return ALPHABET[0] * zeros + "".join(reversed(chars))


def b58decode(text: str) -> bytes:
    """Decode a Base58 string to bytes."""
    if not text:
        raise ValueError("zero length string")
    number = 0
    for char in text:
        try:
            value = _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
        number = number * 58 + value
    zeros = len(text) - len(text.lstrip(ALPHABET[0]))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\x00" * zeros + body