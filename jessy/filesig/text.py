"""Checksums embedded as comment lines in text files."""

from __future__ import annotations

from enum import Enum
from typing import Union

from .. import lhash

TEXT_KEY_PREFIX = "jess-"
TEXT_CHECKSUM_KEY = TEXT_KEY_PREFIX + "checksum"
TEXT_SIGNATURE_KEY = TEXT_KEY_PREFIX + "signature"


class ChecksumMissingError(ValueError):
    """Raised when no checksum is found."""

    def __init__(self, message: str = "no checksum found") -> None:
        super().__init__(message)


class ChecksumFailedError(ValueError):
    """Raised when a checksum does not match."""

    def __init__(self, message: str = "checksum does not match") -> None:
        super().__init__(message)


class TextPlacement(str, Enum):
    """Where jess metadata is put in text files."""

    TOP = "top"
    BOTTOM = "bottom"
    AFTER_COMMENT = "after-comment"


DEFAULT_PLACEMENT = TextPlacement.AFTER_COMMENT


def _raw_lines(data: bytes) -> list:
    """Split into lines, keeping each line's end-of-line marker."""
    parts = data.split(b"\n")
    lines = [part + b"\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _text_split(data: bytes, comment_sign: str) -> tuple:
    meta_prefix = (comment_sign + " " + TEXT_KEY_PREFIX).encode("utf-8")
    sign = comment_sign.encode("utf-8")
    content = bytearray()
    meta_lines = []
    for line in _raw_lines(bytes(data)):
        if line.startswith(meta_prefix):
            meta_lines.append(line[len(sign):].decode("utf-8", errors="replace").strip())
        else:
            content += line
    return bytes(content).strip(), meta_lines


def detect_line_end_format(data: bytes) -> str:
    """Return the line ending of the first line, defaulting to LF."""
    data = bytes(data or b"")
    i = data.find(b"\n")
    if i > 0 and data[i - 1 : i + 1] == b"\r\n":
        return "\r\n"
    return "\n"


def _meta_block(meta_lines: list, comment_sign: str, line_end: str) -> bytes:
    return "".join(f"{comment_sign} {line}{line_end}" for line in meta_lines).encode("utf-8")


def _text_add_meta(
    data: bytes, meta_lines: list, comment_sign: str, placement: Union[TextPlacement, str, None]
) -> bytes:
    line_end = detect_line_end_format(data)
    placement = TextPlacement(placement) if placement else DEFAULT_PLACEMENT
    meta = _meta_block(meta_lines, comment_sign, line_end)
    end = line_end.encode("ascii")

    if placement is TextPlacement.TOP:
        return meta + data + end
    if placement is TextPlacement.BOTTOM:
        return data + end + end + meta

    sign = comment_sign.encode("utf-8")
    out = bytearray()
    written = False
    for line in _raw_lines(data):
        if not written and not line.startswith(sign):
            out += meta
            written = True
        out += line
    if not written:
        out += meta
    out += end
    return bytes(out)


def add_text_file_checksum(
    data: bytes, comment_sign: str, placement: Union[TextPlacement, str, None] = None
) -> bytes:
    """Add a checksum line to a text file."""
    content, meta_lines = _text_split(data, comment_sign)
    checksum = lhash.Algorithm.BLAKE2b_256.digest(content).base58()
    meta_lines.append(f"{TEXT_CHECKSUM_KEY}: {checksum}")
    return _text_add_meta(content, sorted(set(meta_lines)), comment_sign, placement)


def verify_text_file_checksum(data: bytes, comment_sign: str) -> None:
    """Verify all checksums of a text file; raise if any fails or none exist."""
    content, meta_lines = _text_split(data, comment_sign)
    verified = 0
    for line in meta_lines:
        if not line.startswith(TEXT_CHECKSUM_KEY):
            continue
        value = line[len(TEXT_CHECKSUM_KEY):].strip().strip(":= ")
        try:
            labeled = lhash.from_base58(value)
        except lhash.LabeledHashError as exc:
            raise ChecksumFailedError(
                f"checksum does not match: failed to parse labeled hash: {exc}"
            ) from exc
        if not labeled.matches(content):
            raise ChecksumFailedError()
        verified += 1
    if verified == 0:
        raise ChecksumMissingError()


def add_yaml_checksum(data: bytes, placement: Union[TextPlacement, str, None] = None) -> bytes:
    """Add a checksum to a YAML file."""
    return add_text_file_checksum(data, "#", placement)


def verify_yaml_checksum(data: bytes) -> None:
    """Verify the checksums of a YAML file."""
    verify_text_file_checksum(data, "#")