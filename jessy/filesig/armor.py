"""Armored text sections holding signatures."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Optional

from .. import dsd
from ..letter import Letter, letter_from_dsd

_START = b"-----BEGIN JESS SIGNATURE-----"
_END = b"-----END JESS SIGNATURE-----"
_LINE_LENGTH = 64

_FIND = re.compile(re.escape(_START) + b"(.+?)" + re.escape(_END), re.S | re.M)
_REMOVE = re.compile(re.escape(_START) + b".+?" + re.escape(_END) + b"\r?\n?", re.S | re.M)
_WHITESPACE = re.compile(rb"\s")


def _raw_b64decode(data: bytes) -> bytes:
    if b"=" in data or len(data) % 4 == 1:
        raise ValueError("illegal base64 data")
    return base64.b64decode(data + b"=" * (-len(data) % 4), validate=True)


def parse_sig_file(file_data: bytes) -> tuple:
    """Extract all signatures from a signature file.

    Returns the parsed letters and the last error met (or None). An error
    next to signatures means some signatures could not be parsed.
    """
    warning: Optional[Exception] = None
    signatures = []
    for match in _FIND.finditer(bytes(file_data)):
        captured = _WHITESPACE.sub(b"", match.group(1))
        if captured.endswith(_END):
            captured = captured[: -len(_END)]
        if captured.startswith(_START):
            captured = captured[len(_START):]
        try:
            raw = _raw_b64decode(captured)
        except (binascii.Error, ValueError) as exc:
            warning = exc
            continue
        try:
            signatures.append(letter_from_dsd(raw))
        except (ValueError, dsd.DSDError) as exc:
            warning = exc
    return signatures, warning


def make_sig_file_section(signature: Letter) -> bytes:
    """Create an armored section for a signature file."""
    data = signature.to_dsd(dsd.Format.CBOR)
    encoded = base64.b64encode(data).rstrip(b"=")
    lines = [_START]
    lines += [encoded[i : i + _LINE_LENGTH] for i in range(0, len(encoded), _LINE_LENGTH)]
    lines.append(_END)
    return b"\n".join(lines)


def add_to_sig_file(signature: Letter, sig_file_data: bytes, remove_existing: bool = False) -> bytes:
    """Append a signature section, optionally removing existing ones first."""
    section = make_sig_file_section(signature)
    data = bytes(sig_file_data)
    if remove_existing:
        data = _REMOVE.sub(b"", data)
    return data + b"\n" + section