"""Labeled hashes, hash tools, security requirements, letters, and file checksum and signature-file helpers."""

__version__ = "0.1.0"