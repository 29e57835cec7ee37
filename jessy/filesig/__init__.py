"""Checksums embedded in text, YAML and JSON files, and armored signature files."""