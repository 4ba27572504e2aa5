#!/usr/bin/env python3
"""
SHA-256 fingerprints for change detection and loop prevention.

The bridge never keeps clipboard content between cycles. It keeps only a
fingerprint of what it last observed on each endpoint, and compares fresh
reads against those fingerprints to decide whether a side changed and
whether the two sides already agree.

This module provides:
- compute_hash(): SHA-256 hex digest of clipboard content
- EMPTY_HASH: digest of empty content, the starting fingerprint of both sides
"""
import hashlib

__all__ = ["compute_hash", "EMPTY_HASH"]


def compute_hash(data: bytes) -> str:
    """
    Compute SHA-256 hash of clipboard content.

    Args:
        data: Raw clipboard content bytes to hash.

    Returns:
        Hexadecimal string representation of the SHA-256 digest.
    """
    return hashlib.sha256(data).hexdigest()


# Fingerprint of an empty clipboard.
EMPTY_HASH: str = compute_hash(b"")
