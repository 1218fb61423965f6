#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import hashlib

from srp6.crypto.BigNumber import BigNumber

HASH_LENGTH = 20


def sha1(*parts: bytes) -> bytes:
    """
    Computes SHA-1 over concatenated byte sequences.

    Returns:
        bytes: SHA-1 digest (20 bytes).
    """
    sha = hashlib.sha1()
    for part in parts:
        if isinstance(part, int):
            raise TypeError("sha1(): pass ints as bytes explicitly")
        sha.update(part)
    return sha.digest()


# the primitives read better as H(...)
H = sha1


def hash_to_number(digest: bytes, byteorder: str = "little") -> BigNumber:
    return BigNumber.from_bytes(digest, byteorder)


def hash_numbers(width: int, byteorder: str, *values: BigNumber) -> BigNumber:
    """H(PAD(v1) | PAD(v2) | ...), every value padded to `width` bytes."""
    digest = sha1(*(v.to_array_pad_zero(width, byteorder) for v in values))
    return hash_to_number(digest, byteorder)
