#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Exceptions raised by the SRP6 handshake."""


class SRP6Error(Exception):
    """Base class for every protocol failure. The session must be discarded."""


class KeyLengthMismatch(SRP6Error):
    def __init__(self, given: int, expected: int) -> None:
        self.given = given
        self.expected = expected
        super().__init__(
            f"The provided key length ({given} bytes) does not match "
            f"the expected ({expected} byte)"
        )

    def __eq__(self, other):
        return (
            isinstance(other, KeyLengthMismatch)
            and (self.given, self.expected) == (other.given, other.expected)
        )

    __hash__ = SRP6Error.__hash__


class InvalidPublicKey(SRP6Error):
    def __init__(self, key) -> None:
        self.key = key
        super().__init__("The provided public key is invalid")


class InvalidProof(SRP6Error):
    def __init__(self, proof) -> None:
        self.proof = proof
        super().__init__("The provided proof is invalid")


class InvalidStrongProof(SRP6Error):
    def __init__(self, proof) -> None:
        self.proof = proof
        super().__init__("The provided strong proof is invalid")


class HandshakeStateError(SRP6Error):
    """A handshake method was called out of order."""

    def __init__(self, operation: str, phase) -> None:
        self.operation = operation
        self.phase = phase
        super().__init__(f"{operation}() is not allowed in phase {phase.name}")


class MessageFormatError(SRP6Error):
    """A wire message could not be decoded."""
