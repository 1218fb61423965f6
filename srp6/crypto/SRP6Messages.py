#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Messages exchanged during signup and login, and their JSON wire form.

Big numbers travel as upper-case big-endian hex strings, the same text a
BigNumber prints, so the wire form does not depend on the byte order the
hashes use.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict

from srp6.crypto.BigNumber import BigNumber, BigNumberError
from srp6.crypto.SRP6Errors import MessageFormatError

# Proof (M) and StrongProof (M2) are plain numbers
Proof = BigNumber
StrongProof = BigNumber
SessionKey = BigNumber


def _number_field(data: Dict[str, Any], name: str) -> BigNumber:
    try:
        raw = data[name]
    except KeyError:
        raise MessageFormatError(f"missing field '{name}'")
    if not isinstance(raw, str):
        raise MessageFormatError(f"field '{name}' must be a hex string")
    try:
        return BigNumber.from_hex_str_be(raw)
    except BigNumberError:
        raise MessageFormatError(f"field '{name}' is not valid hex: {raw!r}")


def _string_field(data: Dict[str, Any], name: str) -> str:
    try:
        raw = data[name]
    except KeyError:
        raise MessageFormatError(f"missing field '{name}'")
    if not isinstance(raw, str):
        raise MessageFormatError(f"field '{name}' must be a string")
    return raw


def _load_object(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MessageFormatError(f"invalid JSON: {e}")
    if not isinstance(data, dict):
        raise MessageFormatError("expected a JSON object")
    return data


class _JsonMessage:
    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        raise NotImplementedError

    @classmethod
    def from_json(cls, text: str):
        return cls.from_dict(_load_object(text))


@dataclass(frozen=True)
class UserDetails(_JsonMessage):
    """Username, salt and verifier: the record a credential store keeps."""

    username: str
    salt: BigNumber
    verifier: BigNumber

    def to_dict(self) -> Dict[str, Any]:
        return {
            "username": self.username,
            "salt": self.salt.to_hex(),
            "verifier": self.verifier.to_hex(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserDetails":
        return cls(
            username=_string_field(data, "username"),
            salt=_number_field(data, "salt"),
            verifier=_number_field(data, "verifier"),
        )


@dataclass(frozen=True)
class UserHandshake(_JsonMessage):
    """user -> host: I and A"""

    username: str
    user_publickey: BigNumber

    def to_dict(self) -> Dict[str, Any]:
        return {
            "username": self.username,
            "user_publickey": self.user_publickey.to_hex(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserHandshake":
        return cls(
            username=_string_field(data, "username"),
            user_publickey=_number_field(data, "user_publickey"),
        )


@dataclass(frozen=True)
class ServerHandshake(_JsonMessage):
    """host -> user: s and B"""

    salt: BigNumber
    server_publickey: BigNumber

    def to_dict(self) -> Dict[str, Any]:
        return {
            "salt": self.salt.to_hex(),
            "server_publickey": self.server_publickey.to_hex(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServerHandshake":
        return cls(
            salt=_number_field(data, "salt"),
            server_publickey=_number_field(data, "server_publickey"),
        )


def encode_proof(proof: BigNumber) -> str:
    """Proof / StrongProof as a JSON string literal."""
    return json.dumps(proof.to_hex())


def decode_proof(text: str) -> BigNumber:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise MessageFormatError(f"invalid JSON: {e}")
    return _number_field({"proof": raw}, "proof")
