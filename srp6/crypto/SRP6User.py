#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
SRP6User – client side of the SRP-6a handshake.

The user only learns N and g from its DomainParams; s and B come from the
host's ServerHandshake. The session key S is only trusted after the host's
strong proof M2 has been checked in verify_proof().
"""

import os
from enum import Enum
from typing import Callable, Optional

from srp6.crypto.BigNumber import BigNumber
from srp6.crypto.DomainParams import DomainParams
from srp6.crypto.SRP6Credentials import generate_new_user_secrets
from srp6.crypto.SRP6Errors import (
    HandshakeStateError,
    InvalidStrongProof,
    KeyLengthMismatch,
)
from srp6.crypto.SRP6Messages import ServerHandshake, UserHandshake
from srp6.crypto.SRP6Primitives import (
    calculate_private_key_x,
    calculate_proof_M,
    calculate_pubkey_A,
    calculate_session_key_hash_interleave_K,
    calculate_session_key_S_for_client,
    calculate_strong_proof_M2,
    calculate_u,
    generate_private_key,
    proofs_equal,
)
from srp6.utils.Logger import Logger


class UserPhase(Enum):
    IDLE = "idle"
    AWAITING_SERVER = "awaiting_server"
    AWAITING_VERIFICATION = "awaiting_verification"
    VERIFIED = "verified"
    REJECTED = "rejected"


class SRP6User:
    """
    Client-side SRP6 session.

    Responsibilities
    ----------------
    * Compute A = g^a mod N
    * Derive S and K from the host's s and B
    * Compute the proof M
    * Check the host's strong proof M2
    """

    # signup does not need a session
    generate_new_user_secrets = staticmethod(generate_new_user_secrets)

    def __init__(self, params: DomainParams, rand: Callable[[int], bytes] = os.urandom) -> None:
        self.params = params
        self._rand = rand
        self._phase = UserPhase.IDLE
        self._username: Optional[str] = None

        self._a: Optional[BigNumber] = None
        self._A: Optional[BigNumber] = None
        self._B: Optional[BigNumber] = None
        self._U: Optional[BigNumber] = None
        self._salt: Optional[BigNumber] = None
        self._S: Optional[BigNumber] = None
        self._K: Optional[BigNumber] = None
        self._M: Optional[BigNumber] = None

    @property
    def phase(self) -> UserPhase:
        return self._phase

    @property
    def A(self) -> Optional[BigNumber]:
        return self._A

    @property
    def B(self) -> Optional[BigNumber]:
        return self._B

    @property
    def U(self) -> Optional[BigNumber]:
        return self._U

    @property
    def M(self) -> Optional[BigNumber]:
        return self._M

    @property
    def salt(self) -> Optional[BigNumber]:
        return self._salt

    # ------------------------------------------------------------------
    def start_handshake(self, username: str) -> UserHandshake:
        """
        Draw a fresh a and compute A.

        Returns:
            UserHandshake: I and A for the host.
        """
        if self._phase is not UserPhase.IDLE:
            raise HandshakeStateError("start_handshake", self._phase)

        try:
            self._a = generate_private_key(self.params, self._rand)
            self._A = calculate_pubkey_A(self.params, self._a)
        except Exception as e:
            Logger.warning(f"[SRP6] Handshake for '{username}' not started: {e}")
            self._reject()
            raise

        self._username = username
        self._phase = UserPhase.AWAITING_SERVER

        return UserHandshake(username=username, user_publickey=self._A)

    # ------------------------------------------------------------------
    def update_handshake(self, server_handshake: ServerHandshake, username: str, password: str) -> BigNumber:
        """
        Process the host's s and B and compute the proof M.

        Args:
            server_handshake (ServerHandshake): s and B from the host.
            username (str): Username I.
            password (str): Cleartext password p, only used to derive x.

        Returns:
            BigNumber: Proof M for the host.

        Raises:
            KeyLengthMismatch: B or s wider than configured.
            InvalidPublicKey: B % N == 0 or u == 0.
        """
        if self._phase is not UserPhase.AWAITING_SERVER:
            raise HandshakeStateError("update_handshake", self._phase)

        params = self.params
        B = server_handshake.server_publickey
        salt = server_handshake.salt
        try:
            if B.num_bytes() > params.key_length:
                raise KeyLengthMismatch(B.num_bytes(), params.key_length)
            if salt.num_bytes() > params.salt_length:
                raise KeyLengthMismatch(salt.num_bytes(), params.salt_length)

            self._B = B
            self._salt = salt
            self._U = calculate_u(params, self._A, self._B)

            x = calculate_private_key_x(params, username, password, salt)
            self._S = calculate_session_key_S_for_client(params, self._B, self._A, self._a, x)
            self._K = calculate_session_key_hash_interleave_K(params, self._S)
            self._M = calculate_proof_M(params, username, salt, self._A, self._B, self._K)
        except Exception as e:
            Logger.warning(f"[SRP6] Server handshake rejected for '{username}': {e}")
            self._reject()
            raise

        # a is only needed for S
        self._a = None
        self._phase = UserPhase.AWAITING_VERIFICATION
        return self._M

    # ------------------------------------------------------------------
    def verify_proof(self, servers_proof: BigNumber) -> BigNumber:
        """
        Check the host's strong proof M2.

        Returns:
            BigNumber: the mutually authenticated session key S.

        Raises:
            InvalidStrongProof: M2 does not match; S and K are dropped.
        """
        if self._phase is not UserPhase.AWAITING_VERIFICATION:
            raise HandshakeStateError("verify_proof", self._phase)

        my_strong_proof = calculate_strong_proof_M2(self.params, self._A, self._M, self._K)
        if not proofs_equal(my_strong_proof, servers_proof):
            Logger.warning(f"[SRP6] Invalid strong proof for '{self._username}'")
            self._reject()
            raise InvalidStrongProof(servers_proof)

        session_key = self._S
        self._phase = UserPhase.VERIFIED
        self._clear_secrets()
        return session_key

    # ------------------------------------------------------------------
    def _clear_secrets(self) -> None:
        self._a = None
        self._S = None
        self._K = None

    def _reject(self) -> None:
        self._phase = UserPhase.REJECTED
        self._clear_secrets()

    def clear(self) -> None:
        """Drop all per-session material. An unfinished handshake is rejected."""
        self._clear_secrets()
        if self._phase not in (UserPhase.VERIFIED, UserPhase.REJECTED):
            self._phase = UserPhase.REJECTED

    def __enter__(self) -> "SRP6User":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.clear()

    def __repr__(self) -> str:
        return f"SRP6User(phase={self._phase.name}, A={self._A!r}, B={self._B!r})"
