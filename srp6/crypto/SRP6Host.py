#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
SRP6Host – server side of the SRP-6a handshake.

Flow
----
    user                                host
    start_handshake()  --- I, A --->    continue_handshake()
    update_handshake() <--- s, B ---
                       ---- M  --->     verify_proof()
    verify_proof()     <--- M2 ---

One instance holds exactly one outstanding handshake. Concurrent logins
need one instance each.
"""

import os
from enum import Enum
from typing import Callable, Optional, Tuple

from srp6.crypto.BigNumber import BigNumber
from srp6.crypto.DomainParams import DomainParams
from srp6.crypto.SRP6Errors import (
    HandshakeStateError,
    InvalidProof,
    InvalidPublicKey,
    KeyLengthMismatch,
)
from srp6.crypto.SRP6Messages import ServerHandshake, UserDetails
from srp6.crypto.SRP6Primitives import (
    calculate_proof_M,
    calculate_pubkey_B,
    calculate_session_key_hash_interleave_K,
    calculate_session_key_S_for_host,
    calculate_strong_proof_M2,
    calculate_u,
    generate_private_key,
    proofs_equal,
)
from srp6.utils.Logger import Logger


class HostPhase(Enum):
    IDLE = "idle"
    AWAITING_PROOF = "awaiting_proof"
    VERIFIED = "verified"
    REJECTED = "rejected"


class SRP6Host:
    """
    Server-side SRP6 session.

    continue_handshake() computes S, K and the expected M eagerly, so
    verify_proof() is a comparison followed, only on success, by M2.
    """

    def __init__(self, params: DomainParams, rand: Callable[[int], bytes] = os.urandom) -> None:
        self.params = params
        self._rand = rand
        self._phase = HostPhase.IDLE
        self._username: Optional[str] = None

        self._A: Optional[BigNumber] = None
        self._B: Optional[BigNumber] = None
        self._U: Optional[BigNumber] = None
        self._b: Optional[BigNumber] = None
        self._S: Optional[BigNumber] = None
        self._K: Optional[BigNumber] = None
        self._M: Optional[BigNumber] = None

    # ------------------------------------------------------------------
    # Public values
    # ------------------------------------------------------------------

    @property
    def phase(self) -> HostPhase:
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

    # ------------------------------------------------------------------
    # Handshake
    # ------------------------------------------------------------------

    def continue_handshake(self, user_details: UserDetails, user_publickey: BigNumber) -> ServerHandshake:
        """
        Answer the user's A with the stored salt and a fresh B.

        Args:
            user_details (UserDetails): Record from the credential store.
            user_publickey (BigNumber): A as received from the user.

        Returns:
            ServerHandshake: s and B for the user.

        Raises:
            KeyLengthMismatch: A or the stored record is wider than configured.
            InvalidPublicKey: A % N == 0.
            HandshakeStateError: the instance already ran a handshake.

        Any failure after the phase check leaves the session REJECTED.
        """
        if self._phase is not HostPhase.IDLE:
            raise HandshakeStateError("continue_handshake", self._phase)

        params = self.params
        try:
            self._check_width(user_publickey, params.key_length)
            self._check_width(user_details.verifier, params.key_length)
            self._check_width(user_details.salt, params.salt_length)
            if (user_publickey % params.N).is_zero():
                raise InvalidPublicKey(user_publickey)

            b = generate_private_key(params, self._rand)
            B = calculate_pubkey_B(params, user_details.verifier, b)

            self._username = user_details.username
            self._b = b
            self._B = B
            self._A = user_publickey
            self._U = calculate_u(params, self._A, self._B)

            self._S = calculate_session_key_S_for_host(params, self._A, self._B, self._b, user_details.verifier)
            self._K = calculate_session_key_hash_interleave_K(params, self._S)
            self._M = calculate_proof_M(
                params,
                user_details.username,
                user_details.salt,
                self._A,
                self._B,
                self._K,
            )
        except Exception as e:
            Logger.warning(f"[SRP6] Handshake for '{user_details.username}' aborted: {e}")
            self._reject()
            raise

        self._phase = HostPhase.AWAITING_PROOF
        return ServerHandshake(salt=user_details.salt, server_publickey=B)

    def verify_proof(self, users_proof: BigNumber) -> Tuple[BigNumber, BigNumber]:
        """
        Check the user's proof M.

        Returns:
            (M2, S): the strong proof for the user and the session key.

        Raises:
            InvalidProof: M does not match. No M2 is computed and the
                session's secrets are dropped.
        """
        if self._phase is not HostPhase.AWAITING_PROOF:
            raise HandshakeStateError("verify_proof", self._phase)

        if not proofs_equal(self._M, users_proof):
            Logger.warning(f"[SRP6] Invalid proof from '{self._username}'")
            self._reject()
            raise InvalidProof(users_proof)

        strong_proof = calculate_strong_proof_M2(self.params, self._A, self._M, self._K)
        session_key = self._S

        self._phase = HostPhase.VERIFIED
        self._clear_secrets()
        Logger.success(f"[SRP6] '{self._username}' authenticated")
        return strong_proof, session_key

    # ------------------------------------------------------------------
    # Secret handling
    # ------------------------------------------------------------------

    @staticmethod
    def _check_width(value: BigNumber, expected: int) -> None:
        if value.num_bytes() > expected:
            raise KeyLengthMismatch(value.num_bytes(), expected)

    def _clear_secrets(self) -> None:
        self._b = None
        self._S = None
        self._K = None
        self._M = None

    def _reject(self) -> None:
        self._phase = HostPhase.REJECTED
        self._clear_secrets()

    def clear(self) -> None:
        """Drop all per-session material. An unfinished handshake is rejected."""
        self._clear_secrets()
        if self._phase in (HostPhase.IDLE, HostPhase.AWAITING_PROOF):
            self._phase = HostPhase.REJECTED

    def __enter__(self) -> "SRP6Host":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.clear()

    def __repr__(self) -> str:
        return f"SRP6Host(phase={self._phase.name}, A={self._A!r}, B={self._B!r})"
