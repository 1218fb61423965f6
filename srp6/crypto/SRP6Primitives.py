#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
SRP6Primitives – the SRP-6a formulas as pure functions.

Vocabulary
----------
    N    A large safe prime (N = 2q+1, where q is prime), all math is mod N
    g    A generator modulo N
    k    Multiplier parameter (k = H(N, g) in SRP-6a)
    s    User's salt
    I    Username
    p    Cleartext password
    H()  SHA-1
    u    Random scrambling parameter
    a,b  Secret ephemeral values
    A,B  Public ephemeral values
    x    Private key (derived from p and s)
    v    Password verifier
    S    Session key
    K    Strong session key (SHA1 interleaved)
    M    Proof sent by the user
    M2   Strong proof sent back by the host

Every value that enters a hash is padded to the width configured in
DomainParams (key_length for N-sized values, salt_length for s in M) in
the configured byte order. The one exception is x, which hashes s in its
minimal form.

Safeguards
----------
    * the user aborts on B % N == 0 or u == 0
    * the host aborts on A % N == 0
    * the host only shows M2 after it has checked M
"""

import hmac
import os
from functools import lru_cache
from typing import Callable

from srp6.crypto.BigNumber import BigNumber
from srp6.crypto.DomainParams import DomainParams
from srp6.crypto.HashHelper import HASH_LENGTH, H, hash_numbers, hash_to_number
from srp6.crypto.SRP6Errors import InvalidPublicKey
from srp6.utils.Logger import DebugLevel, Logger

STRONG_SESSION_KEY_LENGTH = HASH_LENGTH * 2


def _trace(name: str, value: BigNumber) -> None:
    # secrets are only formatted when someone reads them
    if Logger.enabled(DebugLevel.DEBUG):
        Logger.debug(f"[SRP6] {name} = {value!r}")


# ======================================================================
# Random values
# ======================================================================

def generate_private_key(params: DomainParams, rand: Callable[[int], bytes] = os.urandom) -> BigNumber:
    """`a` or `b`: a positive random number as wide as N."""
    return BigNumber.new_rand(params.key_length, rand)


def generate_salt(params: DomainParams, rand: Callable[[int], bytes] = os.urandom) -> BigNumber:
    return BigNumber.new_rand(params.salt_length, rand)


# ======================================================================
# Credentials: x, v
# ======================================================================

def calculate_p_hash(I: str, p: str) -> bytes:
    """H(I | ":" | p), used for the private key x."""
    return H(I.encode("utf-8"), b":", p.encode("utf-8"))


def calculate_private_key_x(params: DomainParams, I: str, p: str, s: BigNumber) -> BigNumber:
    """x = H(s | H(I | ":" | p))"""
    x = hash_to_number(H(s.to_minimal_bytes(params.byteorder), calculate_p_hash(I, p)), params.byteorder)
    _trace("x", x)
    return x


def calculate_password_verifier_v(params: DomainParams, x: BigNumber) -> BigNumber:
    """v = g^x % N, only needed at signup or password change."""
    return params.g.modpow(x, params.N)


# ======================================================================
# Public keys: k, A, B, u
# ======================================================================

@lru_cache(maxsize=16)
def calculate_k(params: DomainParams) -> BigNumber:
    """k = H(N | PAD(g)), depends only on the group."""
    return hash_numbers(params.key_length, params.byteorder, params.N, params.g)


def calculate_pubkey_A(params: DomainParams, a: BigNumber) -> BigNumber:
    """A = g^a % N"""
    A = params.g.modpow(a, params.N)
    _trace("A", A)
    return A


def calculate_pubkey_B(params: DomainParams, v: BigNumber, b: BigNumber) -> BigNumber:
    """B = (k * v + g^b) % N"""
    g_b = params.g.modpow(b, params.N)
    B = (calculate_k(params) * v + g_b) % params.N
    _trace("B", B)
    return B


def calculate_u(params: DomainParams, A: BigNumber, B: BigNumber) -> BigNumber:
    """u = H(PAD(A) | PAD(B))"""
    u = hash_numbers(params.key_length, params.byteorder, A, B)
    _trace("u", u)
    return u


# ======================================================================
# Session key S
# ======================================================================

def subtract_mod(N: BigNumber, lhs: BigNumber, rhs: BigNumber) -> BigNumber:
    """
    (lhs - rhs) mod N for operands already reduced below N.

    Unsigned numbers cannot go negative, so an underflow is corrected by
    computing (N - rhs) + lhs. With both operands < N one correction is
    always enough and the result stays in [0, N).
    """
    if lhs >= N or rhs >= N:
        raise ValueError("subtract_mod() operands must be reduced mod N")
    if lhs < rhs:
        return (N - rhs) + lhs
    return lhs - rhs


def calculate_session_key_S_for_host(
    params: DomainParams,
    A: BigNumber,
    B: BigNumber,
    b: BigNumber,
    v: BigNumber,
) -> BigNumber:
    """
    S = (A * v^u % N)^b % N

    Raises:
        InvalidPublicKey: A % N == 0, which would force S = 0.
    """
    N = params.N
    if (A % N).is_zero():
        raise InvalidPublicKey(A)

    u = calculate_u(params, A, B)
    base = (A * v.modpow(u, N)) % N
    S = base.modpow(b, N)
    _trace("S", S)
    return S


def calculate_session_key_S_for_client(
    params: DomainParams,
    B: BigNumber,
    A: BigNumber,
    a: BigNumber,
    x: BigNumber,
) -> BigNumber:
    """
    S = (B - k * g^x % N)^(a + u * x) % N

    Raises:
        InvalidPublicKey: B % N == 0 or u == 0.
    """
    N = params.N
    B_mod = B % N
    if B_mod.is_zero():
        raise InvalidPublicKey(B)

    u = calculate_u(params, A, B)
    if u.is_zero():
        raise InvalidPublicKey(B)

    exponent = a + u * x
    to_sub = (calculate_k(params) * params.g.modpow(x, N)) % N
    base = subtract_mod(N, B_mod, to_sub)
    S = base.modpow(exponent, N)
    _trace("S", S)
    return S


def calculate_session_key_hash_interleave_K(params: DomainParams, S: BigNumber) -> BigNumber:
    """
    K = SHA_Interleave(S)

    S is padded to key_length, split into its even and odd indexed bytes,
    each half is hashed and the two digests are interleaved byte by byte
    into a 40 byte key.
    """
    s_bytes = params.pad(S)

    even_hash = H(s_bytes[0::2])
    odd_hash = H(s_bytes[1::2])

    out = bytearray(STRONG_SESSION_KEY_LENGTH)
    for i in range(HASH_LENGTH):
        out[2 * i] = even_hash[i]
        out[2 * i + 1] = odd_hash[i]

    K = BigNumber.from_bytes(bytes(out), params.byteorder)
    _trace("K", K)
    return K


# ======================================================================
# Proofs M and M2
# ======================================================================

def calculate_hash_N_xor_g(params: DomainParams) -> bytes:
    """H(N) xor H(g), the first operand of M."""
    hash_n = H(params.pad(params.N))
    hash_g = H(params.g.to_minimal_bytes(params.byteorder))
    return bytes(x ^ y for x, y in zip(hash_n, hash_g))


def calculate_proof_M(
    params: DomainParams,
    I: str,
    s: BigNumber,
    A: BigNumber,
    B: BigNumber,
    K: BigNumber,
) -> BigNumber:
    """M = H(H(N) xor H(g) | H(I) | s | A | B | K)"""
    order = params.byteorder
    M = hash_to_number(
        H(
            calculate_hash_N_xor_g(params),
            H(I.encode("utf-8")),
            params.pad_salt(s),
            params.pad(A),
            params.pad(B),
            K.to_array_pad_zero(STRONG_SESSION_KEY_LENGTH, order),
        ),
        order,
    )
    _trace("M", M)
    return M


def calculate_strong_proof_M2(params: DomainParams, A: BigNumber, M: BigNumber, K: BigNumber) -> BigNumber:
    """M2 = H(A | M | K)"""
    order = params.byteorder
    M2 = hash_to_number(
        H(
            params.pad(A),
            M.to_array_pad_zero(HASH_LENGTH, order),
            K.to_array_pad_zero(STRONG_SESSION_KEY_LENGTH, order),
        ),
        order,
    )
    _trace("M2", M2)
    return M2


def proofs_equal(expected: BigNumber, given: BigNumber, width: int = HASH_LENGTH) -> bool:
    """Constant time comparison of two proofs."""
    if given.num_bytes() > width:
        return False
    return hmac.compare_digest(
        expected.to_array_pad_zero(width),
        given.to_array_pad_zero(width),
    )
