#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Unit tests for the SRP6 formulas."""

import unittest
from unittest import mock

import srp6_testdata as testdata
from srp6.crypto.BigNumber import BigNumber
from srp6.crypto.DomainParams import DomainParams
from srp6.crypto.HashHelper import HASH_LENGTH, sha1
from srp6.crypto.SRP6Errors import InvalidPublicKey
from srp6.crypto.SRP6Primitives import (
    STRONG_SESSION_KEY_LENGTH,
    calculate_hash_N_xor_g,
    calculate_k,
    calculate_password_verifier_v,
    calculate_private_key_x,
    calculate_proof_M,
    calculate_pubkey_A,
    calculate_pubkey_B,
    calculate_session_key_hash_interleave_K,
    calculate_session_key_S_for_client,
    calculate_session_key_S_for_host,
    calculate_strong_proof_M2,
    calculate_u,
    proofs_equal,
    subtract_mod,
)
from srp6.utils.Logger import Logger


class RFC5054VectorsTest(unittest.TestCase):
    """RFC 5054 appendix B, 1024-bit group, big-endian hashing."""

    def setUp(self) -> None:
        self.params = DomainParams.rfc5054(1024, salt_length=16, byteorder="big")
        self.salt = testdata.number(testdata.SALT)
        self.a = testdata.number(testdata.A_PRIVATE)
        self.b = testdata.number(testdata.B_PRIVATE)
        self.A = testdata.number(testdata.A_PUBLIC)
        self.B = testdata.number(testdata.B_PUBLIC)

    def _x(self) -> BigNumber:
        return calculate_private_key_x(self.params, testdata.USERNAME, testdata.PASSWORD, self.salt)

    def _v(self) -> BigNumber:
        return calculate_password_verifier_v(self.params, self._x())

    def test_multiplier_k(self) -> None:
        self.assertEqual(calculate_k(self.params), testdata.number(testdata.K_MULTIPLIER))

    def test_private_key_x(self) -> None:
        self.assertEqual(self._x(), testdata.number(testdata.X))

    def test_verifier(self) -> None:
        v = self._v()
        self.assertEqual(v, testdata.number(testdata.VERIFIER))
        self.assertTrue(str(v).startswith("7E273DE8696FFC4F"))

    def test_public_keys(self) -> None:
        self.assertEqual(calculate_pubkey_A(self.params, self.a), self.A)
        self.assertEqual(calculate_pubkey_B(self.params, self._v(), self.b), self.B)

    def test_scrambler_u(self) -> None:
        self.assertEqual(calculate_u(self.params, self.A, self.B), testdata.number(testdata.U))

    def test_session_key_both_sides(self) -> None:
        expected = testdata.number(testdata.SECRET)

        host_S = calculate_session_key_S_for_host(self.params, self.A, self.B, self.b, self._v())
        client_S = calculate_session_key_S_for_client(self.params, self.B, self.A, self.a, self._x())

        self.assertEqual(host_S, expected)
        self.assertEqual(client_S, expected)
        self.assertTrue(str(host_S).startswith("B0DC82BABCF30674"))


class PrimitivesTest(unittest.TestCase):
    """Properties of the primitives in the default little-endian mode."""

    def setUp(self) -> None:
        self.params = DomainParams.rfc5054(1024, salt_length=16)
        self.salt = BigNumber.from_hex_str_be("BEB25379D1A8581EB5A727673A2441EE")
        self.x = calculate_private_key_x(self.params, "alice", "password123", self.salt)
        self.v = calculate_password_verifier_v(self.params, self.x)
        self.a = BigNumber.from_hex_str_be("60975527035CF2AD1989806F0407210B")
        self.b = BigNumber.from_hex_str_be("E487CB59D31AC550471E81F00F6928E0")
        self.A = calculate_pubkey_A(self.params, self.a)
        self.B = calculate_pubkey_B(self.params, self.v, self.b)

    def test_deterministic(self) -> None:
        """Equal inputs give equal outputs."""
        x2 = calculate_private_key_x(self.params, "alice", "password123", self.salt)
        self.assertEqual(self.x, x2)
        self.assertEqual(calculate_u(self.params, self.A, self.B), calculate_u(self.params, self.A, self.B))
        self.assertEqual(calculate_k(self.params), calculate_k(DomainParams.rfc5054(1024, salt_length=16)))

    def test_byte_order_changes_x(self) -> None:
        """Little and big endian conventions are not interchangeable."""
        big = DomainParams.rfc5054(1024, salt_length=16, byteorder="big")
        self.assertNotEqual(self.x, calculate_private_key_x(big, "alice", "password123", self.salt))

    def test_x_depends_on_password(self) -> None:
        other = calculate_private_key_x(self.params, "alice", "password124", self.salt)
        self.assertNotEqual(self.x, other)

    def test_x_hashes_minimal_salt_big_endian(self) -> None:
        """A salt with a leading zero byte enters x without that byte."""
        params = DomainParams.rfc5054(1024, salt_length=16, byteorder="big")
        salt = BigNumber.from_hex_str_be("00B25379D1A8581EB5A727673A2441EE")
        self.assertEqual(len(salt.to_bytes_be()), 15)

        expected = BigNumber.from_bytes_be(sha1(salt.to_bytes_be(), sha1(b"alice:password123")))
        self.assertEqual(calculate_private_key_x(params, "alice", "password123", salt), expected)

    def test_x_hashes_minimal_salt_little_endian(self) -> None:
        """x = H(to_vec(s) | H(I:p)), read back little-endian."""
        salt = BigNumber(0x11223344)

        expected = BigNumber.from_bytes_le(sha1(salt.to_vec(), sha1(b"alice:password123")))
        self.assertEqual(calculate_private_key_x(self.params, "alice", "password123", salt), expected)

    def test_x_is_only_traced_when_debug_is_on(self) -> None:
        self.addCleanup(Logger.set_level, None)

        Logger.set_level("Error")
        with mock.patch.object(Logger, "debug") as debug:
            calculate_private_key_x(self.params, "alice", "password123", self.salt)
        debug.assert_not_called()

        Logger.set_level("ALL")
        with mock.patch.object(Logger, "debug") as debug:
            calculate_private_key_x(self.params, "alice", "password123", self.salt)
        debug.assert_called_once()

    def test_k_cache_is_bounded(self) -> None:
        self.assertEqual(calculate_k.cache_info().maxsize, 16)

    def test_host_and_client_agree(self) -> None:
        host_S = calculate_session_key_S_for_host(self.params, self.A, self.B, self.b, self.v)
        client_S = calculate_session_key_S_for_client(self.params, self.B, self.A, self.a, self.x)
        self.assertEqual(host_S, client_S)

    def test_host_rejects_zero_A(self) -> None:
        for bad in (BigNumber(0), self.params.N):
            with self.subTest(A=bad):
                with self.assertRaises(InvalidPublicKey):
                    calculate_session_key_S_for_host(self.params, bad, self.B, self.b, self.v)

    def test_client_rejects_zero_B(self) -> None:
        for bad in (BigNumber(0), self.params.N):
            with self.subTest(B=bad):
                with self.assertRaises(InvalidPublicKey):
                    calculate_session_key_S_for_client(self.params, bad, self.A, self.a, self.x)

    def test_client_rejects_zero_scrambler(self) -> None:
        """u == 0 would drop the password from S."""
        with mock.patch("srp6.crypto.SRP6Primitives.calculate_u", return_value=BigNumber(0)):
            with self.assertRaises(InvalidPublicKey):
                calculate_session_key_S_for_client(self.params, self.B, self.A, self.a, self.x)

    def test_interleave_K_width(self) -> None:
        S = calculate_session_key_S_for_host(self.params, self.A, self.B, self.b, self.v)
        K = calculate_session_key_hash_interleave_K(self.params, S)
        self.assertLessEqual(K.num_bytes(), STRONG_SESSION_KEY_LENGTH)

    def test_interleave_K_layout(self) -> None:
        """Even bytes of K come from H(even half of S), odd bytes from H(odd half)."""
        S = BigNumber(0x0102)
        s_bytes = self.params.pad(S)
        K = calculate_session_key_hash_interleave_K(self.params, S)
        k_bytes = K.to_array_pad_zero(STRONG_SESSION_KEY_LENGTH)

        self.assertEqual(k_bytes[0::2], sha1(s_bytes[0::2]))
        self.assertEqual(k_bytes[1::2], sha1(s_bytes[1::2]))

    def test_hash_N_xor_g_width(self) -> None:
        self.assertEqual(len(calculate_hash_N_xor_g(self.params)), HASH_LENGTH)

    def test_proofs(self) -> None:
        S = calculate_session_key_S_for_host(self.params, self.A, self.B, self.b, self.v)
        K = calculate_session_key_hash_interleave_K(self.params, S)

        M = calculate_proof_M(self.params, "alice", self.salt, self.A, self.B, K)
        M_other_user = calculate_proof_M(self.params, "bob", self.salt, self.A, self.B, K)
        M2 = calculate_strong_proof_M2(self.params, self.A, M, K)

        self.assertLessEqual(M.num_bytes(), HASH_LENGTH)
        self.assertNotEqual(M, M_other_user)
        self.assertNotEqual(M, M2)

    def test_proofs_equal(self) -> None:
        self.assertTrue(proofs_equal(BigNumber(5), BigNumber(5)))
        self.assertFalse(proofs_equal(BigNumber(5), BigNumber(6)))
        self.assertFalse(proofs_equal(BigNumber(5), BigNumber(5) + BigNumber(1 << 8 * HASH_LENGTH)))


class SubtractModTest(unittest.TestCase):
    """The wraparound subtraction used for B - k*g^x."""

    def test_no_underflow(self) -> None:
        self.assertEqual(subtract_mod(BigNumber(23), BigNumber(10), BigNumber(5)), BigNumber(5))

    def test_single_wrap(self) -> None:
        """5 - 10 mod 23 == (23 - 10) + 5 == 18"""
        self.assertEqual(subtract_mod(BigNumber(23), BigNumber(5), BigNumber(10)), BigNumber(18))

    def test_result_stays_reduced(self) -> None:
        N = BigNumber(23)
        for lhs in range(23):
            for rhs in range(23):
                result = subtract_mod(N, BigNumber(lhs), BigNumber(rhs))
                self.assertLess(result, N)
                self.assertEqual(int(result), (lhs - rhs) % 23)

    def test_unreduced_operands_rejected(self) -> None:
        N = BigNumber(23)
        with self.assertRaises(ValueError):
            subtract_mod(N, BigNumber(23), BigNumber(1))
        with self.assertRaises(ValueError):
            subtract_mod(N, BigNumber(1), BigNumber(30))

    def test_client_S_with_wraparound_in_small_group(self) -> None:
        """
        In a tiny group B often falls below k*g^x mod N; host and client
        must still agree.
        """
        params = DomainParams(BigNumber(23), BigNumber(5), key_length=1, salt_length=1)
        N = params.N
        salt = BigNumber(7)
        a = BigNumber(6)
        A = calculate_pubkey_A(params, a)

        wrapped = 0
        for password in ("p1", "p2", "p3", "p4", "p5", "p6"):
            x = calculate_private_key_x(params, "carol", password, salt)
            v = calculate_password_verifier_v(params, x)
            to_sub = (calculate_k(params) * v) % N

            for b_int in range(1, 23):
                b = BigNumber(b_int)
                B = calculate_pubkey_B(params, v, b)
                if (B % N).is_zero() or calculate_u(params, A, B).is_zero():
                    continue
                if B < to_sub:
                    wrapped += 1

                host_S = calculate_session_key_S_for_host(params, A, B, b, v)
                client_S = calculate_session_key_S_for_client(params, B, A, a, x)
                self.assertEqual(host_S, client_S)

        self.assertGreater(wrapped, 0)


if __name__ == "__main__":
    unittest.main()
