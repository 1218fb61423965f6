#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Tests for the srp6-demo command line harness."""

import io
import unittest
from contextlib import redirect_stdout
from unittest import mock

from srp6.crypto.DomainParams import DomainParams
from srp6.crypto.SRP6Credentials import generate_new_user_secrets
from srp6.crypto.SRP6Errors import InvalidProof
from srp6.crypto.SRP6Messages import UserDetails
from srp6.main import authenticate, build_params, main
from srp6.utils.CliArgs import parse_args
from srp6.utils.Logger import Logger


class MainTest(unittest.TestCase):

    def tearDown(self) -> None:
        Logger.set_level(None)

    def _run(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def test_build_params_from_cli(self) -> None:
        params = build_params(parse_args(["-g", "1024", "-o", "big", "signup", "-u", "bob", "-p", "pw"]))
        self.assertEqual(params.key_length, 128)
        self.assertEqual(params.byteorder, "big")

    def test_group_choices(self) -> None:
        params = build_params(parse_args(["-g", "4096", "signup", "-u", "bob", "-p", "pw"]))
        self.assertEqual(params.key_length, 512)
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit):
            with mock.patch("sys.stderr", io.StringIO()):
                parse_args(["-g", "1536", "signup", "-u", "bob", "-p", "pw"])

    def test_signup_prints_user_details(self) -> None:
        code, output = self._run(["-g", "1024", "signup", "-u", "bob", "-p", "pw"])
        self.assertEqual(code, 0)

        line = next(l for l in output.splitlines() if l.startswith("{"))
        details = UserDetails.from_json(line)
        self.assertEqual(details.username, "bob")

    def test_auth_benchmark(self) -> None:
        code, _ = self._run(["-g", "1024", "auth", "-u", "bob", "-p", "pw", "-n", "2"])
        self.assertEqual(code, 0)

    def test_auth_needs_one_loop(self) -> None:
        code, _ = self._run(["-g", "1024", "auth", "-u", "bob", "-p", "pw", "-n", "0"])
        self.assertEqual(code, 2)

    def test_authenticate_over_json(self) -> None:
        params = DomainParams.rfc5054(1024)
        stored = generate_new_user_secrets("bob", "pw", params).to_json()

        host_secret, user_secret = authenticate(params, stored, "bob", "pw")
        self.assertEqual(host_secret, user_secret)

    def test_authenticate_wrong_password(self) -> None:
        params = DomainParams.rfc5054(1024)
        stored = generate_new_user_secrets("bob", "pw", params).to_json()

        with self.assertRaises(InvalidProof):
            authenticate(params, stored, "bob", "not-pw")

    def test_command_required(self) -> None:
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit):
            with mock.patch("sys.stderr", io.StringIO()):
                parse_args(["-g", "1024"])


if __name__ == "__main__":
    unittest.main()
