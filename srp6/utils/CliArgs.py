#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse

from srp6.crypto.DomainParams import RFC5054_GROUPS


def build_parser():
    parser = argparse.ArgumentParser(prog="srp6-demo", description="SRP6 signup and authentication demo")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging output")
    parser.add_argument("-g", "--group", type=int, choices=sorted(RFC5054_GROUPS), help="RFC 5054 group size in bits")
    parser.add_argument("-o", "--byteorder", choices=("little", "big"), help="Byte order used for hashing")

    sub = parser.add_subparsers(dest="command", required=True)

    signup = sub.add_parser("signup", help="Create salt and verifier for a new user")
    signup.add_argument("-u", "--username", type=str, required=True, help="Username")
    signup.add_argument("-p", "--password", type=str, required=True, help="Password")

    auth = sub.add_parser("auth", help="Run full handshakes and report the average duration")
    auth.add_argument("-u", "--username", type=str, required=True, help="Username")
    auth.add_argument("-p", "--password", type=str, required=True, help="Password")
    auth.add_argument("-n", "--loops", type=int, default=10, help="Number of handshakes to run")

    return parser


def parse_args(argv=None):
    return build_parser().parse_args(argv)
