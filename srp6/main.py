#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Demo harness: signup once, then authenticate by passing every message
through its JSON wire form, the way a real client and server would.
"""

import time

from srp6.crypto.DomainParams import DomainParams
from srp6.crypto.SRP6Credentials import generate_new_user_secrets
from srp6.crypto.SRP6Errors import SRP6Error
from srp6.crypto.SRP6Host import SRP6Host
from srp6.crypto.SRP6Messages import (
    ServerHandshake,
    UserDetails,
    UserHandshake,
    decode_proof,
    encode_proof,
)
from srp6.crypto.SRP6User import SRP6User
from srp6.utils.CliArgs import parse_args
from srp6.utils.ConfigLoader import ConfigLoader
from srp6.utils.Logger import Logger


def build_params(args) -> DomainParams:
    cfg = dict(ConfigLoader.get_config().get("SRP6", {}))
    if args.group:
        cfg["group"] = args.group
    if args.byteorder:
        cfg["byteorder"] = args.byteorder
    return DomainParams.from_config({"SRP6": cfg})


def authenticate(params: DomainParams, stored_details: str, username: str, password: str):
    """
    One full login. `stored_details` is the UserDetails JSON a credential
    store would hand the server.

    Returns:
        (host_secret, user_secret)
    """
    user = SRP6User(params)
    host = SRP6Host(params)
    with user, host:
        # user -> host
        wire = user.start_handshake(username).to_json()
        user_handshake = UserHandshake.from_json(wire)
        details = UserDetails.from_json(stored_details)

        # host -> user
        wire = host.continue_handshake(details, user_handshake.user_publickey).to_json()
        proof = user.update_handshake(ServerHandshake.from_json(wire), username, password)

        # user -> host, host -> user
        strong_proof, host_secret = host.verify_proof(decode_proof(encode_proof(proof)))
        user_secret = user.verify_proof(decode_proof(encode_proof(strong_proof)))

    return host_secret, user_secret


def run_signup(params: DomainParams, username: str, password: str) -> UserDetails:
    details = generate_new_user_secrets(username, password, params)

    Logger.success(f"Signup for user {username}")
    Logger.success(f" - Salt              [s] = {details.salt}")
    Logger.success(f" - Password verifier [v] = {details.verifier}")
    print(details.to_json())
    return details


def run_benchmark(params: DomainParams, username: str, password: str, loops: int) -> float:
    stored = generate_new_user_secrets(username, password, params).to_json()

    total = 0.0
    for _ in range(loops):
        start = time.perf_counter()
        host_secret, user_secret = authenticate(params, stored, username, password)
        total += time.perf_counter() - start
        if host_secret != user_secret:
            raise RuntimeError("host and user derived different secrets")

    average = total / loops
    Logger.success(f"Time elapsed in auth is: {average * 1000:.2f} ms (average of {loops})")
    return average


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        Logger.set_level("ALL")

    params = build_params(args)
    Logger.info(f"Using RFC 5054 group of {params.key_length * 8} bits, {params.byteorder} endian")

    try:
        if args.command == "signup":
            run_signup(params, args.username, args.password)
        elif args.command == "auth":
            if args.loops < 1:
                Logger.error("--loops must be at least 1")
                return 2
            run_benchmark(params, args.username, args.password, args.loops)
    except SRP6Error as e:
        Logger.error(f"Authentication failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
