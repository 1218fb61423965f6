#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import hmac
import os
from typing import Callable

from srp6.crypto.DomainParams import DomainParams
from srp6.crypto.SRP6Messages import UserDetails
from srp6.crypto.SRP6Primitives import (
    calculate_password_verifier_v,
    calculate_private_key_x,
    generate_salt,
)
from srp6.utils.Logger import Logger


def generate_new_user_secrets(
    username: str,
    password: str,
    params: DomainParams,
    rand: Callable[[int], bytes] = os.urandom,
) -> UserDetails:
    """
    Create salt s and verifier v for a new user or a password change.

    Args:
        username (str): Username I.
        password (str): Cleartext password p, never stored.
        params (DomainParams): Group the verifier is computed in.
        rand: Random source for the salt.

    Returns:
        UserDetails: the record to hand to the credential store.
    """
    salt = generate_salt(params, rand)
    x = calculate_private_key_x(params, username, password, salt)
    verifier = calculate_password_verifier_v(params, x)

    Logger.info(f"[SRP6] Generated credentials for '{username}'")
    return UserDetails(username=username, salt=salt, verifier=verifier)


def check_password(username: str, password: str, details: UserDetails, params: DomainParams) -> bool:
    """
    Verify that username+password reproduce the stored verifier.

    Returns:
        bool: True if the verifier matches, False otherwise.
    """
    if details.verifier.num_bytes() > params.key_length:
        return False

    x = calculate_private_key_x(params, username, password, details.salt)
    expected = calculate_password_verifier_v(params, x)
    return hmac.compare_digest(params.pad(expected), params.pad(details.verifier))
