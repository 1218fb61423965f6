#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Domain parameters shared by host and user: the prime modulus N, the
generator g and the fixed widths every hashed value is padded to.

The vetted groups come from RFC 5054 appendix A.
"""

from dataclasses import dataclass
from typing import Optional

from srp6.crypto.BigNumber import BYTEORDERS, BigNumber
from srp6.crypto.SRP6Errors import KeyLengthMismatch
from srp6.utils.ConfigLoader import ConfigLoader

DEFAULT_SALT_LENGTH = 32

# N in big-endian hex, g
RFC5054_GROUPS = {
    1024: (
        """
        EEAF0AB9 ADB38DD6 9C33F80A FA8FC5E8 60726187 75FF3C0B 9EA2314C
        9C256576 D674DF74 96EA81D3 383B4813 D692C6E0 E0D5D8E2 50B98BE4
        8E495C1D 6089DAD1 5DC7D7B4 6154D6B6 CE8EF4AD 69B15D49 82559B29
        7BCF1885 C529F566 660E57EC 68EDBC3C 05726CC0 2FD4CBF4 976EAA9A
        FD5138FE 8376435B 9FC61D2F C0EB06E3
        """,
        2,
    ),
    2048: (
        """
        AC6BDB41 324A9A9B F166DE5E 1389582F AF72B665 1987EE07 FC319294
        3DB56050 A37329CB B4A099ED 8193E075 7767A13D D52312AB 4B03310D
        CD7F48A9 DA04FD50 E8083969 EDB767B0 CF609517 9A163AB3 661A05FB
        D5FAAAE8 2918A996 2F0B93B8 55F97993 EC975EEA A80D740A DBF4FF74
        7359D041 D5C33EA7 1D281E44 6B14773B CA97B43A 23FB8016 76BD207A
        436C6481 F1D2B907 8717461A 5B9D32E6 88F87748 544523B5 24B0D57D
        5EA77A27 75D2ECFA 032CFBDB F52FB378 61602790 04E57AE6 AF874E73
        03CE5329 9CCC041C 7BC308D8 2A5698F3 A8D0C382 71AE35F8 E9DBFBB6
        94B5C803 D89F7AE4 35DE236D 525F5475 9B65E372 FCD68EF2 0FA7111F
        9E4AFF73
        """,
        2,
    ),
    3072: (
        """
        FFFFFFFF FFFFFFFF C90FDAA2 2168C234 C4C6628B 80DC1CD1 29024E08
        8A67CC74 020BBEA6 3B139B22 514A0879 8E3404DD EF9519B3 CD3A431B
        302B0A6D F25F1437 4FE1356D 6D51C245 E485B576 625E7EC6 F44C42E9
        A637ED6B 0BFF5CB6 F406B7ED EE386BFB 5A899FA5 AE9F2411 7C4B1FE6
        49286651 ECE45B3D C2007CB8 A163BF05 98DA4836 1C55D39A 69163FA8
        FD24CF5F 83655D23 DCA3AD96 1C62F356 208552BB 9ED52907 7096966D
        670C354E 4ABC9804 F1746C08 CA18217C 32905E46 2E36CE3B E39E772C
        180E8603 9B2783A2 EC07A28F B5C55DF0 6F4C52C9 DE2BCBF6 95581718
        3995497C EA956AE5 15D22618 98FA0510 15728E5A 8AAAC42D AD33170D
        04507A33 A85521AB DF1CBA64 ECFB8504 58DBEF0A 8AEA7157 5D060C7D
        B3970F85 A6E1E4C7 ABF5AE8C DB0933D7 1E8C94E0 4A25619D CEE3D226
        1AD2EE6B F12FFA06 D98A0864 D8760273 3EC86A64 521F2B18 177B200C
        BBE11757 7A615D6C 770988C0 BAD946E2 08E24FA0 74E5AB31 43DB5BFC
        E0FD108E 4B82D120 A93AD2CA FFFFFFFF FFFFFFFF
        """,
        5,
    ),
    4096: (
        """
        FFFFFFFF FFFFFFFF C90FDAA2 2168C234 C4C6628B 80DC1CD1 29024E08
        8A67CC74 020BBEA6 3B139B22 514A0879 8E3404DD EF9519B3 CD3A431B
        302B0A6D F25F1437 4FE1356D 6D51C245 E485B576 625E7EC6 F44C42E9
        A637ED6B 0BFF5CB6 F406B7ED EE386BFB 5A899FA5 AE9F2411 7C4B1FE6
        49286651 ECE45B3D C2007CB8 A163BF05 98DA4836 1C55D39A 69163FA8
        FD24CF5F 83655D23 DCA3AD96 1C62F356 208552BB 9ED52907 7096966D
        670C354E 4ABC9804 F1746C08 CA18217C 32905E46 2E36CE3B E39E772C
        180E8603 9B2783A2 EC07A28F B5C55DF0 6F4C52C9 DE2BCBF6 95581718
        3995497C EA956AE5 15D22618 98FA0510 15728E5A 8AAAC42D AD33170D
        04507A33 A85521AB DF1CBA64 ECFB8504 58DBEF0A 8AEA7157 5D060C7D
        B3970F85 A6E1E4C7 ABF5AE8C DB0933D7 1E8C94E0 4A25619D CEE3D226
        1AD2EE6B F12FFA06 D98A0864 D8760273 3EC86A64 521F2B18 177B200C
        BBE11757 7A615D6C 770988C0 BAD946E2 08E24FA0 74E5AB31 43DB5BFC
        E0FD108E 4B82D120 A9210801 1A723C12 A787E6D7 88719A10 BDBA5B26
        99C32718 6AF4E23C 1A946834 B6150BDA 2583E9CA 2AD44CE8 DBBBC2DB
        04DE8EF9 2E8EFC14 1FBECAA6 287C5947 4E6BC05D 99B2964F A090C3A2
        233BA186 515BE7ED 1F612970 CEE2D7AF B81BDD76 2170481C D0069127
        D5B05AA9 93B4EA98 8D8FDDC1 86FFB7DC 90A6C08F 4DF435C9 34063199
        FFFFFFFF FFFFFFFF
        """,
        5,
    ),
}


@dataclass(frozen=True)
class DomainParams:
    """
    N, g and the widths derived from them.

    key_length is the byte length of N; every public value, S and the
    verifier are padded to it before hashing. Construction fails fast when
    the modulus does not have exactly key_length bytes.
    """

    modulus: BigNumber
    generator: BigNumber
    key_length: int
    salt_length: int = DEFAULT_SALT_LENGTH
    byteorder: str = "little"

    def __post_init__(self) -> None:
        if self.modulus.num_bytes() != self.key_length:
            raise KeyLengthMismatch(self.modulus.num_bytes(), self.key_length)
        if self.salt_length <= 0:
            raise ValueError(f"salt_length must be positive, got {self.salt_length}")
        if self.byteorder not in BYTEORDERS:
            raise ValueError(f"byteorder must be one of {BYTEORDERS}, got {self.byteorder!r}")
        if not (2 <= int(self.generator) < int(self.modulus)):
            raise ValueError("generator must lie in [2, N)")

    # N and g read like the formulas
    @property
    def N(self) -> BigNumber:
        return self.modulus

    @property
    def g(self) -> BigNumber:
        return self.generator

    def pad(self, value: BigNumber) -> bytes:
        return value.to_array_pad_zero(self.key_length, self.byteorder)

    def pad_salt(self, value: BigNumber) -> bytes:
        return value.to_array_pad_zero(self.salt_length, self.byteorder)

    @classmethod
    def from_hex(
        cls,
        modulus_hex: str,
        generator: int,
        key_length: Optional[int] = None,
        salt_length: int = DEFAULT_SALT_LENGTH,
        byteorder: str = "little",
    ) -> "DomainParams":
        modulus = BigNumber.from_hex_str_be(modulus_hex)
        if key_length is None:
            key_length = modulus.num_bytes()
        return cls(modulus, BigNumber(generator), key_length, salt_length, byteorder)

    @classmethod
    def rfc5054(
        cls,
        bits: int = 2048,
        salt_length: int = DEFAULT_SALT_LENGTH,
        byteorder: str = "little",
    ) -> "DomainParams":
        """One of the vetted RFC 5054 groups, key_length = bits / 8."""
        try:
            modulus_hex, generator = RFC5054_GROUPS[bits]
        except KeyError:
            raise ValueError(
                f"Unknown RFC 5054 group {bits}, available: {sorted(RFC5054_GROUPS)}"
            )
        return cls.from_hex(modulus_hex, generator, bits // 8, salt_length, byteorder)

    @classmethod
    def from_config(cls, config: Optional[dict] = None) -> "DomainParams":
        """Build the group selected in the SRP6 config section."""
        cfg = (config if config is not None else ConfigLoader.get_config()).get("SRP6", {})
        return cls.rfc5054(
            bits=int(cfg.get("group", 2048)),
            salt_length=int(cfg.get("salt_length", DEFAULT_SALT_LENGTH)),
            byteorder=cfg.get("byteorder", "little"),
        )
