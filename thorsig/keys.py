#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Private/public key pairs.

The private key is an integer in the [1, n-1] range;
the public key is the curve point Q = q*G,
also available as 'public key integer', i.e.
the uncompressed SEC representation without its 0x04 prefix
read as a big-endian integer.

The private key is never included in repr() or error messages.
"""

import secrets
from dataclasses import InitVar, dataclass, field
from typing import Optional, Union

from thorsig import libsecp256k1
from thorsig.alias import Point
from thorsig.curve import Curve, mult, secp256k1
from thorsig.exceptions import ThorSigValueError
from thorsig.sec_point import (
    bytes_from_point,
    int_from_point,
    point_from_int,
    point_from_octets,
)
from thorsig.utils import bytes_from_octets

# private key inputs: native int, or n_size bytes / hex-string
PrvKey = Union[int, bytes, str]


def int_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> int:
    """Return a verified-as-valid private key integer.

    It supports:

    - integer (native int)
    - n_size octets (bytes or hex-string)
    """

    if isinstance(prv_key, int):
        q = prv_key
    else:
        try:
            q = int.from_bytes(bytes_from_octets(prv_key, ec.n_size), "big")
        except ValueError as e:
            raise ThorSigValueError("not a private key") from e

    if not 0 < q < ec.n:
        raise ThorSigValueError("private key not in 1..n-1")

    return q


def _pub_key_from_int(q: int, ec: Curve) -> Point:
    # q is assumed to be a valid private key
    if ec == secp256k1 and libsecp256k1.is_available():
        return libsecp256k1.mult(q)
    return mult(q, ec.G, ec)


@dataclass(frozen=True)
class KeyPair:
    "Private key integer and its public key point."

    prv_key: int = field(repr=False)
    pub_key: Point
    ec: Curve = secp256k1
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        if not 0 < self.prv_key < self.ec.n:
            raise ThorSigValueError("private key not in 1..n-1")
        self.ec.require_on_curve(self.pub_key)
        if self.pub_key[1] == 0:
            raise ThorSigValueError("INF is not a valid public key")
        # a mismatching pair can never produce a recoverable signature
        if self.pub_key != _pub_key_from_int(self.prv_key, self.ec):
            raise ThorSigValueError("public key does not match private key")

    @classmethod
    def from_prv_key(cls, prv_key: PrvKey, ec: Curve = secp256k1) -> "KeyPair":
        "Return the KeyPair of the provided private key."
        q = int_from_prv_key(prv_key, ec)
        return cls(q, _pub_key_from_int(q, ec), ec, check_validity=False)

    @property
    def pub_key_int(self) -> int:
        "The public key as integer (uncompressed SEC, without prefix)."
        return int_from_point(self.pub_key, self.ec)

    def pub_key_bytes(self, compressed: bool = False) -> bytes:
        "The public key as SEC octets."
        return bytes_from_point(self.pub_key, self.ec, compressed)


def gen_keys(prv_key: Optional[PrvKey] = None, ec: Curve = secp256k1) -> KeyPair:
    """Return a private/public key pair.

    If the private key is not provided,
    a random one is generated.
    """
    if prv_key is None:
        # q in the range [1, ec.n-1]
        prv_key = 1 + secrets.randbelow(ec.n - 1)
    return KeyPair.from_prv_key(prv_key, ec)


def pub_key_int_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> int:
    "Return the public key integer of the provided private key."
    return gen_keys(prv_key, ec).pub_key_int


# public key inputs:
# KeyPair, Point tuple, public key integer, or SEC octets
Key = Union[KeyPair, Point, int, bytes, str]


def point_from_key(key: Key, ec: Curve = secp256k1) -> Point:
    """Return a verified-as-valid public key Point.

    It supports:

    - KeyPair
    - Point tuple
    - public key integer (uncompressed SEC without prefix)
    - SEC octets (bytes or hex-string, with 02, 03, or 04 prefix)
    """

    if isinstance(key, KeyPair):
        if key.ec != ec:
            raise ThorSigValueError(f"curve mismatch: {key.ec.name}")
        return key.pub_key

    if isinstance(key, tuple):
        Q = key
        ec.require_on_curve(Q)
    elif isinstance(key, int):
        Q = point_from_int(key, ec)
    else:
        Q = point_from_octets(key, ec)

    if Q[1] == 0:
        raise ThorSigValueError("not a valid public key: INF")
    return Q
