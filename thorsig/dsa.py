#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic Curve Digital Signature Algorithm (ECDSA).

Implementation according to SEC 1 v.2:

http://www.secg.org/sec1-v2.pdf

with public key recovery (section 4.1.6).

Nonces are ephemeral random numbers drawn from the secrets module
for each signature: they are never derived from the message
(no RFC6979) and never reused.
No 'lower-s' normalization is performed.
"""

import logging
import secrets
from dataclasses import InitVar, dataclass
from typing import Optional

from thorsig.alias import HashF, Octets, Point
from thorsig.curve import Curve, double_mult, is_in_subgroup, mult, secp256k1
from thorsig.exceptions import ThorSigRuntimeError, ThorSigValueError
from thorsig.hashes import new_blake2b256, reduce_to_hlen
from thorsig.keys import Key, PrvKey, int_from_prv_key, point_from_key
from thorsig.number_theory import mod_inv
from thorsig.utils import bytes_from_octets, int_repr

logger = logging.getLogger(__name__)

# fresh nonces to be tried before giving up on a degenerate (r, s)
MAX_NONCE_ATTEMPTS = 32


@dataclass(frozen=True)
class Sig:
    """ECDSA (r, s) signature.

    This is the raw signature produced by each signing attempt;
    see thorsig.signing.SignatureData for the recoverable
    [32-bytes r][32-bytes s][1-byte v] signature.
    """

    # 32 bytes scalar, 0 < r < ec.n (ec.n is the curve order)
    r: int
    # 32 bytes scalar, 0 < s < ec.n (ec.n is the curve order)
    s: int
    ec: Curve = secp256k1
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        # r is a scalar, fail if r is not in [1, n-1]
        if not 0 < self.r < self.ec.n:
            raise ThorSigValueError(f"scalar r not in 1..n-1: {int_repr(self.r)}")

        # s is a scalar, fail if s is not in [1, n-1]
        if not 0 < self.s < self.ec.n:
            raise ThorSigValueError(f"scalar s not in 1..n-1: {int_repr(self.s)}")


def challenge_(msg_hash: Octets, ec: Curve = secp256k1, hf: HashF = new_blake2b256) -> int:
    "Return the message hash as scalar, i.e. reduced mod n."

    # the message msg_hash: a hf_len array
    hf_len = hf().digest_size
    msg_hash = bytes_from_octets(msg_hash, hf_len)

    # big-endian unsigned integer, as many bits as the hash
    c = int.from_bytes(msg_hash, byteorder="big", signed=False)
    return c % ec.n


def _sign_(c: int, q: int, nonce: int, ec: Curve) -> Sig:
    # Private function for testing purposes: it allows to explore
    # degenerate nonces, i.e. those resulting in r = 0 or s = 0.
    # It assumes that c is in [0, n-1], while q and nonce are in [1, n-1]
    # Steps numbering follows SEC 1 v.2 section 4.1.3
    K = mult(nonce, ec.G, ec)  # 1

    # mod n makes the affine x_K-coordinate a scalar
    r = K[0] % ec.n  # 2, 3
    if r == 0:  # r≠0 required as it multiplies the public key
        raise ThorSigRuntimeError("failed to sign: r = 0")

    s = mod_inv(nonce, ec.n) * (c + r * q) % ec.n  # 6
    if s == 0:  # s≠0 required as verify will need the inverse of s
        raise ThorSigRuntimeError("failed to sign: s = 0")

    return Sig(r, s, ec)


def sign_(
    msg_hash: Octets,
    prv_key: PrvKey,
    nonce: Optional[PrvKey] = None,
    ec: Curve = secp256k1,
    hf: HashF = new_blake2b256,
) -> Sig:
    """Sign a hf_len bytes message hash according to ECDSA.

    If the nonce is not provided, a fresh random one is used;
    degenerate nonces are transparently replaced by new ones.
    An explicitly provided nonce is never replaced:
    it is meant for testing only, as reusing it with
    the same private key leaks the private key.
    """

    # the secret key q: an integer in the range 1..n-1.
    # SEC 1 v.2 section 3.2.1
    q = int_from_prv_key(prv_key, ec)

    # the challenge
    c = challenge_(msg_hash, ec, hf)  # 4, 5

    if nonce is not None:
        return _sign_(c, q, int_from_prv_key(nonce, ec), ec)

    for attempt in range(1, MAX_NONCE_ATTEMPTS + 1):
        # nonce: an integer in the range 1..n-1.
        k = 1 + secrets.randbelow(ec.n - 1)  # 1
        try:
            return _sign_(c, q, k, ec)
        except ThorSigRuntimeError as e:
            logger.debug("signing attempt %d discarded: %s", attempt, e)

    err_msg = f"failed to sign: no valid nonce in {MAX_NONCE_ATTEMPTS} attempts"
    raise ThorSigRuntimeError(err_msg)


def sign(
    msg: Octets,
    prv_key: PrvKey,
    nonce: Optional[PrvKey] = None,
    ec: Curve = secp256k1,
    hf: HashF = new_blake2b256,
) -> Sig:
    """ECDSA signature of a message.

    The message msg is first processed by hf, yielding the value

        msg_hash = hf(msg),

    a sequence of bits of length *hf_len*,
    then msg_hash is signed with sign_.
    """
    msg_hash = reduce_to_hlen(msg, hf)
    return sign_(msg_hash, prv_key, nonce, ec, hf)


def _assert_as_valid_(c: int, Q: Point, r: int, s: int, ec: Curve) -> None:
    # Private function for test/dev purposes
    # Steps numbering follows SEC 1 v.2 section 4.1.4

    w = mod_inv(s, ec.n)
    u = c * w % ec.n
    v = r * w % ec.n  # 4
    # Let K = u*G + v*Q.
    K = double_mult(v, Q, u, ec.G, ec)  # 5

    # Fail if infinite(K).
    if K[1] == 0:  # 5
        raise ThorSigRuntimeError("invalid (INF) key")

    # Fail if r ≠ x_K %n.
    if r != K[0] % ec.n:  # 6, 7, 8
        raise ThorSigRuntimeError("signature verification failed")


def assert_as_valid_(
    msg_hash: Octets, key: Key, sig: Sig, hf: HashF = new_blake2b256
) -> None:
    # It raises Errors, while verify should always return True or False
    sig.assert_valid()
    c = challenge_(msg_hash, sig.ec, hf)  # 2, 3
    Q = point_from_key(key, sig.ec)
    # second part delegated to helper function
    _assert_as_valid_(c, Q, sig.r, sig.s, sig.ec)


def assert_as_valid(
    msg: Octets, key: Key, sig: Sig, hf: HashF = new_blake2b256
) -> None:
    # It raises Errors, while verify should always return True or False
    msg_hash = reduce_to_hlen(msg, hf)
    assert_as_valid_(msg_hash, key, sig, hf)


def verify_(msg_hash: Octets, key: Key, sig: Sig, hf: HashF = new_blake2b256) -> bool:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4)."""
    # all kind of Exceptions are catched because
    # verify must always return a bool
    try:
        assert_as_valid_(msg_hash, key, sig, hf)
    except Exception:  # pylint: disable=broad-except
        return False

    return True


def verify(msg: Octets, key: Key, sig: Sig, hf: HashF = new_blake2b256) -> bool:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4)."""
    msg_hash = reduce_to_hlen(msg, hf)
    return verify_(msg_hash, key, sig, hf)


def _recover_pub_key_(key_id: int, e: int, r: int, s: int, ec: Curve) -> Optional[Point]:
    # Private function: key_id, r, and s are assumed already validated.
    # None is returned when there is no candidate public key.
    # Steps numbering follows SEC 1 v.2 section 4.1.6

    # r = x_K % ec.n, so x_K = r + j*ec.n
    # j = key_id // 2 is always zero for key_id in {0, 1}
    x_K = r + (key_id // 2) * ec.n  # 1.1
    if x_K >= ec.p:
        return None

    # y_K parity is selected by the lowest bit of key_id
    try:
        y_K = ec.y_odd(x_K, key_id & 1)  # 1.2, 1.3
    except ThorSigValueError:
        return None
    K = x_K, y_K

    if not is_in_subgroup(K, ec):  # 1.4
        return None

    # no inverse for r
    if r % ec.n == 0:
        return None

    # e is the message hash as integer (1.5)
    # Q = r^-1 (s*K - e*G)
    e_inv = -e % ec.n
    r_inv = mod_inv(r, ec.n)
    sr_inv = r_inv * s % ec.n
    e_inv_r_inv = r_inv * e_inv % ec.n
    Q = double_mult(sr_inv, K, e_inv_r_inv, ec.G, ec)  # 1.6.1
    if Q[1] == 0:
        return None
    return Q


def recover_pub_key_(
    key_id: int,
    r: int,
    s: int,
    msg_hash: Optional[Octets],
    ec: Curve = secp256k1,
) -> Optional[Point]:
    """ECDSA public key recovery (SEC 1 v.2 section 4.1.6).

    Return the candidate public key Point selected by key_id
    (the parity of the y-coordinate of the signature ephemeral point),
    or None if there is no such candidate.

    Invalid arguments (key_id not 0 or 1, negative r or s,
    missing message hash) raise ThorSigValueError.
    The message hash is read as big-endian unsigned integer.
    This function has no side effect.

    See also:
    - https://crypto.stackexchange.com/questions/18105/how-does-recovering-the-public-key-from-an-ecdsa-signature-work/18106#18106
    """

    if key_id not in (0, 1):
        raise ThorSigValueError(f"key_id must be 0 or 1: {key_id}")
    if r < 0:
        raise ThorSigValueError(f"r must be positive: {r}")
    if s < 0:
        raise ThorSigValueError(f"s must be positive: {s}")
    if msg_hash is None:
        raise ThorSigValueError("msg_hash cannot be None")

    e = int.from_bytes(bytes_from_octets(msg_hash), byteorder="big", signed=False)
    return _recover_pub_key_(key_id, e, r, s, ec)
