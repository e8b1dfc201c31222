#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Recoverable ECDSA signatures.

A recoverable signature supplements the ECDSA (r, s) pair
with a recovery indicator v, so that the signer public key
can be recovered from signature and message hash alone,
without being transmitted.

For a given (r, s) two candidate public keys can be recovered,
one for each parity of the y-coordinate of the signature
ephemeral point: v is the parity leading to the signer key.
At signing time v is found by trial recovery;
in the negligible-probability case that neither parity
leads to the signer key, a new signature is generated
with a fresh nonce.

The signature is serialized in a compact 65-bytes (fixed size)
format:

    [32-bytes r][32-bytes s][1-byte v]

where r and s are big-endian and zero-padded,
and v is 0 or 1 (not offset by 27 or by any chain id).
"""

import logging
from dataclasses import InitVar, dataclass
from typing import Optional, Union

from thorsig import dsa
from thorsig.alias import BinaryData, Octets
from thorsig.curve import Curve, secp256k1
from thorsig.exceptions import ThorSigRuntimeError, ThorSigValueError
from thorsig.hashes import HASH_SIZE, new_blake2b256, reduce_to_hlen
from thorsig.keys import KeyPair, PrvKey
from thorsig.sec_point import int_from_point
from thorsig.utils import bytes_from_int, bytes_from_octets, bytesio_from_binarydata

logger = logging.getLogger(__name__)

# signatures to be tried before giving up on finding v
MAX_SIGN_ATTEMPTS = 32

_SCALAR_SIZE = 32
_REQUIRED_LENGTH = 2 * _SCALAR_SIZE + 1


@dataclass(frozen=True)
class SignatureData:
    """Recoverable signature: 1 byte v, 32 bytes r, 32 bytes s.

    r and s are kept as fixed-size big-endian byte strings:
    leading zero bytes are significant.
    Equality is structural over (v, r, s).
    """

    # recovery indicator: 0 or 1
    v: int
    # 32 bytes
    r: bytes
    # 32 bytes
    s: bytes
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        if self.v not in (0, 1):
            raise ThorSigValueError(f"invalid recovery indicator: {self.v}")
        if len(self.r) != _SCALAR_SIZE:
            err_msg = f"invalid r size: {len(self.r)} bytes"
            err_msg += f" instead of {_SCALAR_SIZE}"
            raise ThorSigValueError(err_msg)
        if len(self.s) != _SCALAR_SIZE:
            err_msg = f"invalid s size: {len(self.s)} bytes"
            err_msg += f" instead of {_SCALAR_SIZE}"
            raise ThorSigValueError(err_msg)

    @classmethod
    def from_ints(cls, v: int, r: int, s: int) -> "SignatureData":
        "Return the SignatureData with r and s zero-padded to 32 bytes."
        return cls(v, bytes_from_int(r, _SCALAR_SIZE), bytes_from_int(s, _SCALAR_SIZE))

    @property
    def r_int(self) -> int:
        return int.from_bytes(self.r, byteorder="big", signed=False)

    @property
    def s_int(self) -> int:
        return int.from_bytes(self.s, byteorder="big", signed=False)

    def serialize(self, check_validity: bool = True) -> bytes:
        "Return the [32-bytes r][32-bytes s][1-byte v] compact format."

        if check_validity:
            self.assert_valid()

        return b"".join([self.r, self.s, self.v.to_bytes(1, byteorder="big")])

    def to_bytes(self) -> bytes:
        return self.serialize()

    @classmethod
    def parse(cls, data: BinaryData, check_validity: bool = True) -> "SignatureData":
        "Return a SignatureData by parsing the 65 bytes compact format."

        stream = bytesio_from_binarydata(data)
        sig_bin = stream.read(_REQUIRED_LENGTH)

        if len(sig_bin) != _REQUIRED_LENGTH:
            err_msg = f"invalid signature length: {len(sig_bin)}"
            err_msg += f" instead of {_REQUIRED_LENGTH}"
            raise ThorSigValueError(err_msg)

        r = sig_bin[:_SCALAR_SIZE]
        s = sig_bin[_SCALAR_SIZE : 2 * _SCALAR_SIZE]
        v = sig_bin[-1]
        return cls(v, r, s, check_validity)


def recover_pub_key(
    key_id: int, r: int, s: int, msg_hash: Optional[Octets], ec: Curve = secp256k1
) -> Optional[int]:
    """Return the public key integer recovered from (r, s) and msg_hash.

    key_id (0 or 1) selects the candidate;
    None is returned if there is no candidate.
    The public key integer is the uncompressed SEC representation
    of the public key without its 0x04 prefix,
    read as a big-endian integer.
    """

    Q = dsa.recover_pub_key_(key_id, r, s, msg_hash, ec)
    return None if Q is None else int_from_point(Q, ec)


def _msg_hash(msg: Octets, hash_first: bool) -> bytes:
    if hash_first:
        return reduce_to_hlen(msg, new_blake2b256)
    # the message must already be a hash
    return bytes_from_octets(msg, HASH_SIZE)


def sign_message(
    msg: Octets, key_pair: Union[KeyPair, PrvKey], hash_first: bool = True
) -> SignatureData:
    """Return the recoverable signature of the message.

    If hash_first is True, the message is hashed with blake2b-256,
    otherwise it must already be a 32 bytes message hash.

    The recovery indicator v is the first key_id whose
    recovered public key matches the key pair one.
    Failing that, the message is signed again with a new nonce,
    up to MAX_SIGN_ATTEMPTS times.
    """

    if isinstance(key_pair, KeyPair):
        key_pair.assert_valid()
    else:
        key_pair = KeyPair.from_prv_key(key_pair)
    ec = key_pair.ec

    msg_hash = _msg_hash(msg, hash_first)
    pub_key = key_pair.pub_key_int

    # attempts recovering only keys not matching the key pair
    mismatches = 0
    for attempt in range(1, MAX_SIGN_ATTEMPTS + 1):
        sig = dsa.sign_(msg_hash, key_pair.prv_key, ec=ec)
        candidates = 0
        for key_id in (0, 1):
            candidate = recover_pub_key(key_id, sig.r, sig.s, msg_hash, ec)
            if candidate is None:
                continue
            if candidate == pub_key:
                return SignatureData.from_ints(key_id, sig.r, sig.s)
            candidates += 1
        if candidates:
            mismatches += 1
        logger.debug(
            "signing attempt %d: no recovery id found (%d candidates)",
            attempt,
            candidates,
        )

    err_msg = f"no recovery id found in {MAX_SIGN_ATTEMPTS} attempts"
    if mismatches:
        err_msg += f", {mismatches} of them recovered only keys"
        err_msg += " not matching the key pair"
    raise ThorSigRuntimeError(err_msg)


def recover_pub_key_from_sig(
    sig: Union[SignatureData, BinaryData],
    msg: Octets,
    hash_first: bool = True,
    ec: Curve = secp256k1,
) -> int:
    """Return the signer public key integer.

    The signature can be a SignatureData
    or its 65 bytes compact serialization.
    """

    if isinstance(sig, SignatureData):
        sig.assert_valid()
    else:
        sig = SignatureData.parse(sig)

    msg_hash = _msg_hash(msg, hash_first)
    pub_key = recover_pub_key(sig.v, sig.r_int, sig.s_int, msg_hash, ec)
    if pub_key is None:
        raise ThorSigValueError("no public key can be recovered from the signature")
    return pub_key
