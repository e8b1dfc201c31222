#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Helper functions to use the libsecp256k1 python bindings.

The bindings are an optional dependency (thorsig[secp256k1]):
when not installed, is_available returns False
and callers use python-ecdsa instead.
"""

import contextlib
import logging

from thorsig.alias import INF, Point
from thorsig.exceptions import ThorSigRuntimeError

logger = logging.getLogger(__name__)

LIBSECP256K1_AVAILABLE = False
with contextlib.suppress(ImportError):
    from btclib_libsecp256k1 import ffi, lib

    LIBSECP256K1_AVAILABLE = True
    # Keeping a single one of these is most efficient.
    ctx = lib.secp256k1_context_create(769)
    # ctx = lib.secp256k1_context_create(
    #    lib.SECP256K1_CONTEXT_SIGN | lib.SECP256K1_CONTEXT_VERIFY
    # )
    EC_COMPRESSED = 258  # lib.SECP256K1_EC_COMPRESSED
    EC_UNCOMPRESSED = 2  # lib.SECP256K1_EC_UNCOMPRESSED

logger.debug("libsecp256k1 bindings available: %s", LIBSECP256K1_AVAILABLE)

# secp256k1 group order
_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def is_available() -> bool:
    return LIBSECP256K1_AVAILABLE


def pub_key_from_prv_key(prv_key: int, compressed: bool = True) -> bytes:
    """Derive the SEC public key from an integer private key."""

    if not 0 < prv_key < _ORDER:
        raise ThorSigRuntimeError("private key not in 1..n-1")
    prv_key_bytes = prv_key.to_bytes(32, byteorder="big", signed=False)

    pubkey_ptr = ffi.new("secp256k1_pubkey *")
    if not lib.secp256k1_ec_pubkey_create(ctx, pubkey_ptr, prv_key_bytes):
        raise ThorSigRuntimeError("secp256k1_ec_pubkey_create failure")
    length_ = 33 if compressed else 65
    serialized_pubkey_ptr = ffi.new(f"char[{length_}]")
    length = ffi.new("size_t *", length_)
    lib.secp256k1_ec_pubkey_serialize(
        ctx,
        serialized_pubkey_ptr,
        length,
        pubkey_ptr,
        EC_COMPRESSED if compressed else EC_UNCOMPRESSED,
    )  # according to documentation, it always returns 1
    return ffi.unpack(serialized_pubkey_ptr, length_)


def mult(num: int) -> Point:
    """Multiply the generator point."""
    m = num % _ORDER
    if m == 0:
        return INF
    pub_key = pub_key_from_prv_key(m, compressed=False)
    return int.from_bytes(pub_key[1:33], "big"), int.from_bytes(pub_key[33:], "big")
