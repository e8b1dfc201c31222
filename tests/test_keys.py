#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `thorsig.keys` module."

import dataclasses

import pytest

from thorsig.alias import INF
from thorsig.curve import CURVES, mult, secp256k1, secp256r1
from thorsig.exceptions import ThorSigValueError
from thorsig.keys import (
    KeyPair,
    gen_keys,
    int_from_prv_key,
    point_from_key,
    pub_key_int_from_prv_key,
)
from thorsig.sec_point import bytes_from_point, int_from_point

ec = secp256k1


def test_int_from_prv_key() -> None:
    q = 0x1E99423A4ED27608A15A2616A2B0E9E52CED330AC530EDCC32C8FFC6A526AEDD
    assert int_from_prv_key(q) == q
    assert int_from_prv_key(q.to_bytes(32, "big")) == q
    assert int_from_prv_key(q.to_bytes(32, "big").hex()) == q
    assert int_from_prv_key(1) == 1
    assert int_from_prv_key(b"\x00" * 31 + b"\x01") == 1

    for invalid_q in (0, ec.n, -1, ec.n.to_bytes(32, "big"), b"\x00" * 32):
        with pytest.raises(ThorSigValueError, match="private key not in 1..n-1"):
            int_from_prv_key(invalid_q)

    with pytest.raises(ThorSigValueError, match="not a private key"):
        int_from_prv_key(b"\x01" * 31)
    with pytest.raises(ThorSigValueError, match="not a private key"):
        int_from_prv_key("not a hex-string")


def test_prv_key_never_exposed() -> None:
    q = 0x1E99423A4ED27608A15A2616A2B0E9E52CED330AC530EDCC32C8FFC6A526AEDD
    key_pair = gen_keys(q)
    assert str(q) not in repr(key_pair)
    assert hex(q)[2:] not in repr(key_pair).lower()

    q = ec.n + 1
    with pytest.raises(ThorSigValueError) as excinfo:
        gen_keys(q)
    assert str(q) not in str(excinfo.value)
    assert hex(q)[2:] not in str(excinfo.value).lower()


def test_gen_keys() -> None:
    key_pair = gen_keys(1)
    assert key_pair.prv_key == 1
    assert key_pair.pub_key == ec.G
    assert key_pair.ec == ec
    assert key_pair.pub_key_int == int_from_point(ec.G)
    assert key_pair.pub_key_bytes() == bytes_from_point(ec.G, compressed=False)
    assert key_pair.pub_key_bytes(compressed=True) == bytes_from_point(ec.G)
    assert pub_key_int_from_prv_key(1) == key_pair.pub_key_int

    for curve in CURVES.values():
        key_pair = gen_keys(ec=curve)
        assert 0 < key_pair.prv_key < curve.n
        assert key_pair.pub_key == mult(key_pair.prv_key, curve.G, curve)
        assert key_pair == KeyPair(key_pair.prv_key, key_pair.pub_key, curve)

    # random keys are not repeated
    assert gen_keys() != gen_keys()


def test_key_pair() -> None:
    key_pair = KeyPair(2, mult(2))
    assert key_pair == KeyPair.from_prv_key(2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        key_pair.prv_key = 3  # type: ignore

    err_msg = "public key does not match private key"
    with pytest.raises(ThorSigValueError, match=err_msg):
        KeyPair(1, mult(2))
    key_pair = KeyPair(1, mult(2), check_validity=False)
    with pytest.raises(ThorSigValueError, match=err_msg):
        key_pair.assert_valid()

    with pytest.raises(ThorSigValueError, match="private key not in 1..n-1"):
        KeyPair(0, mult(1))
    with pytest.raises(ThorSigValueError, match="point not on curve"):
        KeyPair(1, (ec.G[0], ec.G[1] + 1))
    with pytest.raises(ThorSigValueError, match="INF is not a valid public key"):
        KeyPair(1, INF)


def test_point_from_key() -> None:
    key_pair = gen_keys()
    Q = key_pair.pub_key
    for key in (
        key_pair,
        Q,
        key_pair.pub_key_int,
        key_pair.pub_key_bytes(),
        key_pair.pub_key_bytes(compressed=True),
        key_pair.pub_key_bytes().hex(),
    ):
        assert point_from_key(key) == Q

    with pytest.raises(ThorSigValueError, match="curve mismatch: "):
        point_from_key(key_pair, secp256r1)
    with pytest.raises(ThorSigValueError, match="not a valid public key: INF"):
        point_from_key(INF)
    with pytest.raises(ThorSigValueError, match="point not on curve"):
        point_from_key((Q[0], Q[1] + 1))
