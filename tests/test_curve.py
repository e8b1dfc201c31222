#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `thorsig.curve` module."

import dataclasses
import secrets

import pytest

from thorsig.alias import INF
from thorsig.curve import (
    CURVES,
    add,
    double_mult,
    is_in_subgroup,
    mult,
    secp256k1,
)
from thorsig.exceptions import ThorSigTypeError, ThorSigValueError

ec = secp256k1


def test_secp256k1() -> None:
    assert ec.p == 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
    assert ec.n == 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
    assert ec.G == (
        0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
        0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    )
    assert ec.a == 0
    assert ec.b == 7
    assert ec.h == 1
    assert ec.p_size == 32
    assert ec.n_size == 32
    assert CURVES["secp256k1"] is ec

    assert "secp256k1" in str(ec)
    assert "secp256k1" in repr(ec)


def test_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        ec.n = 7  # type: ignore


def test_on_curve() -> None:
    for curve in CURVES.values():
        assert curve.is_on_curve(curve.G)
        assert curve.is_on_curve(INF)
        assert not curve.is_on_curve((curve.G[0], curve.G[1] + 1))
        with pytest.raises(ThorSigValueError, match="point not on curve"):
            curve.require_on_curve((curve.G[0], curve.G[1] + 1))

    with pytest.raises(ThorSigTypeError, match="point must be a tuple"):
        ec.is_on_curve((1, 2, 3))  # type: ignore
    with pytest.raises(ThorSigValueError, match="y-coordinate not in 1..p-1: "):
        ec.is_on_curve((ec.G[0], ec.p))
    with pytest.raises(ThorSigValueError, match="x-coordinate not in 0..p-1: "):
        ec.is_on_curve((ec.p, ec.G[1]))


def test_y_odd() -> None:
    for curve in CURVES.values():
        x_G, y_G = curve.G
        assert curve.y_odd(x_G, y_G & 1) == y_G
        assert curve.y_odd(x_G, 1 - (y_G & 1)) == curve.p - y_G
        assert curve.y_even(x_G) % 2 == 0
        assert curve.y_odd(x_G) % 2 == 1

    # 5 is not a valid x-coordinate in secp256k1
    with pytest.raises(ThorSigValueError, match="invalid x-coordinate: "):
        ec.y_odd(5)
    with pytest.raises(ThorSigValueError, match="x-coordinate not in 0..p-1: "):
        ec.y_odd(ec.p)
    with pytest.raises(ThorSigValueError, match="odd1even0 must be bool or 1/0"):
        ec.y_odd(ec.G[0], 2)


def test_mult() -> None:
    assert mult(1) == ec.G
    assert mult(0) == INF
    assert mult(ec.n) == INF
    assert mult(ec.n + 1) == ec.G
    assert mult(2) == (
        0xC6047F9441ED7D6D3045406E95C07CD85C778E4B8CEF3CA7ABAC09B95C709EE5,
        0x1AE168FEA63DC339A3C58419466CEAEEF7F632653266D0E1236431A950CFE52A,
    )
    assert mult(ec.n - 1) == (ec.G[0], ec.p - ec.G[1])
    # integer representations
    assert mult("0x02") == mult(2)
    assert mult(b"\x02") == mult(2)

    for curve in CURVES.values():
        q = 1 + secrets.randbelow(curve.n - 1)
        Q = mult(q, curve.G, curve)
        assert curve.is_on_curve(Q)
        assert mult(2, Q, curve) == add(Q, Q, curve)
        assert mult(q, INF, curve) == INF

    with pytest.raises(ThorSigValueError, match="point not on curve"):
        mult(2, (ec.G[0], ec.G[1] + 1))


def test_add() -> None:
    for curve in CURVES.values():
        G = curve.G
        minus_G = G[0], curve.p - G[1]
        assert add(G, INF, curve) == G
        assert add(INF, G, curve) == G
        assert add(INF, INF, curve) == INF
        assert add(G, minus_G, curve) == INF
        assert add(G, G, curve) == mult(2, G, curve)
        assert add(mult(2, G, curve), G, curve) == mult(3, G, curve)


def test_double_mult() -> None:
    for curve in CURVES.values():
        H = mult(1 + secrets.randbelow(curve.n - 1), curve.G, curve)
        u = secrets.randbelow(curve.n)
        v = secrets.randbelow(curve.n)
        expected = add(mult(u, H, curve), mult(v, curve.G, curve), curve)
        assert double_mult(u, H, v, curve.G, curve) == expected

        assert double_mult(0, H, v, curve.G, curve) == mult(v, curve.G, curve)
        assert double_mult(u, H, 0, curve.G, curve) == mult(u, H, curve)
        assert double_mult(0, H, 0, curve.G, curve) == INF
        assert double_mult(u, INF, v, curve.G, curve) == mult(v, curve.G, curve)
        # scalars are reduced mod n
        assert double_mult(u + curve.n, H, v, curve.G, curve) == expected


def test_subgroup() -> None:
    for curve in CURVES.values():
        assert is_in_subgroup(curve.G, curve)
        Q = mult(1 + secrets.randbelow(curve.n - 1), curve.G, curve)
        assert is_in_subgroup(Q, curve)
