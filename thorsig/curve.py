#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve domain parameters and point arithmetic.

A Curve is the prime order subgroup of the points of
an elliptic curve y^2 = x^3 + a*x + b over Fp,
generated by G, with order n and cofactor h.

Group arithmetic (addition, scalar multiplication,
double scalar multiplication, and point decompression)
is delegated to python-ecdsa:
points are exchanged as affine (x, y) tuples,
with INF as the infinity point,
and converted to python-ecdsa Jacobian points
only inside this module.

Curve instances are created at import time and never modified:
they are safely shared among threads.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ecdsa import curves
from ecdsa.ellipticcurve import INFINITY, PointJacobi
from ecdsa.errors import MalformedPointError

from thorsig.alias import INF, Integer, Point
from thorsig.exceptions import ThorSigTypeError, ThorSigValueError
from thorsig.utils import hex_string, int_from_integer, int_repr


@dataclass(frozen=True)
class Curve:
    "Prime order subgroup of the points of an elliptic curve over Fp."

    name: str
    # field prime
    p: int
    a: int
    b: int
    # generator
    G: Point
    # group order
    n: int
    # cofactor
    h: int
    p_size: int = field(init=False, repr=False, compare=False)
    n_size: int = field(init=False, repr=False, compare=False)
    # python-ecdsa CurveFp and generator (with lazy precomputation)
    _curve_fp: Any = field(init=False, repr=False, compare=False)
    _generator: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # frozen dataclass: derived attributes must bypass __setattr__
        object.__setattr__(self, "p_size", (self.p.bit_length() + 7) // 8)
        object.__setattr__(self, "n_size", (self.n.bit_length() + 7) // 8)
        object.__setattr__(self, "_curve_fp", None)
        object.__setattr__(self, "_generator", None)

    @classmethod
    def from_ecdsa_curve(cls, name: str, ecdsa_curve: Any) -> "Curve":
        "Return the Curve wrapping a python-ecdsa curve."

        curve_fp = ecdsa_curve.curve
        generator = ecdsa_curve.generator
        ec = cls(
            name,
            curve_fp.p(),
            curve_fp.a(),
            curve_fp.b(),
            (generator.x(), generator.y()),
            generator.order(),
            curve_fp.cofactor(),
        )
        object.__setattr__(ec, "_curve_fp", curve_fp)
        object.__setattr__(ec, "_generator", generator)
        return ec

    def __str__(self) -> str:
        result = f"Curve {self.name}"
        result += f"\n p   = {hex_string(self.p)}"
        result += f"\n a   = {int_repr(self.a)}"
        result += f"\n b   = {int_repr(self.b)}"
        result += f"\n x_G = {hex_string(self.G[0])}"
        result += f"\n y_G = {hex_string(self.G[1])}"
        result += f"\n n   = {hex_string(self.n)}"
        result += f"\n h   = {self.h}"
        return result

    def is_on_curve(self, Q: Point) -> bool:
        """Return True if the point is on the curve."""
        if len(Q) != 2:
            raise ThorSigTypeError("point must be a tuple[int, int]")
        if Q[1] == 0:  # Infinity point in affine coordinates
            return True
        if not 0 < Q[1] < self.p:  # y cannot be zero
            err_msg = f"y-coordinate not in 1..p-1: {int_repr(Q[1])}"
            raise ThorSigValueError(err_msg)
        if not 0 <= Q[0] < self.p:
            err_msg = f"x-coordinate not in 0..p-1: {int_repr(Q[0])}"
            raise ThorSigValueError(err_msg)
        return bool(self._curve_fp.contains_point(Q[0], Q[1]))

    def require_on_curve(self, Q: Point) -> None:
        """Require the input curve Point to be on the curve.

        An Error is raised if not.
        """
        if not self.is_on_curve(Q):
            raise ThorSigValueError("point not on curve")

    def y_odd(self, x: int, odd1even0: int = 1) -> int:
        """Return the odd/even affine y-coordinate associated to x.

        The point is decompressed by python-ecdsa
        from its SEC 1 compressed representation.
        """
        if odd1even0 not in (0, 1):
            raise ThorSigValueError("odd1even0 must be bool or 1/0")
        if not 0 <= x < self.p:
            raise ThorSigValueError(f"x-coordinate not in 0..p-1: {int_repr(x)}")
        prefix = b"\x03" if odd1even0 else b"\x02"
        x_bytes = x.to_bytes(self.p_size, byteorder="big", signed=False)
        try:
            R = PointJacobi.from_bytes(self._curve_fp, prefix + x_bytes)
        except MalformedPointError as e:
            raise ThorSigValueError(f"invalid x-coordinate: {int_repr(x)}") from e
        return R.y()

    def y_even(self, x: int) -> int:
        """Return the even affine y-coordinate associated to x."""
        return self.y_odd(x, 0)


secp256k1 = Curve.from_ecdsa_curve("secp256k1", curves.SECP256k1)
secp256r1 = Curve.from_ecdsa_curve("secp256r1", curves.NIST256p)

CURVES: Dict[str, Curve] = {
    "secp256k1": secp256k1,
    "secp256r1": secp256r1,
}


def _jac(Q: Point, ec: Curve, with_order: bool = True) -> Any:
    # affine tuple to python-ecdsa Jacobian point
    if Q[1] == 0:
        return INFINITY
    if with_order and Q == ec.G:
        return ec._generator  # pylint: disable=protected-access
    order = ec.n if with_order else None
    curve_fp = ec._curve_fp  # pylint: disable=protected-access
    return PointJacobi(curve_fp, Q[0], Q[1], 1, order)


def _aff(R: Any) -> Point:
    # python-ecdsa point to affine tuple
    if R == INFINITY:
        return INF
    R = R.to_affine()
    return R.x(), R.y()


def add(Q1: Point, Q2: Point, ec: Curve = secp256k1) -> Point:
    """Return the sum of two points.

    The input points must be on the curve.
    """
    ec.require_on_curve(Q1)
    ec.require_on_curve(Q2)
    if Q2[1] == 0:
        return Q1
    if Q1[1] == 0:
        return Q2
    return _aff(_jac(Q1, ec) + _jac(Q2, ec))


def mult(m: Integer, Q: Optional[Point] = None, ec: Curve = secp256k1) -> Point:
    """Elliptic curve scalar multiplication.

    Q defaults to the generator G;
    the scalar m is reduced mod n.
    """
    Q = ec.G if Q is None else Q
    ec.require_on_curve(Q)
    m = int_from_integer(m) % ec.n
    if m == 0:
        return INF
    return _aff(_jac(Q, ec) * m)


def _mult(m: int, Q: Point, ec: Curve) -> Point:
    # Private function: m is used as it is, i.e. without reduction mod n,
    # as needed to check that n*Q is INF.
    # The input point is assumed to be on curve.
    if m < 0:
        raise ThorSigValueError(f"negative m: {hex(m)}")
    if m == 0:
        return INF
    return _aff(_jac(Q, ec, with_order=False) * m)


def double_mult(
    u: Integer, H: Point, v: Integer, G: Point, ec: Curve = secp256k1
) -> Point:
    """Double scalar multiplication (u*H + v*G).

    Also known as 'sum of two multiplies';
    the scalars are reduced mod n.
    """
    ec.require_on_curve(H)
    ec.require_on_curve(G)
    u = int_from_integer(u) % ec.n
    v = int_from_integer(v) % ec.n
    if u == 0 or H[1] == 0:
        return mult(v, G, ec)
    if v == 0 or G[1] == 0:
        return mult(u, H, ec)
    return _aff(_jac(G, ec).mul_add(v, _jac(H, ec), u))


def is_in_subgroup(Q: Point, ec: Curve = secp256k1) -> bool:
    "Return True if n*Q is the infinity point."
    return _mult(ec.n, Q, ec)[1] == 0

