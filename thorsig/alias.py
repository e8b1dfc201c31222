#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases.

mypy aliases, documenting also coding input conventions.
"""

from io import BytesIO
from typing import Any, Callable, Tuple, Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "deadbeef"
# "dead beef"
# "02 cc71eb30d653c0c3163990c47b976f3fb3f37cccdcbedb169a1dfef58bbfbfaf"
#
# use thorsig.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for message hashes (32 bytes), private keys (32 bytes),
# SEC points (33 or 65 bytes), and the compact
# [32-bytes r][32-bytes s][1-byte v] recoverable signature
Octets = Union[bytes, str]

# binary data, usually to be consumed as byte stream,
# but possibly provided as Octets too
BinaryData = Union[BytesIO, Octets]

# hex-string or bytes representation of an int
Integer = Union[bytes, str, int]

# Hash digest constructor: called without arguments
# it must return a hashlib-like object (update/digest/digest_size)
HashF = Callable[[], Any]

# Elliptic curve point in affine coordinates.
# Warning: to make Point a NamedTuple would slow down the code
Point = Tuple[int, int]

# Note that the infinity point in affine coordinates is INF = (int, 0)
# (no affine point has y=0 coordinate in a group of prime order).
# It can be checked with 'INF[1] == 0'
# The x-coordinate is arbitrary: 5 is preferred
# because it is not a valid x-coordinate in secp256k1
# (and even 5 + secp256k1.n is not a valid x-coordinate)
INF = 5, 0
