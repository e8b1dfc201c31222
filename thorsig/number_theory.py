#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Modular arithmetic functions.

Thin wrappers around python-ecdsa number theory,
raising thorsig exceptions where python-ecdsa is silent.
"""

from ecdsa import numbertheory

from thorsig.exceptions import ThorSigValueError
from thorsig.utils import int_repr


def mod_inv(a: int, m: int) -> int:
    """Return the inverse of a (mod m), m being a prime.

    python-ecdsa returns 0 as inverse of 0: here it is an error.
    """

    a %= m
    if a == 0:
        raise ThorSigValueError(f"No inverse for 0 mod {int_repr(m)}")
    return numbertheory.inverse_mod(a, m)
