#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions.

Messages are hashed with BLAKE2b truncated to a 32 bytes digest
(i.e. blake2b-256, with digest_size as BLAKE2 parameter,
not a truncation of the 64 bytes digest).
"""

import hashlib
from typing import Any

from thorsig.alias import HashF, Octets
from thorsig.utils import bytes_from_octets

HASH_SIZE = 32


def new_blake2b256() -> Any:
    "Return a new blake2b-256 hash object (a HashF constructor)."
    return hashlib.blake2b(digest_size=HASH_SIZE)


def blake2b256(octets: Octets) -> bytes:
    """Return the BLAKE2b-256(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    return hashlib.blake2b(octets, digest_size=HASH_SIZE).digest()


def reduce_to_hlen(msg: Octets, hf: HashF = new_blake2b256) -> bytes:
    msg = bytes_from_octets(msg)
    # Step 4 of SEC 1 v.2 section 4.1.3
    h = hf()
    h.update(msg)
    return bytes(h.digest())
