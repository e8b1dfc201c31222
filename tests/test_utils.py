#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `thorsig.utils` module."

from io import BytesIO

import pytest

from thorsig.exceptions import ThorSigValueError
from thorsig.utils import (
    bytes_from_int,
    bytes_from_octets,
    bytesio_from_binarydata,
    hex_string,
    int_from_integer,
    int_repr,
)


def test_bytes_from_octets() -> None:
    assert bytes_from_octets("0a0B") == b"\x0a\x0b"
    assert bytes_from_octets(" 0a0b ") == b"\x0a\x0b"
    assert bytes_from_octets(b"\x0a\x0b", 2) == b"\x0a\x0b"
    assert bytes_from_octets("0a0b", (2, 3)) == b"\x0a\x0b"

    err_msg = "invalid size: 2 bytes instead of 3"
    with pytest.raises(ThorSigValueError, match=err_msg):
        bytes_from_octets(b"\x0a\x0b", 3)
    with pytest.raises(ThorSigValueError, match="invalid size: "):
        bytes_from_octets("0a0b", (3, 4))


def test_bytesio_from_binarydata() -> None:
    stream = bytesio_from_binarydata("0a0b")
    assert stream.read() == b"\x0a\x0b"
    stream = bytesio_from_binarydata(b"\x0a\x0b")
    assert stream.read() == b"\x0a\x0b"
    stream = BytesIO(b"\x0a\x0b")
    assert bytesio_from_binarydata(stream) is stream


def test_int_from_integer() -> None:
    for i in (0xDEADBEEF, "0xdeadbeef", "deadbeef", b"\xde\xad\xbe\xef"):
        assert int_from_integer(i) == 0xDEADBEEF
    assert int_from_integer(-0xDEADBEEF) == -0xDEADBEEF
    assert int_from_integer("-0xdeadbeef") == -0xDEADBEEF


def test_bytes_from_int() -> None:
    assert bytes_from_int(1) == b"\x00" * 31 + b"\x01"
    assert bytes_from_int(0) == b"\x00" * 32
    assert bytes_from_int(0xFF, 1) == b"\xff"
    i = (1 << 256) - 1
    assert bytes_from_int(i) == b"\xff" * 32
    # leading zero bytes are kept
    assert len(bytes_from_int(1 << 248)) == 32

    with pytest.raises(ThorSigValueError, match="negative integer: "):
        bytes_from_int(-1)
    with pytest.raises(ThorSigValueError, match="integer too large for 32 bytes: "):
        bytes_from_int(1 << 256)


def test_hex_string() -> None:
    assert hex_string(0xA) == "0A"
    assert hex_string(0x123456789) == "01 23456789"
    assert hex_string("0x0a") == "0A"
    with pytest.raises(ThorSigValueError, match="negative integer: "):
        hex_string(-1)


def test_int_repr() -> None:
    assert int_repr(42) == "42"
    assert int_repr(0xFFFFFFFF) == str(0xFFFFFFFF)
    assert int_repr(0x100000000) == "'01 00000000'"
