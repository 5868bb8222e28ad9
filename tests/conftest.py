"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from nbtcodec import (
    Byte,
    ByteArray,
    Compound,
    Double,
    Float,
    Int,
    IntArray,
    List,
    Long,
    LongArray,
    Short,
    String,
)


@pytest.fixture
def player() -> Compound:
    """Small root compound with a scalar, a string and a list."""
    return Compound(
        {
            "name": String("Bob"),
            "hp": Int(20),
            "tags": List([String("fast"), String("brave")]),
        }
    )


@pytest.fixture
def level() -> Compound:
    """Root compound exercising every tag type and nesting."""
    return Compound(
        {
            "byteTest": Byte(127),
            "shortTest": Short(32767),
            "intTest": Int(2147483647),
            "longTest": Long(9223372036854775807),
            "floatTest": Float(0.49823147058486938),
            "doubleTest": Double(0.49312871321823148),
            "stringTest": String("HELLO WORLD THIS IS A TEST STRING ÅÄÖ!"),
            "byteArrayTest": ByteArray(bytes((n * n * 255 + n * 7) % 100 for n in range(1000))),
            "intArrayTest": IntArray([0, -1, 2147483647, -2147483648]),
            "longArrayTest": LongArray([1, -(2**63), 2**63 - 1]),
            "listTest (long)": List([Long(11), Long(12), Long(13), Long(14), Long(15)]),
            "listTest (compound)": List(
                [
                    Compound({"name": String("Compound tag #0"), "created-on": Long(1264099775885)}),
                    Compound({"name": String("Compound tag #1"), "created-on": Long(1264099775885)}),
                ]
            ),
            "emptyList": List(),
            "nested compound test": Compound(
                {
                    "egg": Compound({"name": String("Eggbert"), "value": Float(0.5)}),
                    "ham": Compound({"name": String("Hampus"), "value": Float(0.75)}),
                }
            ),
            "listOfLists": List([List([Int(1), Int(2)]), List(), List([String("x")])]),
        }
    )
