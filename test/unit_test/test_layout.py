"""
Test Binary Layout Codec

Tests for field types, records and tagged instruction sets.
"""

import sys
from enum import IntEnum
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sen_adapter.errors import InvalidArgument, LayoutError, LengthMismatch, UnknownInstruction
from sen_adapter.layout import (
    InstructionSet,
    InstructionVariant,
    Struct,
    array,
    bool_,
    i64,
    i128,
    pub,
    u8,
    u16,
    u32,
    u64,
    u128,
)

OWNER = "SENBBKVCM7homnf5RX9zqpf1GFe935hnbU4uVzY1Y6M"
ZERO_ADDRESS = "11111111111111111111111111111111"


class Demo(IntEnum):
    PING = 0
    TRANSFER = 1
    CLOSE_ALL = 2


class TestFields:
    """Tests for fixed-width field types"""

    def test_sizes(self):
        assert [t.size for t in (u8, u16, u32, u64, i64, u128, i128, bool_, pub)] == [1, 2, 4, 8, 8, 16, 16, 1, 32]
        assert array(pub, 11).size == 352

    def test_little_endian(self):
        layout = Struct("ints", [("a", u16), ("b", u32), ("c", u64)])
        data = layout.encode({"a": 0x0102, "b": 0x03040506, "c": 1})
        assert data == bytes([0x02, 0x01, 0x06, 0x05, 0x04, 0x03, 1, 0, 0, 0, 0, 0, 0, 0])

    def test_range_limits(self):
        layout = Struct("limits", [("small", u8), ("big", u64), ("signed", i64)])
        ok = {"small": 255, "big": 2 ** 64 - 1, "signed": -(2 ** 63)}
        assert layout.decode(layout.encode(ok)) == ok

        for bad in ({"small": 256}, {"big": 2 ** 64}, {"signed": 2 ** 63}, {"small": -1}):
            values = {**ok, **bad}
            with pytest.raises(InvalidArgument):
                layout.encode(values)

    def test_wide_integers(self):
        layout = Struct("wide", [("debt", u128), ("compensation", i128)])
        values = {"debt": 2 ** 128 - 1, "compensation": -(2 ** 100)}
        data = layout.encode(values)
        assert len(data) == 32
        assert layout.decode(data) == values

    def test_bool_and_pubkey(self):
        layout = Struct("mixed", [("flag", bool_), ("owner", pub)])
        data = layout.encode({"flag": True, "owner": OWNER})
        assert data[0] == 1
        assert layout.decode(data) == {"flag": True, "owner": OWNER}

        with pytest.raises(InvalidArgument):
            layout.encode({"flag": 2, "owner": OWNER})
        with pytest.raises(InvalidArgument):
            layout.encode({"flag": False, "owner": "not-a-key"})

    def test_array(self):
        layout = Struct("signers", [("signers", array(pub, 3))])
        values = {"signers": [OWNER, ZERO_ADDRESS, OWNER]}
        assert layout.decode(layout.encode(values)) == values
        with pytest.raises(InvalidArgument):
            layout.encode({"signers": [OWNER]})

    def test_non_integer_rejected(self):
        layout = Struct("amount", [("amount", u64)])
        for bad in (1.0, "1", True, None):
            with pytest.raises(InvalidArgument):
                layout.encode({"amount": bad})


class TestStruct:
    """Tests for Struct records"""

    def test_span_and_names(self):
        layout = Struct("ticket", [("owner", pub), ("ido", pub), ("amount", u64), ("is_initialized", bool_)])
        assert layout.span == 73
        assert layout.field_names == ["owner", "ido", "amount", "is_initialized"]

    def test_duplicate_field(self):
        with pytest.raises(LayoutError):
            Struct("broken", [("amount", u64), ("amount", u8)])

    def test_missing_field(self):
        layout = Struct("pair", [("a", u64), ("b", u64)])
        with pytest.raises(InvalidArgument) as excinfo:
            layout.encode({"a": 1})
        assert excinfo.value.argument == "b"

    def test_length_guard(self):
        layout = Struct("pair", [("a", u64), ("b", u64)])
        data = layout.encode({"a": 1, "b": 2})
        with pytest.raises(LengthMismatch):
            layout.decode(data[:-1])
        with pytest.raises(LengthMismatch):
            layout.decode(data + b"\x00")

    def test_empty_record(self):
        layout = Struct("empty", [])
        assert layout.span == 0
        assert layout.encode() == b""
        assert layout.decode(b"") == {}


class TestInstructionSet:
    """Tests for tagged instruction sets"""

    def make_set(self):
        return InstructionSet("demo", [
            InstructionVariant(Demo.PING),
            InstructionVariant(Demo.TRANSFER, [("amount", u64), ("to", pub)]),
            InstructionVariant(Demo.CLOSE_ALL),
        ])

    def test_encode_layout(self):
        instructions = self.make_set()
        data = instructions.encode("transfer", {"amount": 5, "to": OWNER})
        assert len(data) == 1 + 8 + 32
        assert data[0] == 1
        assert data[1:9] == (5).to_bytes(8, "little")
        assert instructions.encode("ping") == b"\x00"

    def test_round_trip(self):
        instructions = self.make_set()
        decoded = instructions.decode(instructions.encode("transfer", {"amount": 5, "to": OWNER}))
        assert decoded.name == "transfer"
        assert decoded.code == 1
        assert decoded.fields == {"amount": 5, "to": OWNER}

    def test_name_normalization(self):
        instructions = self.make_set()
        assert instructions.encode("closeAll") == instructions.encode("close_all") == b"\x02"
        assert "CloseAll" in instructions
        assert "close" not in instructions
        assert len(instructions) == 3

    def test_unknown_name(self):
        with pytest.raises(UnknownInstruction):
            self.make_set().encode("burn")

    def test_decode_errors(self):
        instructions = self.make_set()
        with pytest.raises(LengthMismatch):
            instructions.decode(b"")
        with pytest.raises(UnknownInstruction):
            instructions.decode(b"\x09")
        with pytest.raises(LengthMismatch):
            instructions.decode(b"\x01" + b"\x00" * 8)
        with pytest.raises(LengthMismatch):
            instructions.decode(b"\x00\x00")

    def test_duplicate_tag(self):
        class Other(IntEnum):
            PONG = 0

        with pytest.raises(LayoutError):
            InstructionSet("broken", [InstructionVariant(Demo.PING), InstructionVariant(Other.PONG)])

    def test_duplicate_name(self):
        class Other(IntEnum):
            PING = 7

        with pytest.raises(LayoutError):
            InstructionSet("broken", [InstructionVariant(Demo.PING), InstructionVariant(Other.PING)])
