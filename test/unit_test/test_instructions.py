"""
Test Instruction Registry

Tests for encoding and decoding instruction data by program name.
"""

import sys
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sen_adapter import ProgramRegistry, decode_instruction, encode_instruction
from sen_adapter.errors import InvalidArgument, LayoutError, LengthMismatch, UnknownInstruction
from sen_adapter.layout import BoolType, PubkeyType

OWNER = "SENBBKVCM7homnf5RX9zqpf1GFe935hnbU4uVzY1Y6M"


def sample_value(field_type):
    """Largest value for integers, a fixed key for pubkeys"""
    if isinstance(field_type, PubkeyType):
        return OWNER
    if isinstance(field_type, BoolType):
        return True
    return field_type.max_value


class TestRegistry:
    """Tests for ProgramRegistry"""

    def test_builtin_programs(self):
        assert ProgramRegistry.list() == ["farming", "ido", "purchasing", "splt", "stake", "swap"]
        assert ProgramRegistry.is_registered("swap")
        assert ProgramRegistry.get("SWAP") is ProgramRegistry.get("swap")

    def test_unknown_program(self):
        with pytest.raises(UnknownInstruction) as excinfo:
            ProgramRegistry.get("lending")
        assert "swap" in excinfo.value.message

    def test_register_rejects_taken_name(self, monkeypatch):
        builtin = {name: ProgramRegistry.get(name) for name in ProgramRegistry.list()}
        monkeypatch.setattr(ProgramRegistry, "_sets", builtin)
        swap = ProgramRegistry.get("swap")

        with pytest.raises(LayoutError):
            ProgramRegistry.register(ProgramRegistry.get("farming"), name="Swap")
        assert ProgramRegistry.get("swap") is swap

        ProgramRegistry.register(swap, name="swap_v2")
        assert ProgramRegistry.get("swap_v2") is swap

    @pytest.mark.parametrize("program", ["swap", "splt", "farming", "stake", "ido", "purchasing"])
    def test_every_variant_round_trips(self, program):
        instructions = ProgramRegistry.get(program)
        for variant in instructions.variants:
            fields = {name: sample_value(field_type) for name, field_type in variant.layout.fields}
            data = instructions.encode(variant.name, fields)
            assert len(data) == variant.span
            decoded = instructions.decode(data)
            assert (decoded.name, decoded.code, decoded.fields) == (variant.name, variant.code, fields)

    @pytest.mark.parametrize("program,count", [
        ("swap", 12), ("splt", 13), ("farming", 12), ("stake", 9), ("ido", 9), ("purchasing", 8),
    ])
    def test_variant_counts(self, program, count):
        assert len(ProgramRegistry.get(program)) == count


class TestSwapInstructions:
    """Tests for swap program payloads"""

    def test_swap(self):
        data = encode_instruction("swap", "swap", {"amount": 1_000_000_000, "limit": 299_000_000_000})
        assert data[0] == 3
        assert len(data) == 17
        assert int.from_bytes(data[1:9], "little") == 1_000_000_000
        assert int.from_bytes(data[9:17], "little") == 299_000_000_000

    def test_initialize_pool(self):
        fields = {"delta_a": 1, "delta_b": 2, "fee_ratio": 2_500_000, "tax_ratio": 500_000}
        data = encode_instruction("swap", "initializePool", fields)
        assert data[0] == 0
        assert len(data) == 33
        decoded = decode_instruction("swap", data)
        assert decoded.name == "initialize_pool"
        assert decoded.fields == fields

    def test_tag_only(self):
        assert encode_instruction("swap", "freeze_pool") == b"\x04"
        assert encode_instruction("swap", "ThawPool") == b"\x05"
        assert decode_instruction("swap", b"\x07").name == "transfer_ownership"

    def test_missing_field(self):
        with pytest.raises(InvalidArgument):
            encode_instruction("swap", "swap", {"amount": 1})

    def test_decode_errors(self):
        with pytest.raises(LengthMismatch):
            decode_instruction("swap", b"")
        with pytest.raises(UnknownInstruction):
            decode_instruction("swap", bytes([42]))
        with pytest.raises(LengthMismatch):
            decode_instruction("swap", bytes([3]) + bytes(15))


class TestProgramPayloads:
    """Payload layouts of the other programs"""

    def test_splt_transfer(self):
        data = encode_instruction("splt", "transfer", {"amount": 10})
        assert data == bytes([3]) + (10).to_bytes(8, "little")

    def test_splt_sync_native(self):
        assert encode_instruction("splt", "sync_native") == bytes([17])

    def test_splt_initialize_mint(self):
        fields = {
            "decimals": 9,
            "mint_authority": OWNER,
            "freeze_authority_option": 1,
            "freeze_authority": OWNER,
        }
        data = encode_instruction("splt", "initialize_mint", fields)
        assert len(data) == 1 + 1 + 32 + 1 + 32
        assert decode_instruction("splt", data).fields == fields

    def test_farming_initialize(self):
        data = encode_instruction("farming", "initialize_farm", {"reward": 5, "period": 86_400})
        assert data[0] == 0
        assert decode_instruction("farming", data).fields == {"reward": 5, "period": 86_400}

    def test_stake_carries_index(self):
        data = encode_instruction("stake", "stake", {"index": 2, "amount": 7})
        assert len(data) == 1 + 4 + 8
        assert data[1:5] == (2).to_bytes(4, "little")

    def test_ido_dates(self):
        fields = {"amount": 10, "startdate": 100, "middledate": 200, "enddate": 300}
        data = encode_instruction("ido", "initialize_ido", fields)
        assert len(data) == 33
        assert decode_instruction("ido", data).fields == fields

    def test_purchasing_place_order(self):
        fields = {"index": 1, "bid_amount": 10, "ask_amount": 20, "locked_time": -1}
        data = encode_instruction("purchasing", "place_order", fields)
        assert len(data) == 1 + 4 + 8 + 8 + 8
        assert decode_instruction("purchasing", data).fields == fields
