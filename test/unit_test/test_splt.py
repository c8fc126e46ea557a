"""
Test SPL Token Builders

Tests for token program instructions, wrapped SOL and account parsing.
"""

import base64
import struct
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sen_adapter.errors import InvalidArgument, LengthMismatch
from sen_adapter.protocols.constants import (
    DEFAULT_SPLATA_PROGRAM_ID,
    DEFAULT_SPLT_PROGRAM_ID,
    RENT_SYSVAR_ID,
    SYSTEM_PROGRAM_ID,
)
from sen_adapter.protocols.splt import (
    MAX_SIGNERS,
    SPLT_INSTRUCTIONS,
    AuthorityType,
    build_create_associated_account_instruction,
    build_initialize_mint_instruction,
    build_initialize_multisig_instruction,
    build_set_authority_instruction,
    build_transfer_instruction,
    build_unwrap_instruction,
    build_wrap_instructions,
    fetch_mint_data,
    parse_multisig_data,
)
from sen_adapter.schema import MINT_SCHEMA, MULTISIG_SCHEMA
from sen_adapter.types.common import WRAPPED_SOL_MINT
from sen_adapter.utils.address import derive_associated_address

SPLT = Pubkey.from_string(DEFAULT_SPLT_PROGRAM_ID)
SPLATA = Pubkey.from_string(DEFAULT_SPLATA_PROGRAM_ID)
ZERO_ADDRESS = "11111111111111111111111111111111"


def new_address() -> Pubkey:
    return Keypair().pubkey()


class TestTokenInstructions:
    """Tests for plain token program builders"""

    def test_transfer(self):
        source, destination, authority = new_address(), new_address(), new_address()
        ix = build_transfer_instruction(42, source, destination, authority)
        assert ix.program_id == SPLT
        assert bytes(ix.data) == bytes([3]) + struct.pack("<Q", 42)
        assert [meta.pubkey for meta in ix.accounts] == [source, destination, authority]
        assert ix.accounts[2].is_signer
        assert not ix.accounts[2].is_writable

    def test_initialize_mint_without_freeze(self):
        mint, authority = new_address(), new_address()
        ix = build_initialize_mint_instruction(6, mint, authority)
        fields = SPLT_INSTRUCTIONS.decode(bytes(ix.data)).fields
        assert fields["decimals"] == 6
        assert fields["mint_authority"] == str(authority)
        assert fields["freeze_authority_option"] == 0
        assert str(ix.accounts[1].pubkey) == RENT_SYSVAR_ID

    def test_set_authority_option_byte(self):
        target, current, new = new_address(), new_address(), new_address()

        ix = build_set_authority_instruction(AuthorityType.FREEZE_ACCOUNT, target, current, new)
        data = bytes(ix.data)
        assert data[0] == 6
        assert data[1] == int(AuthorityType.FREEZE_ACCOUNT)
        assert data[2] == 1
        assert data[3:35] == bytes(new)

        ix = build_set_authority_instruction(AuthorityType.MINT_TOKENS, target, current)
        fields = SPLT_INSTRUCTIONS.decode(bytes(ix.data)).fields
        assert fields["new_authority_option"] == 0
        assert fields["new_authority"] == ZERO_ADDRESS

    def test_multisig_bounds(self):
        signers = [new_address() for _ in range(3)]
        ix = build_initialize_multisig_instruction(2, new_address(), signers)
        assert len(ix.accounts) == 2 + 3
        assert bytes(ix.data) == bytes([2, 2])

        with pytest.raises(InvalidArgument):
            build_initialize_multisig_instruction(4, new_address(), signers)
        with pytest.raises(InvalidArgument):
            build_initialize_multisig_instruction(0, new_address(), signers)
        with pytest.raises(InvalidArgument):
            build_initialize_multisig_instruction(1, new_address(), [new_address() for _ in range(MAX_SIGNERS + 1)])


class TestAssociatedAccounts:
    """Tests for associated accounts and wrapped SOL"""

    def test_create_associated_account(self):
        payer, owner, mint = new_address(), new_address(), new_address()
        ix = build_create_associated_account_instruction(payer, owner, mint)
        assert ix.program_id == SPLATA
        assert bytes(ix.data) == bytes([1])
        assert ix.accounts[1].pubkey == derive_associated_address(owner, mint)
        assert str(ix.accounts[4].pubkey) == SYSTEM_PROGRAM_ID
        assert ix.accounts[5].pubkey == SPLT

    def test_wrap_sequence(self):
        owner = new_address()
        wsol = derive_associated_address(owner, WRAPPED_SOL_MINT)
        create, transfer, sync = build_wrap_instructions(1_000_000, owner)

        assert create.program_id == SPLATA
        assert str(transfer.program_id) == SYSTEM_PROGRAM_ID
        assert bytes(transfer.data) == struct.pack("<IQ", 2, 1_000_000)
        assert [meta.pubkey for meta in transfer.accounts] == [owner, wsol]
        assert sync.program_id == SPLT
        assert bytes(sync.data) == bytes([17])
        assert sync.accounts[0].pubkey == wsol

    def test_wrap_zero(self):
        with pytest.raises(InvalidArgument):
            build_wrap_instructions(0, new_address())

    def test_unwrap_closes_to_owner(self):
        owner = new_address()
        ix = build_unwrap_instruction(owner)
        assert bytes(ix.data) == bytes([9])
        assert [meta.pubkey for meta in ix.accounts] == [
            derive_associated_address(owner, WRAPPED_SOL_MINT), owner, owner,
        ]


class TestAccountParsing:
    """Tests for mint, token account and multisig parsing"""

    def test_fetch_mint(self):
        mint_data = MINT_SCHEMA.encode({
            "mint_authority_option": 1,
            "mint_authority": ZERO_ADDRESS,
            "supply": 1_000,
            "decimals": 9,
            "is_initialized": True,
            "freeze_authority_option": 0,
            "freeze_authority": ZERO_ADDRESS,
        })
        reader = Mock()
        reader.get_account_info.return_value = {
            "owner": DEFAULT_SPLT_PROGRAM_ID,
            "data": [base64.b64encode(mint_data).decode(), "base64"],
        }
        record = fetch_mint_data(reader, "mint")
        assert record["decimals"] == 9
        assert record["supply"] == 1_000
        reader.get_account_info.assert_called_once_with("mint", encoding="base64")

    def test_fetch_missing(self):
        reader = Mock()
        reader.get_account_info.return_value = None
        with pytest.raises(InvalidArgument):
            fetch_mint_data(reader, "mint")

    def test_fetch_wrong_size(self):
        reader = Mock()
        reader.get_account_info.return_value = {"data": base64.b64encode(bytes(165)).decode()}
        with pytest.raises(LengthMismatch):
            fetch_mint_data(reader, "account")

    def test_multisig_unused_slots(self):
        signer = str(new_address())
        data = MULTISIG_SCHEMA.encode({
            "m": 1,
            "n": 1,
            "is_initialized": True,
            "signers": [signer] + [ZERO_ADDRESS] * 10,
        })
        record = parse_multisig_data(data)
        assert record["signers"][0] == signer
        assert record["signers"][1:] == [ZERO_ADDRESS] * 10
