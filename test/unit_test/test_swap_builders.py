"""
Test Swap Instruction Builders

Tests for address derivation and account metas of swap program instructions.
"""

import sys
from pathlib import Path

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sen_adapter.errors import InvalidArgument, PoolUnavailable
from sen_adapter.protocols.constants import (
    DEFAULT_SPLATA_PROGRAM_ID,
    DEFAULT_SPLT_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
)
from sen_adapter.protocols.swap import (
    DEFAULT_SWAP_PROGRAM_ID,
    SWAP_INSTRUCTIONS,
    RouteHop,
    build_initialize_pool_instruction,
    build_routing_instruction,
    build_swap_instruction,
    build_transfer_taxman_instruction,
    build_update_fee_instruction,
    build_wrap_sol_instruction,
    derive_pool_address,
    derive_proof_address,
    derive_treasurer_address,
    find_treasury,
)
from sen_adapter.types.common import WRAPPED_SOL_MINT
from sen_adapter.utils.address import create_strict_account, derive_associated_address

PROGRAM = Pubkey.from_string(DEFAULT_SWAP_PROGRAM_ID)


def new_address() -> Pubkey:
    return Keypair().pubkey()


@pytest.fixture(scope="module")
def pool():
    return create_strict_account(DEFAULT_SWAP_PROGRAM_ID).pubkey()


def make_hop(pool_address, taxman=None):
    return RouteHop(
        pool=pool_address,
        src=new_address(),
        src_mint=new_address(),
        treasury_bid=new_address(),
        dst=new_address(),
        dst_mint=new_address(),
        treasury_ask=new_address(),
        taxman=taxman or new_address(),
    )


class TestDerivation:
    """Tests for treasurer, proof and pool recovery"""

    def test_treasurer_is_off_curve(self, pool):
        treasurer = derive_treasurer_address(pool, PROGRAM)
        assert not treasurer.is_on_curve()
        assert derive_treasurer_address(str(pool), DEFAULT_SWAP_PROGRAM_ID) == treasurer

    def test_pool_recovered_from_lp_mint(self, pool):
        treasurer = derive_treasurer_address(pool, PROGRAM)
        proof = derive_proof_address(pool, PROGRAM)
        assert derive_pool_address(treasurer, proof, PROGRAM) == pool

    def test_foreign_mint(self, pool):
        proof = derive_proof_address(pool, PROGRAM)
        assert derive_pool_address(new_address(), proof, PROGRAM) is None

    def test_default_program_from_config(self, pool):
        assert derive_treasurer_address(pool) == derive_treasurer_address(pool, PROGRAM)

    def test_find_treasury(self):
        record = {"mint_a": "A", "treasury_a": "TA", "mint_b": "B", "treasury_b": "TB"}
        assert find_treasury("A", record) == "TA"
        assert find_treasury("B", record) == "TB"
        with pytest.raises(PoolUnavailable):
            find_treasury("C", record)


class TestBuilders:
    """Tests for instruction account metas and data"""

    def test_initialize_pool(self, pool):
        payer, owner, mint_a, mint_b = new_address(), new_address(), new_address(), new_address()
        mint_lpt, lpt, taxman = new_address(), new_address(), new_address()
        ix = build_initialize_pool_instruction(
            1_000, 2_000, payer, owner, pool, lpt, mint_lpt, taxman,
            new_address(), mint_a, new_address(), mint_b, program_id=PROGRAM,
        )
        assert ix.program_id == PROGRAM
        assert len(ix.accounts) == 18

        signers = [meta.pubkey for meta in ix.accounts if meta.is_signer]
        assert signers == [payer, pool, mint_lpt]

        treasurer = derive_treasurer_address(pool, PROGRAM)
        assert ix.accounts[6].pubkey == derive_proof_address(pool, PROGRAM)
        assert ix.accounts[9].pubkey == derive_associated_address(treasurer, mint_a)
        assert ix.accounts[12].pubkey == derive_associated_address(treasurer, mint_b)
        assert ix.accounts[13].pubkey == treasurer
        assert str(ix.accounts[14].pubkey) == SYSTEM_PROGRAM_ID

        decoded = SWAP_INSTRUCTIONS.decode(bytes(ix.data))
        assert decoded.name == "initialize_pool"
        assert decoded.fields["delta_a"] == 1_000
        assert decoded.fields["fee_ratio"] == 2_500_000

    def test_initialize_pool_same_mints(self, pool):
        mint = new_address()
        with pytest.raises(InvalidArgument):
            build_initialize_pool_instruction(
                1, 1, new_address(), new_address(), pool, new_address(), new_address(), new_address(),
                new_address(), mint, new_address(), mint, program_id=PROGRAM,
            )

    def test_non_strict_pool(self):
        # Roughly half of all keys hash onto the curve; find one
        for _ in range(256):
            candidate = new_address()
            try:
                derive_treasurer_address(candidate, PROGRAM)
            except InvalidArgument:
                return
        pytest.fail("No non-strict key found")

    def test_swap(self, pool):
        payer = new_address()
        hop = make_hop(pool)
        ix = build_swap_instruction(1_000, 990, payer, hop, program_id=PROGRAM)
        assert len(ix.accounts) == 15
        assert ix.accounts[0].pubkey == payer
        assert ix.accounts[0].is_signer
        assert ix.accounts[1].pubkey == pool
        assert ix.accounts[1].is_writable
        # Taxman treasury defaults to the taxman's associated account for dst_mint
        assert ix.accounts[9].pubkey == derive_associated_address(hop.taxman, hop.dst_mint)
        assert ix.accounts[10].pubkey == derive_treasurer_address(pool, PROGRAM)
        assert bytes(ix.data) == bytes([3]) + (1_000).to_bytes(8, "little") + (990).to_bytes(8, "little")

    def test_routing(self, pool):
        second_pool = create_strict_account(DEFAULT_SWAP_PROGRAM_ID).pubkey()
        hops = [make_hop(pool), make_hop(second_pool)]
        ix = build_routing_instruction(500, 0, new_address(), hops, program_id=PROGRAM)
        assert len(ix.accounts) == 5 + 2 * 10
        assert str(ix.accounts[2].pubkey) == DEFAULT_SPLT_PROGRAM_ID
        assert str(ix.accounts[4].pubkey) == DEFAULT_SPLATA_PROGRAM_ID
        assert ix.accounts[5].pubkey == pool
        assert ix.accounts[14].pubkey == derive_treasurer_address(pool, PROGRAM)
        assert ix.accounts[15].pubkey == second_pool
        assert ix.accounts[24].pubkey == derive_treasurer_address(second_pool, PROGRAM)
        assert bytes(ix.data)[0] == 8

    def test_routing_without_hops(self):
        with pytest.raises(InvalidArgument):
            build_routing_instruction(1, 0, new_address(), [], program_id=PROGRAM)

    def test_update_fee(self, pool):
        payer = new_address()
        ix = build_update_fee_instruction(3_000_000, 1_000_000, payer, pool, program_id=PROGRAM)
        assert [meta.pubkey for meta in ix.accounts] == [payer, pool]
        assert SWAP_INSTRUCTIONS.decode(bytes(ix.data)).fields == {"fee_ratio": 3_000_000, "tax_ratio": 1_000_000}

        with pytest.raises(InvalidArgument):
            build_update_fee_instruction(600_000_000, 400_000_000, payer, pool, program_id=PROGRAM)

    def test_transfer_taxman(self, pool):
        payer, taxman = new_address(), new_address()
        ix = build_transfer_taxman_instruction(payer, pool, taxman, program_id=PROGRAM)
        assert [meta.pubkey for meta in ix.accounts] == [payer, pool, taxman]
        assert bytes(ix.data) == bytes([6])

    def test_wrap_sol(self):
        payer = new_address()
        ix = build_wrap_sol_instruction(5_000_000, payer, program_id=PROGRAM)
        assert ix.accounts[1].pubkey == derive_associated_address(payer, WRAPPED_SOL_MINT)
        assert str(ix.accounts[2].pubkey) == WRAPPED_SOL_MINT
        assert bytes(ix.data) == bytes([11]) + (5_000_000).to_bytes(8, "little")
