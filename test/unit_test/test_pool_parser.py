"""
Test Pool Parser with Mocks

Tests for reading pool and LP accounts through a mocked account reader.
"""

import base64
import sys
from decimal import Decimal
from pathlib import Path
from unittest.mock import Mock

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

SWAP_PROGRAM = "D8UuF1jPr5gtxHvnVz3HpxP2UkgtxLs9vwz7ecaTkrGy"
SPLT_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
SNTR_MINT = "SENBBKVCM7homnf5RX9zqpf1GFe935hnbU4uVzY1Y6M"
WSOL_MINT = "So11111111111111111111111111111111111111112"
ZERO_ADDRESS = "11111111111111111111111111111111"


def _pool_bytes(state=1, reserve_a=5_000_000_000_000, reserve_b=200_000_000_000):
    from sen_adapter.schema import encode_account

    return encode_account("pool", {
        "owner": ZERO_ADDRESS,
        "state": state,
        "mint_lpt": ZERO_ADDRESS,
        "taxman": ZERO_ADDRESS,
        "mint_a": SNTR_MINT,
        "treasury_a": ZERO_ADDRESS,
        "reserve_a": reserve_a,
        "mint_b": WSOL_MINT,
        "treasury_b": ZERO_ADDRESS,
        "reserve_b": reserve_b,
        "fee_ratio": 2_500_000,
        "tax_ratio": 500_000,
    })


def _mint_bytes(mint_authority, freeze_authority, decimals=9):
    from sen_adapter.schema import encode_account

    return encode_account("mint", {
        "mint_authority_option": 1,
        "mint_authority": mint_authority,
        "supply": 0,
        "decimals": decimals,
        "is_initialized": True,
        "freeze_authority_option": 1,
        "freeze_authority": freeze_authority,
    })


def _account_info(owner, data):
    return {"owner": owner, "lamports": 1, "data": [base64.b64encode(data).decode(), "base64"]}


def _mock_reader(accounts):
    """Reader answering get_account_info from an address -> info dict"""
    reader = Mock()
    reader.get_account_info.side_effect = lambda address, encoding="base64": accounts.get(address)
    return reader


def test_fetch_pool_data():
    """Test fetching and parsing a pool"""
    from sen_adapter.protocols.swap import fetch_pool_data

    print("Testing fetch_pool_data...")

    reader = _mock_reader({"pool1": _account_info(SWAP_PROGRAM, _pool_bytes())})
    record = fetch_pool_data(reader, "pool1", SWAP_PROGRAM)

    assert record["mint_a"] == SNTR_MINT
    assert record["reserve_a"] == 5_000_000_000_000
    assert record["fee_ratio"] == 2_500_000

    print("  fetch_pool_data: PASSED")


def test_fetch_pool_data_errors():
    """Test missing pool, wrong owner and bad data"""
    from sen_adapter.protocols.swap import fetch_pool_data
    from sen_adapter.errors import PoolUnavailable, ErrorCode

    print("Testing fetch_pool_data errors...")

    reader = _mock_reader({
        "foreign": _account_info(SPLT_PROGRAM, _pool_bytes()),
        "garbage": {"owner": SWAP_PROGRAM, "data": ["!!not base64!!", "base64"]},
    })

    try:
        fetch_pool_data(reader, "missing", SWAP_PROGRAM)
        assert False, "Should raise for a missing pool"
    except PoolUnavailable as e:
        assert e.code == ErrorCode.POOL_NOT_FOUND

    for address in ("foreign", "garbage"):
        try:
            fetch_pool_data(reader, address, SWAP_PROGRAM)
            assert False, f"Should raise for {address}"
        except PoolUnavailable as e:
            assert e.code == ErrorCode.POOL_INVALID_STATE

    print("  fetch_pool_data errors: PASSED")


def test_pool_state_to_pool():
    """Test converting a pool record to a Pool"""
    from sen_adapter.protocols.swap import parse_pool_data, pool_state_to_pool
    from sen_adapter.types import PoolState

    print("Testing pool_state_to_pool...")

    reader = _mock_reader({SNTR_MINT: _account_info(SPLT_PROGRAM, _mint_bytes(ZERO_ADDRESS, ZERO_ADDRESS, 6))})
    pool = pool_state_to_pool("pool1", parse_pool_data(_pool_bytes()), reader=reader)

    assert pool.state == PoolState.INITIALIZED
    assert pool.token_a.decimals == 6
    # Wrapped SOL needs no lookup
    assert pool.token_b.symbol == "SOL"
    assert reader.get_account_info.call_count == 1
    assert pool.is_tradable
    assert pool.fee_rate == Decimal("0.0025")
    assert pool.to_dict()["state"] == "initialized"

    print("  pool_state_to_pool: PASSED")


def test_require_tradable():
    """Test frozen and empty pools"""
    from sen_adapter.protocols.swap import parse_pool_data, pool_state_to_pool
    from sen_adapter.errors import PoolUnavailable

    print("Testing require_tradable...")

    frozen = pool_state_to_pool("pool1", parse_pool_data(_pool_bytes(state=2)))
    empty = pool_state_to_pool("pool2", parse_pool_data(_pool_bytes(reserve_b=0)))

    for pool in (frozen, empty):
        assert not pool.is_tradable
        try:
            pool.require_tradable()
            assert False, f"{pool.address} should not be tradable"
        except PoolUnavailable:
            pass

    print("  require_tradable: PASSED")


def test_pool_state_unknown():
    """Test a pool record with an undefined state byte"""
    from sen_adapter.protocols.swap import parse_pool_data, pool_state_to_pool
    from sen_adapter.errors import PoolUnavailable, ErrorCode

    print("Testing unknown pool state...")

    try:
        pool_state_to_pool("pool1", parse_pool_data(_pool_bytes(state=7)))
        assert False, "Should raise for state 7"
    except PoolUnavailable as e:
        assert e.code == ErrorCode.POOL_INVALID_STATE
        assert "7" in e.message

    print("  unknown pool state: PASSED")


def test_fetch_lpt_data():
    """Test recovering the pool behind an LP account"""
    from solders.keypair import Keypair
    from sen_adapter.protocols.swap import derive_proof_address, derive_treasurer_address, fetch_lpt_data
    from sen_adapter.schema import encode_account
    from sen_adapter.utils.address import create_strict_account

    print("Testing fetch_lpt_data...")

    pool = create_strict_account(SWAP_PROGRAM).pubkey()
    treasurer = derive_treasurer_address(pool, SWAP_PROGRAM)
    proof = derive_proof_address(pool, SWAP_PROGRAM)
    mint_lpt = str(Keypair().pubkey())

    lpt_bytes = encode_account("account", {
        "mint": mint_lpt,
        "owner": ZERO_ADDRESS,
        "amount": 1_000,
        "delegate_option": 0,
        "delegate": ZERO_ADDRESS,
        "state": 1,
        "is_native_option": 0,
        "is_native": 0,
        "delegated_amount": 0,
        "close_authority_option": 0,
        "close_authority": ZERO_ADDRESS,
    })
    reader = _mock_reader({
        "lpt1": _account_info(SPLT_PROGRAM, lpt_bytes),
        mint_lpt: _account_info(SPLT_PROGRAM, _mint_bytes(str(treasurer), str(proof))),
    })

    record = fetch_lpt_data(reader, "lpt1", SWAP_PROGRAM)
    assert record["pool"] == str(pool)
    assert record["amount"] == 1_000

    print("  fetch_lpt_data: PASSED")


def test_fetch_lpt_data_plain_mint():
    """Test that ordinary token accounts are rejected"""
    from solders.keypair import Keypair
    from sen_adapter.protocols.swap import fetch_lpt_data
    from sen_adapter.schema import encode_account
    from sen_adapter.errors import PoolUnavailable

    print("Testing fetch_lpt_data on a plain mint...")

    mint = str(Keypair().pubkey())
    account_bytes = encode_account("account", {
        "mint": mint, "owner": ZERO_ADDRESS, "amount": 5, "delegate_option": 0, "delegate": ZERO_ADDRESS,
        "state": 1, "is_native_option": 0, "is_native": 0, "delegated_amount": 0,
        "close_authority_option": 0, "close_authority": ZERO_ADDRESS,
    })
    reader = _mock_reader({
        "acc": _account_info(SPLT_PROGRAM, account_bytes),
        mint: _account_info(SPLT_PROGRAM, _mint_bytes(str(Keypair().pubkey()), ZERO_ADDRESS)),
    })

    try:
        fetch_lpt_data(reader, "acc", SWAP_PROGRAM)
        assert False, "Should reject a non-LP mint"
    except PoolUnavailable:
        pass

    print("  fetch_lpt_data plain mint: PASSED")


def main():
    """Run all pool parser tests"""
    print("=" * 60)
    print("Sen Adapter Pool Parser Tests")
    print("=" * 60)

    tests = [
        test_fetch_pool_data,
        test_fetch_pool_data_errors,
        test_pool_state_to_pool,
        test_require_tradable,
        test_pool_state_unknown,
        test_fetch_lpt_data,
        test_fetch_lpt_data_plain_mint,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
