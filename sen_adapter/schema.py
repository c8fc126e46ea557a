"""
Account schema registry

Declarative field layouts of every on-chain account the adapter reads.
Field order is wire order; offsets follow from the fixed widths.

The registry is built once at import and is read-only afterwards.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .errors import LayoutError, UnknownSchema
from .layout import Struct, array, bool_, i64, i128, pub, u8, u32, u64, u128

logger = logging.getLogger(__name__)


class AccountKind(Enum):
    """Closed set of account kinds known to the registry"""
    POOL = "pool"
    DEBT = "debt"
    FARM = "farm"
    MINT = "mint"
    ACCOUNT = "account"
    MULTISIG = "multisig"
    IDO = "ido"
    TICKET = "ticket"
    STAKE_DEBT = "stake_debt"
    STAKE_FARM = "stake_farm"
    ORDER = "order"
    RETAILER = "retailer"


# Swap program
POOL_SCHEMA = Struct(AccountKind.POOL.value, [
    ("owner", pub),
    ("state", u8),
    ("mint_lpt", pub),
    ("taxman", pub),
    ("mint_a", pub),
    ("treasury_a", pub),
    ("reserve_a", u64),
    ("mint_b", pub),
    ("treasury_b", pub),
    ("reserve_b", u64),
    ("fee_ratio", u64),
    ("tax_ratio", u64),
])

# Farming program
DEBT_SCHEMA = Struct(AccountKind.DEBT.value, [
    ("farm", pub),
    ("owner", pub),
    ("shares", u64),
    ("debt", u128),
    ("is_initialized", bool_),
])

FARM_SCHEMA = Struct(AccountKind.FARM.value, [
    ("owner", pub),
    ("state", u8),
    ("mint_stake", pub),
    ("treasury_stake", pub),
    ("mint_reward", pub),
    ("treasury_reward", pub),
    ("genesis_timestamp", i64),
    ("total_shares", u64),
    ("reward", u64),
    ("period", u64),
    ("compensation", i128),
])

# SPL token program
MINT_SCHEMA = Struct(AccountKind.MINT.value, [
    ("mint_authority_option", u32),
    ("mint_authority", pub),
    ("supply", u64),
    ("decimals", u8),
    ("is_initialized", bool_),
    ("freeze_authority_option", u32),
    ("freeze_authority", pub),
])

ACCOUNT_SCHEMA = Struct(AccountKind.ACCOUNT.value, [
    ("mint", pub),
    ("owner", pub),
    ("amount", u64),
    ("delegate_option", u32),
    ("delegate", pub),
    ("state", u8),
    ("is_native_option", u32),
    ("is_native", u64),
    ("delegated_amount", u64),
    ("close_authority_option", u32),
    ("close_authority", pub),
])

MULTISIG_SCHEMA = Struct(AccountKind.MULTISIG.value, [
    ("m", u8),
    ("n", u8),
    ("is_initialized", bool_),
    ("signers", array(pub, 11)),
])

# IDO program
IDO_SCHEMA = Struct(AccountKind.IDO.value, [
    ("owner", pub),
    ("startdate", i64),
    ("middledate", i64),
    ("enddate", i64),
    ("redeemdate", i64),
    ("total_sold", u64),
    ("total_raised", u64),
    ("sold_mint_treasury", pub),
    ("raised_mint_treasury", pub),
    ("is_initialized", bool_),
])

TICKET_SCHEMA = Struct(AccountKind.TICKET.value, [
    ("owner", pub),
    ("ido", pub),
    ("amount", u64),
    ("is_initialized", bool_),
])

# Stake program
STAKE_DEBT_SCHEMA = Struct(AccountKind.STAKE_DEBT.value, [
    ("farm", pub),
    ("owner", pub),
    ("shares", u64),
    ("reward_per_share", u64),
    ("created_at", i64),
    ("updated_at", i64),
    ("is_initialized", bool_),
])

STAKE_FARM_SCHEMA = Struct(AccountKind.STAKE_FARM.value, [
    ("owner", pub),
    ("state", u8),
    ("mint_stake", pub),
    ("treasury_stake", pub),
    ("mint_reward", pub),
    ("treasury_reward", pub),
    ("reward_per_share", u64),
    ("period", u64),
    ("scope", u64),
])

# Purchasing program
ORDER_SCHEMA = Struct(AccountKind.ORDER.value, [
    ("owner", pub),
    ("state", u8),
    ("retailer", pub),
    ("bid_amount", u64),
    ("ask_amount", u64),
    ("locked_time", i64),
    ("created_at", i64),
    ("updated_at", i64),
])

RETAILER_SCHEMA = Struct(AccountKind.RETAILER.value, [
    ("owner", pub),
    ("state", u8),
    ("mint_bid", pub),
    ("treasury_bid", pub),
    ("mint_ask", pub),
    ("treasury_ask", pub),
])


def _build_registry(schemas: Iterable[Struct]) -> Dict[str, Struct]:
    registry: Dict[str, Struct] = {}
    for schema in schemas:
        if schema.name in registry:
            raise LayoutError.duplicate("schema registry", "schema", schema.name)
        registry[schema.name] = schema
    missing = {kind.value for kind in AccountKind} - set(registry)
    if missing:
        raise LayoutError(f"Account kinds without schema: {sorted(missing)}", "schema registry")
    logger.debug(f"Account schema registry built: {len(registry)} schemas")
    return registry


SCHEMAS: Dict[str, Struct] = _build_registry([
    POOL_SCHEMA,
    DEBT_SCHEMA,
    FARM_SCHEMA,
    MINT_SCHEMA,
    ACCOUNT_SCHEMA,
    MULTISIG_SCHEMA,
    IDO_SCHEMA,
    TICKET_SCHEMA,
    STAKE_DEBT_SCHEMA,
    STAKE_FARM_SCHEMA,
    ORDER_SCHEMA,
    RETAILER_SCHEMA,
])


def get_schema(name: Union[str, AccountKind]) -> Struct:
    """
    Look up an account schema.

    Args:
        name: AccountKind or its name in any casing ("Pool", "stake_debt", "STAKE_DEBT")

    Raises:
        UnknownSchema: If no schema is registered under that name
    """
    key = name.value if isinstance(name, AccountKind) else str(name).lower()
    schema = SCHEMAS.get(key)
    if schema is None:
        raise UnknownSchema(str(name), ", ".join(sorted(SCHEMAS)))
    return schema


def list_schemas() -> List[str]:
    """Registered schema names"""
    return sorted(SCHEMAS)


def decode_account(name: Union[str, AccountKind], data: bytes) -> Dict[str, Any]:
    """
    Decode raw account bytes into a record.

    Raises:
        UnknownSchema: If name is not registered
        LengthMismatch: If len(data) differs from the schema span
    """
    return get_schema(name).decode(data)


def encode_account(name: Union[str, AccountKind], values: Mapping[str, Any]) -> bytes:
    """Encode a record into account bytes (fixtures, simulations)"""
    return get_schema(name).encode(values)


def match_schemas(data: bytes, names: Optional[Iterable[Union[str, AccountKind]]] = None) -> List[str]:
    """
    Names of the schemas whose span equals len(data).

    Several kinds can share a span, so the result is a candidate list rather
    than an answer.
    """
    candidates = [get_schema(name) for name in names] if names is not None else SCHEMAS.values()
    return [schema.name for schema in candidates if schema.span == len(data)]
