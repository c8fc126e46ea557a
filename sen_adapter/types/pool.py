"""
Pool type definitions
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum
from typing import Optional

from ..errors import PoolUnavailable
from ..utils.numeric import PRECISION
from .common import Token


class PoolState(IntEnum):
    """
    Account state byte shared by pools, farms and token accounts
    """
    UNINITIALIZED = 0
    INITIALIZED = 1
    FROZEN = 2


@dataclass
class Pool:
    """
    Swap pool information

    Attributes:
        address: Pool address (base58)
        state: Pool state
        owner: Pool owner
        mint_lpt: LP token mint
        taxman: Tax recipient
        token_a: Token on side A
        treasury_a: Treasury holding reserve A
        reserve_a: Reserve A in base units
        token_b: Token on side B
        treasury_b: Treasury holding reserve B
        reserve_b: Reserve B in base units
        fee_ratio: Fee kept by the pool, parts per PRECISION
        tax_ratio: Tax sent to the taxman, parts per PRECISION
    """
    address: str
    state: PoolState
    owner: str
    mint_lpt: str
    taxman: str
    token_a: Token
    treasury_a: str
    reserve_a: int
    token_b: Token
    treasury_b: str
    reserve_b: int
    fee_ratio: int
    tax_ratio: int

    def __str__(self) -> str:
        return f"{self.symbol} (sen)"

    def __repr__(self) -> str:
        return f"Pool({self.symbol}, {self.address[:8]}...)"

    @property
    def symbol(self) -> str:
        return f"{self.token_a.symbol}/{self.token_b.symbol}"

    @property
    def is_tradable(self) -> bool:
        return self.state == PoolState.INITIALIZED and self.reserve_a > 0 and self.reserve_b > 0

    @property
    def fee_rate(self) -> Decimal:
        """Fee ratio as a fraction"""
        return Decimal(self.fee_ratio) / Decimal(PRECISION)

    @property
    def tax_rate(self) -> Decimal:
        """Tax ratio as a fraction"""
        return Decimal(self.tax_ratio) / Decimal(PRECISION)

    @property
    def price(self) -> Decimal:
        """UI price of token A in terms of token B"""
        if self.reserve_a == 0:
            return Decimal(0)
        return self.token_b.ui_amount(self.reserve_b) / self.token_a.ui_amount(self.reserve_a)

    def require_tradable(self) -> "Pool":
        """
        Raises:
            PoolUnavailable: If the pool is frozen, uninitialized or empty
        """
        if self.state != PoolState.INITIALIZED:
            raise PoolUnavailable.invalid_state(self.address, f"state is {self.state.name}")
        if self.reserve_a == 0 or self.reserve_b == 0:
            raise PoolUnavailable.invalid_state(self.address, "empty reserves")
        return self

    def get_token_by_mint(self, mint: str) -> Optional[Token]:
        """Get token by mint address"""
        if self.token_a.mint == mint:
            return self.token_a
        if self.token_b.mint == mint:
            return self.token_b
        return None

    def reserves_for(self, bid_mint: str):
        """
        (reserve_bid, reserve_ask) when selling bid_mint into the pool

        Raises:
            PoolUnavailable: If bid_mint is not one of the pool mints
        """
        if bid_mint == self.token_a.mint:
            return self.reserve_a, self.reserve_b
        if bid_mint == self.token_b.mint:
            return self.reserve_b, self.reserve_a
        raise PoolUnavailable.invalid_state(self.address, f"mint {bid_mint} is not in pool")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary"""
        return {
            "address": self.address,
            "state": self.state.name.lower(),
            "owner": self.owner,
            "mint_lpt": self.mint_lpt,
            "taxman": self.taxman,
            "token_a": {
                "mint": self.token_a.mint,
                "symbol": self.token_a.symbol,
                "decimals": self.token_a.decimals,
            },
            "token_b": {
                "mint": self.token_b.mint,
                "symbol": self.token_b.symbol,
                "decimals": self.token_b.decimals,
            },
            "treasury_a": self.treasury_a,
            "treasury_b": self.treasury_b,
            "reserve_a": str(self.reserve_a),
            "reserve_b": str(self.reserve_b),
            "fee_ratio": self.fee_ratio,
            "tax_ratio": self.tax_ratio,
            "price": str(self.price),
        }
