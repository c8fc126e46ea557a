"""
Common type definitions
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from ..utils.numeric import decimalize, undecimalize


@dataclass(frozen=True)
class Token:
    """
    Token information

    Attributes:
        mint: Token mint address (base58)
        symbol: Token symbol (e.g., "SOL", "SNTR")
        decimals: Number of decimal places
        name: Full token name (optional)
    """
    mint: str
    symbol: str
    decimals: int
    name: str = ""

    def __str__(self) -> str:
        return self.symbol

    def __repr__(self) -> str:
        return f"Token({self.symbol}, {self.mint[:8]}...)"

    @property
    def is_native_sol(self) -> bool:
        """Check if this is wrapped SOL"""
        return self.mint == WRAPPED_SOL_MINT

    def ui_amount(self, raw_amount: int) -> Decimal:
        """
        Convert raw amount to UI amount with full precision

        Args:
            raw_amount: Raw token amount (smallest units)

        Returns:
            UI amount as Decimal
        """
        return Decimal(undecimalize(raw_amount, self.decimals))

    def raw_amount(self, ui_amount: Union[Decimal, int, str]) -> int:
        """
        Convert UI amount to raw amount, truncating excess fraction digits

        Args:
            ui_amount: UI amount (Decimal, int or str)

        Returns:
            Raw token amount (smallest units)
        """
        return decimalize(ui_amount, self.decimals)


WRAPPED_SOL_MINT = "So11111111111111111111111111111111111111112"
SYSTEM_PROGRAM_ADDRESS = "11111111111111111111111111111111"

WRAPPED_SOL = Token(
    mint=WRAPPED_SOL_MINT,
    symbol="SOL",
    decimals=9,
    name="Wrapped SOL",
)
