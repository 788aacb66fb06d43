"""Contract state snapshot - point-in-time view of ParrOdessa42 counters."""

from dataclasses import dataclass
from decimal import Decimal

from web3 import Web3


def format_ether(wei: int) -> str:
    """Format a wei amount as a plain decimal ether string ("0.01", "1")."""
    value = Decimal(Web3.from_wei(wei, "ether")).normalize()
    return format(value, "f")


@dataclass(frozen=True)
class ContractStateSnapshot:
    """Read-only view of supply, price and minting flag.

    Always fetched fresh from the chain; never cached between checks.
    """

    max_supply: int
    total_supply: int
    mint_price_wei: int
    minting_enabled: bool

    @property
    def mint_price_eth(self) -> str:
        return format_ether(self.mint_price_wei)

    @property
    def is_sold_out(self) -> bool:
        return self.total_supply >= self.max_supply

    @property
    def remaining_supply(self) -> int:
        return max(self.max_supply - self.total_supply, 0)
