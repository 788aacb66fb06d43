"""Console helpers shared by the deploy and mint commands."""

import sys

from pydantic import ValidationError

from parrodessa.core.config import Settings, configure_logging
from parrodessa.models.contract_state import ContractStateSnapshot
from parrodessa.services.exceptions import ErrorKind, ServiceError

RULE = "=" * 60

ERROR_HINTS = {
    ErrorKind.CONFIGURATION_ERROR: "Check your .env file and command-line options",
    ErrorKind.NETWORK_ERROR: "Check the RPC URL for the selected network",
    ErrorKind.CONTRACT_NOT_FOUND: "Check the contract address and the selected network",
    ErrorKind.INSUFFICIENT_FUNDS: "Make sure you have enough ETH for gas fees",
    ErrorKind.SUPPLY_CAP_REACHED: "Every NFT up to MAX_SUPPLY has been minted",
    ErrorKind.MINTING_DISABLED: "Minting has been disabled by the contract owner",
    ErrorKind.TRANSACTION_REVERTED: "Inspect the transaction on the block explorer",
    ErrorKind.TRANSACTION_TIMEOUT: "The transaction may still confirm; check the block explorer",
}


def load_settings(verbose: bool = False) -> Settings | None:
    """Load settings and configure logging. Prints the problem and returns None on bad config."""
    try:
        settings = Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        print(f"Error: invalid configuration\n{e}", file=sys.stderr)
        return None

    if verbose:
        settings.log_level = "DEBUG"

    configure_logging(settings)
    return settings


def print_service_error(prefix: str, error: ServiceError) -> None:
    """Print a failure line and the operator hint for its kind."""
    print(f"\n{prefix}: {error}", file=sys.stderr)
    hint = ERROR_HINTS.get(error.kind)
    if hint:
        print(f"Hint: {hint}", file=sys.stderr)


def print_state(state: ContractStateSnapshot) -> None:
    print("\nContract State:")
    print(f"  Max Supply: {state.max_supply}")
    print(f"  Current Supply: {state.total_supply}")
    print(f"  Remaining Supply: {state.remaining_supply}")
    print(f"  Mint Price: {state.mint_price_eth} ETH")
    print(f"  Minting Enabled: {state.minting_enabled}")
