"""CLI command for minting a ParrOdessa42 token.

Usage:
    python -m parrodessa.cli mint [OPTIONS]

Examples:
    # Mint to the signer using CONTRACT_ADDRESS and METADATA_URI from .env
    python -m parrodessa.cli mint

    # Explicit contract and metadata
    python -m parrodessa.cli mint --contract-address 0x3eFe...637A \\
        --metadata-uri bafkreieg4lxxqed34oda2kixk4estsx5cspeuhezjr64kswxt6p3xnoqyy

    # Mint to another wallet, paying the public mint price
    python -m parrodessa.cli mint --to 0xabc... --pay-mint-price
"""

import asyncio
import sys
from argparse import ArgumentParser, Namespace

import structlog
from pydantic import ValidationError

from parrodessa.cli.common import RULE, load_settings, print_service_error, print_state
from parrodessa.models.mint import MintRequest
from parrodessa.services.blockchain.connection import connect, resolve_signer
from parrodessa.services.blockchain.contract import ParrOdessaContract
from parrodessa.services.blockchain.transactions import TransactionSender
from parrodessa.services.exceptions import ServiceError
from parrodessa.services.minting import MintingService

logger = structlog.get_logger()


def parse_args(argv: list[str] | None = None) -> Namespace:
    """Parse command-line arguments."""
    parser = ArgumentParser(
        description="Mint a ParrOdessa42 NFT on a deployed contract",
        epilog="Defaults come from CONTRACT_ADDRESS and METADATA_URI in the environment",
    )

    parser.add_argument(
        "--network",
        type=str,
        help="Override network setting (localhost, sepolia or mainnet)",
    )

    parser.add_argument(
        "--contract-address",
        type=str,
        help="Deployed contract address (default: CONTRACT_ADDRESS)",
    )

    parser.add_argument(
        "--metadata-uri",
        type=str,
        help="Token metadata URI or IPFS CID (default: METADATA_URI)",
    )

    parser.add_argument(
        "--to",
        type=str,
        help="Recipient address (default: signer address)",
    )

    parser.add_argument(
        "--pay-mint-price",
        action="store_true",
        help="Attach mintPrice() as transaction value (for non-owner mints)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    return parser.parse_args(argv)


async def async_main(argv: list[str] | None = None) -> int:
    """Main CLI entry point (async).

    Returns:
        Exit code: 0 (success), 1 (error)
    """
    args = parse_args(argv)

    settings = load_settings(args.verbose)
    if settings is None:
        return 1

    contract_address = args.contract_address or settings.contract_address
    metadata_uri = args.metadata_uri or settings.metadata_uri

    if not contract_address or not metadata_uri:
        print(
            "Error: contract address and metadata URI are required "
            "(--contract-address/--metadata-uri or CONTRACT_ADDRESS/METADATA_URI)",
            file=sys.stderr,
        )
        return 1

    print("Starting NFT minting process...")
    print("Minting parameters:")
    print(f"  Contract: {contract_address}")
    print(f"  Metadata URI: {metadata_uri}")

    try:
        profile = settings.get_network_profile(args.network)
        w3 = connect(profile)
        signer = resolve_signer(w3, profile, settings.private_key)

        try:
            request = MintRequest(recipient=args.to or signer.address, metadata_uri=metadata_uri)
        except ValidationError as e:
            print(f"Error: invalid mint request\n{e}", file=sys.stderr)
            return 1

        contract = ParrOdessaContract(w3, contract_address)
        service = MintingService(contract, TransactionSender(w3, profile, signer))

        print(f"Minting to: {request.recipient}")

        state = await contract.get_state_snapshot()
        print_state(state)
        await service.check_preconditions(state)

        value = state.mint_price_wei if args.pay_mint_price else 0

        print("\nMinting NFT...")
        tx_hash = await service.submit(request, value=value)
        print(f"Transaction hash: {tx_hash}")

        print("Waiting for confirmation...")
        result = await service.confirm(tx_hash, request)

    except ServiceError as e:
        logger.error("cli.mint_failed", error=str(e), error_kind=e.kind.value)
        print_service_error("Minting failed", e)
        return 1

    except Exception as e:
        logger.error(
            "cli.unexpected_error",
            error=str(e),
            error_type=type(e).__name__,
        )
        print(f"\nMinting failed: {e}", file=sys.stderr)
        return 1

    verified = "Verified" if result.ownership_verified else "Failed"

    print(f"Transaction confirmed in block: {result.block_number}")
    print("NFT minted successfully!")
    print(f"  Token ID: {result.token_id}")
    print(f"  Owner: {result.owner}")
    print(f"  Metadata URI: {request.metadata_uri}")
    print(f"Ownership verification: {verified}")
    print(f"Token URI: {result.token_uri}")
    print(f"Balance: {result.balance} NFT(s)")

    print("\nNext Steps:")
    tx_url = profile.tx_url(result.tx_hash)
    if tx_url:
        print(f"1. View your NFT transaction: {tx_url}")
    else:
        print("1. View your NFT on the block explorer")
    print("2. Test the ownerOf function")
    print("3. Transfer NFT to another address (optional)")

    print("\n" + RULE)
    print("Minting process completed!")
    print(RULE + "\n")

    if not result.ownership_verified:
        logger.error("cli.ownership_mismatch", owner=result.owner, recipient=result.recipient)
        return 1

    logger.info("cli.success", token_id=result.token_id)
    return 0


def main(argv: list[str] | None = None) -> None:
    """Synchronous entry point for CLI.

    web3 calls block inside the event loop, so Ctrl-C surfaces from
    asyncio.run() rather than from inside async_main().
    """
    try:
        exit_code = asyncio.run(async_main(argv))
    except KeyboardInterrupt:
        logger.info("cli.interrupted")
        print("\nMinting interrupted by user", file=sys.stderr)
        exit_code = 130  # Standard exit code for SIGINT
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
