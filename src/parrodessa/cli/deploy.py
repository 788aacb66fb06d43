"""CLI command for deploying the ParrOdessa42 contract.

Usage:
    python -m parrodessa.cli deploy [OPTIONS]

Examples:
    # Deploy with the default name, symbol and base URI to NETWORK
    python -m parrodessa.cli deploy

    # Deploy to a local Hardhat/Anvil node
    python -m parrodessa.cli deploy --network localhost

    # Custom constructor arguments
    python -m parrodessa.cli deploy --name "My Collection" --symbol MYC \\
        --base-uri ipfs://

    # Verbose logging
    python -m parrodessa.cli deploy -v
"""

import asyncio
import sys
from argparse import ArgumentParser, Namespace

import structlog

from parrodessa.abi import load_contract_artifact
from parrodessa.cli.common import RULE, load_settings, print_service_error, print_state
from parrodessa.services.blockchain.connection import connect, resolve_signer
from parrodessa.services.blockchain.transactions import TransactionSender
from parrodessa.services.deployment import (
    DEFAULT_BASE_URI,
    DEFAULT_NAME,
    DEFAULT_SYMBOL,
    ConstructorArgs,
    DeploymentService,
)
from parrodessa.services.exceptions import ServiceError

logger = structlog.get_logger()


def parse_args(argv: list[str] | None = None) -> Namespace:
    """Parse command-line arguments."""
    parser = ArgumentParser(
        description="Deploy the ParrOdessa42 NFT contract",
        epilog="Network, signer and RPC endpoints come from the environment (.env)",
    )

    parser.add_argument(
        "--network",
        type=str,
        help="Override network setting (localhost, sepolia or mainnet)",
    )

    parser.add_argument(
        "--name",
        default=DEFAULT_NAME,
        help=f"Token collection name (default: {DEFAULT_NAME})",
    )

    parser.add_argument(
        "--symbol",
        default=DEFAULT_SYMBOL,
        help=f"Token symbol (default: {DEFAULT_SYMBOL})",
    )

    parser.add_argument(
        "--base-uri",
        default=DEFAULT_BASE_URI,
        help=f"Base metadata URI (default: {DEFAULT_BASE_URI})",
    )

    parser.add_argument(
        "--artifact",
        type=str,
        help="Compiled contract artifact (default: CONTRACT_ARTIFACT_PATH)",
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

    constructor_args = ConstructorArgs(
        name=args.name,
        symbol=args.symbol,
        base_uri=args.base_uri,
    )

    print("Starting ParrOdessa42 deployment...")
    print("Deploying contract with parameters:")
    print(f"  Name: {constructor_args.name}")
    print(f"  Symbol: {constructor_args.symbol}")
    print(f"  Base URI: {constructor_args.base_uri}")

    try:
        profile = settings.get_network_profile(args.network)
        artifact = load_contract_artifact(args.artifact or settings.contract_artifact_path)

        w3 = connect(profile)
        signer = resolve_signer(w3, profile, settings.private_key)
        service = DeploymentService(
            w3=w3,
            profile=profile,
            sender=TransactionSender(w3, profile, signer),
            artifact=artifact,
        )

        print("Deploying contract...")
        result = await service.deploy(constructor_args)

    except ServiceError as e:
        logger.error("cli.deploy_failed", error=str(e), error_kind=e.kind.value)
        print_service_error("Deployment failed", e)
        return 1

    except Exception as e:
        logger.error(
            "cli.unexpected_error",
            error=str(e),
            error_type=type(e).__name__,
        )
        print(f"\nDeployment failed: {e}", file=sys.stderr)
        return 1

    record = result.record
    print(f"ParrOdessa42 deployed to: {record.contract_address}")
    print(f"Deployed by: {record.deployer}")
    print(f"Network: {record.network} (Chain ID: {record.chain_id})")
    print(f"Confirmed in block: {result.block_number} (gas used: {result.gas_used})")

    print_state(result.state)

    print("\nDeployment Summary:")
    print(record.to_json())

    verify_command = service.verify_command(record.contract_address, constructor_args)
    print("\nNext Steps:")
    print("1. Copy the contract address above (set CONTRACT_ADDRESS for minting)")
    print("2. Verify the contract on the block explorer:")
    print(f"   {verify_command}")
    print("3. Mint your first NFT: python -m parrodessa.cli mint --metadata-uri <CID>")
    print("4. Test ownership verification")

    tx_url = profile.tx_url(record.transaction_hash)
    if tx_url:
        print(f"\nDeployment transaction: {tx_url}")
    address_url = profile.address_url(record.contract_address)
    if address_url:
        print(f"Contract on explorer: {address_url}")
    if profile.explorer_url and not profile.explorer_api_key:
        print("Note: ETHERSCAN_API_KEY is not set; verification will fail without it")

    print("\n" + RULE)
    print("Deployment completed successfully!")
    print(f"Contract Address: {record.contract_address}")
    print(RULE + "\n")

    logger.info("cli.success", contract_address=record.contract_address)
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
        print("\nDeployment interrupted by user", file=sys.stderr)
        exit_code = 130  # Standard exit code for SIGINT
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
