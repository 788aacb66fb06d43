"""Web3 connection and signer resolution for a network profile."""

from dataclasses import dataclass, field

import structlog
from eth_account import Account
from web3 import Web3

from parrodessa.core.config import NetworkProfile
from parrodessa.services.exceptions import BlockchainConnectionError, ConfigurationError

logger = structlog.get_logger()


@dataclass(frozen=True)
class Signer:
    """Account that signs workflow transactions.

    ``private_key`` is None for node-managed (unlocked) accounts, which are
    sent through eth_sendTransaction instead of being signed locally.
    """

    address: str
    private_key: str | None = field(default=None, repr=False)

    @property
    def signs_locally(self) -> bool:
        return self.private_key is not None


def connect(profile: NetworkProfile) -> Web3:
    """Open an HTTP connection to the profile's RPC endpoint.

    Raises:
        BlockchainConnectionError: If the endpoint does not answer
        ConfigurationError: If the node reports a different chain id
    """
    w3 = Web3(
        Web3.HTTPProvider(
            profile.rpc_url,
            request_kwargs={"timeout": profile.timeout_seconds},
        )
    )

    if not w3.is_connected():
        logger.error("web3.connection_failed", network=profile.name, rpc_url=profile.rpc_url)
        raise BlockchainConnectionError(f"Failed to connect to {profile.rpc_url}")

    chain_id = w3.eth.chain_id
    if chain_id != profile.chain_id:
        logger.error(
            "web3.chain_id_mismatch",
            network=profile.name,
            expected=profile.chain_id,
            actual=chain_id,
        )
        raise ConfigurationError(
            f"Network '{profile.name}' expects chain id {profile.chain_id}, "
            f"but {profile.rpc_url} reports {chain_id}"
        )

    logger.info("web3.connected", network=profile.name, chain_id=chain_id)
    return w3


def resolve_signer(w3: Web3, profile: NetworkProfile, private_key: str = "") -> Signer:
    """Pick the signing account for this run.

    Uses PRIVATE_KEY when set. Local development nodes fall back to their
    first unlocked account.

    Raises:
        ConfigurationError: If no usable signer exists for the profile
    """
    if private_key:
        try:
            account = Account.from_key(private_key)
        except ValueError as e:
            raise ConfigurationError("PRIVATE_KEY is not a valid private key") from e
        return Signer(address=account.address, private_key=private_key)

    if profile.allow_node_accounts:
        accounts = w3.eth.accounts
        if accounts:
            address = Web3.to_checksum_address(accounts[0])
            logger.info("web3.using_node_account", network=profile.name, address=address)
            return Signer(address=address)

    raise ConfigurationError(
        f"No signer available for network '{profile.name}'. Set PRIVATE_KEY in your .env file."
    )
