"""Application configuration using Pydantic BaseSettings."""

import logging
import sys
from dataclasses import dataclass

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from parrodessa.services.exceptions import ConfigurationError

LOCALHOST = "localhost"
SEPOLIA = "sepolia"
MAINNET = "mainnet"

CHAIN_IDS = {
    LOCALHOST: 1337,
    SEPOLIA: 11155111,
    MAINNET: 1,
}

EXPLORER_URLS = {
    SEPOLIA: "https://sepolia.etherscan.io",
    MAINNET: "https://etherscan.io",
}


@dataclass(frozen=True)
class NetworkProfile:
    """Resolved connection parameters for one named network."""

    name: str
    rpc_url: str
    chain_id: int
    gas_price_wei: int | None
    timeout_seconds: int
    explorer_url: str | None = None
    explorer_api_key: str = ""
    allow_node_accounts: bool = False

    def tx_url(self, tx_hash: str) -> str | None:
        if not self.explorer_url:
            return None
        return f"{self.explorer_url}/tx/{tx_hash}"

    def address_url(self, address: str) -> str | None:
        if not self.explorer_url:
            return None
        return f"{self.explorer_url}/address/{address}"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application Environment
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Network selection and RPC endpoints
    network: str = Field(default=SEPOLIA, alias="NETWORK")
    localhost_rpc_url: str = Field(default="http://127.0.0.1:8545", alias="LOCALHOST_RPC_URL")
    localhost_chain_id: int = Field(default=CHAIN_IDS[LOCALHOST], alias="LOCALHOST_CHAIN_ID")
    sepolia_rpc_url: str = Field(default="https://rpc.sepolia.org", alias="SEPOLIA_RPC_URL")
    mainnet_rpc_url: str = Field(default="https://eth.llamarpc.com", alias="MAINNET_RPC_URL")

    # Signing and fees
    private_key: str = Field(default="", alias="PRIVATE_KEY")
    gas_price_wei: int = Field(default=20_000_000_000, alias="GAS_PRICE_WEI")  # 20 gwei
    transaction_timeout_seconds: int = Field(default=120, alias="TRANSACTION_TIMEOUT_SECONDS")

    # Block explorer verification
    etherscan_api_key: str = Field(default="", alias="ETHERSCAN_API_KEY")

    # Contract
    contract_artifact_path: str = Field(
        default="artifacts/contracts/ParrOdessa42.sol/ParrOdessa42.json",
        alias="CONTRACT_ARTIFACT_PATH",
    )
    contract_address: str = Field(default="", alias="CONTRACT_ADDRESS")
    metadata_uri: str = Field(default="", alias="METADATA_URI")

    @field_validator("network")
    @classmethod
    def validate_network(cls, value: str) -> str:
        """Normalize the network name and reject unknown profiles."""
        name = value.strip().lower()
        if name not in CHAIN_IDS:
            raise ValueError(
                f"Unknown network '{value}'. Expected one of: {', '.join(sorted(CHAIN_IDS))}"
            )
        return name

    def get_network_profile(self, name: str | None = None) -> NetworkProfile:
        """Build the NetworkProfile for ``name`` (defaults to the active NETWORK).

        Raises:
            ConfigurationError: If the network name is not a known profile
        """
        name = (name or self.network).strip().lower()

        if name == LOCALHOST:
            return NetworkProfile(
                name=LOCALHOST,
                rpc_url=self.localhost_rpc_url,
                chain_id=self.localhost_chain_id,
                gas_price_wei=None,
                timeout_seconds=self.transaction_timeout_seconds,
                allow_node_accounts=True,
            )

        rpc_urls = {
            SEPOLIA: self.sepolia_rpc_url,
            MAINNET: self.mainnet_rpc_url,
        }
        if name not in rpc_urls:
            raise ConfigurationError(
                f"Unknown network '{name}'. Expected one of: {', '.join(sorted(CHAIN_IDS))}"
            )

        return NetworkProfile(
            name=name,
            rpc_url=rpc_urls[name],
            chain_id=CHAIN_IDS[name],
            gas_price_wei=self.gas_price_wei,
            timeout_seconds=self.transaction_timeout_seconds,
            explorer_url=EXPLORER_URLS[name],
            explorer_api_key=self.etherscan_api_key,
        )


def configure_logging(settings: Settings) -> None:
    """Configure structlog based on application environment.

    - Production: JSON output for log aggregation
    - Development: Console output for human readability

    Log events go to stderr so workflow output on stdout stays clean.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    if settings.app_env == "production":
        # JSON output for production (log aggregation)
        processors = [
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
