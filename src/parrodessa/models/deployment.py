"""Deployment record - summary of one contract deployment run."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DeploymentRecord(BaseModel):
    """Deployment summary printed after a successful deployment.

    Serialized with camelCase keys; not persisted anywhere.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    contract_address: str = Field(alias="contractAddress")
    deployer: str
    network: str
    chain_id: str = Field(alias="chainId")
    timestamp: str = Field(default_factory=utc_timestamp)
    transaction_hash: str = Field(alias="transactionHash")
    contract_name: str = Field(alias="contractName")
    contract_symbol: str = Field(alias="contractSymbol")
    base_uri: str = Field(alias="baseURI")
    max_supply: str = Field(alias="maxSupply")
    mint_price: str = Field(alias="mintPrice")

    def to_json(self) -> str:
        """Render as indented JSON with camelCase keys."""
        return self.model_dump_json(by_alias=True, indent=2)
