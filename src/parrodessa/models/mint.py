"""Mint request and result entities."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, field_validator
from web3 import Web3


class MintRequest(BaseModel):
    """Recipient and metadata URI for a single mintNFT call."""

    model_config = ConfigDict(frozen=True)

    recipient: str
    metadata_uri: str

    @field_validator("recipient")
    @classmethod
    def validate_recipient(cls, value: str) -> str:
        """Checksum the recipient address."""
        if not Web3.is_address(value):
            raise ValueError(f"Invalid recipient address: {value}")
        return Web3.to_checksum_address(value)

    @field_validator("metadata_uri")
    @classmethod
    def validate_metadata_uri(cls, value: str) -> str:
        """Reject blank metadata URIs."""
        value = value.strip()
        if not value:
            raise ValueError("Metadata URI must not be empty")
        return value


@dataclass
class MintResult:
    """Outcome of a confirmed mint, including post-mint verification reads."""

    tx_hash: str
    block_number: int
    token_id: int
    owner: str
    token_uri: str
    balance: int
    recipient: str

    @property
    def ownership_verified(self) -> bool:
        return self.owner.lower() == self.recipient.lower()
