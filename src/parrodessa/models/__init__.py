"""Domain models for deployment and minting workflows."""

from parrodessa.models.contract_state import ContractStateSnapshot, format_ether
from parrodessa.models.deployment import DeploymentRecord
from parrodessa.models.mint import MintRequest, MintResult

__all__ = [
    "ContractStateSnapshot",
    "DeploymentRecord",
    "MintRequest",
    "MintResult",
    "format_ether",
]
