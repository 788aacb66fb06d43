"""Deployment service for the ParrOdessa42 contract.

This module provides the DeploymentService which:
1. Builds a contract factory from the compiled artifact
2. Submits the creation transaction with name, symbol and base URI
3. Waits for confirmation and reads back the initial contract state
4. Assembles the DeploymentRecord from the receipt and the live state
"""

from dataclasses import dataclass

import structlog
from web3 import Web3

from parrodessa.abi import ContractArtifact
from parrodessa.core.config import NetworkProfile
from parrodessa.models.contract_state import ContractStateSnapshot
from parrodessa.models.deployment import DeploymentRecord
from parrodessa.services.blockchain.contract import ParrOdessaContract
from parrodessa.services.blockchain.transactions import TransactionSender
from parrodessa.services.exceptions import TransactionRevertError

logger = structlog.get_logger()

DEFAULT_NAME = "ParrOdessa42"
DEFAULT_SYMBOL = "POD42"
DEFAULT_BASE_URI = "https://ipfs.io/ipfs/"


@dataclass(frozen=True)
class ConstructorArgs:
    """Constructor arguments for ParrOdessa42."""

    name: str = DEFAULT_NAME
    symbol: str = DEFAULT_SYMBOL
    base_uri: str = DEFAULT_BASE_URI

    def as_tuple(self) -> tuple[str, str, str]:
        return self.name, self.symbol, self.base_uri


@dataclass
class DeploymentResult:
    """Result of a deployment run."""

    record: DeploymentRecord
    state: ContractStateSnapshot  # Read right after confirmation
    block_number: int
    gas_used: int


class DeploymentService:
    """Deploys ParrOdessa42 and reports its initial state."""

    def __init__(
        self,
        w3: Web3,
        profile: NetworkProfile,
        sender: TransactionSender,
        artifact: ContractArtifact,
    ):
        self.w3 = w3
        self.profile = profile
        self.sender = sender
        self.artifact = artifact

    async def deploy(self, args: ConstructorArgs) -> DeploymentResult:
        """Deploy the contract and wait for it to be mined.

        Args:
            args: Constructor arguments

        Returns:
            DeploymentResult with record, initial state and receipt details

        Raises:
            ServiceError: Submission, confirmation or state read failures
        """
        logger.info(
            "deploy.started",
            network=self.profile.name,
            deployer=self.sender.signer.address,
            contract_name=args.name,
            symbol=args.symbol,
            base_uri=args.base_uri,
        )

        factory = self.w3.eth.contract(abi=self.artifact.abi, bytecode=self.artifact.bytecode)
        tx_hash = await self.sender.submit(factory.constructor(*args.as_tuple()), label="deploy")

        receipt = await self.sender.wait(tx_hash, label="deploy")
        contract_address = receipt.get("contractAddress")
        if not contract_address:
            raise TransactionRevertError(f"Deployment receipt has no contract address: {tx_hash}")

        contract = ParrOdessaContract(self.w3, contract_address, abi=self.artifact.abi)
        state = await contract.get_state_snapshot()

        record = DeploymentRecord(
            contract_address=contract.address,
            deployer=self.sender.signer.address,
            network=self.profile.name,
            chain_id=str(self.profile.chain_id),
            transaction_hash=tx_hash,
            contract_name=args.name,
            contract_symbol=args.symbol,
            base_uri=args.base_uri,
            max_supply=str(state.max_supply),
            mint_price=state.mint_price_eth,
        )

        logger.info(
            "deploy.completed",
            contract_address=record.contract_address,
            tx_hash=tx_hash,
            block_number=receipt["blockNumber"],
            gas_used=receipt["gasUsed"],
        )

        return DeploymentResult(
            record=record,
            state=state,
            block_number=receipt["blockNumber"],
            gas_used=receipt["gasUsed"],
        )

    def verify_command(self, contract_address: str, args: ConstructorArgs) -> str:
        """Hardhat command that verifies the deployed source on the block explorer."""
        return (
            f"npx hardhat verify --network {self.profile.name} {contract_address} "
            f'"{args.name}" "{args.symbol}" "{args.base_uri}"'
        )
