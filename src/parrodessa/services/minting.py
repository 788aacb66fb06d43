"""Minting service for a deployed ParrOdessa42 contract."""

import structlog

from parrodessa.models.contract_state import ContractStateSnapshot
from parrodessa.models.mint import MintRequest, MintResult
from parrodessa.services.blockchain.contract import ParrOdessaContract
from parrodessa.services.blockchain.transactions import TransactionSender
from parrodessa.services.exceptions import MintingDisabledError, SupplyCapReachedError

logger = structlog.get_logger()


class MintingService:
    """Checks mint preconditions, submits mintNFT and verifies the minted token."""

    def __init__(self, contract: ParrOdessaContract, sender: TransactionSender):
        self.contract = contract
        self.sender = sender

    async def check_preconditions(
        self, state: ContractStateSnapshot | None = None
    ) -> ContractStateSnapshot:
        """
        Make sure a mint can succeed against current contract state.

        Args:
            state: Snapshot fetched by the caller just before this check
                (fetched here when omitted)

        Returns:
            The snapshot the checks were made against

        Raises:
            SupplyCapReachedError: total supply has reached MAX_SUPPLY
            MintingDisabledError: minting is switched off
        """
        if state is None:
            state = await self.contract.get_state_snapshot()

        if state.is_sold_out:
            logger.warning(
                "mint.precondition_failed",
                reason="supply_cap_reached",
                total_supply=state.total_supply,
                max_supply=state.max_supply,
            )
            raise SupplyCapReachedError(
                f"Maximum supply reached ({state.total_supply}/{state.max_supply})"
            )

        if not state.minting_enabled:
            logger.warning("mint.precondition_failed", reason="minting_disabled")
            raise MintingDisabledError("Minting is disabled on the contract")

        return state

    async def submit(self, request: MintRequest, value: int = 0) -> str:
        """Submit mintNFT(recipient, metadataURI). Returns the transaction hash."""
        logger.info(
            "mint.submitting",
            contract_address=self.contract.address,
            recipient=request.recipient,
            metadata_uri=request.metadata_uri,
            value=value,
        )
        call = self.contract.mint_nft(request.recipient, request.metadata_uri)
        return await self.sender.submit(call, value=value, label="mint")

    async def confirm(self, tx_hash: str, request: MintRequest) -> MintResult:
        """
        Wait for the mint and read back the minted token.

        Token ids are assigned sequentially, so the new token is
        totalSupply() - 1. A concurrent mint between confirmation and the
        supply read makes that id wrong; the Transfer event in the receipt is
        used as a cross-check.
        """
        receipt = await self.sender.wait(tx_hash, label="mint")

        total_supply = await self.contract.total_supply()
        token_id = total_supply - 1

        event_token_ids = self.contract.transfer_token_ids(receipt)
        if event_token_ids and token_id not in event_token_ids:
            logger.warning(
                "mint.token_id_mismatch",
                token_id=token_id,
                event_token_ids=event_token_ids,
                tx_hash=tx_hash,
            )

        owner = await self.contract.owner_of(token_id)
        token_uri = await self.contract.token_uri(token_id)
        balance = await self.contract.balance_of(request.recipient)

        result = MintResult(
            tx_hash=tx_hash,
            block_number=receipt["blockNumber"],
            token_id=token_id,
            owner=owner,
            token_uri=token_uri,
            balance=balance,
            recipient=request.recipient,
        )

        logger.info(
            "mint.completed",
            token_id=token_id,
            owner=owner,
            ownership_verified=result.ownership_verified,
            block_number=result.block_number,
        )
        return result
