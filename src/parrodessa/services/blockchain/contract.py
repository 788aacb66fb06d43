"""Typed access to a deployed ParrOdessa42 contract."""

from typing import Any

import structlog
from web3 import Web3
from web3.contract.contract import ContractFunction
from web3.exceptions import BadFunctionCallOutput
from web3.logs import DISCARD
from web3.types import TxReceipt

from parrodessa.abi import get_contract_abi
from parrodessa.models.contract_state import ContractStateSnapshot
from parrodessa.services.blockchain.errors import classify_transaction_error
from parrodessa.services.exceptions import ContractNotFoundError

logger = structlog.get_logger()


class ParrOdessaContract:
    """Read and call wrapper around the ParrOdessa42 contract interface."""

    def __init__(self, w3: Web3, address: str, abi: list[dict] | None = None):
        """
        Bind to a contract address.

        No check is made that code exists at ``address``; a wrong address
        fails at the first read with ContractNotFoundError.

        Args:
            w3: Connected Web3 instance
            address: Contract address (any case, checksummed here)
            abi: Contract ABI (default: packaged ParrOdessa42 ABI)
        """
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.abi = abi or get_contract_abi()
        self.contract = self.w3.eth.contract(address=self.address, abi=self.abi)

    def _call(self, function_name: str, *args: Any) -> Any:
        try:
            return getattr(self.contract.functions, function_name)(*args).call()
        except BadFunctionCallOutput as e:
            logger.error(
                "contract.call_failed",
                function=function_name,
                contract_address=self.address,
                error=str(e),
            )
            raise ContractNotFoundError(
                f"Contract not found at {self.address} or {function_name}() missing"
            ) from e
        except Exception as e:
            error = classify_transaction_error(e)
            logger.error(
                "contract.call_failed",
                function=function_name,
                contract_address=self.address,
                error=str(e),
                error_kind=error.kind.value,
            )
            raise error from e

    async def get_state_snapshot(self) -> ContractStateSnapshot:
        """Fetch supply, price and minting flag from the chain."""
        snapshot = ContractStateSnapshot(
            max_supply=self._call("MAX_SUPPLY"),
            total_supply=self._call("totalSupply"),
            mint_price_wei=self._call("mintPrice"),
            minting_enabled=bool(self._call("mintingEnabled")),
        )
        logger.debug(
            "contract.state_fetched",
            contract_address=self.address,
            max_supply=snapshot.max_supply,
            total_supply=snapshot.total_supply,
            mint_price_wei=snapshot.mint_price_wei,
            minting_enabled=snapshot.minting_enabled,
        )
        return snapshot

    async def total_supply(self) -> int:
        return self._call("totalSupply")

    async def owner_of(self, token_id: int) -> str:
        return Web3.to_checksum_address(self._call("ownerOf", token_id))

    async def token_uri(self, token_id: int) -> str:
        return self._call("tokenURI", token_id)

    async def balance_of(self, address: str) -> int:
        return self._call("balanceOf", Web3.to_checksum_address(address))

    def mint_nft(self, recipient: str, metadata_uri: str) -> ContractFunction:
        """Bound mintNFT call, ready for TransactionSender.submit()."""
        return self.contract.functions.mintNFT(
            Web3.to_checksum_address(recipient), metadata_uri
        )

    def transfer_token_ids(self, receipt: TxReceipt) -> list[int]:
        """Token ids of ERC-721 Transfer events emitted by this contract in ``receipt``."""
        events = self.contract.events.Transfer().process_receipt(receipt, errors=DISCARD)
        return [int(event["args"]["tokenId"]) for event in events]
