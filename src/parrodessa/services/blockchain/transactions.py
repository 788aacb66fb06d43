"""Transaction submission and confirmation."""

from typing import Any

import structlog
from web3 import Web3
from web3.exceptions import TimeExhausted
from web3.types import TxReceipt

from parrodessa.core.config import NetworkProfile
from parrodessa.services.blockchain.connection import Signer
from parrodessa.services.blockchain.errors import classify_transaction_error
from parrodessa.services.exceptions import TransactionRevertError, TransactionTimeoutError

logger = structlog.get_logger()


class TransactionSender:
    """Builds, signs and sends transactions for one signer, then waits for receipts."""

    def __init__(self, w3: Web3, profile: NetworkProfile, signer: Signer):
        """
        Initialize transaction sender.

        Args:
            w3: Connected Web3 instance
            profile: Network profile (chain id, gas price, timeout)
            signer: Account used as the transaction sender
        """
        self.w3 = w3
        self.profile = profile
        self.signer = signer

    def _base_params(self, value: int) -> dict[str, Any]:
        params: dict[str, Any] = {
            "from": self.signer.address,
            "chainId": self.profile.chain_id,
        }
        if value:
            params["value"] = value
        if self.profile.gas_price_wei is not None:
            params["gasPrice"] = self.profile.gas_price_wei
        return params

    async def submit(self, call: Any, value: int = 0, label: str = "transaction") -> str:
        """
        Submit a contract function call or constructor.

        Args:
            call: Bound ContractFunction or ContractConstructor
            value: Wei attached to the call
            label: Name used in log events

        Returns:
            Transaction hash (0x-prefixed hex string)

        Raises:
            ServiceError: Classified failure (insufficient funds, revert, RPC error)
        """
        params = self._base_params(value)

        try:
            if self.signer.signs_locally:
                params["nonce"] = self.w3.eth.get_transaction_count(self.signer.address, "pending")
                transaction = call.build_transaction(params)
                signed_txn = self.w3.eth.account.sign_transaction(
                    transaction, private_key=self.signer.private_key
                )
                tx_hash = self.w3.eth.send_raw_transaction(signed_txn.raw_transaction)
            else:
                tx_hash = call.transact(params)
        except Exception as e:
            error = classify_transaction_error(e)
            logger.error(
                "tx.submission_failed",
                label=label,
                sender=self.signer.address,
                error=str(e),
                error_kind=error.kind.value,
            )
            raise error from e

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(
            "tx.submitted",
            label=label,
            tx_hash=tx_hash_hex,
            sender=self.signer.address,
            nonce=params.get("nonce"),
        )
        return tx_hash_hex

    async def wait(self, tx_hash: str, label: str = "transaction") -> TxReceipt:
        """
        Block until the transaction is mined.

        Returns:
            Transaction receipt

        Raises:
            TransactionTimeoutError: No receipt within the profile timeout
            TransactionRevertError: Receipt status is 0
        """
        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.profile.timeout_seconds
            )
        except TimeExhausted as e:
            logger.warning(
                "tx.confirmation_timeout",
                label=label,
                tx_hash=tx_hash,
                timeout=self.profile.timeout_seconds,
            )
            raise TransactionTimeoutError(f"Transaction confirmation timeout: {tx_hash}") from e
        except Exception as e:
            error = classify_transaction_error(e)
            logger.error("tx.confirmation_failed", label=label, tx_hash=tx_hash, error=str(e))
            raise error from e

        if receipt["status"] == 0:
            logger.error(
                "tx.reverted",
                label=label,
                tx_hash=tx_hash,
                block_number=receipt["blockNumber"],
                gas_used=receipt["gasUsed"],
            )
            raise TransactionRevertError(f"Transaction reverted: {tx_hash}")

        logger.info(
            "tx.confirmed",
            label=label,
            tx_hash=tx_hash,
            block_number=receipt["blockNumber"],
            gas_used=receipt["gasUsed"],
        )
        return receipt
