"""Translation of raw web3 failures into typed service errors."""

from typing import Any

import requests
import structlog
from eth_abi import decode
from eth_abi.exceptions import DecodingError
from web3.exceptions import ContractLogicError

from parrodessa.services.exceptions import (
    BlockchainConnectionError,
    InsufficientFundsError,
    MintingDisabledError,
    ServiceError,
    SupplyCapReachedError,
    TransactionRevertError,
    TransactionSubmissionError,
)

logger = structlog.get_logger()

# Revert reasons emitted by ParrOdessa42
SUPPLY_CAP_REASON = "Maximum supply reached"
MINTING_DISABLED_REASON = "Minting is currently disabled"

# Error(string) selector used by Solidity require/revert
ERROR_STRING_SELECTOR = "0x08c379a0"

# JSON-RPC error messages nodes use for an underfunded sender
INSUFFICIENT_FUNDS_MESSAGES = (
    "insufficient funds",
    "sender doesn't have enough funds",
)

REVERT_PREFIXES = (
    "execution reverted: ",
    "execution reverted",
)


def revert_reason(error: ContractLogicError) -> str:
    """Extract the revert reason string from a ContractLogicError.

    Prefers ABI-decoding the Error(string) payload; falls back to the message
    with the node's "execution reverted" prefix removed.
    """
    data = getattr(error, "data", None)
    if isinstance(data, str) and data.startswith(ERROR_STRING_SELECTOR):
        try:
            (reason,) = decode(["string"], bytes.fromhex(data[len(ERROR_STRING_SELECTOR) :]))
            return reason
        except (DecodingError, ValueError):
            logger.debug("errors.revert_data_undecodable", data=data)

    message = getattr(error, "message", None) or str(error)
    for prefix in REVERT_PREFIXES:
        if message.startswith(prefix):
            return message[len(prefix) :].strip()
    return message.strip()


def rpc_error_payload(error: Exception) -> dict[str, Any] | None:
    """Return the JSON-RPC ``error`` object carried by a web3 exception, if any."""
    rpc_response = getattr(error, "rpc_response", None)
    if isinstance(rpc_response, dict) and isinstance(rpc_response.get("error"), dict):
        return rpc_response["error"]

    # Older providers raise ValueError({"code": ..., "message": ...})
    if error.args and isinstance(error.args[0], dict):
        return error.args[0]

    return None


def classify_transaction_error(error: Exception) -> ServiceError:
    """Map an exception raised while building or sending a transaction to a ServiceError.

    Returns the error unchanged when it is already a ServiceError. The caller
    raises the result with ``from error`` to keep the original traceback.
    """
    if isinstance(error, ServiceError):
        return error

    if isinstance(error, ContractLogicError):
        reason = revert_reason(error)
        if reason == SUPPLY_CAP_REASON:
            return SupplyCapReachedError(f"Transaction reverted: {reason}")
        if reason == MINTING_DISABLED_REASON:
            return MintingDisabledError(f"Transaction reverted: {reason}")
        return TransactionRevertError(f"Transaction reverted: {reason or 'no reason given'}")

    payload = rpc_error_payload(error)
    if payload is not None:
        message = str(payload.get("message", ""))
        if message.lower().startswith(INSUFFICIENT_FUNDS_MESSAGES):
            return InsufficientFundsError(f"Insufficient funds for gas and value: {message}")
        return TransactionSubmissionError(f"RPC error {payload.get('code')}: {message}")

    if isinstance(error, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)):
        return BlockchainConnectionError(f"RPC endpoint unreachable: {error}")
    if isinstance(error, (ConnectionError, TimeoutError)):
        return BlockchainConnectionError(f"RPC endpoint unreachable: {error}")

    return TransactionSubmissionError(f"Transaction submission failed: {error}")
