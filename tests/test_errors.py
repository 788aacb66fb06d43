"""Tests for classification of raw web3 failures into typed service errors."""

from unittest.mock import patch

import pytest
import requests
from eth_abi import encode
from web3.exceptions import ContractLogicError

from parrodessa.services.blockchain.errors import (
    ERROR_STRING_SELECTOR,
    classify_transaction_error,
    revert_reason,
)
from parrodessa.services.exceptions import (
    BlockchainConnectionError,
    ErrorKind,
    InsufficientFundsError,
    MintingDisabledError,
    SupplyCapReachedError,
    TransactionRevertError,
    TransactionSubmissionError,
)


class RPCResponseError(Exception):
    """Exception carrying a JSON-RPC response, like web3's Web3RPCError."""

    def __init__(self, message, rpc_response):
        super().__init__(message)
        self.rpc_response = rpc_response


def revert_data(reason: str) -> str:
    return ERROR_STRING_SELECTOR + encode(["string"], [reason]).hex()


def test_revert_reason_decoded_from_error_data():
    error = ContractLogicError("execution reverted", data=revert_data("Maximum supply reached"))

    assert revert_reason(error) == "Maximum supply reached"


def test_revert_reason_falls_back_to_message():
    error = ContractLogicError("execution reverted: Minting is currently disabled")

    assert revert_reason(error) == "Minting is currently disabled"


def test_revert_reason_with_truncated_error_data_uses_message():
    error = ContractLogicError(
        "execution reverted: Maximum supply reached", data=ERROR_STRING_SELECTOR + "0000"
    )

    assert revert_reason(error) == "Maximum supply reached"


def test_revert_reason_with_malformed_hex_uses_message():
    error = ContractLogicError(
        "execution reverted: Minting is currently disabled", data=ERROR_STRING_SELECTOR + "zz1"
    )

    assert revert_reason(error) == "Minting is currently disabled"


def test_revert_reason_propagates_unexpected_decoder_failure():
    error = ContractLogicError("execution reverted", data=revert_data("Maximum supply reached"))

    with patch("parrodessa.services.blockchain.errors.decode", side_effect=RuntimeError("bug")):
        with pytest.raises(RuntimeError):
            revert_reason(error)


def test_supply_cap_revert_classified():
    error = ContractLogicError("execution reverted", data=revert_data("Maximum supply reached"))

    result = classify_transaction_error(error)

    assert isinstance(result, SupplyCapReachedError)
    assert result.kind is ErrorKind.SUPPLY_CAP_REACHED


def test_minting_disabled_revert_classified():
    error = ContractLogicError("execution reverted: Minting is currently disabled")

    result = classify_transaction_error(error)

    assert isinstance(result, MintingDisabledError)
    assert result.kind is ErrorKind.MINTING_DISABLED


def test_other_revert_is_transaction_revert():
    error = ContractLogicError("execution reverted: Ownable: caller is not the owner")

    result = classify_transaction_error(error)

    assert isinstance(result, TransactionRevertError)
    assert "Ownable: caller is not the owner" in str(result)


def test_insufficient_funds_from_value_error_payload():
    error = ValueError(
        {"code": -32000, "message": "insufficient funds for gas * price + value: balance 0"}
    )

    result = classify_transaction_error(error)

    assert isinstance(result, InsufficientFundsError)
    assert result.kind is ErrorKind.INSUFFICIENT_FUNDS


def test_insufficient_funds_from_rpc_response():
    error = RPCResponseError(
        "Sender doesn't have enough funds to send tx.",
        rpc_response={
            "jsonrpc": "2.0",
            "id": 1,
            "error": {
                "code": -32003,
                "message": "Sender doesn't have enough funds to send tx. Max upfront cost: 1",
            },
        },
    )

    assert isinstance(classify_transaction_error(error), InsufficientFundsError)


def test_unrecognized_rpc_error_is_submission_error():
    error = ValueError({"code": -32000, "message": "nonce too low"})

    result = classify_transaction_error(error)

    assert isinstance(result, TransactionSubmissionError)
    assert "nonce too low" in str(result)


def test_transport_errors_are_network_errors():
    assert isinstance(
        classify_transaction_error(requests.exceptions.ConnectionError("refused")),
        BlockchainConnectionError,
    )
    assert isinstance(classify_transaction_error(TimeoutError("slow")), BlockchainConnectionError)


def test_service_errors_pass_through():
    error = MintingDisabledError("already typed")

    assert classify_transaction_error(error) is error


def test_unknown_exception_is_submission_error():
    result = classify_transaction_error(RuntimeError("boom"))

    assert isinstance(result, TransactionSubmissionError)
    assert result.kind is ErrorKind.TRANSACTION_FAILED
