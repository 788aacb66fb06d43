"""Service error hierarchy for contract deployment and minting.

Every error carries an ``ErrorKind`` so callers discriminate failures by type
instead of inspecting message text:
- ServiceError: Base for all service errors
- ConfigurationError / ArtifactError: Local setup problems, nothing was sent
- BlockchainConnectionError: RPC endpoint unreachable
- Contract precondition errors: Detected before or during submission
- Transaction errors: Submission, revert and confirmation failures
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Structured failure category surfaced to the operator."""

    CONFIGURATION_ERROR = "configuration_error"
    NETWORK_ERROR = "network_error"
    CONTRACT_NOT_FOUND = "contract_not_found"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    SUPPLY_CAP_REACHED = "supply_cap_reached"
    MINTING_DISABLED = "minting_disabled"
    TRANSACTION_FAILED = "transaction_failed"
    TRANSACTION_REVERTED = "transaction_reverted"
    TRANSACTION_TIMEOUT = "transaction_timeout"


class ServiceError(Exception):
    """Base exception for all service errors."""

    kind: ErrorKind = ErrorKind.TRANSACTION_FAILED


class ConfigurationError(ServiceError):
    """Missing or inconsistent configuration (network, signer, inputs)."""

    kind = ErrorKind.CONFIGURATION_ERROR


class ArtifactError(ConfigurationError):
    """Compiled contract artifact missing or unusable."""


class BlockchainConnectionError(ServiceError):
    """Failed to connect to blockchain RPC endpoint."""

    kind = ErrorKind.NETWORK_ERROR


class ContractNotFoundError(ServiceError):
    """Smart contract not found at specified address."""

    kind = ErrorKind.CONTRACT_NOT_FOUND


class InsufficientFundsError(ServiceError):
    """Signer balance cannot cover gas and value."""

    kind = ErrorKind.INSUFFICIENT_FUNDS


class SupplyCapReachedError(ServiceError):
    """Every token up to MAX_SUPPLY has been minted."""

    kind = ErrorKind.SUPPLY_CAP_REACHED


class MintingDisabledError(ServiceError):
    """Contract owner has switched minting off."""

    kind = ErrorKind.MINTING_DISABLED


class TransactionSubmissionError(ServiceError):
    """Transaction could not be built, signed or sent."""

    kind = ErrorKind.TRANSACTION_FAILED


class TransactionRevertError(ServiceError):
    """Transaction reverted on-chain or in simulation."""

    kind = ErrorKind.TRANSACTION_REVERTED


class TransactionTimeoutError(ServiceError):
    """Transaction confirmation timeout."""

    kind = ErrorKind.TRANSACTION_TIMEOUT
