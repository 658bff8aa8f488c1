"""
Exceptions for the simcall SDK.

Every failure raised while preparing or interpreting a simulated call is a
``SimCallError`` carrying a stable ``RpcErrorCode`` so API layers can branch on
the failure kind without parsing messages.
"""
from enum import Enum
from typing import Any, Dict, Optional


class RpcErrorCode(str, Enum):
    """
    Stable error codes for simulated-call failures.
    """
    CONFLICTING_FEE_FIELDS = "CONFLICTING_FEE_FIELDS"
    FEE_CAP_TOO_LOW = "FEE_CAP_TOO_LOW"
    TIP_ABOVE_FEE_CAP = "TIP_ABOVE_FEE_CAP"
    TIP_VERY_HIGH = "TIP_VERY_HIGH"
    BLOB_MISSING_HASHES = "BLOB_MISSING_HASHES"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INVALID_INPUT = "INVALID_INPUT"
    REVERT = "REVERT"
    STATE_ACCESS = "STATE_ACCESS"


# JSON-RPC numeric codes used by execution clients
_RPC_NUMERIC_CODES: Dict[RpcErrorCode, int] = {
    RpcErrorCode.CONFLICTING_FEE_FIELDS: -32602,
    RpcErrorCode.INVALID_INPUT: -32602,
    RpcErrorCode.REVERT: 3,
    RpcErrorCode.STATE_ACCESS: -32603,
}
_DEFAULT_NUMERIC_CODE = -32000


class SimCallError(Exception):
    """Base exception for simulated-call errors."""

    error_code: RpcErrorCode = RpcErrorCode.INVALID_INPUT
    message: str = "simulated call failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    def to_rpc_error(self) -> Dict[str, Any]:
        """
        Render this error as a JSON-RPC error object.

        Returns:
            Dictionary with ``code`` and ``message`` (and ``data`` where present)
        """
        return {
            "code": _RPC_NUMERIC_CODES.get(self.error_code, _DEFAULT_NUMERIC_CODE),
            "message": str(self),
        }


class ConflictingFeeFieldsInRequest(SimCallError):
    """Raised when mutually incompatible fee fields are supplied together."""

    error_code = RpcErrorCode.CONFLICTING_FEE_FIELDS
    message = "conflicting fee fields in request"


class TransactionInputError(SimCallError):
    """Raised when both ``input`` and ``data`` are set to different values."""

    error_code = RpcErrorCode.INVALID_INPUT
    message = "both \"data\" and \"input\" are set and not equal. Please use \"input\" to pass transaction call data"


class InvalidTransactionError(SimCallError):
    """Base exception for transactions the simulated executor would reject."""


class FeeCapTooLow(InvalidTransactionError):
    """Raised when the max fee per gas is below the block base fee."""

    error_code = RpcErrorCode.FEE_CAP_TOO_LOW
    message = "max fee per gas less than block base fee"


class TipAboveFeeCap(InvalidTransactionError):
    """Raised when the priority fee exceeds the max fee per gas."""

    error_code = RpcErrorCode.TIP_ABOVE_FEE_CAP
    message = "max priority fee per gas higher than max fee per gas"


class TipVeryHigh(InvalidTransactionError):
    """Raised when base fee plus priority fee overflows 256 bits."""

    error_code = RpcErrorCode.TIP_VERY_HIGH
    message = "max priority fee per gas higher than 2^256-1"


class BlobTransactionMissingBlobHashes(InvalidTransactionError):
    """Raised when a blob transaction carries no blob versioned hashes."""

    error_code = RpcErrorCode.BLOB_MISSING_HASHES
    message = "blob transaction missing blob hashes"


class InsufficientFunds(InvalidTransactionError):
    """Raised when the caller cannot cover the transferred value."""

    error_code = RpcErrorCode.INSUFFICIENT_FUNDS

    def __init__(self, cost: int, balance: int):
        self.cost = cost
        self.balance = balance
        super().__init__(f"insufficient funds for gas * price + value: have {balance} want {cost}")


class RevertError(SimCallError):
    """
    Raised when the executor reports a revert or a halt.

    ``data`` holds the raw revert payload, or is empty for halts.
    """

    error_code = RpcErrorCode.REVERT

    def __init__(self, data: bytes = b""):
        self.data = bytes(data)
        if self.data:
            super().__init__(f"execution reverted: 0x{self.data.hex()}")
        else:
            super().__init__("execution reverted")

    def to_rpc_error(self) -> Dict[str, Any]:
        error = super().to_rpc_error()
        error["data"] = "0x" + self.data.hex()
        return error


class StateAccessError(SimCallError):
    """Raised when the account-state view cannot be read."""

    error_code = RpcErrorCode.STATE_ACCESS
    message = "failed to read account state"
