"""
simcall SDK - transaction environments for simulated Ethereum calls.
"""
from .client import CallSimulator
from .config import RPC_DEFAULT_GAS_CAP, SimulationConfig
from .evm_env import CfgEnv, EvmEnv, build_evm_env
from .exceptions import (
    BlobTransactionMissingBlobHashes, ConflictingFeeFieldsInRequest, FeeCapTooLow,
    InsufficientFunds, InvalidTransactionError, RevertError, RpcErrorCode,
    SimCallError, StateAccessError, TipAboveFeeCap, TipVeryHigh, TransactionInputError
)
from .fees import CallFees, resolve_fees
from .models import (
    BlockContext, CallRequest, ExecutionOutcome, Halt, HaltReason, Revert,
    Success, TransactionEnvironment, TxKind
)
from .providers import InMemoryStateView, StateView, Web3StateView, get_state_view
from .result import ensure_success
from .tx_env import build_tx_env, create_txn_env
from .version import __version__

__all__ = [
    "CallSimulator",
    "SimulationConfig",
    "RPC_DEFAULT_GAS_CAP",
    "CfgEnv",
    "EvmEnv",
    "build_evm_env",
    "SimCallError",
    "RpcErrorCode",
    "ConflictingFeeFieldsInRequest",
    "TransactionInputError",
    "InvalidTransactionError",
    "FeeCapTooLow",
    "TipAboveFeeCap",
    "TipVeryHigh",
    "BlobTransactionMissingBlobHashes",
    "InsufficientFunds",
    "RevertError",
    "StateAccessError",
    "CallFees",
    "resolve_fees",
    "BlockContext",
    "CallRequest",
    "ExecutionOutcome",
    "Halt",
    "HaltReason",
    "Revert",
    "Success",
    "TransactionEnvironment",
    "TxKind",
    "StateView",
    "InMemoryStateView",
    "Web3StateView",
    "get_state_view",
    "ensure_success",
    "build_tx_env",
    "create_txn_env",
    "__version__",
]
