"""
Assembly of the transaction environment for a simulated call.
"""
import logging

from .allowance import cap_tx_gas_limit_with_caller_allowance
from .exceptions import BlobTransactionMissingBlobHashes
from .fees import CallFees
from .models import ZERO_ADDRESS, BlockContext, CallRequest, TransactionEnvironment, TxKind
from .providers import StateView

logger = logging.getLogger(__name__)


def create_txn_env(block: BlockContext, request: CallRequest) -> TransactionEnvironment:
    """
    Resolve a call request into a transaction environment.

    Every absent field gets its default here: the block gas limit, the zero
    address as caller, zero value, contract creation when ``to`` is absent and
    empty lists.

    Args:
        block: Block the call is simulated against
        request: Inbound call request

    Returns:
        Transaction environment with every field set

    Raises:
        BlobTransactionMissingBlobHashes: If ``blobVersionedHashes`` is present but empty
        TransactionInputError: If ``input`` and ``data`` conflict
        SimCallError: Any fee resolution error from ``CallFees.ensure_fees``
    """
    # Ensure that if versioned hashes are set, they're not empty
    if request.blob_versioned_hashes is not None and not request.blob_versioned_hashes:
        raise BlobTransactionMissingBlobHashes()

    fees = CallFees.ensure_fees(
        request.gas_price,
        request.max_fee_per_gas,
        request.max_priority_fee_per_gas,
        block.base_fee,
        request.blob_versioned_hashes,
        request.max_fee_per_blob_gas,
        block.blob_gasprice,
    )

    data = request.unique_input()

    return TransactionEnvironment(
        caller=request.from_address or ZERO_ADDRESS,
        kind=TxKind.call(request.to) if request.to is not None else TxKind.create(),
        value=request.value or 0,
        data=data or b"",
        nonce=request.nonce,
        gas_limit=request.gas if request.gas is not None else block.gas_limit,
        gas_price=fees.gas_price,
        gas_priority_fee=fees.max_priority_fee_per_gas,
        max_fee_per_blob_gas=fees.max_fee_per_blob_gas or 0,
        blob_hashes=tuple(request.blob_versioned_hashes or ()),
        access_list=tuple(request.access_list or ()),
        authorization_list=tuple(request.authorization_list or ()),
        chain_id=request.chain_id,
        tx_type=request.transaction_type or 0,
    )


def build_tx_env(
    block: BlockContext,
    request: CallRequest,
    state: StateView,
    gas_limit: int,
) -> TransactionEnvironment:
    """
    Build the transaction environment of an ``eth_call``.

    The caller's nonce is always discarded so the account's next nonce is
    used. Without an explicit gas limit the limit is capped by what the caller
    can afford, or set to ``gas_limit`` when the call is free.

    Args:
        block: Block the call is simulated against
        request: Inbound call request
        state: Account state used for the allowance lookup
        gas_limit: Node-configured gas ceiling for free calls

    Raises:
        InsufficientFunds: If the caller cannot cover the transferred value
        SimCallError: Any error from ``create_txn_env``
    """
    request_gas = request.gas
    request = request.model_copy(update={"nonce": None})

    env = create_txn_env(block, request)

    if request_gas is None:
        if env.gas_price > 0:
            cap_tx_gas_limit_with_caller_allowance(state, env)
        else:
            # free calls get the node's gas cap, not the block gas limit
            logger.debug(f"No gas price given, using gas cap {gas_limit}")
            env.gas_limit = gas_limit

    return env
