"""
Fee resolution for simulated calls.

A call request may carry legacy (``gasPrice``), EIP-1559 (``maxFeePerGas``,
``maxPriorityFeePerGas``) and EIP-4844 (``maxFeePerBlobGas``) fee fields. This
module reconciles them against the block's base fee into a single
``CallFees`` record. The allowed field combinations live in ``_FEE_MODELS``,
keyed on a presence bitmask; any combination missing from the table is a
conflict.
"""
import logging
from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Dict, Optional, Sequence

from .exceptions import (
    BlobTransactionMissingBlobHashes, ConflictingFeeFieldsInRequest,
    FeeCapTooLow, TipAboveFeeCap, TipVeryHigh
)
from .models import U256_MAX

logger = logging.getLogger(__name__)


class FeeField(IntFlag):
    """Presence bits for the optional fee fields of a request"""
    NONE = 0
    LEGACY = 1
    MAX_FEE = 2
    PRIORITY = 4
    BLOB = 8


class FeeModel(str, Enum):
    LEGACY = "legacy"
    EIP1559 = "eip1559"
    EIP4844 = "eip4844"


def _build_fee_table() -> Dict[int, FeeModel]:
    table: Dict[int, FeeModel] = {
        # legacy transaction, or no fee fields at all
        FeeField.NONE: FeeModel.LEGACY,
        FeeField.LEGACY: FeeModel.LEGACY,
    }
    for market in (FeeField.MAX_FEE, FeeField.PRIORITY, FeeField.MAX_FEE | FeeField.PRIORITY):
        table[market] = FeeModel.EIP1559
        table[market | FeeField.BLOB] = FeeModel.EIP4844
    # a blob fee alone prices the call at the base fee
    table[FeeField.BLOB] = FeeModel.EIP4844
    return table


_FEE_MODELS = _build_fee_table()


def fee_presence(
    gas_price: Optional[int],
    max_fee: Optional[int],
    priority_fee: Optional[int],
    max_fee_per_blob_gas: Optional[int],
) -> FeeField:
    """Compute the presence bitmask for a set of request fee fields."""
    mask = FeeField.NONE
    if gas_price is not None:
        mask |= FeeField.LEGACY
    if max_fee is not None:
        mask |= FeeField.MAX_FEE
    if priority_fee is not None:
        mask |= FeeField.PRIORITY
    if max_fee_per_blob_gas is not None:
        mask |= FeeField.BLOB
    return mask


def get_effective_gas_price(
    max_fee_per_gas: Optional[int],
    max_priority_fee_per_gas: Optional[int],
    block_base_fee: int,
) -> int:
    """
    Effective gas price of an EIP-1559 request, with the usual fee checks.

    Args:
        max_fee_per_gas: Requested fee cap, if any
        max_priority_fee_per_gas: Requested tip, if any (0 when absent)
        block_base_fee: Base fee of the simulated block

    Returns:
        ``min(max_fee, base_fee + tip)``, or ``base_fee + tip`` without a cap

    Raises:
        FeeCapTooLow: If the fee cap is below the base fee
        TipAboveFeeCap: If the tip exceeds the fee cap
        TipVeryHigh: If ``base_fee + tip`` overflows 256 bits
    """
    priority_fee = max_priority_fee_per_gas or 0
    if max_fee_per_gas is not None:
        if max_fee_per_gas < block_base_fee:
            raise FeeCapTooLow()
        if max_fee_per_gas < priority_fee:
            raise TipAboveFeeCap()

    tipped = block_base_fee + priority_fee
    if tipped > U256_MAX:
        raise TipVeryHigh()

    if max_fee_per_gas is None:
        return tipped
    return min(max_fee_per_gas, tipped)


@dataclass(frozen=True)
class CallFees:
    """
    Resolved fees of a call request.

    ``gas_price`` is the unified price: ``gasPrice`` for legacy requests, the
    effective EIP-1559 price otherwise.
    """
    gas_price: int
    max_priority_fee_per_gas: Optional[int] = None
    max_fee_per_blob_gas: Optional[int] = None

    @classmethod
    def ensure_fees(
        cls,
        call_gas_price: Optional[int],
        call_max_fee: Optional[int],
        call_priority_fee: Optional[int],
        block_base_fee: int,
        blob_versioned_hashes: Optional[Sequence[bytes]],
        max_fee_per_blob_gas: Optional[int],
        block_blob_fee: Optional[int],
    ) -> "CallFees":
        """
        Ensure the fee fields of a request are not conflicting and resolve them.

        A request carrying ``maxFeePerBlobGas`` is treated as an EIP-4844
        transaction and must also carry a non-empty blob hash list.

        Raises:
            ConflictingFeeFieldsInRequest: If the fee fields cannot be combined
            BlobTransactionMissingBlobHashes: If a blob fee is given without blob hashes
            FeeCapTooLow, TipAboveFeeCap, TipVeryHigh: See ``get_effective_gas_price``
        """
        has_blob_hashes = bool(blob_versioned_hashes)
        mask = fee_presence(call_gas_price, call_max_fee, call_priority_fee, max_fee_per_blob_gas)

        model = _FEE_MODELS.get(mask)
        if model is None:
            raise ConflictingFeeFieldsInRequest()
        logger.debug(f"Resolving fees with {model.value} model (fields={mask!r})")

        implied_blob_fee = block_blob_fee if has_blob_hashes else None

        if model is FeeModel.LEGACY:
            # when no fields are specified, the gas price is zero
            return cls(
                gas_price=call_gas_price or 0,
                max_priority_fee_per_gas=None,
                max_fee_per_blob_gas=implied_blob_fee,
            )

        effective_gas_price = get_effective_gas_price(call_max_fee, call_priority_fee, block_base_fee)

        if model is FeeModel.EIP1559:
            return cls(
                gas_price=effective_gas_price,
                max_priority_fee_per_gas=call_priority_fee,
                max_fee_per_blob_gas=implied_blob_fee,
            )

        if not has_blob_hashes:
            raise BlobTransactionMissingBlobHashes()
        return cls(
            gas_price=effective_gas_price,
            max_priority_fee_per_gas=call_priority_fee,
            max_fee_per_blob_gas=max_fee_per_blob_gas,
        )


def resolve_fees(
    legacy_price: Optional[int],
    max_fee: Optional[int],
    priority_fee: Optional[int],
    base_fee: int,
    has_blob_hashes: bool,
    blob_max_fee: Optional[int],
    block_blob_fee: Optional[int],
) -> CallFees:
    """
    Resolve fees from a plain ``has_blob_hashes`` flag instead of a hash list.
    """
    hashes = (b"\x00" * 32,) if has_blob_hashes else None
    return CallFees.ensure_fees(
        legacy_price, max_fee, priority_fee, base_fee, hashes, blob_max_fee, block_blob_fee
    )
