"""
Data models for the simcall SDK.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator
from web3 import Web3

from .exceptions import TransactionInputError

U64_MAX = 2**64 - 1
U256_MAX = 2**256 - 1
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def _parse_quantity(value: Any, limit: int) -> Optional[int]:
    """
    Parse a JSON-RPC quantity (int or 0x-hex string) and bound-check it.

    Args:
        value: Raw field value
        limit: Largest accepted value (inclusive)

    Returns:
        The parsed integer, or None if the value is absent
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("quantity must be an integer, not a boolean")
    if isinstance(value, str):
        if not value.startswith(("0x", "0X")):
            raise ValueError(f"quantity must be 0x-prefixed hex, got {value!r}")
        value = Web3.to_int(hexstr=value)
    if not isinstance(value, int):
        raise ValueError(f"quantity must be an integer, got {type(value).__name__}")
    if value < 0 or value > limit:
        raise ValueError(f"quantity {value} out of range")
    return value


def _parse_bytes(value: Any) -> Optional[bytes]:
    if value is None:
        return None
    if isinstance(value, str):
        return Web3.to_bytes(hexstr=value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise ValueError(f"expected hex string or bytes, got {type(value).__name__}")


def _parse_hash(value: Any) -> bytes:
    raw = _parse_bytes(value)
    if raw is None or len(raw) != 32:
        raise ValueError("hash must be exactly 32 bytes")
    return raw


def _parse_address(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = "0x" + value.hex()
    if not Web3.is_address(value):
        raise ValueError(f"invalid address: {value!r}")
    return Web3.to_checksum_address(value)


class AccessListEntry(BaseModel):
    """EIP-2930 access list item"""
    address: str
    storage_keys: List[bytes] = Field(default_factory=list, alias="storageKeys")

    @field_validator("address", mode="before")
    @classmethod
    def _check_address(cls, value: Any) -> Optional[str]:
        return _parse_address(value)

    @field_validator("storage_keys", mode="before")
    @classmethod
    def _check_keys(cls, value: Any) -> List[bytes]:
        return [_parse_hash(key) for key in value or []]

    class Config:
        populate_by_name = True
        frozen = True


class Authorization(BaseModel):
    """EIP-7702 signed authorization tuple"""
    chain_id: int = Field(..., alias="chainId")
    address: str
    nonce: int
    y_parity: int = Field(..., alias="yParity")
    r: int
    s: int

    @field_validator("address", mode="before")
    @classmethod
    def _check_address(cls, value: Any) -> Optional[str]:
        return _parse_address(value)

    @field_validator("chain_id", "r", "s", mode="before")
    @classmethod
    def _check_u256(cls, value: Any) -> Optional[int]:
        return _parse_quantity(value, U256_MAX)

    @field_validator("nonce", mode="before")
    @classmethod
    def _check_u64(cls, value: Any) -> Optional[int]:
        return _parse_quantity(value, U64_MAX)

    @field_validator("y_parity", mode="before")
    @classmethod
    def _check_parity(cls, value: Any) -> Optional[int]:
        return _parse_quantity(value, 255)

    class Config:
        populate_by_name = True
        frozen = True


class CallRequest(BaseModel):
    """
    Call object of an ``eth_call`` / ``eth_estimateGas`` request.

    All fields are optional; ``None`` means the caller did not send the field.
    An explicitly empty list is kept distinct from an absent one.
    """
    from_address: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    gas: Optional[int] = None
    gas_price: Optional[int] = Field(None, alias="gasPrice")
    max_fee_per_gas: Optional[int] = Field(None, alias="maxFeePerGas")
    max_priority_fee_per_gas: Optional[int] = Field(None, alias="maxPriorityFeePerGas")
    max_fee_per_blob_gas: Optional[int] = Field(None, alias="maxFeePerBlobGas")
    value: Optional[int] = None
    input: Optional[bytes] = None
    data: Optional[bytes] = None
    nonce: Optional[int] = None
    access_list: Optional[List[AccessListEntry]] = Field(None, alias="accessList")
    chain_id: Optional[int] = Field(None, alias="chainId")
    blob_versioned_hashes: Optional[List[bytes]] = Field(None, alias="blobVersionedHashes")
    transaction_type: Optional[int] = Field(None, alias="type")
    authorization_list: Optional[List[Authorization]] = Field(None, alias="authorizationList")

    @field_validator("from_address", "to", mode="before")
    @classmethod
    def _check_addresses(cls, value: Any) -> Optional[str]:
        return _parse_address(value)

    @field_validator(
        "gas_price", "max_fee_per_gas", "max_priority_fee_per_gas",
        "max_fee_per_blob_gas", "value", mode="before"
    )
    @classmethod
    def _check_u256(cls, value: Any) -> Optional[int]:
        return _parse_quantity(value, U256_MAX)

    @field_validator("gas", "nonce", "chain_id", "transaction_type", mode="before")
    @classmethod
    def _check_u64(cls, value: Any) -> Optional[int]:
        return _parse_quantity(value, U64_MAX)

    @field_validator("input", "data", mode="before")
    @classmethod
    def _check_bytes(cls, value: Any) -> Optional[bytes]:
        return _parse_bytes(value)

    @field_validator("blob_versioned_hashes", mode="before")
    @classmethod
    def _check_hashes(cls, value: Any) -> Optional[List[bytes]]:
        if value is None:
            return None
        return [_parse_hash(item) for item in value]

    def unique_input(self) -> Optional[bytes]:
        """
        Return the call data, accepting either ``input`` or the legacy ``data``.

        Raises:
            TransactionInputError: If both are set and differ
        """
        if self.input is not None and self.data is not None and self.input != self.data:
            raise TransactionInputError()
        return self.input if self.input is not None else self.data

    class Config:
        populate_by_name = True
        frozen = True


@dataclass(frozen=True)
class BlockContext:
    """
    Fee-relevant view of the block a call is simulated against.

    ``blob_gasprice`` is treated as present by convention and defaults to 0.
    """
    number: int = 0
    base_fee: int = 0
    gas_limit: int = 30_000_000
    blob_gasprice: Optional[int] = 0
    timestamp: int = 0
    coinbase: str = ZERO_ADDRESS


@dataclass(frozen=True)
class TxKind:
    """Call target: an address for a message call, None for contract creation"""
    to: Optional[str] = None

    @classmethod
    def create(cls) -> "TxKind":
        return cls(None)

    @classmethod
    def call(cls, address: str) -> "TxKind":
        return cls(address)

    @property
    def is_create(self) -> bool:
        return self.to is None


@dataclass
class TransactionEnvironment:
    """
    Fully resolved transaction handed to the executor.

    ``nonce`` of None means the executor uses the account's next nonce.
    """
    caller: str
    kind: TxKind
    value: int
    data: bytes
    nonce: Optional[int]
    gas_limit: int
    gas_price: int
    gas_priority_fee: Optional[int] = None
    max_fee_per_blob_gas: int = 0
    blob_hashes: Tuple[bytes, ...] = ()
    access_list: Tuple[AccessListEntry, ...] = ()
    authorization_list: Tuple[Authorization, ...] = ()
    chain_id: Optional[int] = None
    tx_type: int = 0


class HaltReason(str, Enum):
    """Reasons an executor may halt execution"""
    OUT_OF_GAS = "OUT_OF_GAS"
    INVALID_OPCODE = "INVALID_OPCODE"
    OPCODE_NOT_FOUND = "OPCODE_NOT_FOUND"
    STACK_UNDERFLOW = "STACK_UNDERFLOW"
    STACK_OVERFLOW = "STACK_OVERFLOW"
    INVALID_JUMP = "INVALID_JUMP"
    CALL_TOO_DEEP = "CALL_TOO_DEEP"
    CREATE_COLLISION = "CREATE_COLLISION"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Success:
    output: bytes
    gas_used: int = 0
    logs: Tuple[Any, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Revert:
    output: bytes
    gas_used: int = 0


@dataclass(frozen=True)
class Halt:
    reason: HaltReason
    gas_used: int = 0


ExecutionOutcome = Union[Success, Revert, Halt]
