"""
Collaborator interfaces for call simulation and their concrete variants.

Each state view variant implements the whole ``StateView`` contract on its
own; ``get_state_view`` picks one from the ``SimulationConfig``.
"""
import logging
from typing import Dict, Mapping, Optional, Protocol, Tuple, Union

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

from .config import SimulationConfig
from .evm_env import CfgEnv, EvmEnv
from .exceptions import StateAccessError
from .models import BlockContext, ExecutionOutcome, TransactionEnvironment

logger = logging.getLogger(__name__)

BlockIdentifier = Union[str, int, bytes]


class StateView(Protocol):
    """Read-only, point-in-time account state"""

    def get_balance(self, address: str) -> int:
        """Balance in wei; 0 for accounts that do not exist"""
        ...


class Executor(Protocol):
    """Virtual machine that runs one resolved transaction"""

    def transact(self, state: StateView, evm_env: EvmEnv, tx_env: TransactionEnvironment) -> ExecutionOutcome:
        ...


class BlockEnvSource(Protocol):
    """Resolves a block identifier into its execution configuration"""

    def evm_env_at(self, block_id: BlockIdentifier) -> Tuple[CfgEnv, BlockContext]:
        ...


class InMemoryStateView:
    """
    State view backed by a plain balance mapping.

    Addresses are matched case-insensitively.
    """

    def __init__(self, balances: Optional[Mapping[str, int]] = None):
        self._balances: Dict[str, int] = {
            address.lower(): balance for address, balance in (balances or {}).items()
        }

    def get_balance(self, address: str) -> int:
        return self._balances.get(address.lower(), 0)


class Web3StateView:
    """
    State view reading balances from an Ethereum node at a fixed block.

    Balances are memoized per instance, so one view serves one call.
    """

    def __init__(self, w3: Web3, block_identifier: BlockIdentifier = "latest"):
        self.w3 = w3
        self.block_identifier = block_identifier
        self._balances: Dict[str, int] = {}

    @classmethod
    def from_config(cls, config: SimulationConfig, block_identifier: BlockIdentifier = "latest") -> "Web3StateView":
        """
        Connect to ``config.rpc_url``.

        Raises:
            ValueError: If the config carries no RPC URL
        """
        if not config.rpc_url:
            raise ValueError("rpc_url is required for the web3 state backend")
        w3 = Web3(Web3.HTTPProvider(config.rpc_url, request_kwargs={"timeout": config.request_timeout}))
        return cls(w3, block_identifier)

    def get_balance(self, address: str) -> int:
        """
        Raises:
            StateAccessError: If the node request fails
        """
        key = address.lower()
        if key in self._balances:
            return self._balances[key]
        checksum_address = Web3.to_checksum_address(address)
        try:
            balance = self.w3.eth.get_balance(checksum_address, self.block_identifier)
        # web3 v6 reports JSON-RPC error responses as ValueError
        except (Web3Exception, requests.RequestException, ValueError) as e:
            logger.error(f"Balance lookup for {address} at {self.block_identifier!r} failed: {e}")
            raise StateAccessError(f"Failed to read balance of {address}: {str(e)}") from e
        self._balances[key] = int(balance)
        return self._balances[key]


def get_state_view(
    config: SimulationConfig,
    block_identifier: BlockIdentifier = "latest",
    balances: Optional[Mapping[str, int]] = None,
    w3: Optional[Web3] = None,
) -> StateView:
    """
    Build the state view variant selected by ``config.state_backend``.

    Args:
        config: Simulation settings
        block_identifier: Block the view is pinned to (web3 backend)
        balances: Initial balances (memory backend)
        w3: Existing Web3 instance to reuse instead of ``config.rpc_url`` (web3 backend)
    """
    if config.state_backend == "web3":
        if w3 is not None:
            return Web3StateView(w3, block_identifier)
        return Web3StateView.from_config(config, block_identifier)
    return InMemoryStateView(balances)


