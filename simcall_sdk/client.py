"""
CallSimulator - runs ``eth_call`` requests against an external executor.
"""
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from pydantic import ValidationError
from web3 import Web3

from .config import SimulationConfig
from .evm_env import EvmEnv, build_evm_env
from .exceptions import TransactionInputError
from .models import CallRequest, TransactionEnvironment
from .providers import BlockEnvSource, BlockIdentifier, Executor, StateView, get_state_view
from .result import ensure_success
from .tx_env import build_tx_env

StateFactory = Callable[[BlockIdentifier], StateView]


class CallSimulator:
    """
    Simulates calls without going through a node's full ``eth_call`` pipeline.

    The simulator handles:
    1. Resolving the request's fees and gas limit into a transaction environment
    2. Relaxing the block's execution configuration for simulation
    3. Interpreting the executor's outcome

    Fetching block configuration, account state and executing bytecode are
    delegated to the given collaborators.
    """

    def __init__(
        self,
        block_source: BlockEnvSource,
        executor: Executor,
        config: Optional[SimulationConfig] = None,
        state_factory: Optional[StateFactory] = None,
        w3: Optional[Web3] = None,
        balances: Optional[Mapping[str, int]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the CallSimulator

        Args:
            block_source: Resolves block identifiers into (CfgEnv, BlockContext)
            executor: Runs the resolved transaction
            config: Simulation settings (defaults to ``SimulationConfig()``)
            state_factory: Builds a state view for a block identifier
                (defaults to the variant selected by ``config.state_backend``)
            w3: Web3 instance for the web3 state backend
            balances: Account balances for the memory state backend
            logger: Optional logger instance to use for debug/info logging
        """
        self.block_source = block_source
        self.executor = executor
        self.config = config or SimulationConfig()
        self.w3 = w3
        self.balances = balances
        self.logger = logger or logging.getLogger(__name__)
        self.state_factory = state_factory or self._default_state_factory

    def _default_state_factory(self, block_id: BlockIdentifier) -> StateView:
        return get_state_view(self.config, block_id, balances=self.balances, w3=self.w3)

    def prepare(
        self,
        request: Union[CallRequest, Dict[str, Any]],
        block_id: BlockIdentifier = "latest",
    ) -> Tuple[EvmEnv, TransactionEnvironment, StateView]:
        """
        Resolve a request into everything the executor needs.

        Args:
            request: Call request, as a model or a JSON-RPC call object
            block_id: Block to simulate against

        Returns:
            Tuple of (relaxed EvmEnv, TransactionEnvironment, state view)

        Raises:
            TransactionInputError: If a call object dictionary is malformed
            SimCallError: Any fee, blob or funds error from environment building
        """
        call = self._coerce_request(request)

        cfg, block = self.block_source.evm_env_at(block_id)
        state = self.state_factory(block_id)
        tx_env = build_tx_env(block, call, state, self.config.call_gas_limit)
        evm_env = build_evm_env(cfg, block)

        self.logger.debug(
            f"Prepared call at block {block.number}: caller={tx_env.caller} "
            f"gas_limit={tx_env.gas_limit} gas_price={tx_env.gas_price}"
        )
        return evm_env, tx_env, state

    def eth_call_light(
        self,
        request: Union[CallRequest, Dict[str, Any]],
        block_id: BlockIdentifier = "latest",
    ) -> bytes:
        """
        Simulate a call and return its output.

        Args:
            request: Call request, as a model or a JSON-RPC call object
            block_id: Block to simulate against

        Returns:
            Output bytes of the call

        Raises:
            RevertError: If execution reverted or halted
            SimCallError: Any error from ``prepare``
        """
        evm_env, tx_env, state = self.prepare(request, block_id)
        outcome = self.executor.transact(state, evm_env, tx_env)
        return ensure_success(outcome)

    def _coerce_request(self, request: Union[CallRequest, Dict[str, Any]]) -> CallRequest:
        if isinstance(request, CallRequest):
            return request
        if not isinstance(request, dict):
            raise TransactionInputError(f"Call request must be a dictionary, got {type(request).__name__}")
        try:
            return CallRequest.model_validate(request)
        except ValidationError as e:
            self.logger.error(f"Invalid call request: {e}")
            raise TransactionInputError(f"Invalid call request: {str(e)}") from e
