"""
Gas allowance capping for calls that did not specify a gas limit.
"""
import logging

from ._rate_limited_log import rate_limited_log
from .exceptions import InsufficientFunds
from .models import U64_MAX, TransactionEnvironment
from .providers import StateView

logger = logging.getLogger(__name__)


def caller_gas_allowance(state: StateView, env: TransactionEnvironment) -> int:
    """
    Amount of gas the caller can afford at the environment's gas price.

    Args:
        state: Point-in-time account state
        env: Resolved transaction environment

    Returns:
        ``(balance - value) // gas_price``, or 0 when the gas price is 0

    Raises:
        InsufficientFunds: If the caller's balance is below the transferred value
    """
    balance = state.get_balance(env.caller)
    if balance < env.value:
        raise InsufficientFunds(cost=env.value, balance=balance)
    if env.gas_price == 0:
        return 0
    return (balance - env.value) // env.gas_price


def cap_tx_gas_limit_with_caller_allowance(state: StateView, env: TransactionEnvironment) -> None:
    """
    Cap ``env.gas_limit`` with the caller's allowance.

    The limit is only replaced when the allowance fits in 64 bits; a larger
    allowance leaves the current limit as it is rather than saturating.
    """
    allowance = caller_gas_allowance(state, env)
    if allowance > U64_MAX:
        rate_limited_log(
            "Caller allowance does not fit in a 64-bit gas limit; keeping the default gas limit",
            level="info",
            logger_instance=logger,
        )
        return
    logger.debug(f"Capping gas limit of {env.caller} from {env.gas_limit} to {allowance}")
    env.gas_limit = allowance
