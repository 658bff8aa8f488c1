"""
Interpretation of executor outcomes.
"""
import logging

from .exceptions import RevertError
from .models import ExecutionOutcome, Halt, Revert, Success

logger = logging.getLogger(__name__)


def ensure_success(outcome: ExecutionOutcome) -> bytes:
    """
    Return the output of a successful execution.

    Args:
        outcome: Outcome reported by the executor

    Returns:
        Output bytes of a ``Success``

    Raises:
        RevertError: For a ``Revert`` (carrying its output) or a ``Halt``
            (carrying empty data; the halt reason is not part of the payload)
        TypeError: If the outcome is not one of the known variants
    """
    if isinstance(outcome, Success):
        return bytes(outcome.output)
    if isinstance(outcome, Revert):
        logger.debug(f"Execution reverted after {outcome.gas_used} gas")
        raise RevertError(outcome.output)
    if isinstance(outcome, Halt):
        logger.debug(f"Execution halted ({outcome.reason}) after {outcome.gas_used} gas")
        raise RevertError(b"")
    raise TypeError(f"Unknown execution outcome: {type(outcome).__name__}")
