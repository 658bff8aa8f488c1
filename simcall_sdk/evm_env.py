"""
Block-level execution configuration for simulated calls.
"""
from dataclasses import dataclass, replace

from .models import BlockContext


@dataclass(frozen=True)
class CfgEnv:
    """Chain-level executor settings"""
    chain_id: int = 1
    spec: str = "prague"
    disable_block_gas_limit: bool = False
    disable_eip3607: bool = False
    disable_base_fee: bool = False


@dataclass(frozen=True)
class EvmEnv:
    cfg_env: CfgEnv
    block_env: BlockContext


def build_evm_env(cfg: CfgEnv, block: BlockContext) -> EvmEnv:
    """
    Relax the executor configuration for ``eth_call`` and pair it with the block.

    The relaxations are the ones other node implementations apply to calls:
    the call's gas limit may exceed the block gas limit, the sender may have
    code (EIP-3607 disabled), and the fee cap may be below the base fee.
    """
    relaxed = replace(
        cfg,
        disable_block_gas_limit=True,
        disable_eip3607=True,
        disable_base_fee=True,
    )
    return EvmEnv(cfg_env=relaxed, block_env=block)
