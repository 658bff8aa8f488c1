"""
Tests for the simulation execution configuration.
"""
from simcall_sdk.evm_env import CfgEnv, EvmEnv, build_evm_env


def test_relaxations_are_applied(cfg, block):
    evm_env = build_evm_env(cfg, block)

    assert isinstance(evm_env, EvmEnv)
    assert evm_env.cfg_env.disable_block_gas_limit
    assert evm_env.cfg_env.disable_eip3607
    assert evm_env.cfg_env.disable_base_fee
    assert evm_env.block_env is block


def test_other_settings_are_kept(block):
    cfg = CfgEnv(chain_id=11155111, spec="cancun")
    evm_env = build_evm_env(cfg, block)
    assert evm_env.cfg_env.chain_id == 11155111
    assert evm_env.cfg_env.spec == "cancun"


def test_base_config_is_not_mutated(cfg, block):
    build_evm_env(cfg, block)
    assert not cfg.disable_block_gas_limit
    assert not cfg.disable_eip3607
    assert not cfg.disable_base_fee
