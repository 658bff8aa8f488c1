"""
Tests for gas allowance capping.
"""
import logging
import pytest
from unittest.mock import MagicMock

from simcall_sdk.allowance import caller_gas_allowance, cap_tx_gas_limit_with_caller_allowance
from simcall_sdk.exceptions import InsufficientFunds
from simcall_sdk.models import U64_MAX, TransactionEnvironment, TxKind
from simcall_sdk.providers import InMemoryStateView
from conftest import TEST_BLOCK_GAS_LIMIT, TEST_CALLER


def make_env(gas_price=10, value=0, gas_limit=TEST_BLOCK_GAS_LIMIT):
    return TransactionEnvironment(
        caller=TEST_CALLER,
        kind=TxKind.create(),
        value=value,
        data=b"",
        nonce=None,
        gas_limit=gas_limit,
        gas_price=gas_price,
    )


def test_allowance_is_floor_of_spendable_balance():
    state = InMemoryStateView({TEST_CALLER: 1_000_005})
    assert caller_gas_allowance(state, make_env(gas_price=10)) == 100_000


def test_value_is_subtracted_first():
    state = InMemoryStateView({TEST_CALLER: 1_000})
    assert caller_gas_allowance(state, make_env(gas_price=3, value=100)) == 300


def test_unknown_account_has_zero_balance():
    assert caller_gas_allowance(InMemoryStateView(), make_env()) == 0


def test_zero_price_allowance_is_zero():
    state = InMemoryStateView({TEST_CALLER: 1_000})
    assert caller_gas_allowance(state, make_env(gas_price=0)) == 0


def test_insufficient_funds_reports_cost_and_balance():
    state = InMemoryStateView({TEST_CALLER: 300})
    with pytest.raises(InsufficientFunds) as exc_info:
        caller_gas_allowance(state, make_env(value=400))
    assert exc_info.value.cost == 400
    assert exc_info.value.balance == 300
    assert "have 300 want 400" in str(exc_info.value)


def test_cap_sets_gas_limit(balance_state):
    env = make_env(gas_price=10)
    cap_tx_gas_limit_with_caller_allowance(balance_state, env)
    assert env.gas_limit == 100_000
    balance_state.get_balance.assert_called_once_with(TEST_CALLER)


def test_cap_may_raise_gas_limit_above_block_default():
    state = InMemoryStateView({TEST_CALLER: 10**18})
    env = make_env(gas_price=1)
    cap_tx_gas_limit_with_caller_allowance(state, env)
    assert env.gas_limit == 10**18


def test_allowance_at_width_boundary_is_applied():
    state = InMemoryStateView({TEST_CALLER: U64_MAX})
    env = make_env(gas_price=1)
    cap_tx_gas_limit_with_caller_allowance(state, env)
    assert env.gas_limit == U64_MAX


def test_overflowing_allowance_keeps_default_gas_limit(caplog):
    state = InMemoryStateView({TEST_CALLER: U64_MAX + 1})
    env = make_env(gas_price=1)

    caplog.set_level(logging.INFO)
    cap_tx_gas_limit_with_caller_allowance(state, env)

    # not saturated to U64_MAX
    assert env.gas_limit == TEST_BLOCK_GAS_LIMIT
    assert any("does not fit" in msg for msg in caplog.messages)


def test_overflow_notice_is_rate_limited(caplog):
    state = InMemoryStateView({TEST_CALLER: 2**80})
    caplog.set_level(logging.INFO)
    for _ in range(3):
        cap_tx_gas_limit_with_caller_allowance(state, make_env(gas_price=1))
    assert sum("does not fit" in msg for msg in caplog.messages) == 1


def test_cap_failure_leaves_env_untouched():
    state = MagicMock()
    state.get_balance = MagicMock(return_value=5)
    env = make_env(value=10)
    with pytest.raises(InsufficientFunds):
        cap_tx_gas_limit_with_caller_allowance(state, env)
    assert env.gas_limit == TEST_BLOCK_GAS_LIMIT
