"""
Pytest fixtures for the simcall SDK tests.
"""
import pytest
from unittest.mock import MagicMock
from web3 import Web3
from web3.providers.rpc import HTTPProvider

from simcall_sdk._rate_limited_log import reset_rate_limits
from simcall_sdk.evm_env import CfgEnv
from simcall_sdk.models import BlockContext, Success

# Constants for testing
TEST_RPC_URL = "https://rpc.example.com"
TEST_CALLER = "0x1234567890123456789012345678901234567890"
TEST_TARGET = "0x0987654321098765432109876543210987654321"
TEST_BLOB_HASH = "0x01" + "ab" * 31
TEST_BALANCE_WEI = 1_000_000
TEST_BLOCK_GAS_LIMIT = 30_000_000


@pytest.fixture(autouse=True)
def _patch_http_provider(monkeypatch):
    """
    Stub every Web3 HTTP call so no DNS / network traffic is triggered.
    Works for all tests because it is autouse.
    """
    def _dummy(self, method, params=None, _=None):      # signature match
        if method == "eth_chainId":
            return {"jsonrpc": "2.0", "id": 1, "result": "0x1"}         # main-net
        if method == "eth_getBalance":
            return {"jsonrpc": "2.0", "id": 1, "result": hex(TEST_BALANCE_WEI)}
        # everything else – return something harmless
        return {"jsonrpc": "2.0", "id": 1, "result": "0x0"}

    monkeypatch.setattr(HTTPProvider, "make_request", _dummy, raising=True)


@pytest.fixture(autouse=True)
def _fresh_rate_limits():
    """Every test starts with an empty rate-limited log cache."""
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def block():
    """A post-London block with a 100 wei base fee"""
    return BlockContext(
        number=19_000_000,
        base_fee=100,
        gas_limit=TEST_BLOCK_GAS_LIMIT,
        blob_gasprice=7,
        timestamp=1_700_000_000,
    )


@pytest.fixture
def cfg():
    return CfgEnv(chain_id=1)


@pytest.fixture
def balance_state():
    """State view mock whose balance lookups can be asserted on"""
    state = MagicMock()
    state.get_balance = MagicMock(return_value=TEST_BALANCE_WEI)
    return state


@pytest.fixture
def block_source(cfg, block):
    """Block source resolving every identifier to the same block"""
    source = MagicMock()
    source.evm_env_at = MagicMock(return_value=(cfg, block))
    return source


@pytest.fixture
def executor():
    """Executor that succeeds with a fixed 32-byte word"""
    mock = MagicMock()
    mock.transact = MagicMock(return_value=Success(output=b"\x00" * 31 + b"\x2a", gas_used=21_000))
    return mock


@pytest.fixture
def mock_w3():
    """Mock Web3 instance with a balance-serving eth module"""
    mock = MagicMock(spec=Web3)
    mock.eth = MagicMock()
    mock.eth.get_balance = MagicMock(return_value=TEST_BALANCE_WEI)
    return mock
