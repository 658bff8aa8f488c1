"""
Tests for the SimulationConfig module.
"""
import pytest
from pydantic import ValidationError

from simcall_sdk.config import RPC_DEFAULT_GAS_CAP, SimulationConfig


class TestSimulationConfig:
    """Test SimulationConfig class."""

    def test_defaults(self):
        config = SimulationConfig()
        assert config.call_gas_limit == RPC_DEFAULT_GAS_CAP == 50_000_000
        assert config.state_backend == "memory"
        assert config.rpc_url is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SIMCALL_GAS_CAP", "25000000")
        monkeypatch.setenv("SIMCALL_STATE_BACKEND", "web3")
        monkeypatch.setenv("SIMCALL_RPC_URL", "https://rpc.example.com")
        monkeypatch.setenv("SIMCALL_REQUEST_TIMEOUT", "5")

        config = SimulationConfig.from_env()

        assert config.call_gas_limit == 25_000_000
        assert config.state_backend == "web3"
        assert config.rpc_url == "https://rpc.example.com"
        assert config.request_timeout == 5

    def test_from_env_without_variables(self, monkeypatch):
        for name in ("SIMCALL_GAS_CAP", "SIMCALL_STATE_BACKEND", "SIMCALL_RPC_URL", "SIMCALL_REQUEST_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)
        assert SimulationConfig.from_env() == SimulationConfig()

    def test_unknown_backend(self):
        with pytest.raises(ValidationError, match="state_backend must be one of"):
            SimulationConfig(state_backend="redis")

    def test_insecure_rpc_url(self):
        with pytest.raises(ValidationError, match="must use https"):
            SimulationConfig(rpc_url="http://rpc.example.com")

    @pytest.mark.parametrize("url", ["http://localhost:8545", "http://127.0.0.1:8545"])
    def test_local_rpc_url_may_use_http(self, url):
        assert SimulationConfig(rpc_url=url).rpc_url == url

    def test_gas_cap_must_be_positive(self):
        with pytest.raises(ValidationError):
            SimulationConfig(call_gas_limit=0)
