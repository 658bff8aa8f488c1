"""
Configuration for call simulation.
"""
import os
import urllib.parse
from typing import Optional

from pydantic import BaseModel, Field, field_validator

# Gas ceiling applied to calls that neither set a gas limit nor a gas price
RPC_DEFAULT_GAS_CAP = 50_000_000

STATE_BACKENDS = ("memory", "web3")


class SimulationConfig(BaseModel):
    """
    Node-side settings for simulated calls.

    Attributes:
        call_gas_limit: Gas ceiling used for zero-price calls without a gas limit
        state_backend: Which ``StateView`` variant serves balance lookups
        rpc_url: Ethereum RPC endpoint for the ``web3`` backend
        request_timeout: Timeout for RPC requests in seconds
    """
    call_gas_limit: int = Field(RPC_DEFAULT_GAS_CAP, gt=0)
    state_backend: str = "memory"
    rpc_url: Optional[str] = None
    request_timeout: int = Field(30, gt=0)

    @field_validator("state_backend")
    @classmethod
    def _check_backend(cls, value: str) -> str:
        if value not in STATE_BACKENDS:
            raise ValueError(f"state_backend must be one of {', '.join(STATE_BACKENDS)} (got: {value})")
        return value

    @field_validator("rpc_url")
    @classmethod
    def _check_rpc_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        parsed = urllib.parse.urlparse(value)
        # Check if it's a localhost or 127.0.0.1 address (with or without port)
        host = parsed.netloc.split(':')[0]
        is_local = host in ('localhost', '127.0.0.1')
        if parsed.scheme != 'https' and not is_local:
            raise ValueError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")
        return value

    @classmethod
    def from_env(cls) -> "SimulationConfig":
        """
        Build a config from ``SIMCALL_*`` environment variables.

        Unset variables fall back to the defaults.
        """
        values = {}
        gas_cap = os.environ.get("SIMCALL_GAS_CAP")
        if gas_cap:
            values["call_gas_limit"] = int(gas_cap)
        backend = os.environ.get("SIMCALL_STATE_BACKEND")
        if backend:
            values["state_backend"] = backend
        rpc_url = os.environ.get("SIMCALL_RPC_URL")
        if rpc_url:
            values["rpc_url"] = rpc_url
        timeout = os.environ.get("SIMCALL_REQUEST_TIMEOUT")
        if timeout:
            values["request_timeout"] = int(timeout)
        return cls(**values)
