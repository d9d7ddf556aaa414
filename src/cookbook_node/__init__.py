"""Helpers for tutorial e2e tests that talk to a running node."""

from .network import (
    DEFAULT_WS_ENDPOINT,
    WS_ENDPOINT_ENV,
    is_port_reachable,
    parse_endpoint,
    wait_for_port,
)
from .process import NODE_BIN_ENV, NodeProcess, NodeStartError
from .rpc import ChainInfo, NodeClient, RpcError

__all__ = [
    "DEFAULT_WS_ENDPOINT",
    "NODE_BIN_ENV",
    "WS_ENDPOINT_ENV",
    "ChainInfo",
    "NodeClient",
    "NodeProcess",
    "NodeStartError",
    "RpcError",
    "is_port_reachable",
    "parse_endpoint",
    "wait_for_port",
]
