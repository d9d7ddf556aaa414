"""TCP reachability checks for node endpoints."""

import socket
import time
from typing import Tuple
from urllib.parse import urlparse

WS_ENDPOINT_ENV = "POLKADOT_WS"
DEFAULT_WS_ENDPOINT = "ws://127.0.0.1:9944"
DEFAULT_RPC_PORT = 9944
DEFAULT_WSS_PORT = 443


def parse_endpoint(endpoint: str, default_port: int = DEFAULT_RPC_PORT) -> Tuple[str, int]:
    """Split a ``ws://host:port`` URL into host and port.

    ``wss`` URLs without a port use 443; ``ws`` URLs use ``default_port``.
    """
    url = urlparse(endpoint)
    if url.scheme not in ("ws", "wss"):
        raise ValueError(f"Not a WebSocket endpoint: {endpoint}")
    port = url.port or (DEFAULT_WSS_PORT if url.scheme == "wss" else default_port)
    return url.hostname or "127.0.0.1", port


def is_port_reachable(host: str, port: int, timeout: float = 1.0) -> bool:
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


def wait_for_port(
    host: str, port: int, timeout: float = 30.0, interval: float = 0.5
) -> bool:
    """Poll until the port accepts connections or ``timeout`` elapses."""
    deadline = time.monotonic() + timeout
    while True:
        remaining = deadline - time.monotonic()
        if is_port_reachable(host, port, timeout=max(min(interval, remaining), 0.05)):
            return True
        if time.monotonic() >= deadline:
            return False
        time.sleep(min(interval, max(deadline - time.monotonic(), 0)))
