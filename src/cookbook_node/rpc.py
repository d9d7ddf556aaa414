"""Minimal JSON-RPC over WebSocket, enough for tutorial e2e checks."""

import asyncio
import itertools
import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import websockets

logger = logging.getLogger(__name__)


class RpcError(RuntimeError):
    """The node answered a request with a JSON-RPC error object."""

    def __init__(self, method: str, code: Optional[int], message: str, data: Any = None):
        super().__init__(f"{method} failed ({code}): {message}")
        self.method = method
        self.code = code
        self.message = message
        self.data = data


@dataclass
class ChainInfo:
    chain: str
    name: str
    version: str
    best_number: int


def decode_block_number(value) -> int:
    """Headers carry the block number as a hex string such as ``"0x1a"``."""
    if isinstance(value, int):
        return value
    return int(value, 16)


class NodeClient:
    """Async client for a node's WebSocket RPC endpoint.

    Example::

        async with NodeClient("ws://127.0.0.1:9944") as client:
            info = await client.chain_info()
    """

    def __init__(self, endpoint: str, timeout: float = 10.0):
        self.endpoint = endpoint
        self.timeout = timeout
        self._websocket = None
        self._ids = itertools.count(1)

    async def connect(self) -> "NodeClient":
        self._websocket = await websockets.connect(
            self.endpoint, open_timeout=self.timeout
        )
        logger.debug(f"Connected to {self.endpoint}")
        return self

    async def close(self) -> None:
        if self._websocket is not None:
            await self._websocket.close()
            self._websocket = None

    async def __aenter__(self) -> "NodeClient":
        return await self.connect()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Send one request and wait for the response with the same id."""
        if self._websocket is None:
            raise RuntimeError("NodeClient is not connected")

        request_id = next(self._ids)
        request = {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": method,
            "params": params or [],
        }
        await self._websocket.send(json.dumps(request))

        reply = await asyncio.wait_for(self._receive(request_id), timeout=self.timeout)
        if "error" in reply:
            error = reply["error"] or {}
            raise RpcError(
                method, error.get("code"), error.get("message", ""), error.get("data")
            )
        return reply.get("result")

    async def _receive(self, request_id: int) -> dict:
        while True:
            reply = json.loads(await self._websocket.recv())
            # Subscription notifications and stale replies carry other ids.
            if reply.get("id") == request_id:
                return reply

    async def chain_info(self) -> ChainInfo:
        chain = await self.call("system_chain")
        name = await self.call("system_name")
        version = await self.call("system_version")
        header = await self.call("chain_getHeader")
        return ChainInfo(
            chain=chain,
            name=name,
            version=version,
            best_number=decode_block_number(header["number"]),
        )
