"""End-to-end tests for the my-tutorial tutorial."""

import pytest

from cookbook_node import NodeClient


@pytest.mark.asyncio
async def test_connects_and_reads_latest_header(node_endpoint):
    async with NodeClient(node_endpoint) as client:
        header = await client.call("chain_getHeader")

    assert int(header["number"], 16) >= 0
