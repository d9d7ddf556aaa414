"""Connect to a Polkadot endpoint and print the chain name and best block."""

import asyncio
import os

from cookbook_node import NodeClient

ENDPOINT = os.environ.get("POLKADOT_WS", "wss://rpc.polkadot.io")


async def main():
    async with NodeClient(ENDPOINT) as client:
        info = await client.chain_info()

    print(f"Connected to chain: {info.chain}")
    print(f"Latest block number: {info.best_number}")


if __name__ == "__main__":
    asyncio.run(main())
