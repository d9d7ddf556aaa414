"""File templates for a new tutorial."""

from .validator import slug_to_module

TUTORIAL_CATEGORY = "polkadot-sdk-cookbook"
DEFAULT_WS_ENDPOINT = "ws://127.0.0.1:9944"


def generate_justfile() -> str:
    return """default:
  @just --list

say-hello:
  echo "Hello, world!"

test:
  uv run pytest

preview:
  cookbook preview .
"""


def generate_tutorial_yml(slug: str, title: str) -> str:
    return f"""name: {title}
slug: {slug}
category: {TUTORIAL_CATEGORY}
needs_node: true
description: Replace with a short description.
type: sdk # or contracts
"""


def generate_readme(slug: str) -> str:
    return f"""# {slug}

Describe the goal, prerequisites, and step-by-step instructions for this tutorial.

## Prerequisites

- Rust `1.86+` (check with `rustc --version`)
- Python `3.10+` (check with `python --version`)
- [uv](https://docs.astral.sh/uv/) (check with `uv --version`)
- Basic knowledge of Polkadot SDK

## Steps

1. **Setup environment**
   ```bash
   cd tutorials/{slug}
   uv sync
   ```

2. **Build the project**
   ```bash
   # Add your build commands here
   ```

3. **Run tests**
   ```bash
   uv run pytest
   ```

## Testing

To run the end-to-end tests:

```bash
cd tutorials/{slug}
uv run pytest
```

## Next Steps

- Add your implementation code to `{slug}-code/`
- Write comprehensive tests in `tests/`
- Update this README with detailed instructions
"""


def generate_test(slug: str) -> str:
    return f'''"""End-to-end tests for the {slug} tutorial."""

import json
import os
import socket
from urllib.parse import urlparse

import pytest
import websockets

ENDPOINT = os.environ.get("POLKADOT_WS", "{DEFAULT_WS_ENDPOINT}")


def is_port_reachable(host: str, port: int, timeout: float) -> bool:
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


async def rpc_call(ws, method, params=None, request_id=1):
    request = {{"jsonrpc": "2.0", "id": request_id, "method": method, "params": params or []}}
    await ws.send(json.dumps(request))
    while True:
        reply = json.loads(await ws.recv())
        if reply.get("id") == request_id:
            break
    if "error" in reply:
        raise RuntimeError(reply["error"])
    return reply["result"]


@pytest.mark.asyncio
async def test_{slug_to_module(slug)}_connects_and_reads_chain_info():
    url = urlparse(ENDPOINT)
    port = url.port or (443 if url.scheme == "wss" else 9944)
    if not is_port_reachable(url.hostname or "127.0.0.1", port, 1.0):
        pytest.skip("node not available")

    async with websockets.connect(ENDPOINT) as ws:
        header = await rpc_call(ws, "chain_getHeader")

    assert int(header["number"], 16) >= 0
'''


def generate_gitignore() -> str:
    return """__pycache__/
.venv/
.pytest_cache/
dist/
*.log
.DS_Store
.coverage
"""


def generate_pyproject(slug: str, title: str) -> str:
    return f"""[project]
name = "{slug}"
version = "0.1.0"
description = "{title} tutorial for the Polkadot Cookbook"
requires-python = ">=3.10"
dependencies = []

[tool.pytest.ini_options]
testpaths = ["tests"]
asyncio_mode = "auto"
"""


def e2e_test_filename(slug: str) -> str:
    return f"test_{slug_to_module(slug)}_e2e.py"
