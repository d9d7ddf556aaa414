"""pytest fixtures for tutorial e2e tests.

Set ``POLKADOT_WS`` to point at a running node, or ``POLKADOT_NODE_BIN``
to have a dev node started for the session. Tests skip when neither
yields a reachable endpoint.
"""

import os

import pytest

from .network import (
    DEFAULT_WS_ENDPOINT,
    WS_ENDPOINT_ENV,
    is_port_reachable,
    parse_endpoint,
)
from .process import NODE_BIN_ENV, NodeProcess


@pytest.fixture(scope="session")
def node_endpoint():
    endpoint = os.environ.get(WS_ENDPOINT_ENV)
    binary = os.environ.get(NODE_BIN_ENV)

    if endpoint is None and binary:
        with NodeProcess(binary) as node:
            yield node.endpoint
        return

    endpoint = endpoint or DEFAULT_WS_ENDPOINT
    host, port = parse_endpoint(endpoint)
    if not is_port_reachable(host, port, timeout=1.0):
        pytest.skip(f"node not available at {endpoint}")
    yield endpoint
