"""Run a pre-built node binary for the duration of a test session."""

import logging
import os
import pathlib
import subprocess
import time
from typing import List, Optional, Sequence

from .network import wait_for_port

logger = logging.getLogger(__name__)

NODE_BIN_ENV = "POLKADOT_NODE_BIN"
DEFAULT_NODE_ARGS = ["--dev", "--tmp"]


class NodeStartError(RuntimeError):
    """The node binary exited early or never opened its RPC port."""


class NodeProcess:
    """Spawn ``binary`` and wait for its RPC port.

    Usable as a context manager; the process is terminated on exit and
    killed if it does not stop within ``stop_timeout`` seconds.
    """

    def __init__(
        self,
        binary: os.PathLike | str,
        args: Optional[Sequence[str]] = None,
        host: str = "127.0.0.1",
        port: int = 9944,
        startup_timeout: float = 60.0,
        stop_timeout: float = 10.0,
        poll_interval: float = 0.5,
        log_path: Optional[pathlib.Path] = None,
    ):
        self.binary = str(binary)
        self.args: List[str] = (
            list(args) if args is not None else [*DEFAULT_NODE_ARGS, f"--rpc-port={port}"]
        )
        self.host = host
        self.port = port
        self.startup_timeout = startup_timeout
        self.stop_timeout = stop_timeout
        self.poll_interval = poll_interval
        self.log_path = log_path

        self._process: Optional[subprocess.Popen] = None
        self._log_file = None

    @property
    def endpoint(self) -> str:
        return f"ws://{self.host}:{self.port}"

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self) -> "NodeProcess":
        command = [self.binary, *self.args]
        logger.info(f"Starting node: {' '.join(command)}")

        if self.log_path is not None:
            self._log_file = open(self.log_path, "wb")
        try:
            self._process = subprocess.Popen(
                command,
                stdout=self._log_file or subprocess.DEVNULL,
                stderr=subprocess.STDOUT,
            )
        except OSError as e:
            self._close_log()
            raise NodeStartError(f"Could not start {self.binary}: {e}") from e

        deadline = time.monotonic() + self.startup_timeout
        while not wait_for_port(
            self.host, self.port, timeout=self.poll_interval, interval=self.poll_interval
        ):
            exit_code = self._process.poll()
            if exit_code is not None:
                self.stop()
                raise NodeStartError(f"Node exited early with code {exit_code}")
            if time.monotonic() >= deadline:
                self.stop()
                raise NodeStartError(
                    f"Node did not open {self.host}:{self.port} within {self.startup_timeout}s"
                )

        logger.info(f"Node ready at {self.endpoint}")
        return self

    def stop(self) -> None:
        if self._process is None:
            return
        if self._process.poll() is None:
            self._process.terminate()
            try:
                self._process.wait(timeout=self.stop_timeout)
            except subprocess.TimeoutExpired:
                logger.warning("Node did not stop in time, killing it")
                self._process.kill()
                self._process.wait()
        self._process = None
        self._close_log()

    def _close_log(self):
        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None

    def __enter__(self) -> "NodeProcess":
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
