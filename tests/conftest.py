"""Shared pytest fixtures for the launchpad test suite.

Copyright Launchpad Contributors
Last Modified: 2026-10-19
"""

from __future__ import annotations

import logging
import socket
import time
from typing import Callable, Iterator

import pytest

from launchpad.adapters import ControlServer, MemoryPortStore
from launchpad.domain import ControlEndpoint
from launchpad.logging_utils import logger


class FakeHost:
    """Host application recording shutdown requests."""

    def __init__(self, home: str) -> None:
        self.home = home
        self.shutdowns = 0

    def shutdown(self) -> None:
        self.shutdowns += 1


def _exchange(endpoint: ControlEndpoint, line: str, timeout: float = 5.0) -> bytes:
    """Send one raw line to ``endpoint`` and return everything read until EOF."""

    with socket.create_connection(endpoint.address, timeout=timeout) as sock:
        sock.sendall(line.encode("utf-8") + b"\r\n")
        chunks: list[bytes] = []
        while True:
            data = sock.recv(1024)
            if not data:
                break
            chunks.append(data)
    return b"".join(chunks)


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _wait_for(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(level)


@pytest.fixture
def fake_host(tmp_path) -> FakeHost:
    return FakeHost(str(tmp_path))


@pytest.fixture
def port_store() -> MemoryPortStore:
    return MemoryPortStore()


@pytest.fixture
def exit_calls() -> list[int]:
    return []


@pytest.fixture
def running_server(fake_host, port_store, exit_calls) -> Iterator[ControlServer]:
    """Control server on a fresh loopback port, closed after the test."""

    server = ControlServer(
        fake_host,
        port_store,
        "127.0.0.1:0",
        select_new_port=True,
        exit_process=exit_calls.append,
    )
    assert server.start()
    assert server.wait_bound(timeout=5.0) is not None
    yield server
    server.close(timeout=5.0)


@pytest.fixture
def info_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="launchpad")
    return caplog


@pytest.fixture
def exchange() -> Callable[..., bytes]:
    return _exchange


@pytest.fixture
def free_port() -> Callable[[], int]:
    return _free_port


@pytest.fixture
def wait_for() -> Callable[..., bool]:
    return _wait_for
