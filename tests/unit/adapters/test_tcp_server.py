from __future__ import annotations

import errno
import socket
import time

from launchpad.adapters import ControlServer, MemoryPortStore


def test_start_returns_immediately_with_daemon_listener(running_server) -> None:
    thread = running_server.thread

    assert thread is not None
    assert thread.daemon is True
    assert thread.is_alive()
    assert thread.name == "Launchpad Control Listener@127.0.0.1:0"


def test_fresh_port_is_persisted(running_server, port_store) -> None:
    bound = running_server.bound_endpoint

    assert bound is not None
    assert bound.host == "127.0.0.1"
    assert bound.port != 0
    assert port_store.writes == [str(bound)]


def test_status_replies_ok_without_side_effect(running_server, fake_host, exit_calls, exchange) -> None:
    reply = exchange(running_server.bound_endpoint, "status")

    assert reply == b"OK\r\n"
    assert fake_host.shutdowns == 0
    assert exit_calls == []


def test_unknown_command_is_echoed(running_server, exchange) -> None:
    assert exchange(running_server.bound_endpoint, "foo") == b"ERR:foo\r\n"
    assert exchange(running_server.bound_endpoint, "héllo wörld") == "ERR:héllo wörld\r\n".encode("utf-8")


def test_stop_acknowledges_then_exits(running_server, fake_host, exit_calls, exchange, wait_for) -> None:
    reply = exchange(running_server.bound_endpoint, "stop")

    assert reply == b"OK\r\n"
    assert fake_host.shutdowns == 1
    assert wait_for(lambda: exit_calls == [0])


def test_stop_still_exits_when_shutdown_fails(exchange, wait_for, info_logs) -> None:
    class BrokenHost:
        home = "."

        def shutdown(self) -> None:
            raise RuntimeError("boom")

    exit_calls: list[int] = []
    server = ControlServer(BrokenHost(), None, "127.0.0.1:0", exit_process=exit_calls.append)
    server.start()
    try:
        endpoint = server.wait_bound(timeout=5.0)
        assert exchange(endpoint, "stop") == b"OK\r\n"
        assert wait_for(lambda: exit_calls == [0])
        assert "Launchpad shutdown failed" in info_logs.text
    finally:
        server.close(timeout=5.0)


def test_server_keeps_serving_after_bad_clients(running_server, exchange) -> None:
    endpoint = running_server.bound_endpoint

    # client leaving without sending anything
    with socket.create_connection(endpoint.address, timeout=5.0):
        pass
    assert exchange(endpoint, "bogus") == b"ERR:bogus\r\n"
    assert exchange(endpoint, "status") == b"OK\r\n"


def test_command_without_line_terminator_is_accepted(running_server) -> None:
    with socket.create_connection(running_server.bound_endpoint.address, timeout=5.0) as sock:
        sock.sendall(b"status")
        sock.shutdown(socket.SHUT_WR)
        reply = sock.makefile("rb").readline()

    assert reply == b"OK\r\n"


def test_connections_are_serviced_one_at_a_time(running_server) -> None:
    address = running_server.bound_endpoint.address

    first = socket.create_connection(address, timeout=5.0)
    second = socket.create_connection(address, timeout=5.0)
    try:
        second.sendall(b"status\r\n")
        second.settimeout(0.5)
        try:
            early = second.recv(16)
        except socket.timeout:
            early = None
        # the first connection still holds the server
        assert early is None

        first.sendall(b"foo\r\n")
        assert first.makefile("rb").readline() == b"ERR:foo\r\n"
        first.close()

        second.settimeout(5.0)
        assert second.makefile("rb").readline() == b"OK\r\n"
    finally:
        first.close()
        second.close()


def test_connection_timeout_aborts_silent_client(fake_host, exchange, info_logs) -> None:
    server = ControlServer(fake_host, None, "127.0.0.1:0", connection_timeout=0.2)
    server.start()
    try:
        endpoint = server.wait_bound(timeout=5.0)
        with socket.create_connection(endpoint.address, timeout=5.0) as silent:
            time.sleep(0.5)
            assert silent.recv(16) == b""
        assert exchange(endpoint, "status") == b"OK\r\n"
        assert "Failure talking to control client" in info_logs.text
    finally:
        server.close(timeout=5.0)


def test_reuses_persisted_port_without_rewriting_it(fake_host, free_port, exchange) -> None:
    port = free_port()
    store = MemoryPortStore(f"127.0.0.1:{port}")
    server = ControlServer(fake_host, store)
    server.start()
    try:
        bound = server.wait_bound(timeout=5.0)
        assert bound is not None
        assert bound.port == port
        assert store.writes == []
        assert exchange(bound, "status") == b"OK\r\n"
    finally:
        server.close(timeout=5.0)


def test_no_endpoint_disables_listener(fake_host, info_logs) -> None:
    server = ControlServer(fake_host, None, "localhost:abc")

    assert server.start() is False
    assert server.endpoint is None
    assert server.thread is None
    assert server.wait_bound(timeout=0) is None
    assert "No socket address to listen to" in info_logs.text


def test_bind_failure_disables_server_only(fake_host, info_logs) -> None:
    store = MemoryPortStore()
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as blocker:
        blocker.bind(("127.0.0.1", 0))
        blocker.listen(1)
        port = blocker.getsockname()[1]

        server = ControlServer(fake_host, store, f"127.0.0.1:{port}", select_new_port=True)
        assert server.start() is True
        assert server.wait_bound(timeout=5.0) is None
        server.thread.join(timeout=5.0)

    assert not server.thread.is_alive()
    assert store.writes == []
    assert fake_host.shutdowns == 0
    assert "Failed to start control server" in info_logs.text


def test_close_ends_accept_loop(fake_host) -> None:
    server = ControlServer(fake_host, None, "127.0.0.1:0")
    server.start()
    bound = server.wait_bound(timeout=5.0)

    server.close(timeout=5.0)

    assert not server.thread.is_alive()
    try:
        with socket.create_connection(bound.address, timeout=1.0):
            refused = False
    except ConnectionRefusedError:
        refused = True
    assert refused


def test_long_unknown_command_is_echoed_in_full(running_server, exchange) -> None:
    command = "x" * 5000

    reply = exchange(running_server.bound_endpoint, command)

    assert reply == f"ERR:{command}\r\n".encode("utf-8")
    assert exchange(running_server.bound_endpoint, "status") == b"OK\r\n"


def test_accept_failure_ends_loop_and_closes_socket(fake_host, monkeypatch, info_logs) -> None:
    class FailingAcceptSocket(socket.socket):
        def accept(self):
            raise OSError(errno.EBADF, "Bad file descriptor")

    def bind_failing_socket(self, endpoint):
        srv = FailingAcceptSocket(socket.AF_INET, socket.SOCK_STREAM)
        srv.bind(endpoint.address)
        srv.listen(1)
        return srv

    monkeypatch.setattr(ControlServer, "_bind", bind_failing_socket)
    server = ControlServer(fake_host, None, "127.0.0.1:0")
    server.start()
    bound = server.wait_bound(timeout=5.0)
    assert bound is not None

    server.thread.join(timeout=5.0)

    assert not server.thread.is_alive()
    assert "Failure accepting control connection" in info_logs.text
    try:
        with socket.create_connection(bound.address, timeout=1.0):
            refused = False
    except ConnectionRefusedError:
        refused = True
    assert refused


def test_server_loop_without_endpoint_logs_and_returns(fake_host, info_logs) -> None:
    server = ControlServer(fake_host, None, "127.0.0.1:0")

    # loop entered before start() resolved anything
    server._server_loop()

    assert server.wait_bound(timeout=0) is None
    assert "Control server has no endpoint to bind" in info_logs.text
