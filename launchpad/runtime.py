"""Runtime of the launchpad process.

:class:`Launchpad` is the long-running application the control channel
belongs to. :func:`run` wires settings, the persisted port record and the
control client or server together for the command-line front end.
"""

from __future__ import annotations

import os
import signal
import threading
from typing import Callable

from .adapters.port_store import FilePortStore
from .adapters.tcp_client import ControlClient
from .adapters.tcp_server import ACCEPT_POLL_INTERVAL, ControlServer
from .constants import COMMAND_STATUS, COMMAND_STOP
from .logging_utils import logprintf
from .settings import Settings


class Launchpad:
    """Host application controlled through the control channel.

    Shutdown hooks run once, in reverse registration order, on the first
    call to :meth:`shutdown`, whether it comes from the control server or
    from a signal.
    """

    def __init__(self, home: str):
        self._home = os.path.abspath(home)
        self._hooks: list[Callable[[], None]] = []
        self._lock = threading.Lock()
        self._stopped = threading.Event()

    @property
    def home(self) -> str:
        return self._home

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def add_shutdown_hook(self, hook: Callable[[], None]) -> None:
        self._hooks.append(hook)

    def shutdown(self) -> None:
        with self._lock:
            if self._stopped.is_set():
                return
            logprintf(2, "Shutting down launchpad at %s", self._home)
            for hook in reversed(self._hooks):
                try:
                    hook()
                except Exception as exc:
                    logprintf(0, "Shutdown hook %r failed", hook, exc_info=exc)
            self._stopped.set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._stopped.wait(timeout)

    def _install_signal_handlers(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            return

        def handle_signal(signum, _frame) -> None:
            logprintf(2, "Received signal %d", signum)
            self.shutdown()

        for sig in (signal.SIGINT, signal.SIGTERM):
            signal.signal(sig, handle_signal)

    def serve_forever(self, control: ControlServer | None = None) -> int:
        """Run until :meth:`shutdown` is called and return the exit status.

        This call blocks and is the main entry point of server mode.
        """

        logprintf(2, "Starting launchpad at %s", self._home)
        self._install_signal_handlers()
        if control is not None:
            control.start()
        try:
            # wake up regularly so signals are handled promptly
            while not self.wait(timeout=1.0):
                pass
        finally:
            if control is not None:
                # lets an acknowledged stop finish before the interpreter exits
                control.close(timeout=ACCEPT_POLL_INTERVAL * 4)
        logprintf(2, "Launchpad stopped")
        return 0


def run(
    settings: Settings,
    command: str | None = None,
    listen_spec: str | None = None,
    with_control: bool = False,
    select_new_port: bool | None = None,
) -> int:
    """Execute ``command`` and return a POSIX exit code.

    ``stop`` and ``status`` talk to a running launchpad. ``start`` runs the
    launchpad with the control server, no command runs it with the
    control server only when ``with_control`` is set.
    """

    if listen_spec is None:
        listen_spec = settings.control_listen

    if command in (COMMAND_STOP, COMMAND_STATUS):
        store = FilePortStore.for_home(settings.home)
        client = ControlClient(store, listen_spec, timeout=settings.client_timeout)
        if command == COMMAND_STOP:
            return client.request_stop()
        return client.request_status()

    launchpad = Launchpad(settings.home)
    control = None
    if command == "start" or with_control or listen_spec is not None:
        if select_new_port is None:
            select_new_port = settings.select_new_port
        control = ControlServer(
            launchpad,
            FilePortStore.for_home(launchpad.home),
            listen_spec,
            select_new_port,
            connection_timeout=settings.connection_timeout,
        )
    return launchpad.serve_forever(control)
