"""launchpad/application/control.py

High-level command processing for the TCP control interface.

This module implements the one-line textual protocol used by the control
socket, delegating the shutdown itself to a callback supplied by the
server adapter.

Copyright Launchpad Contributors
Last modified: 2026-10-19
"""

from __future__ import annotations

from typing import Callable

from ..constants import COMMAND_STATUS, COMMAND_STOP, RESPONSE_ERROR_PREFIX, RESPONSE_OK
from ..domain import ControlResponse


def process_client_command(
    command: str,
    on_stop: Callable[[], None],
) -> ControlResponse:
    """Process a received command line and return the protocol response.

    ``command`` is matched exactly, as received without its line
    terminator. ``on_stop`` runs before the acknowledgement of ``stop`` is
    built; the caller sends the reply and then ends the process.
    """

    if command == COMMAND_STOP:
        on_stop()
        return ControlResponse(text=RESPONSE_OK, terminate=True)

    if command == COMMAND_STATUS:
        return ControlResponse(text=RESPONSE_OK)

    return ControlResponse(text=f"{RESPONSE_ERROR_PREFIX}{command}")
