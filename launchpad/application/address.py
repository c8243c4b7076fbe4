"""launchpad/application/address.py

Resolution of the control endpoint.

The endpoint comes from an explicit listen specification
(``[host ":"] port``), from the persisted port record or from the default
ephemeral binding on loopback. Resolution problems are logged and turn
into an absent endpoint, which disables the control channel.

Copyright Launchpad Contributors
Last modified: 2026-10-19
"""

from __future__ import annotations

import socket

from ..constants import DEFAULT_LISTEN_INTERFACE, DEFAULT_LISTEN_PORT
from ..domain import ControlEndpoint
from ..logging_utils import logprintf
from ..ports import PortStorePort


def parse_listen_spec(spec: str) -> tuple[str, int]:
    """Split ``spec`` into host and port.

    The host is the text before the first colon, the default interface
    when it is empty or there is no colon at all. Raises
    :class:`ValueError` when the port is not a decimal number in the TCP
    port range.
    """

    host, sep, port_text = spec.partition(":")
    if not sep:
        host, port_text = "", spec
    host = host.strip() or DEFAULT_LISTEN_INTERFACE
    port_text = port_text.strip()
    if not (port_text.isascii() and port_text.isdigit()):
        raise ValueError(f"Invalid port number: {port_text!r}")
    port = int(port_text)
    if port > 65535:
        raise ValueError(f"Port number out of range: {port}")
    return host, port


def socket_address(endpoint: ControlEndpoint) -> tuple[socket.AddressFamily, tuple]:
    """Return the address family and socket address for ``endpoint``.

    Raises :class:`socket.gaierror` when the host does not resolve.
    """

    infos = socket.getaddrinfo(
        endpoint.host, endpoint.port, type=socket.SOCK_STREAM
    )
    family, _type, _proto, _canon, sockaddr = infos[0]
    return family, sockaddr


def resolve_endpoint(
    listen_spec: str | None,
    select_new_port: bool,
    store: PortStorePort | None = None,
) -> ControlEndpoint | None:
    """Work out the control endpoint, or ``None`` if there is no usable one.

    Parameters
    ----------
    listen_spec:
        Explicit ``[host ":"] port`` specification, ``None`` or blank when
        not given.
    select_new_port:
        ``True`` for a server that must pick a fresh port. Otherwise a
        missing ``listen_spec`` is looked up in ``store`` first.
    store:
        Persisted port record, may be ``None`` when there is none.
    """

    if listen_spec is not None and not listen_spec.strip():
        listen_spec = None
    if listen_spec is None and not select_new_port and store is not None:
        listen_spec = store.read()
        if listen_spec is not None:
            logprintf(3, "Using control port %s from %s", listen_spec, store.location)
    if listen_spec is None:
        listen_spec = f"{DEFAULT_LISTEN_INTERFACE}:{DEFAULT_LISTEN_PORT}"

    try:
        host, port = parse_listen_spec(listen_spec)
    except ValueError:
        logprintf(0, "Cannot parse port number from '%s'", listen_spec)
        return None

    endpoint = ControlEndpoint(host=host, port=port)
    try:
        socket_address(endpoint)
    except (socket.gaierror, UnicodeError) as exc:
        logprintf(0, "Unknown host in '%s': %s", listen_spec, exc)
        return None
    return endpoint
