"""launchpad/ports/__init__.py

Hexagonal architecture ports (abstract interfaces).

The control server and the address resolver only talk to the host
application and to the persisted port record through these contracts.
Adapters in :mod:`launchpad.adapters` and :mod:`launchpad.runtime`
provide the concrete implementations.

Copyright Launchpad Contributors
Last modified: 2026-10-19
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HostApplicationPort(Protocol):
    """Application hosting the control server.

    Concrete implementation: :class:`launchpad.runtime.Launchpad`.
    """

    @property
    def home(self) -> str:  # pragma: no cover - structural
        """Base directory holding the ``conf/controlport`` record."""

    def shutdown(self) -> None:  # pragma: no cover - structural
        """Stop the application synchronously."""


@runtime_checkable
class PortStorePort(Protocol):
    """Storage of the persisted ``host:port`` control record.

    Concrete implementations: :class:`launchpad.adapters.port_store.FilePortStore`
    and :class:`launchpad.adapters.port_store.MemoryPortStore`.
    """

    @property
    def location(self) -> str:  # pragma: no cover - structural
        """Human readable location of the record, used in log messages."""

    def read(self) -> str | None:  # pragma: no cover - structural
        """Return the stored record or ``None`` when there is none."""

    def write(self, record: str) -> None:  # pragma: no cover - structural
        """Replace the stored record with ``record``."""


__all__ = [
    "HostApplicationPort",
    "PortStorePort",
]
