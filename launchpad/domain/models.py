"""launchpad/domain/models.py

Pydantic domain models for the control channel.

Copyright Launchpad Contributors
Last modified: 2026-10-19
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..constants import RESPONSE_OK


class ControlEndpoint(BaseModel):
    """Host and port the control server listens on and clients connect to.

    Attributes
    ----------
    host:
        Host name or address. Only resolvable hosts end up in an endpoint.
    port:
        TCP port, ``0`` asking the system to pick a free one on bind.
    """

    model_config = ConfigDict(frozen=True)

    host: str
    port: int = Field(ge=0, le=65535)

    @property
    def address(self) -> tuple[str, int]:
        return (self.host, self.port)

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


class ControlResponse(BaseModel):
    """Reply line produced for a single control command.

    Attributes
    ----------
    text:
        Line sent back to the client, without the line terminator.
    terminate:
        ``True`` when the process must exit once ``text`` has been sent.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    terminate: bool = False

    @property
    def ok(self) -> bool:
        return self.text == RESPONSE_OK


__all__ = [
    "ControlEndpoint",
    "ControlResponse",
]
