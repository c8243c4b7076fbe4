"""launchpad/domain/__init__.py

Domain models of the launchpad control channel.

Copyright Launchpad Contributors
Last modified: 2026-10-19
"""

from .models import ControlEndpoint, ControlResponse

__all__ = [
    "ControlEndpoint",
    "ControlResponse",
]
