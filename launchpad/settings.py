"""
Configuration settings for the launchpad.
Path: launchpad/settings.py
Copyright Launchpad Contributors
Last Modified: 2026-10-19
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Launchpad settings, overridable through ``LAUNCHPAD_*`` variables."""

    home: str = Field(
        default="launchpad",
        description="Application home directory, holds conf/controlport",
    )
    control_listen: Optional[str] = Field(
        default=None,
        description="Control channel listen specification, [host:]port",
    )
    select_new_port: bool = Field(
        default=True,
        description="Pick a fresh control port on start instead of the persisted one",
    )
    log_level: str = Field(
        default="2",
        description="Log level, 0-3 (error, warn, info, debug) or a level name",
    )
    log_file: str = Field(
        default="",
        description="Log file path, empty or '-' for standard error",
    )
    client_timeout: Optional[float] = Field(default=None, gt=0)
    connection_timeout: Optional[float] = Field(default=None, gt=0)

    model_config = {
        "env_prefix": "LAUNCHPAD_",
        "env_file": ".env",
        "extra": "ignore",
        "case_sensitive": False,
    }
