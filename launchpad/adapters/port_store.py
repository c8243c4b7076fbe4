"""launchpad/adapters/port_store.py

Storage adapters for the persisted control port record.

The record is a single ``host:port`` line. A server that picked a fresh
port writes it once at startup; clients and restarted servers read it to
find the running instance.

Copyright Launchpad Contributors
Last modified: 2026-10-19
"""

from __future__ import annotations

import os

from ..constants import CONFIG_DIR_NAME, CONTROL_PORT_FILE_NAME, ENCODING
from ..logging_utils import logprintf


class FilePortStore:
    """Keep the control record in a text file, ``<home>/conf/controlport``."""

    def __init__(self, path: str) -> None:
        self._path = path

    @classmethod
    def for_home(cls, home: str) -> FilePortStore:
        return cls(os.path.join(home, CONFIG_DIR_NAME, CONTROL_PORT_FILE_NAME))

    @property
    def path(self) -> str:
        return self._path

    @property
    def location(self) -> str:
        return self._path

    def read(self) -> str | None:
        if not os.path.isfile(self._path):
            return None
        try:
            with open(self._path, "r", encoding=ENCODING) as f:
                line = f.readline()
        except (OSError, UnicodeDecodeError) as exc:
            logprintf(3, "Cannot read control port from %s: %s", self._path, exc)
            return None
        line = line.strip()
        return line or None

    def write(self, record: str) -> None:
        try:
            parent = os.path.dirname(self._path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self._path, "w", encoding=ENCODING) as f:
                f.write(record)
                f.write("\n")
        except OSError as exc:
            logprintf(1, "Cannot write control port to %s: %s", self._path, exc)
            return
        logprintf(3, "Wrote control port %s to %s", record, self._path)


class MemoryPortStore:
    """In-process record, for embedding and tests."""

    def __init__(self, record: str | None = None) -> None:
        self._record = record
        self.writes: list[str] = []

    @property
    def location(self) -> str:
        return "<memory>"

    def read(self) -> str | None:
        return self._record

    def write(self, record: str) -> None:
        self.writes.append(record)
        self._record = record
