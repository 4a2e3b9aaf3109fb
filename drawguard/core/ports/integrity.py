"""
Integrity check port (Protocol).

Verifies uploaded database files away from the request path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class IntegrityCheckPort(Protocol):
    """Database file integrity verification."""

    def verify(self, path: str | Path) -> bool:
        """Return True only if the file is an intact database."""
        ...

    async def verify_async(self, path: str | Path) -> bool:
        """Same as verify, without blocking the event loop."""
        ...

    def shutdown(self) -> None:
        """Release worker resources."""
        ...
