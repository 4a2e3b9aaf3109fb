# drawguard - Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from drawguard.core.ports.integrity import IntegrityCheckPort

__all__ = [
    "IntegrityCheckPort",
]
