from drawguard.adapters.sqlite.integrity import (
    SQLiteIntegrityVerifier,
    check_database_integrity,
)

__all__ = [
    "SQLiteIntegrityVerifier",
    "check_database_integrity",
]
