from infrastructure.repositories.sqlite_block_repository import (
    FallbackTable,
    SqliteBlockRepository,
    is_backend_unavailable,
)

__all__ = [
    "FallbackTable",
    "SqliteBlockRepository",
    "is_backend_unavailable",
]
