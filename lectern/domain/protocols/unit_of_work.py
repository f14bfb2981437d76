"""Unit of work protocol.

Repositories stage changes; handlers decide where a transaction ends.
Each commit() is an atomic boundary: either all staged changes become
durable or none do.
"""

from typing import Protocol


class UnitOfWork(Protocol):
    """Transaction boundary owned by a command handler."""

    async def commit(self) -> None:
        """Make staged changes durable.

        Raises:
            StoreUnavailable: If the store rejects the commit.
        """
        ...

    async def rollback(self) -> None:
        """Discard staged changes. Never raises."""
        ...
