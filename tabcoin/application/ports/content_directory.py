"""Content Directory Port - content ownership lookups.

Content CRUD lives outside the ledger. The ledger only needs to know who
owns a content item, both to report the owner on a vote and to project a
user's TabCoins from the votes their content received.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable
from uuid import UUID


@runtime_checkable
class ContentDirectoryProtocol(Protocol):
    """Protocol for resolving content ownership."""

    async def get_owner_id(self, content_id: UUID) -> UUID | None:
        """Return the owner of a content item, or None if it does not exist."""
        ...

    async def list_owned_content_ids(self, owner_id: UUID) -> list[UUID]:
        """Return every content id owned by ``owner_id``."""
        ...
