"""Authorization Port - "can this principal perform this action".

Normally enforced before a vote reaches the ledger. The vote service
accepts an optional implementation to gate entry itself.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable
from uuid import UUID

# Feature a user needs to vote on content.
UPDATE_CONTENT_ACTION = "update:content"


@runtime_checkable
class AuthorizationProtocol(Protocol):
    """Protocol for permission checks."""

    async def can_perform(
        self, principal_id: UUID | None, action: str, resource_id: UUID
    ) -> bool:
        """Return True when the principal holds the feature for the resource."""
        ...
