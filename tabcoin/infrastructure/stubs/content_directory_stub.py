"""In-memory stub for ContentDirectoryProtocol."""

from __future__ import annotations

from uuid import UUID


class ContentDirectoryStub:
    """In-memory content ownership map.

    Call add_content() in tests before voting on a content item.
    """

    def __init__(self) -> None:
        self._owners: dict[UUID, UUID] = {}

    def add_content(self, content_id: UUID, owner_id: UUID) -> None:
        self._owners[content_id] = owner_id

    def remove_content(self, content_id: UUID) -> None:
        self._owners.pop(content_id, None)

    async def get_owner_id(self, content_id: UUID) -> UUID | None:
        return self._owners.get(content_id)

    async def list_owned_content_ids(self, owner_id: UUID) -> list[UUID]:
        return [cid for cid, oid in self._owners.items() if oid == owner_id]

    def clear(self) -> None:
        self._owners.clear()
